from __future__ import annotations

"""
Cyclic Group Detection.

Partitions the reference graph into strongly connected components with
Kosaraju's algorithm and orders them so that dependencies come before their
dependents. Both depth-first passes use explicit stacks; the visiting order is
the same as the textbook recursive formulation, so results are deterministic
for a given record order.

See https://en.wikipedia.org/wiki/Kosaraju%27s_algorithm
"""

import logging
from typing import Iterator, List, Optional, Tuple

from classdeps.domain.class_models import ClassRecord, Group

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def find_groups(records: List[ClassRecord]) -> List[Group]:
    """
    Compute the groups of mutually dependent classes.

    No group depends on a group listed after it. Each record's ``group``
    field is set to the index of its group in the returned list.

    Args:
        records: Record arena with ``outgoing`` and ``incoming`` populated.

    Returns:
        List[Group]: Groups in reverse dependency order.
    """
    finish_order = _finish_order(records)
    created = _assign(records, finish_order)

    # Later roots are emitted first
    groups: List[Group] = []
    for position, members in enumerate(reversed(created)):
        groups.append(Group(index=position, members=members))
        for member in members:
            records[member].group = position

    logger.debug(
        f"Found {len(groups)} group(s), {sum(1 for g in groups if g.is_cyclic)} cyclic"
    )
    return groups

# -----------------------------------------------------------------------------
# PASS 1: FINISH ORDER
# -----------------------------------------------------------------------------

def _finish_order(records: List[ClassRecord]) -> List[int]:
    """Return record indices, latest finisher first."""
    visited = [False] * len(records)
    finished: List[int] = []

    for start in range(len(records)):
        if visited[start]:
            continue
        visited[start] = True
        stack: List[Tuple[int, Iterator[int]]] = [(start, iter(records[start].outgoing))]
        while stack:
            node, successors = stack[-1]
            for target in successors:
                if not visited[target]:
                    visited[target] = True
                    stack.append((target, iter(records[target].outgoing)))
                    break
            else:
                stack.pop()
                finished.append(node)

    finished.reverse()
    return finished

# -----------------------------------------------------------------------------
# PASS 2: BACKWARD FLOOD FILL
# -----------------------------------------------------------------------------

def _assign(
        records: List[ClassRecord],
        finish_order: List[int],
) -> List[List[int]]:
    """Flood-fill groups backwards along ``incoming`` edges, in creation order."""
    owners: List[Optional[int]] = [None] * len(records)
    created: List[List[int]] = []

    for root in finish_order:
        if owners[root] is not None:
            continue
        number = len(created)
        members = [root]
        owners[root] = number
        stack: List[Iterator[int]] = [iter(records[root].incoming)]
        while stack:
            for source in stack[-1]:
                if owners[source] is None:
                    owners[source] = number
                    members.append(source)
                    stack.append(iter(records[source].incoming))
                    break
            else:
                stack.pop()
        created.append(members)

    return created
