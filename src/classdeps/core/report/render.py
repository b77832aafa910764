from __future__ import annotations

"""
Dependency Report Renderer.

Converts the ordered groups into text lines. A singleton prints as
``Name -> [Dep1, Dep2]``; a cyclic group prints its member list followed by
one indented line per member.
"""

from typing import Iterable, List

from classdeps.domain.class_models import ClassRecord, Group

MEMBER_INDENT = "    "


def render_report(records: List[ClassRecord], groups: List[Group]) -> List[str]:
    """
    Render every group, in the given order.

    Args:
        records: Record arena with resolved ``outgoing`` edges.
        groups: Groups in reverse dependency order.

    Returns:
        List[str]: Output lines without trailing newlines.
    """
    lines: List[str] = []
    for group in groups:
        if not group.is_cyclic:
            lines.append(render_record(records, records[group.members[0]]))
            continue

        lines.append(format_names(records[m].class_name for m in group.members))
        for member in group.members:
            lines.append(MEMBER_INDENT + render_record(records, records[member]))
    return lines


def render_record(records: List[ClassRecord], record: ClassRecord) -> str:
    """Render one record and its outgoing edges."""
    targets = format_names(records[t].class_name for t in record.outgoing)
    return f"{record.class_name} -> {targets}"


def format_names(names: Iterable[str]) -> str:
    """Format names as a bracketed, comma separated list."""
    return "[" + ", ".join(names) + "]"
