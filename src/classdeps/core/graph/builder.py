from __future__ import annotations

"""
Reference Graph Builder.

Turns the raw reference names of every decoded class into resolved edges
between records of the same directory. Names without a matching record
belong to external libraries and are dropped.
"""

import logging
from typing import Dict, List

from classdeps.domain.class_models import ClassRecord

logger = logging.getLogger(__name__)


def build_reference_graph(records: List[ClassRecord]) -> Dict[str, int]:
    """
    Populate ``outgoing`` and ``incoming`` edges of every record.

    Args:
        records: The record arena; edges are written in place.

    Returns:
        Dict[str, int]: Mapping from class path to arena index.
    """
    index_by_path = _index_class_paths(records)
    _link_references(records, index_by_path)
    _reverse_references(records)
    return index_by_path


def _index_class_paths(records: List[ClassRecord]) -> Dict[str, int]:
    index_by_path: Dict[str, int] = {}
    for record in records:
        previous = index_by_path.get(record.class_path)
        if previous is not None:
            logger.warning(
                f"Class {record.class_path} is defined by both "
                f"{records[previous].file_name} and {record.file_name}; using {record.file_name}."
            )
        index_by_path[record.class_path] = record.index
    return index_by_path


def _link_references(records: List[ClassRecord], index_by_path: Dict[str, int]) -> None:
    for record in records:
        record.outgoing = []
        for name in record.reference_names:
            target = index_by_path.get(name)
            if target is None:
                continue
            # A shadowed duplicate can still resolve to itself
            if target == record.index:
                continue
            record.outgoing.append(target)


def _reverse_references(records: List[ClassRecord]) -> None:
    for record in records:
        record.incoming = []
    for record in records:
        for target in record.outgoing:
            records[target].incoming.append(record.index)
