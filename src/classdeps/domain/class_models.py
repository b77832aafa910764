from __future__ import annotations

"""
Class Graph Domain Models.

Defines the records exchanged between the decoder, the graph builder, the
component finder and the reporter. Records live in a flat arena (a list);
edges and group membership are expressed as integer indices into it.
"""

from dataclasses import dataclass, field
from typing import List, Optional

# -----------------------------------------------------------------------------
# DECODER OUTPUT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class DecodedClass:
    """
    Identity and outbound references extracted from one class file.

    Attributes:
        class_path: Internal (slash separated) name of the class itself.
        reference_names: Referenced class names, in discovery order, without
                         duplicates, self references or nested classes.
    """
    class_path: str
    reference_names: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class DecodeFailure:
    """
    A class file that was skipped because it could not be decoded.

    Attributes:
        file_name: Name of the file inside the analysed directory.
        error: Human readable reason.
    """
    file_name: str
    error: str

# -----------------------------------------------------------------------------
# GRAPH MODELS
# -----------------------------------------------------------------------------

@dataclass
class ClassRecord:
    """
    One node of the reference graph.

    Attributes:
        index: Position of the record in the arena.
        file_name: File system name of the class file.
        class_name: Display name (file name without its suffix).
        class_path: Canonical identity decoded from the constant pool.
        reference_names: Raw reference names produced by the decoder.
        outgoing: Arena indices of the classes this class references.
        incoming: Arena indices of the classes referencing this class.
        group: Index of the owning group once components are assigned.
    """
    index: int
    file_name: str
    class_name: str
    class_path: str
    reference_names: List[str] = field(default_factory=list)
    outgoing: List[int] = field(default_factory=list)
    incoming: List[int] = field(default_factory=list)
    group: Optional[int] = None

    def __str__(self) -> str:
        return self.class_name


@dataclass
class Group:
    """
    A strongly connected component of the reference graph.

    Attributes:
        index: Position of the group in reverse dependency order.
        members: Arena indices of the member records, in assignment order.
    """
    index: int
    members: List[int] = field(default_factory=list)

    @property
    def is_cyclic(self) -> bool:
        return len(self.members) > 1
