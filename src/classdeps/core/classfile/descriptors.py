from __future__ import annotations

"""
Descriptor Scanning.

Extracts object type names from field/method descriptors and generic
signatures. An object type starts with ``L`` and its name runs up to the
first ``;`` or ``<`` that follows.
"""

from typing import Iterator

from classdeps.domain.errors import MalformedClassFileError


def extract_descriptor_names(descriptor: str) -> Iterator[str]:
    """
    Yield every class name embedded in a descriptor, in order of appearance.

    Duplicates are yielded as they occur; filtering is left to the caller.

    Example:
        ``Ljava/util/List<Lcom/x/Y;>;`` yields ``java/util/List`` then
        ``com/x/Y``.

    Raises:
        MalformedClassFileError: If a name is not terminated.
    """
    start = descriptor.find("L")
    while start >= 0:
        end = _name_end(descriptor, start + 1)
        yield descriptor[start + 1:end]
        start = descriptor.find("L", end + 1)


def _name_end(descriptor: str, offset: int) -> int:
    semicolon = descriptor.find(";", offset)
    bracket = descriptor.find("<", offset)
    ends = [i for i in (semicolon, bracket) if i >= 0]
    if not ends:
        raise MalformedClassFileError(f"Unterminated class name in descriptor {descriptor!r}.")
    return min(ends)
