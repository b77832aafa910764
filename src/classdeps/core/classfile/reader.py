from __future__ import annotations

"""
Class File Reader.

Decodes a compiled class file just far enough to recover the class's own
internal name and the names of every class it references. The byte stream is
consumed once, front to back:

1. Header (magic + versions), skipped.
2. Constant pool: UTF8 texts and class entries are captured, the rest skipped.
3. Access flags, this-class, superclass and interfaces.
4. Fields and methods: descriptors and ``Signature`` attributes are scanned.
5. Class-level attributes.

Class entries of the constant pool contribute references too, which recovers
classes used only inside method bodies.
"""

import io
import logging
from typing import BinaryIO, Dict, List, Set

from classdeps.core.classfile.descriptors import extract_descriptor_names
from classdeps.core.classfile.stream import ClassFileStream
from classdeps.domain.class_models import DecodedClass
from classdeps.domain.constants import (
    HEADER_SIZE,
    NESTED_CLASS_SEPARATOR,
    SIGNATURE_ATTRIBUTE,
    SKIPPED_TAG_SIZES,
    TAG_CLASS,
    TAG_UTF8,
    WIDE_TAGS,
)
from classdeps.domain.errors import MalformedClassFileError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def read_class_file(path: str) -> DecodedClass:
    """
    Decode the class file stored at ``path``.

    The file handle is released whether decoding succeeds or not.

    Args:
        path: Filesystem path of the class file.

    Returns:
        DecodedClass: The class identity and its references.

    Raises:
        MalformedClassFileError: If the content cannot be decoded.
        OSError: If the file cannot be opened or read.
    """
    with open(path, "rb") as f:
        return decode_class_stream(f)


def decode_class_bytes(data: bytes) -> DecodedClass:
    """Decode an in-memory class file image."""
    return decode_class_stream(io.BytesIO(data))


def decode_class_stream(source: BinaryIO) -> DecodedClass:
    """Decode a class file from any readable binary stream."""
    return ClassFileReader(ClassFileStream(source)).decode()

# -----------------------------------------------------------------------------
# DECODER
# -----------------------------------------------------------------------------

class ClassFileReader:
    """
    Single-use decoder bound to one class file stream.

    Holds the constant pool tables and the reference accumulator for the
    duration of one :meth:`decode` call.
    """

    def __init__(self, stream: ClassFileStream) -> None:
        self._stream = stream
        self._strings: Dict[int, str] = {}
        # Class entry slot -> UTF8 slot, in pool order
        self._classes: Dict[int, int] = {}
        self._class_path = ""
        self._references: List[str] = []
        self._seen: Set[str] = set()

    def decode(self) -> DecodedClass:
        """
        Run the full decode.

        Raises:
            MalformedClassFileError: On unknown tags, truncated input or
                                     invalid constant pool indices.
        """
        self._stream.skip(HEADER_SIZE)
        self._read_constant_pool()

        self._stream.skip(2)  # access flags
        self._class_path = self._class_name_at(self._stream.u2())
        self._collect_pool_references()

        self._skip_super_classes()
        self._read_members()  # fields
        self._read_members()  # methods
        self._read_attributes()

        logger.debug(f"Decoded {self._class_path}: {len(self._references)} reference(s)")
        return DecodedClass(class_path=self._class_path, reference_names=list(self._references))

    # -------------------------------------------------------------------------
    # Constant pool
    # -------------------------------------------------------------------------

    def _read_constant_pool(self) -> None:
        count = self._stream.u2()
        index = 1
        while index < count:
            tag = self._stream.u1()
            if tag == TAG_UTF8:
                self._strings[index] = self._stream.utf8()
            elif tag == TAG_CLASS:
                self._classes[index] = self._stream.u2()
            elif tag in SKIPPED_TAG_SIZES:
                self._stream.skip(SKIPPED_TAG_SIZES[tag])
            else:
                raise MalformedClassFileError(
                    f"Unknown constant pool tag {tag} at index {index} (byte {self._stream.position - 1})."
                )
            index += 2 if tag in WIDE_TAGS else 1

    def _collect_pool_references(self) -> None:
        for slot in self._classes:
            self._add_reference(self._class_name_at(slot))

    def _utf8_at(self, index: int) -> str:
        try:
            return self._strings[index]
        except KeyError:
            raise MalformedClassFileError(f"Constant pool index {index} is not a UTF8 entry.") from None

    def _class_name_at(self, index: int) -> str:
        try:
            name_index = self._classes[index]
        except KeyError:
            raise MalformedClassFileError(f"Constant pool index {index} is not a class entry.") from None
        return self._utf8_at(name_index)

    # -------------------------------------------------------------------------
    # Class body
    # -------------------------------------------------------------------------

    def _skip_super_classes(self) -> None:
        # Already collected as class entries of the pool
        self._stream.skip(2)
        interfaces = self._stream.u2()
        self._stream.skip(2 * interfaces)

    def _read_members(self) -> None:
        """Read a fields or methods table; both share one layout."""
        count = self._stream.u2()
        for _ in range(count):
            self._stream.skip(4)  # access flags, name index
            self._scan_descriptor(self._utf8_at(self._stream.u2()))
            self._read_attributes()

    def _read_attributes(self) -> None:
        count = self._stream.u2()
        for _ in range(count):
            name = self._utf8_at(self._stream.u2())
            length = self._stream.u4()
            if name == SIGNATURE_ATTRIBUTE and length == 2:
                self._scan_descriptor(self._utf8_at(self._stream.u2()))
            else:
                self._stream.skip(length)

    # -------------------------------------------------------------------------
    # Reference collection
    # -------------------------------------------------------------------------

    def _scan_descriptor(self, descriptor: str) -> None:
        for name in extract_descriptor_names(descriptor):
            self._add_reference(name)

    def _add_reference(self, name: str) -> None:
        if NESTED_CLASS_SEPARATOR in name:
            return
        if name == self._class_path or name in self._seen:
            return
        self._seen.add(name)
        self._references.append(name)
