from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A builder that assembles real class file images, so decoder and pipeline
   tests run against genuine binary input rather than mocks.
"""

import os
import struct
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Class File Builder
# -----------------------------------------------------------------------------
class ClassFileBuilder:
    """
    Assemble a minimal but structurally valid class file.

    Constant pool entries are allocated eagerly, so indices are known as soon
    as an entry is added. Long/Double entries take two slots.
    """

    def __init__(self, this_class: str, super_class: Optional[str] = "java/lang/Object") -> None:
        self._pool: List[bytes] = []
        self._next = 1
        self._utf8: Dict[str, int] = {}
        self._classes: Dict[str, int] = {}
        self._interfaces: List[int] = []
        self._fields: List[bytes] = []
        self._methods: List[bytes] = []
        self._attributes: List[bytes] = []
        self.this_index = self.class_ref(this_class)
        self.super_index = self.class_ref(super_class) if super_class else 0

    # --- constant pool ---
    def _add(self, payload: bytes, slots: int = 1) -> int:
        index = self._next
        self._pool.append(payload)
        self._next += slots
        return index

    def utf8(self, text: str) -> int:
        if text not in self._utf8:
            raw = text.encode("utf-8")
            self._utf8[text] = self._add(struct.pack(">BH", 1, len(raw)) + raw)
        return self._utf8[text]

    def raw_utf8(self, raw: bytes) -> int:
        return self._add(struct.pack(">BH", 1, len(raw)) + raw)

    def class_ref(self, name: str) -> int:
        if name not in self._classes:
            self._classes[name] = self._add(struct.pack(">BH", 7, self.utf8(name)))
        return self._classes[name]

    def integer(self, value: int) -> int:
        return self._add(struct.pack(">Bi", 3, value))

    def float_(self, value: float) -> int:
        return self._add(struct.pack(">Bf", 4, value))

    def long(self, value: int) -> int:
        return self._add(struct.pack(">Bq", 5, value), slots=2)

    def double(self, value: float) -> int:
        return self._add(struct.pack(">Bd", 6, value), slots=2)

    def string(self, text: str) -> int:
        return self._add(struct.pack(">BH", 8, self.utf8(text)))

    def name_and_type(self, name: str, descriptor: str) -> int:
        return self._add(struct.pack(">BHH", 12, self.utf8(name), self.utf8(descriptor)))

    def method_ref(self, owner: str, name: str, descriptor: str) -> int:
        nat = self.name_and_type(name, descriptor)
        return self._add(struct.pack(">BHH", 10, self.class_ref(owner), nat))

    def field_ref(self, owner: str, name: str, descriptor: str) -> int:
        nat = self.name_and_type(name, descriptor)
        return self._add(struct.pack(">BHH", 9, self.class_ref(owner), nat))

    def method_handle(self, kind: int, reference: int) -> int:
        return self._add(struct.pack(">BBH", 15, kind, reference))

    def method_type(self, descriptor: str) -> int:
        return self._add(struct.pack(">BH", 16, self.utf8(descriptor)))

    def invoke_dynamic(self, bootstrap: int, name: str, descriptor: str) -> int:
        nat = self.name_and_type(name, descriptor)
        return self._add(struct.pack(">BHH", 18, bootstrap, nat))

    def raw_tag(self, tag: int, payload: bytes = b"") -> int:
        return self._add(struct.pack(">B", tag) + payload)

    # --- attributes ---
    def signature_attribute(self, signature: str) -> bytes:
        return struct.pack(">HIH", self.utf8("Signature"), 2, self.utf8(signature))

    def opaque_attribute(self, name: str, payload: bytes) -> bytes:
        return struct.pack(">HI", self.utf8(name), len(payload)) + payload

    # --- class body ---
    def interface(self, name: str) -> "ClassFileBuilder":
        self._interfaces.append(self.class_ref(name))
        return self

    def field(self, descriptor: str, signature: Optional[str] = None,
              name: str = "f", attributes: Sequence[bytes] = ()) -> "ClassFileBuilder":
        self._fields.append(self._member(name, descriptor, signature, attributes))
        return self

    def method(self, descriptor: str, signature: Optional[str] = None,
               name: str = "m", attributes: Sequence[bytes] = ()) -> "ClassFileBuilder":
        self._methods.append(self._member(name, descriptor, signature, attributes))
        return self

    def class_signature(self, signature: str) -> "ClassFileBuilder":
        self._attributes.append(self.signature_attribute(signature))
        return self

    def class_attribute(self, attribute: bytes) -> "ClassFileBuilder":
        self._attributes.append(attribute)
        return self

    def _member(self, name: str, descriptor: str, signature: Optional[str],
                attributes: Sequence[bytes]) -> bytes:
        attrs = list(attributes)
        if signature is not None:
            attrs.append(self.signature_attribute(signature))
        head = struct.pack(">HHHH", 0x0001, self.utf8(name), self.utf8(descriptor), len(attrs))
        return head + b"".join(attrs)

    def build(self) -> bytes:
        out = [struct.pack(">IHHH", 0xCAFEBABE, 0, 52, self._next)]
        out.extend(self._pool)
        out.append(struct.pack(">HHH", 0x0021, self.this_index, self.super_index))
        out.append(struct.pack(">H", len(self._interfaces)))
        out.extend(struct.pack(">H", i) for i in self._interfaces)
        for table in (self._fields, self._methods, self._attributes):
            out.append(struct.pack(">H", len(table)))
            out.extend(table)
        return b"".join(out)


def simple_class(this_class: str, references: Sequence[str] = ()) -> bytes:
    """Build a class whose only references are constant pool class entries."""
    builder = ClassFileBuilder(this_class)
    for name in references:
        builder.class_ref(name)
    return builder.build()


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def make_class() -> Callable[..., bytes]:
    """Return the simple_class helper."""
    return simple_class


@pytest.fixture
def class_builder() -> Callable[..., ClassFileBuilder]:
    """Return the ClassFileBuilder factory."""
    return ClassFileBuilder


@pytest.fixture
def write_classes(tmp_path: Path) -> Callable[[Dict[str, bytes]], Path]:
    """
    Return a helper writing ``{file_name: bytes}`` into a fresh directory.

    Returns:
        Callable: Helper returning the directory path.
    """
    def _write(files: Dict[str, bytes], subdir: str = "classes") -> Path:
        target = tmp_path / subdir
        target.mkdir(exist_ok=True)
        for name, data in files.items():
            (target / name).write_bytes(data)
        return target

    return _write


@pytest.fixture
def chain_classes() -> Dict[str, bytes]:
    """A -> B -> C, all in the default package."""
    return {
        "A.class": simple_class("A", ["B"]),
        "B.class": simple_class("B", ["C"]),
        "C.class": simple_class("C"),
    }


@pytest.fixture
def mutual_classes() -> Dict[str, bytes]:
    """A <-> B."""
    return {
        "A.class": simple_class("A", ["B"]),
        "B.class": simple_class("B", ["A"]),
    }

