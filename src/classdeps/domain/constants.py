from __future__ import annotations

"""
Domain Constants.

Centralizes the class-file format codes consumed by the decoder, the naming
conventions used to discover and filter classes, and the process exit codes
shared by the CLI layer.
"""

from typing import Dict

APP_NAME = "classdeps"

# -----------------------------------------------------------------------------
# CLASS FILE FORMAT
# -----------------------------------------------------------------------------

CLASS_FILE_SUFFIX = ".class"
NESTED_CLASS_SEPARATOR = "$"
SIGNATURE_ATTRIBUTE = "Signature"

# Magic number (u4) + minor version (u2) + major version (u2)
HEADER_SIZE = 8

# Constant pool entry tags
TAG_UTF8 = 1
TAG_INTEGER = 3
TAG_FLOAT = 4
TAG_LONG = 5
TAG_DOUBLE = 6
TAG_CLASS = 7
TAG_STRING = 8
TAG_FIELDREF = 9
TAG_METHODREF = 10
TAG_INTERFACE_METHODREF = 11
TAG_NAME_AND_TYPE = 12
TAG_METHOD_HANDLE = 15
TAG_METHOD_TYPE = 16
TAG_INVOKE_DYNAMIC = 18

# Payload sizes (in bytes) of the entries that are skipped opaquely
SKIPPED_TAG_SIZES: Dict[int, int] = {
    TAG_FIELDREF: 4,
    TAG_METHODREF: 4,
    TAG_INTERFACE_METHODREF: 4,
    TAG_NAME_AND_TYPE: 4,
    TAG_INVOKE_DYNAMIC: 4,
    TAG_STRING: 2,
    TAG_METHOD_TYPE: 2,
    TAG_INTEGER: 4,
    TAG_FLOAT: 4,
    TAG_LONG: 8,
    TAG_DOUBLE: 8,
    TAG_METHOD_HANDLE: 3,
}

# Entries occupying two constant pool slots
WIDE_TAGS = frozenset({TAG_LONG, TAG_DOUBLE})

# -----------------------------------------------------------------------------
# PROCESS EXIT CODES
# -----------------------------------------------------------------------------

EXIT_OK = 0
# Invalid invocations keep a non-failure status for compatibility
EXIT_USAGE = 0
EXIT_FAILURE = 1
EXIT_MISSING_INPUT = 2
