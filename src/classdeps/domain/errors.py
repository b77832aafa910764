from __future__ import annotations

"""
Domain Exceptions.

Error taxonomy shared by the decoder, the pipeline and the CLI controller.
References to classes outside the analysed directory are not errors and have
no exception type.
"""


class UsageError(Exception):
    """Raised when the command line does not match the accepted invocation."""


class MalformedClassFileError(ValueError):
    """
    Raised when a class file cannot be decoded.

    Covers unknown constant pool tags, truncated streams and indices that
    fall outside the pool or point at an entry of the wrong kind.
    """
