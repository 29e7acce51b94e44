# wren/errors.py
from __future__ import annotations

from typing import Optional


class WrenError(Exception):
    """Base class for every error raised by wren."""


class OutOfBoundsError(WrenError, IndexError):
    """A read would run past the end of the underlying buffer."""

    def __init__(
        self,
        message: str,
        *,
        offset: Optional[int] = None,
        size: Optional[int] = None,
        length: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.offset = offset
        self.size = size
        self.length = length


class TruncatedDataError(OutOfBoundsError):
    """
    The container is shorter than its own header says it is.
    There is no partial result; the whole decode is aborted.
    """

    def __init__(
        self,
        message: str,
        *,
        section: str,
        offset: Optional[int] = None,
        size: Optional[int] = None,
        length: Optional[int] = None,
    ) -> None:
        super().__init__(message, offset=offset, size=size, length=length)
        self.section = section


class UnsupportedFormatError(WrenError, ValueError):
    """Texel size cannot be derived from the container's GL type/format."""


class MissingAttributeError(WrenError, KeyError):
    """A mesh lacks an attribute required by an operation."""

    def __init__(self, semantics: str, message: str) -> None:
        super().__init__(message)
        self.semantics = semantics

    def __str__(self) -> str:
        # KeyError quotes its argument otherwise
        return str(self.args[0])


class AttributeStreamMismatchError(WrenError, RuntimeError):
    """Component attribute streams disagree on their length."""


__all__ = [
    "WrenError",
    "OutOfBoundsError",
    "TruncatedDataError",
    "UnsupportedFormatError",
    "MissingAttributeError",
    "AttributeStreamMismatchError",
]
