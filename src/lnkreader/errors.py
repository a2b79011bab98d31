"""Exceptions and warnings raised while decoding .lnk files.

Every error is terminal: the first violated precondition aborts the decode.
When raised from :func:`lnkreader.decode`, the error carries the record
decoded so far on :attr:`LnkError.partial` (with ``complete=False``).  Fields
beyond the point of failure are ``None`` and nothing in the partial record
should be trusted for anything but diagnostics.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .parser import ShellLink


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------
class LnkError(Exception):
    """Raised when data does not conform to the MS-SHLLINK format."""

    partial: ShellLink | None = None


class TruncatedInputError(LnkError):
    """Raised when a required field is absent or truncated."""

    def __init__(self, offset: int, wanted: int, got: int) -> None:
        self.offset = offset
        self.wanted = wanted
        self.got = got
        super().__init__(
            f"Truncated input at offset {offset}: wanted {wanted} bytes, got {got}"
        )


class InvalidHeaderSizeError(LnkError):
    """HeaderSize is not 0x4C."""

    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(f"Invalid header size 0x{value:08X} (expected 0x0000004C)")


class InvalidClsidError(LnkError):
    """LinkCLSID is not 00021401-0000-0000-C000-000000000046."""

    def __init__(self, value: bytes) -> None:
        self.value = value
        super().__init__(f"Invalid CLSID {value.hex(' ')}")


class ReservedBitSetError(LnkError):
    """A reserved bit or reserved header field is non-zero."""

    def __init__(self, field: str, value: int) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Reserved bits set in {field}: 0x{value:08X}")


class InvalidHotKeyError(LnkError):
    """HotKey low byte is not a permitted virtual key code."""

    def __init__(self, key: int) -> None:
        self.key = key
        super().__init__(f"Invalid hotkey virtual key code 0x{key:02X}")


# ---------------------------------------------------------------------------
# Warnings
# ---------------------------------------------------------------------------
class LnkWarning(UserWarning):
    """Non-fatal observation about a decoded file."""


class LinkInfoWarning(LnkWarning):
    """Part of the LinkInfo structure was recognised but not decoded."""
