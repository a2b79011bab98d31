"""lnkreader -- decode Windows .lnk (MS-SHLLINK) shortcut files."""

from .cursor import ByteCursor, Section
from .errors import (
    InvalidClsidError,
    InvalidHeaderSizeError,
    InvalidHotKeyError,
    LinkInfoWarning,
    LnkError,
    LnkWarning,
    ReservedBitSetError,
    TruncatedInputError,
)
from .flags import FileAttributes, HotKey, LinkFlags, filetime_to_datetime, filetime_to_ns
from .parser import LinkInfo, ShellLink, VolumeID, decode, parse_lnk

__version__ = "0.1.0"

__all__ = [
    "ByteCursor",
    "FileAttributes",
    "HotKey",
    "InvalidClsidError",
    "InvalidHeaderSizeError",
    "InvalidHotKeyError",
    "LinkFlags",
    "LinkInfo",
    "LinkInfoWarning",
    "LnkError",
    "LnkWarning",
    "ReservedBitSetError",
    "Section",
    "ShellLink",
    "TruncatedInputError",
    "VolumeID",
    "decode",
    "filetime_to_datetime",
    "filetime_to_ns",
    "parse_lnk",
]
