"""Pure decoding of the header's bit fields, hotkey and timestamps.

Nothing in this module performs I/O.  ``LinkFlags`` and ``FileAttributes``
are expanded from fixed (bit, name) tables in :mod:`lnkreader._constants`,
so each named flag maps to exactly one bit.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from ._constants import (
    FILE_ATTRIBUTE_BITS,
    FILETIME_UNIX_EPOCH_DELTA,
    HOTKEY_VK_VALID,
    HOTKEYF_ALT,
    HOTKEYF_CONTROL,
    HOTKEYF_SHIFT,
    LINK_FLAG_BITS,
    VK_KEYS,
)
from .errors import InvalidHotKeyError

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Bit-flag expansion
# ---------------------------------------------------------------------------
class _FlagSet:
    """Shared behaviour for the frozen flag dataclasses below."""

    _BITS: tuple[tuple[int, str], ...] = ()

    @classmethod
    def from_word(cls, word: int):
        return cls(**{name: bool(word >> bit & 1) for bit, name in cls._BITS})

    def names(self) -> list[str]:
        """Names of the flags that are set, in ascending bit order."""
        return [name for _, name in self._BITS if getattr(self, name)]


@dataclass(frozen=True)
class LinkFlags(_FlagSet):
    """LinkFlags (MS-SHLLINK 2.1.1)."""

    _BITS = LINK_FLAG_BITS

    has_target_id_list: bool = False
    has_link_info: bool = False
    has_name: bool = False
    has_relative_path: bool = False
    has_working_dir: bool = False
    has_arguments: bool = False
    has_icon_location: bool = False
    is_unicode: bool = False
    force_no_link_info: bool = False
    has_exp_string: bool = False
    run_in_separate_process: bool = False
    has_darwin_id: bool = False
    run_as_user: bool = False
    has_exp_icon: bool = False
    no_pidl_alias: bool = False
    run_with_shim_layer: bool = False
    force_no_link_track: bool = False
    enable_target_metadata: bool = False
    disable_link_path_tracking: bool = False
    disable_known_folder_tracking: bool = False
    disable_known_folder_alias: bool = False
    allow_link_to_link: bool = False
    unalias_on_save: bool = False
    prefer_environment_path: bool = False
    keep_local_id_list_for_unc_target: bool = False


@dataclass(frozen=True)
class FileAttributes(_FlagSet):
    """FileAttributesFlags (MS-SHLLINK 2.1.2)."""

    _BITS = FILE_ATTRIBUTE_BITS

    read_only: bool = False
    hidden: bool = False
    system: bool = False
    directory: bool = False
    archive: bool = False
    normal: bool = False
    temporary: bool = False
    sparse_file: bool = False
    reparse_point: bool = False
    compressed: bool = False
    offline: bool = False
    not_content_indexed: bool = False
    encrypted: bool = False


def expand_link_flags(word: int) -> LinkFlags:
    """Expand the raw LinkFlags word.  Bits 11 and 16 are ignored."""
    return LinkFlags.from_word(word)


def expand_file_attributes(word: int) -> FileAttributes:
    """Expand the raw FileAttributes word.

    Reserved bits 3 and 6 are not represented; the header decoder rejects
    them before calling this.
    """
    return FileAttributes.from_word(word)


# ---------------------------------------------------------------------------
# HotKey
# ---------------------------------------------------------------------------
def validate_hotkey_key(key: int) -> int:
    """Return *key* if it is a permitted HotKey virtual key code."""
    if key not in HOTKEY_VK_VALID:
        raise InvalidHotKeyError(key)
    return key


def render_key(key: int) -> str:
    """Render a virtual key code: ``F1``..``F24``, ``NumLock``, ``ScrollLock``
    or the literal character."""
    return VK_KEYS.get(key, chr(key))


@dataclass(frozen=True)
class HotKey:
    """HotKeyFlags: a virtual key code plus SHIFT/CTRL/ALT modifiers."""

    key: int
    shift: bool = False
    ctrl: bool = False
    alt: bool = False

    @classmethod
    def from_bytes(cls, low: int, high: int) -> "HotKey":
        return cls(
            key=low,
            shift=bool(high & HOTKEYF_SHIFT),
            ctrl=bool(high & HOTKEYF_CONTROL),
            alt=bool(high & HOTKEYF_ALT),
        )

    def render(self) -> str:
        """Human-readable form, e.g. ``"Ctrl+Alt+F9"``."""
        prefix = ""
        if self.shift:
            prefix += "Shift+"
        if self.ctrl:
            prefix += "Ctrl+"
        if self.alt:
            prefix += "Alt+"
        return prefix + render_key(self.key)

    def __str__(self) -> str:
        return self.render()


# ---------------------------------------------------------------------------
# FILETIME
# ---------------------------------------------------------------------------
def filetime_to_ns(ticks: int) -> int:
    """Convert FILETIME ticks (100 ns since 1601) to ns since the Unix epoch.

    Python integers do not wrap, so values before 1970 come back negative.
    """
    return (ticks - FILETIME_UNIX_EPOCH_DELTA) * 100


def ns_to_datetime(ns: int) -> datetime:
    """Timezone-aware UTC datetime for *ns* (truncated to microseconds)."""
    return _UNIX_EPOCH + timedelta(microseconds=ns // 1000)


def filetime_to_datetime(ticks: int) -> datetime:
    return ns_to_datetime(filetime_to_ns(ticks))
