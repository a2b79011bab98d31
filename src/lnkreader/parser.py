"""Decode Windows .lnk files per the MS-SHLLINK spec -- pure struct unpacking.

The decode runs front to back over a single :class:`ByteCursor`:

1. ShellLinkHeader (76 bytes, fixed layout)
2. LinkTargetIDList, only if ``HasTargetIDList``
3. LinkInfo, only if ``HasLinkInfo``

StringData and ExtraData are left unread on the cursor.
"""

import warnings
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ._constants import (
    ANSI_CODEPAGE,
    DRIVE_TYPES,
    FILE_ATTRIBUTE_RESERVED_MASK,
    HEADER_SIZE,
    LINK_CLSID,
    LINKINFO_COMMON_NETWORK_RELATIVE_LINK_AND_PATH_SUFFIX,
    LINKINFO_VOLUME_ID_AND_LOCAL_BASE_PATH,
)
from ._types import ByteSource
from .cursor import ByteCursor
from .errors import (
    InvalidClsidError,
    InvalidHeaderSizeError,
    LinkInfoWarning,
    LnkError,
    ReservedBitSetError,
)
from .flags import (
    FileAttributes,
    HotKey,
    LinkFlags,
    expand_file_attributes,
    expand_link_flags,
    filetime_to_ns,
    ns_to_datetime,
    validate_hotkey_key,
)

# LinkInfoSize and LinkInfoHeaderSize, read before the header size is known.
_LINKINFO_SIZE_FIELDS = 8
# VolumeID bytes before the optional VolumeLabelOffsetUnicode.
_VOLUME_ID_FIXED_HEADER = 16


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class VolumeID:
    """VolumeID (MS-SHLLINK 2.3.1)."""

    size: int
    drive_type: int
    drive_serial_number: int
    volume_label_offset: int
    volume_label_offset_unicode: int | None = None
    volume_label: bytes = b""

    @property
    def drive_type_name(self) -> str:
        return DRIVE_TYPES.get(self.drive_type, f"DRIVE_0x{self.drive_type:X}")

    def volume_label_text(self, encoding: str = ANSI_CODEPAGE) -> str:
        return self.volume_label.decode(encoding, errors="replace")


@dataclass(frozen=True)
class LinkInfo:
    """LinkInfo (MS-SHLLINK 2.3).

    The ``*_unicode`` offsets are ``None`` when ``header_size`` is too small
    to contain them.  ``volume_id`` and ``local_base_path`` are ``None``
    unless ``volume_id_and_local_base_path`` is set.  The
    CommonNetworkRelativeLink body is not decoded.
    """

    size: int
    header_size: int
    flags: int
    volume_id_offset: int
    local_base_path_offset: int
    common_network_relative_link_offset: int
    common_path_suffix_offset: int
    local_base_path_offset_unicode: int | None = None
    common_path_suffix_offset_unicode: int | None = None
    volume_id: VolumeID | None = None
    local_base_path: bytes | None = None

    @property
    def volume_id_and_local_base_path(self) -> bool:
        return bool(self.flags & LINKINFO_VOLUME_ID_AND_LOCAL_BASE_PATH)

    @property
    def common_network_relative_link_and_path_suffix(self) -> bool:
        return bool(self.flags & LINKINFO_COMMON_NETWORK_RELATIVE_LINK_AND_PATH_SUFFIX)

    def local_base_path_text(self, encoding: str = ANSI_CODEPAGE) -> str | None:
        if self.local_base_path is None:
            return None
        return self.local_base_path.decode(encoding, errors="replace")


@dataclass(frozen=True)
class ShellLink:
    """A decoded .lnk file.

    Timestamps are stored as integer nanoseconds since 1970-01-01 UTC so no
    FILETIME precision is lost; the ``creation_time``/``access_time``/
    ``write_time`` properties give ``datetime`` views.

    ``show_command`` is the raw header value.  Values other than
    ``SW_SHOWNORMAL``, ``SW_SHOWMAXIMIZED`` and ``SW_SHOWMINNOACTIVE`` are
    meant to be treated as normal by whoever displays them.

    A record with ``complete=False`` is the partial result attached to a
    :class:`~lnkreader.errors.LnkError`; every field after the failure point
    is ``None``.
    """

    header_size: int | None = None
    clsid: bytes | None = None
    link_flags: LinkFlags | None = None
    file_attributes: FileAttributes | None = None
    creation_time_ns: int | None = None
    access_time_ns: int | None = None
    write_time_ns: int | None = None
    file_size: int | None = None
    icon_index: int | None = None
    show_command: int | None = None
    hotkey: HotKey | None = None
    id_list: bytes | None = None
    link_info: LinkInfo | None = None
    complete: bool = True

    @property
    def creation_time(self) -> datetime | None:
        return None if self.creation_time_ns is None else ns_to_datetime(self.creation_time_ns)

    @property
    def access_time(self) -> datetime | None:
        return None if self.access_time_ns is None else ns_to_datetime(self.access_time_ns)

    @property
    def write_time(self) -> datetime | None:
        return None if self.write_time_ns is None else ns_to_datetime(self.write_time_ns)

    @property
    def target_path(self) -> str | None:
        """LinkInfo local base path decoded with the ANSI code page, if any."""
        if self.link_info is None:
            return None
        return self.link_info.local_base_path_text()


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------
def _decode_header(cursor: ByteCursor, out: dict[str, Any]) -> None:
    """ShellLinkHeader: consume exactly 76 bytes, filling *out* as we go."""
    header_size = cursor.u32()
    out["header_size"] = header_size
    if header_size != HEADER_SIZE:
        raise InvalidHeaderSizeError(header_size)

    clsid = cursor.read(16)
    out["clsid"] = clsid
    if clsid != LINK_CLSID:
        raise InvalidClsidError(clsid)

    out["link_flags"] = expand_link_flags(cursor.u32())

    attributes = cursor.u32()
    if attributes & FILE_ATTRIBUTE_RESERVED_MASK:
        raise ReservedBitSetError("FileAttributes", attributes)
    out["file_attributes"] = expand_file_attributes(attributes)

    out["creation_time_ns"] = filetime_to_ns(cursor.u64())
    out["access_time_ns"] = filetime_to_ns(cursor.u64())
    out["write_time_ns"] = filetime_to_ns(cursor.u64())
    out["file_size"] = cursor.u32()
    out["icon_index"] = cursor.i32()
    out["show_command"] = cursor.u32()

    key = validate_hotkey_key(cursor.u8())
    modifiers = cursor.u8()
    out["hotkey"] = HotKey.from_bytes(key, modifiers)

    for name, read in (
        ("Reserved1", cursor.u16),
        ("Reserved2", cursor.u32),
        ("Reserved3", cursor.u32),
    ):
        value = read()
        if value:
            raise ReservedBitSetError(name, value)


def _decode_id_list(cursor: ByteCursor) -> bytes:
    """LinkTargetIDList: uint16 IDListSize followed by that many opaque bytes."""
    return cursor.read(cursor.u16())


def _decode_volume_id(cursor: ByteCursor) -> VolumeID:
    size = cursor.u32()
    drive_type = cursor.u32()
    serial = cursor.u32()
    label_offset = cursor.u32()
    # VolumeLabelOffsetUnicode is only present when VolumeLabelOffset points
    # past the fixed 16-byte part.
    section = cursor.section(label_offset, consumed=_VOLUME_ID_FIXED_HEADER)
    label_offset_unicode = section.u32_if_declared()
    return VolumeID(
        size=size,
        drive_type=drive_type,
        drive_serial_number=serial,
        volume_label_offset=label_offset,
        volume_label_offset_unicode=label_offset_unicode,
        volume_label=cursor.read_cstring(),
    )


def _decode_link_info(cursor: ByteCursor) -> LinkInfo:
    """LinkInfo: the header size decides how many offset fields follow."""
    size = cursor.u32()
    header_size = cursor.u32()
    section = cursor.section(header_size, consumed=_LINKINFO_SIZE_FIELDS)
    flags = section.u32()
    volume_id_offset = section.u32()
    local_base_path_offset = section.u32()
    common_network_relative_link_offset = section.u32()
    common_path_suffix_offset = section.u32()
    # Present iff LinkInfoHeaderSize > 28 and > 32 respectively.
    local_base_path_offset_unicode = section.u32_if_declared()
    common_path_suffix_offset_unicode = section.u32_if_declared()

    volume_id = None
    local_base_path = None
    if flags & LINKINFO_VOLUME_ID_AND_LOCAL_BASE_PATH:
        volume_id = _decode_volume_id(cursor)
        local_base_path = cursor.read_cstring()

    if flags & LINKINFO_COMMON_NETWORK_RELATIVE_LINK_AND_PATH_SUFFIX:
        warnings.warn(
            f"LinkInfo at offset {cursor.offset} has a CommonNetworkRelativeLink "
            f"(offset 0x{common_network_relative_link_offset:X}) which is not decoded",
            LinkInfoWarning,
            stacklevel=2,
        )

    return LinkInfo(
        size=size,
        header_size=header_size,
        flags=flags,
        volume_id_offset=volume_id_offset,
        local_base_path_offset=local_base_path_offset,
        common_network_relative_link_offset=common_network_relative_link_offset,
        common_path_suffix_offset=common_path_suffix_offset,
        local_base_path_offset_unicode=local_base_path_offset_unicode,
        common_path_suffix_offset_unicode=common_path_suffix_offset_unicode,
        volume_id=volume_id,
        local_base_path=local_base_path,
    )


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------
def decode(cursor: ByteCursor | ByteSource) -> ShellLink:
    """Decode a .lnk file from *cursor*.

    Args:
        cursor: A :class:`ByteCursor` positioned at the start of the file.
            Raw ``bytes`` or a binary file object are wrapped automatically.

    Returns:
        The decoded :class:`ShellLink`.  The cursor is left at the first
        byte after LinkInfo (or after whichever earlier section was last).

    Raises:
        LnkError: On the first violated precondition.  The record decoded
            so far is attached as ``error.partial``.  The cursor position
            is undefined afterwards.
    """
    if not isinstance(cursor, ByteCursor):
        cursor = ByteCursor(cursor)

    out: dict[str, Any] = {}
    try:
        _decode_header(cursor, out)
        flags: LinkFlags = out["link_flags"]
        if flags.has_target_id_list:
            out["id_list"] = _decode_id_list(cursor)
        if flags.has_link_info:
            out["link_info"] = _decode_link_info(cursor)
    except LnkError as exc:
        exc.partial = ShellLink(**out, complete=False)
        raise
    return ShellLink(**out)


def parse_lnk(source: ByteSource) -> ShellLink:
    """Decode a .lnk from raw bytes or an open binary file object."""
    return decode(ByteCursor(source))
