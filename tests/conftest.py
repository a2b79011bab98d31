"""Shared fixtures for lnkreader tests.

The ``pack_*`` helpers lay out .lnk bytes with plain ``struct`` packing so
each test can control every header field and LinkInfo threshold directly.
"""

import struct

import pytest

from lnkreader._constants import ANSI_CODEPAGE, LINK_CLSID

# 2023-11-14T22:13:20.1234567Z
SAMPLE_FILETIME = 133_444_736_001_234_567
SAMPLE_UNIX_NS = 1_700_000_000_123_456_700


def pack_header(
    link_flags: int = 0x00000083,
    file_attributes: int = 0x20,
    creation_time: int = SAMPLE_FILETIME,
    access_time: int = SAMPLE_FILETIME,
    write_time: int = SAMPLE_FILETIME,
    file_size: int = 0,
    icon_index: int = 0,
    show_command: int = 1,
    hotkey_vk: int = 0x41,
    hotkey_mod: int = 0,
    header_size: int = 0x4C,
    clsid: bytes = LINK_CLSID,
    reserved: tuple[int, int, int] = (0, 0, 0),
) -> bytes:
    """76-byte ShellLinkHeader."""
    hdr = bytearray(76)
    struct.pack_into("<I", hdr, 0, header_size)
    hdr[4:20] = clsid
    struct.pack_into("<I", hdr, 20, link_flags)
    struct.pack_into("<I", hdr, 24, file_attributes)
    struct.pack_into("<QQQ", hdr, 28, creation_time, access_time, write_time)
    struct.pack_into("<I", hdr, 52, file_size)  # FileSize
    struct.pack_into("<i", hdr, 56, icon_index)  # IconIndex
    struct.pack_into("<I", hdr, 60, show_command)  # ShowCommand
    struct.pack_into("<BB", hdr, 64, hotkey_vk, hotkey_mod)
    struct.pack_into("<HII", hdr, 66, *reserved)
    return bytes(hdr)


def pack_idlist(items: bytes) -> bytes:
    """LinkTargetIDList: uint16 size prefix + opaque item bytes."""
    return struct.pack("<H", len(items)) + items


def pack_linkinfo(
    local_base_path: str = r"C:\Windows\notepad.exe",
    vol_label: str = "",
    serial: int = 0x4A2D5E79,
    drive_type: int = 3,
    hdr_size: int = 0x24,
    flags: int = 0x01,
    label_offset: int = 0x10,
) -> bytes:
    """LinkInfo section with VolumeID + local base path.

    Optional Unicode offsets are emitted only when *hdr_size* covers them
    (> 28 and > 32).  With *label_offset* > 16 a VolumeLabelOffsetUnicode
    field follows, and the ANSI label still comes next.
    """
    body = bytearray()
    if flags & 0x01:
        vol_id = bytearray()
        vol_id += struct.pack("<I", 0)  # VolumeIDSize (fill later)
        vol_id += struct.pack("<I", drive_type)  # DriveType
        vol_id += struct.pack("<I", serial)  # DriveSerialNumber
        vol_id += struct.pack("<I", label_offset)  # VolumeLabelOffset
        if label_offset > 16:
            vol_id += struct.pack("<I", len(vol_id) + 4)  # VolumeLabelOffsetUnicode
        vol_id += vol_label.encode(ANSI_CODEPAGE) + b"\x00"
        struct.pack_into("<I", vol_id, 0, len(vol_id))
        body += vol_id
        body += local_base_path.encode(ANSI_CODEPAGE) + b"\x00"
        body += b"\x00"  # CommonPathSuffix

    fields = [flags, 0, 0, 0, 0]
    if hdr_size > 28:
        fields.append(0)
    if hdr_size > 32:
        fields.append(0)
    header_len = 8 + 4 * len(fields)
    if flags & 0x01:
        fields[1] = header_len  # VolumeIDOffset
        fields[2] = header_len + struct.unpack_from("<I", body, 0)[0]  # LocalBasePathOffset

    info = bytearray()
    info += struct.pack("<I", header_len + len(body))  # LinkInfoSize
    info += struct.pack("<I", hdr_size)  # LinkInfoHeaderSize
    info += struct.pack(f"<{len(fields)}I", *fields)
    info += body
    return bytes(info)


def build_lnk(
    id_list: bytes | None = b"\x14\x00" + b"\x1f\x50" + bytes(16) + b"\x00\x00",
    link_info: bytes | None = None,
    trailer: bytes = b"\x00\x00\x00\x00",
    **header,
) -> bytes:
    """Header + optional IDList + optional LinkInfo + *trailer*.

    HasTargetIDList/HasLinkInfo are derived from which sections are given
    unless ``link_flags`` is passed explicitly.
    """
    if "link_flags" not in header:
        flags = 0x00000080  # IsUnicode
        if id_list is not None:
            flags |= 0x00000001
        if link_info is not None:
            flags |= 0x00000002
        header["link_flags"] = flags
    out = bytearray(pack_header(**header))
    if id_list is not None:
        out += pack_idlist(id_list)
    if link_info is not None:
        out += link_info
    out += trailer
    return bytes(out)


@pytest.fixture
def simple_lnk_bytes():
    """A .lnk targeting notepad.exe with IDList and LinkInfo."""
    return build_lnk(link_info=pack_linkinfo(vol_label="SYSTEM"))


@pytest.fixture
def header_only_lnk_bytes():
    """Header with no IDList and no LinkInfo."""
    return build_lnk(id_list=None, trailer=b"")


@pytest.fixture
def full_lnk_bytes():
    """A feature-rich header with hotkey, icon index and attributes."""
    return build_lnk(
        link_info=pack_linkinfo(
            local_base_path=r"C:\Program Files\Google\Chrome\Application\chrome.exe",
            vol_label="OS",
            serial=0xDEADBEEF,
        ),
        file_attributes=0x21,
        file_size=201216,
        icon_index=-3,
        show_command=3,
        hotkey_vk=0x43,
        hotkey_mod=0x02,
    )
