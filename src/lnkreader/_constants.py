"""MS-SHLLINK constants used by the decoder."""

from types import MappingProxyType

# ---------------------------------------------------------------------------
# ShellLinkHeader
# ---------------------------------------------------------------------------
HEADER_SIZE = 0x4C

# 00021401-0000-0000-C000-000000000046
LINK_CLSID = b"\x01\x14\x02\x00\x00\x00\x00\x00\xc0\x00\x00\x00\x00\x00\x00\x46"

# 100-ns ticks between 1601-01-01 and 1970-01-01
FILETIME_UNIX_EPOCH_DELTA = 116_444_736_000_000_000

ANSI_CODEPAGE = "cp1252"

# ---------------------------------------------------------------------------
# LinkFlags (section 2.1.1) -- bits 11 and 16 are unused
# ---------------------------------------------------------------------------
LINK_FLAG_BITS: tuple[tuple[int, str], ...] = (
    (0, "has_target_id_list"),
    (1, "has_link_info"),
    (2, "has_name"),
    (3, "has_relative_path"),
    (4, "has_working_dir"),
    (5, "has_arguments"),
    (6, "has_icon_location"),
    (7, "is_unicode"),
    (8, "force_no_link_info"),
    (9, "has_exp_string"),
    (10, "run_in_separate_process"),
    (12, "has_darwin_id"),
    (13, "run_as_user"),
    (14, "has_exp_icon"),
    (15, "no_pidl_alias"),
    (17, "run_with_shim_layer"),
    (18, "force_no_link_track"),
    (19, "enable_target_metadata"),
    (20, "disable_link_path_tracking"),
    (21, "disable_known_folder_tracking"),
    (22, "disable_known_folder_alias"),
    (23, "allow_link_to_link"),
    (24, "unalias_on_save"),
    (25, "prefer_environment_path"),
    (26, "keep_local_id_list_for_unc_target"),
)

# ---------------------------------------------------------------------------
# FileAttributesFlags (section 2.1.2) -- bits 3 and 6 MUST be zero
# ---------------------------------------------------------------------------
FILE_ATTRIBUTE_BITS: tuple[tuple[int, str], ...] = (
    (0, "read_only"),
    (1, "hidden"),
    (2, "system"),
    (4, "directory"),
    (5, "archive"),
    (7, "normal"),
    (8, "temporary"),
    (9, "sparse_file"),
    (10, "reparse_point"),
    (11, "compressed"),
    (12, "offline"),
    (13, "not_content_indexed"),
    (14, "encrypted"),
)
FILE_ATTRIBUTE_RESERVED_MASK = 0x00000048

# ---------------------------------------------------------------------------
# ShowCommand values -- anything else MUST be treated as SW_SHOWNORMAL
# ---------------------------------------------------------------------------
SW_SHOWNORMAL = 1
SW_SHOWMAXIMIZED = 3
SW_SHOWMINNOACTIVE = 7

# ---------------------------------------------------------------------------
# HotKeyFlags (section 2.1.3)
# ---------------------------------------------------------------------------
HOTKEYF_SHIFT = 0x01
HOTKEYF_CONTROL = 0x02
HOTKEYF_ALT = 0x04

# Every permitted HotKey virtual key code and its display token
VK_KEYS = MappingProxyType(
    {
        **{k: chr(k) for k in range(0x30, 0x3A)},  # 0-9
        **{k: chr(k) for k in range(0x41, 0x5B)},  # A-Z
        **{k: f"F{k - 0x6F}" for k in range(0x70, 0x88)},  # F1-F24
        0x90: "NumLock",
        0x91: "ScrollLock",
    }
)
HOTKEY_VK_VALID: frozenset[int] = frozenset(VK_KEYS)

# ---------------------------------------------------------------------------
# LinkInfo (section 2.3)
# ---------------------------------------------------------------------------
LINKINFO_VOLUME_ID_AND_LOCAL_BASE_PATH = 0x00000001
LINKINFO_COMMON_NETWORK_RELATIVE_LINK_AND_PATH_SUFFIX = 0x00000002

DRIVE_TYPES = MappingProxyType(
    {
        0: "DRIVE_UNKNOWN",
        1: "DRIVE_NO_ROOT_DIR",
        2: "DRIVE_REMOVABLE",
        3: "DRIVE_FIXED",
        4: "DRIVE_REMOTE",
        5: "DRIVE_CDROM",
        6: "DRIVE_RAMDISK",
    }
)
