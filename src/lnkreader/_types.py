"""Shared type aliases for lnkreader modules."""

from typing import BinaryIO

ByteSource = bytes | bytearray | memoryview | BinaryIO
