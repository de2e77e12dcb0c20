"""Little-endian encoder and decoder for CIP data."""

from __future__ import annotations

import struct

from .endpoint import EndPoint


class BufferUnderflowError(ValueError):
    """Raised when a read needs more bytes than remain in the buffer."""


class Buffer:
    """A byte buffer written at the end and read from a moving position.

    Write methods return the buffer so calls can be chained.
    """

    def __init__(self, data: bytes = b"") -> None:
        self._buffer = bytearray(data)
        self._position = 0

    # -- writing -----------------------------------------------------------

    def _write_int(self, value: int, size: int) -> "Buffer":
        mask = (1 << (8 * size)) - 1
        self._buffer += (int(value) & mask).to_bytes(size, "little")
        return self

    def write_uint8(self, value: int) -> "Buffer":
        return self._write_int(value, 1)

    def write_int8(self, value: int) -> "Buffer":
        return self._write_int(value, 1)

    def write_uint16(self, value: int) -> "Buffer":
        return self._write_int(value, 2)

    def write_int16(self, value: int) -> "Buffer":
        return self._write_int(value, 2)

    def write_uint32(self, value: int) -> "Buffer":
        return self._write_int(value, 4)

    def write_int32(self, value: int) -> "Buffer":
        return self._write_int(value, 4)

    def write_uint64(self, value: int) -> "Buffer":
        return self._write_int(value, 8)

    def write_int64(self, value: int) -> "Buffer":
        return self._write_int(value, 8)

    def write_float(self, value: float) -> "Buffer":
        self._buffer += struct.pack("<f", value)
        return self

    def write_double(self, value: float) -> "Buffer":
        self._buffer += struct.pack("<d", value)
        return self

    def write_bytes(self, value: bytes) -> "Buffer":
        self._buffer += bytes(value)
        return self

    def write_uint16_list(self, values) -> "Buffer":
        for value in values:
            self.write_uint16(value)
        return self

    def write_endpoint(self, endpoint: EndPoint) -> "Buffer":
        """Write a 16-byte sockaddr_in as used in EtherNet/IP items."""
        self.write_bytes((endpoint.family & 0xFFFF).to_bytes(2, "big"))
        self.write_uint16(endpoint.sin_port)
        self.write_uint32(endpoint.s_addr)
        return self.write_bytes(bytes(8))

    # -- reading -----------------------------------------------------------

    def _take(self, size: int) -> bytes:
        if size < 0:
            raise ValueError("size must not be negative")
        end = self._position + size
        if end > len(self._buffer):
            raise BufferUnderflowError(
                f"need {size} bytes at position {self._position}, "
                f"buffer has {len(self._buffer)}"
            )
        chunk = bytes(self._buffer[self._position:end])
        self._position = end
        return chunk

    def _read_int(self, size: int, signed: bool) -> int:
        return int.from_bytes(self._take(size), "little", signed=signed)

    def read_uint8(self) -> int:
        return self._read_int(1, False)

    def read_int8(self) -> int:
        return self._read_int(1, True)

    def read_uint16(self) -> int:
        return self._read_int(2, False)

    def read_int16(self) -> int:
        return self._read_int(2, True)

    def read_uint32(self) -> int:
        return self._read_int(4, False)

    def read_int32(self) -> int:
        return self._read_int(4, True)

    def read_uint64(self) -> int:
        return self._read_int(8, False)

    def read_int64(self) -> int:
        return self._read_int(8, True)

    def read_float(self) -> float:
        return struct.unpack("<f", self._take(4))[0]

    def read_double(self) -> float:
        return struct.unpack("<d", self._take(8))[0]

    def read_bytes(self, size: int) -> bytes:
        return self._take(size)

    def read_uint16_list(self, count: int) -> list[int]:
        return [self.read_uint16() for _ in range(count)]

    def read_endpoint(self) -> EndPoint:
        """Read a 16-byte sockaddr_in."""
        family = int.from_bytes(self._take(2), "big")
        sin_port = self.read_uint16()
        s_addr = self.read_uint32()
        self._take(8)
        return EndPoint.from_sockaddr(family, s_addr, sin_port)

    # -- state -------------------------------------------------------------

    def data(self) -> bytes:
        """Return the whole content of the buffer."""
        return bytes(self._buffer)

    def size(self) -> int:
        return len(self._buffer)

    def pos(self) -> int:
        return self._position

    def empty(self) -> bool:
        """True when nothing is left to read."""
        return self._position >= len(self._buffer)