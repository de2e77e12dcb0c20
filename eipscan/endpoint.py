"""IPv4 end point with the raw sockaddr fields used on the wire."""

from __future__ import annotations

import socket

AF_INET = 2
EIP_DEFAULT_EXPLICIT_PORT = 44818
EIP_DEFAULT_IMPLICIT_PORT = 2222


def _swap16(value: int) -> int:
    return ((value & 0xFF) << 8) | ((value >> 8) & 0xFF)


class EndPoint:
    """An IPv4 host and port.

    ``s_addr`` and ``sin_port`` hold the network-order address and port
    read as little-endian integers, the way they appear in a sockaddr.
    """

    __slots__ = ("host", "port", "family", "s_addr", "sin_port")

    def __init__(self, host: str, port: int) -> None:
        self.host = host
        self.port = port
        self.family = AF_INET
        self.sin_port = _swap16(port & 0xFFFF)
        try:
            packed = socket.inet_aton(host)
        except (OSError, ValueError):
            packed = bytes(4)
        self.s_addr = int.from_bytes(packed, "little")

    @classmethod
    def from_sockaddr(cls, family: int, s_addr: int, sin_port: int) -> "EndPoint":
        """Build an end point from raw sockaddr_in fields."""
        endpoint = cls.__new__(cls)
        endpoint.s_addr = s_addr & 0xFFFFFFFF
        endpoint.sin_port = sin_port & 0xFFFF
        endpoint.family = family
        endpoint.host = socket.inet_ntoa(endpoint.s_addr.to_bytes(4, "little"))
        endpoint.port = _swap16(endpoint.sin_port)
        return endpoint

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"

    def __repr__(self) -> str:
        return f"EndPoint({self.host!r}, {self.port})"

    def _key(self) -> tuple:
        return (self.host, self.port, self.s_addr, self.sin_port, self.family)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EndPoint):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: "EndPoint") -> bool:
        if not isinstance(other, EndPoint):
            return NotImplemented
        return self.host < other.host and self.port < other.port

    def __hash__(self) -> int:
        return hash(self._key())