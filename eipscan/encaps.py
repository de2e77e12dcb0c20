"""EtherNet/IP encapsulation packets and the session interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Union

from .buffer import Buffer
from .endpoint import EndPoint

HEADER_SIZE = 24


class EncapsCommand(IntEnum):
    """Encapsulation command codes."""

    NOP = 0x0000
    LIST_SERVICES = 0x0004
    LIST_IDENTITY = 0x0063
    LIST_INTERFACES = 0x0064
    REGISTER_SESSION = 0x0065
    UN_REGISTER_SESSION = 0x0066
    SEND_RR_DATA = 0x006F
    SEND_UNIT_DATA = 0x0070
    INDICATE_STATUS = 0x0072
    CANCEL = 0x0073


class EncapsStatusCode(IntEnum):
    """Encapsulation status codes."""

    SUCCESS = 0x0000
    UNSUPPORTED_COMMAND = 0x0001
    INSUFFICIENT_MEMORY = 0x0002
    INVALID_FORMAT_OR_DATA = 0x0003
    INVALID_SESSION_HANDLE = 0x0064
    UNSUPPORTED_PROTOCOL_VERSION = 0x0069


class EncapsPacketError(ValueError):
    """Raised when bytes do not form a valid encapsulation packet."""


def _coerce(enum_type, value: int):
    try:
        return enum_type(value)
    except ValueError:
        return value


@dataclass
class EncapsPacket:
    """An encapsulation header with its data."""

    command: Union[EncapsCommand, int] = EncapsCommand.NOP
    session_handle: int = 0
    status_code: Union[EncapsStatusCode, int] = EncapsStatusCode.SUCCESS
    context: bytes = bytes(8)
    options: int = 0
    data: bytes = b""

    HEADER_SIZE = HEADER_SIZE

    def __post_init__(self) -> None:
        self.context = bytes(self.context)
        if len(self.context) != 8:
            raise ValueError("sender context must be 8 bytes")
        self.data = bytes(self.data)
        self.command = _coerce(EncapsCommand, int(self.command))
        self.status_code = _coerce(EncapsStatusCode, int(self.status_code))

    @property
    def length(self) -> int:
        """Number of data bytes following the header."""
        return len(self.data)

    def pack(self) -> bytes:
        """Encode the header and data."""
        return (
            Buffer()
            .write_uint16(self.command)
            .write_uint16(self.length)
            .write_uint32(self.session_handle)
            .write_uint32(self.status_code)
            .write_bytes(self.context)
            .write_uint32(self.options)
            .write_bytes(self.data)
            .data()
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "EncapsPacket":
        """Decode a packet, checking the header size and the data length."""
        if len(data) < HEADER_SIZE:
            raise EncapsPacketError("EncapsPacket header must be 24 bytes")
        buffer = Buffer(data)
        command = buffer.read_uint16()
        length = buffer.read_uint16()
        session_handle = buffer.read_uint32()
        status_code = buffer.read_uint32()
        context = buffer.read_bytes(8)
        options = buffer.read_uint32()

        data_size = len(data) - HEADER_SIZE
        if data_size != length:
            raise EncapsPacketError(
                f"EncapsPacket data must be {length} but we have only {data_size} bytes"
            )
        return cls(
            command=command,
            session_handle=session_handle,
            status_code=status_code,
            context=context,
            options=options,
            data=buffer.read_bytes(length),
        )

    @staticmethod
    def length_from_header(data: bytes) -> int:
        """Read the data length field from the start of a header."""
        if len(data) < 4:
            raise EncapsPacketError("header too short to hold the length field")
        return Buffer(data[2:4]).read_uint16()


class SessionInfo(ABC):
    """An established EtherNet/IP session with an adapter."""

    @abstractmethod
    def send_and_receive(self, packet: EncapsPacket) -> EncapsPacket:
        """Send an encapsulation packet and return the reply."""

    @property
    @abstractmethod
    def session_handle(self) -> int:
        """Handle of the registered session."""

    @property
    @abstractmethod
    def remote_endpoint(self) -> EndPoint:
        """Address of the adapter the session is established with."""


def register_session_packet() -> EncapsPacket:
    """A RegisterSession request with protocol version 1 and no options."""
    data = Buffer().write_uint16(1).write_uint16(0).data()
    return EncapsPacket(command=EncapsCommand.REGISTER_SESSION, data=data)


def unregister_session_packet(session_handle: int) -> EncapsPacket:
    """An UnRegisterSession request for the given session."""
    return EncapsPacket(
        command=EncapsCommand.UN_REGISTER_SESSION, session_handle=session_handle
    )


def send_rr_data_packet(session_handle: int, timeout: int, data: bytes) -> EncapsPacket:
    """A SendRRData request wrapping the given Common Packet bytes."""
    payload = Buffer().write_uint32(0).write_uint16(timeout).write_bytes(data).data()
    return EncapsPacket(
        command=EncapsCommand.SEND_RR_DATA,
        session_handle=session_handle,
        data=payload,
    )


def list_identity_packet() -> EncapsPacket:
    """A ListIdentity request."""
    return EncapsPacket(command=EncapsCommand.LIST_IDENTITY, session_handle=0)