"""EtherNet/IP Common Packet Format items and packets."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Iterator, Union

from .buffer import Buffer, BufferUnderflowError


class CommonPacketItemId(IntEnum):
    """Type identifiers of Common Packet Format items."""

    NULL_ADDR = 0x0000
    LIST_IDENTITY = 0x000C
    CONNECTION_ADDRESS_ITEM = 0x00A1
    CONNECTED_TRANSPORT_PACKET = 0x00B1
    UNCONNECTED_MESSAGE = 0x00B2
    O2T_SOCKADDR_INFO = 0x8000
    T2O_SOCKADDR_INFO = 0x8001
    SEQUENCED_ADDRESS_ITEM = 0x8002


class CommonPacketFormatError(ValueError):
    """Raised when bytes do not form a valid Common Packet."""


def _item_id(value: int) -> Union[CommonPacketItemId, int]:
    try:
        return CommonPacketItemId(value)
    except ValueError:
        return value


@dataclass(frozen=True)
class CommonPacketItem:
    """A single typed item of a Common Packet."""

    type_id: Union[CommonPacketItemId, int] = CommonPacketItemId.NULL_ADDR
    data: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))
        object.__setattr__(self, "type_id", _item_id(int(self.type_id)))

    @property
    def length(self) -> int:
        """Number of data bytes in the item."""
        return len(self.data)

    def pack(self) -> bytes:
        """Encode the item as type id, length and data."""
        return (
            Buffer()
            .write_uint16(self.type_id)
            .write_uint16(self.length)
            .write_bytes(self.data)
            .data()
        )


@dataclass
class CommonPacket:
    """An ordered collection of Common Packet items."""

    items: list[CommonPacketItem] = field(default_factory=list)

    def append(self, item: CommonPacketItem) -> "CommonPacket":
        """Add an item at the end; returns the packet for chaining."""
        self.items.append(item)
        return self

    def __iter__(self) -> Iterator[CommonPacketItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> CommonPacketItem:
        return self.items[index]

    def pack(self) -> bytes:
        """Encode the item count followed by every item."""
        buffer = Buffer().write_uint16(len(self.items))
        for item in self.items:
            buffer.write_bytes(item.pack())
        return buffer.data()

    @classmethod
    def from_bytes(cls, data: bytes) -> "CommonPacket":
        """Decode a Common Packet; stops early if the data runs out between items."""
        buffer = Buffer(data)
        items: list[CommonPacketItem] = []
        try:
            count = buffer.read_uint16()
            for _ in range(count):
                if buffer.empty():
                    break
                type_id = buffer.read_uint16()
                length = buffer.read_uint16()
                items.append(CommonPacketItem(type_id, buffer.read_bytes(length)))
        except BufferUnderflowError as exc:
            raise CommonPacketFormatError("Wrong Common Packet format") from exc
        return cls(items)

    @classmethod
    def of(cls, items: Iterable[CommonPacketItem]) -> "CommonPacket":
        """Build a packet from an iterable of items."""
        return cls(list(items))


def null_address_item() -> CommonPacketItem:
    """An empty NULL address item."""
    return CommonPacketItem()


def unconnected_data_item(data: bytes) -> CommonPacketItem:
    """An item carrying an unconnected message."""
    return CommonPacketItem(CommonPacketItemId.UNCONNECTED_MESSAGE, data)


def connected_data_item(data: bytes) -> CommonPacketItem:
    """An item carrying a connected transport packet."""
    return CommonPacketItem(CommonPacketItemId.CONNECTED_TRANSPORT_PACKET, data)


def sequence_address_item(connection_id: int, seq_number: int) -> CommonPacketItem:
    """A sequenced address item with connection id and sequence number."""
    data = Buffer().write_uint32(connection_id).write_uint32(seq_number).data()
    return CommonPacketItem(CommonPacketItemId.SEQUENCED_ADDRESS_ITEM, data)