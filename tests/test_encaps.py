import pytest

from eipscan.endpoint import EndPoint
from eipscan.encaps import (
    EncapsCommand,
    EncapsPacket,
    EncapsPacketError,
    EncapsStatusCode,
    SessionInfo,
    list_identity_packet,
    register_session_packet,
    send_rr_data_packet,
    unregister_session_packet,
)

HEADER = [0x6F, 0, 0xB, 0, 0xDD, 0xCC, 0xBB, 0xAA, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,
          0, 0, 0, 0]


def test_should_expand_data():
    data = bytes(HEADER + [0, 0, 0, 0, 0x64, 0, 1, 2, 3, 4, 5])
    packet = EncapsPacket.from_bytes(data)

    assert packet.command == EncapsCommand.SEND_RR_DATA
    assert packet.length == 11
    assert packet.status_code == EncapsStatusCode.SUCCESS
    assert packet.session_handle == 0xAABBCCDD
    assert packet.data == bytes([0, 0, 0, 0, 0x64, 0, 1, 2, 3, 4, 5])


def test_should_throw_if_package_too_short():
    data = bytes(HEADER[:23])
    with pytest.raises(EncapsPacketError):
        EncapsPacket.from_bytes(data)


def test_should_throw_if_package_has_wrong_data_length():
    data = bytes(HEADER + [0, 0, 0, 0, 0x64, 0, 1, 2, 3, 4, 5, 10])
    with pytest.raises(EncapsPacketError, match="must be 11"):
        EncapsPacket.from_bytes(data)


def test_should_create_register_session_packet():
    expected = bytes([0x65, 0, 4, 0] + [0] * 20 + [1, 0, 0, 0])
    assert register_session_packet().pack() == expected


def test_should_create_unregister_session_packet():
    expected = bytes([0x66, 0, 0, 0, 0xDD, 0xCC, 0xBB, 0xAA] + [0] * 16)
    assert unregister_session_packet(0xAABBCCDD).pack() == expected


def test_should_create_send_rr_data_packet():
    expected = bytes(HEADER + [0, 0, 0, 0, 0x64, 0, 1, 2, 3, 4, 5])
    packet = send_rr_data_packet(0xAABBCCDD, 100, bytes([1, 2, 3, 4, 5]))
    assert packet.pack() == expected


def test_should_create_list_identity_packet():
    expected = bytes([0x63] + [0] * 23)
    assert list_identity_packet().pack() == expected


def test_round_trip_keeps_equality():
    packet = send_rr_data_packet(7, 3, b"\x01\x02")
    assert EncapsPacket.from_bytes(packet.pack()) == packet


def test_length_from_header():
    data = bytes(HEADER + [0] * 11)
    assert EncapsPacket.length_from_header(data) == 11


def test_length_from_header_too_short():
    with pytest.raises(EncapsPacketError):
        EncapsPacket.length_from_header(b"\x00\x00\x01")


def test_unknown_command_and_status_are_kept():
    data = bytes([0x99, 0, 0, 0, 0, 0, 0, 0, 0x42, 0, 0, 0] + [0] * 12)
    packet = EncapsPacket.from_bytes(data)
    assert packet.command == 0x99
    assert packet.status_code == 0x42
    assert packet.pack() == data


def test_context_must_be_eight_bytes():
    with pytest.raises(ValueError):
        EncapsPacket(context=b"\x00\x00")


def test_session_info_is_abstract():
    with pytest.raises(TypeError):
        SessionInfo()


class _EchoSession(SessionInfo):
    def send_and_receive(self, packet):
        return EncapsPacket(command=packet.command, session_handle=self.session_handle,
                            data=packet.data)

    @property
    def session_handle(self):
        return 10

    @property
    def remote_endpoint(self):
        return EndPoint("127.0.0.1", 44818)


def test_session_info_subclass():
    session = _EchoSession()
    reply = session.send_and_receive(send_rr_data_packet(10, 0, b"\x05"))
    assert reply.session_handle == 10
    assert reply.command == EncapsCommand.SEND_RR_DATA
    assert str(session.remote_endpoint) == "127.0.0.1:44818"