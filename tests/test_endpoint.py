from eipscan.endpoint import EndPoint


def test_should_convert_ip_and_host_to_addr():
    endpoint = EndPoint("127.0.0.1", 0xAA00)
    assert endpoint.host == "127.0.0.1"
    assert endpoint.port == 0xAA00
    assert endpoint.family == 2
    assert endpoint.s_addr == 0x0100007F
    assert endpoint.sin_port == 0x00AA
    assert str(endpoint) == "127.0.0.1:43520"


def test_should_convert_addr_to_ip_and_host():
    endpoint = EndPoint.from_sockaddr(2, 0x0100007F, 0x00AA)
    assert endpoint.host == "127.0.0.1"
    assert endpoint.port == 0xAA00
    assert endpoint.family == 2
    assert endpoint.s_addr == 0x0100007F
    assert endpoint.sin_port == 0x00AA
    assert str(endpoint) == "127.0.0.1:43520"


def test_should_not_throw_if_can_not_parse_ip():
    endpoint = EndPoint("XXXX", 0)
    assert endpoint.s_addr == 0


def test_round_trip_through_sockaddr_is_equal():
    original = EndPoint("192.168.1.15", 44818)
    copy = EndPoint.from_sockaddr(original.family, original.s_addr, original.sin_port)
    assert copy == original
    assert hash(copy) == hash(original)


def test_different_ports_are_not_equal():
    assert not (EndPoint("10.0.0.1", 1) == EndPoint("10.0.0.1", 2))


def test_less_than_needs_both_host_and_port_smaller():
    low = EndPoint("10.0.0.1", 1)
    high = EndPoint("10.0.0.2", 2)
    mixed = EndPoint("10.0.0.2", 1)
    assert low < high
    assert not (high < low)
    assert not (low < mixed)


def test_endpoints_usable_as_dict_keys():
    table = {EndPoint("127.0.0.1", 2222): "implicit"}
    assert table[EndPoint("127.0.0.1", 2222)] == "implicit"