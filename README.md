# eipscan

Building blocks for EtherNet/IP clients: little-endian CIP encoding, IPv4
end points, the encapsulation packet, the common packet format, TCP/UDP socket
wrappers and a small levelled logger. It uses only the standard library.

## Installation

```
pip install eipscan
```

For running the test suite:

```
pip install "eipscan[test]"
pytest
```

## Encoding and decoding (`eipscan.buffer`)

`Buffer` appends values at the end and reads them from a moving position, all
in little-endian order. Write methods return the buffer, so calls chain:

```python
from eipscan.buffer import Buffer

data = Buffer().write_uint16(0x0302).write_uint32(0x07060504).data()
# b'\x02\x03\x04\x05\x06\x07'

reader = Buffer(data)
reader.read_uint16()   # 0x0302
reader.read_uint32()   # 0x07060504
reader.empty()         # True
```

There are readers and writers for signed and unsigned 8, 16, 32 and 64 bit
integers, `float` and `double`, raw bytes (`write_bytes` / `read_bytes(size)`),
lists of 16-bit values, and 16-byte `sockaddr_in` structures
(`write_endpoint` / `read_endpoint`). `size()`, `pos()` and `empty()` report
the buffer's state. Reading past the end raises `BufferUnderflowError`, a
`ValueError`.

## End points (`eipscan.endpoint`)

```python
from eipscan.endpoint import EndPoint, EIP_DEFAULT_EXPLICIT_PORT

ep = EndPoint("192.168.1.10", EIP_DEFAULT_EXPLICIT_PORT)
str(ep)          # '192.168.1.10:44818'
ep.s_addr        # network-order address as a little-endian integer
ep.sin_port      # network-order port as a little-endian integer
```

A host that is not a dotted IPv4 address gets an address of zero rather than
raising. `EndPoint.from_sockaddr(family, s_addr, sin_port)` builds an end point
from raw `sockaddr_in` fields. End points compare equal on all their fields and
are hashable.

## Encapsulation packets (`eipscan.encaps`)

```python
from eipscan.encaps import EncapsPacket, register_session_packet, send_rr_data_packet

packet = register_session_packet()
wire = packet.pack()                 # 28 bytes

reply = EncapsPacket.from_bytes(wire)
reply.command                        # EncapsCommand.REGISTER_SESSION
reply.length                         # 4
```

Other helpers build `unregister_session_packet(session_handle)`,
`send_rr_data_packet(session_handle, timeout, data)` and
`list_identity_packet()`. `EncapsPacket.length_from_header(data)` reads the
length field of a header. `EncapsPacket.from_bytes` raises `EncapsPacketError`
when there are fewer than 24 bytes or the data does not match the length
field. Command and status codes are the `EncapsCommand` and `EncapsStatusCode`
enums.

`SessionInfo` is an abstract interface (`send_and_receive`, `session_handle`,
`remote_endpoint`) for code that holds an established session; the package
does not provide an implementation of it.

## Common packet format (`eipscan.common_packet`)

```python
from eipscan.common_packet import CommonPacket, null_address_item, unconnected_data_item

cp = CommonPacket()
cp.append(null_address_item()).append(unconnected_data_item(b"\x0e\x03\x20\x01\x24\x01\x30\x01"))
payload = cp.pack()

parsed = CommonPacket.from_bytes(payload)
[item.type_id for item in parsed]
# [CommonPacketItemId.NULL_ADDR, CommonPacketItemId.UNCONNECTED_MESSAGE]
```

`connected_data_item(data)` and `sequence_address_item(connection_id, seq_number)`
build the other common items. Malformed data raises `CommonPacketFormatError`.

## Sockets (`eipscan.sockets`)

```python
from eipscan.endpoint import EndPoint
from eipscan.encaps import register_session_packet
from eipscan.sockets import TCPSocket

endpoint = EndPoint("192.168.1.10", 44818)
with TCPSocket(endpoint, 1.0) as sock:
    sock.send(register_session_packet().pack())
    header = sock.receive(24)
```

- `TCPSocket(endpoint, conn_timeout)` connects with a timeout in seconds;
  `receive(size)` reads until `size` bytes arrive or the peer closes, and
  always returns `size` bytes (zero-padded if fewer arrived).
- `UDPSocket(endpoint)` sends datagrams to the end point; `receive_from(size)`
  returns the data together with the sender's `EndPoint`.
- `UDPBoundSocket(endpoint)` is a UDP socket bound to all interfaces on the
  end point's port.
- `recv_timeout` is a settable property in seconds (zero waits forever).
- `BaseSocket.select(sockets, timeout)` runs each ready socket's handler (set
  with `set_begin_receive_handler`) and keeps waiting until `timeout` seconds
  pass with nothing ready.

End points may also be given as `(host, port)` tuples.

## Logging (`eipscan.logger`)

```python
from eipscan.logger import LogLevel, set_log_level, log

set_log_level(LogLevel.DEBUG)
log(LogLevel.INFO, "connected")   # prints "[INFO] connected"
```

Messages go to standard output through `ConsoleAppender` unless another
`LogAppender` is installed with `set_appender`. `LogLevel.OFF` silences all
output.

## What this package does not do

It provides the wire formats and transport only. It does not register or
manage sessions, route CIP requests or decode CIP responses, discover devices
on a network, or read identity, parameter or file objects. There is no
command-line tool.