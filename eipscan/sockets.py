"""TCP and UDP sockets used to talk to EtherNet/IP adapters."""

from __future__ import annotations

import select as _select
import socket
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence, Tuple, Union

from .endpoint import EndPoint
from .logger import LogLevel, log

BeginReceiveHandler = Callable[["BaseSocket"], None]
EndPointLike = Union[EndPoint, Tuple[str, int]]


def _as_endpoint(endpoint: EndPointLike) -> EndPoint:
    if isinstance(endpoint, EndPoint):
        return endpoint
    host, port = endpoint
    return EndPoint(host, port)


def _sockaddr(endpoint: EndPoint) -> Tuple[str, int]:
    """The numeric address the end point resolves to, as a socket address."""
    return socket.inet_ntoa(endpoint.s_addr.to_bytes(4, "little")), endpoint.port


def _clamp(seconds: float) -> float:
    return max(float(seconds), 0.0)


class BaseSocket(ABC):
    """A socket bound to a remote end point with a receive callback."""

    def __init__(self, endpoint: EndPointLike) -> None:
        self._remote_endpoint = _as_endpoint(endpoint)
        self._sock: Optional[socket.socket] = None
        self._recv_timeout = 0.0
        self._begin_receive_handler: Optional[BeginReceiveHandler] = None

    @abstractmethod
    def send(self, data: bytes) -> None:
        """Send all of the given bytes."""

    @abstractmethod
    def receive(self, size: int) -> bytes:
        """Receive up to ``size`` bytes; the result is ``size`` bytes long."""

    def set_begin_receive_handler(self, handler: BeginReceiveHandler) -> None:
        """Set the callback run by :meth:`select` when data is ready."""
        self._begin_receive_handler = handler

    def begin_receive(self) -> None:
        """Run the receive callback with this socket."""
        if self._begin_receive_handler is None:
            raise RuntimeError("no receive handler is set")
        self._begin_receive_handler(self)

    @property
    def recv_timeout(self) -> float:
        """Receive timeout in seconds; zero means wait forever."""
        return self._recv_timeout

    @recv_timeout.setter
    def recv_timeout(self, seconds: float) -> None:
        self._recv_timeout = float(seconds)
        interval = _clamp(seconds)
        self._socket.settimeout(interval if interval > 0 else None)

    @property
    def _socket(self) -> socket.socket:
        if self._sock is None:
            raise OSError("socket is closed")
        return self._sock

    def fileno(self) -> int:
        """File descriptor of the underlying socket."""
        return self._socket.fileno()

    @property
    def remote_endpoint(self) -> EndPoint:
        """The end point this socket talks to."""
        return self._remote_endpoint

    def close(self) -> None:
        """Shut down and close the socket; closing twice does nothing."""
        if self._sock is None:
            return
        sock, self._sock = self._sock, None
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        sock.close()

    def __enter__(self) -> "BaseSocket":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    @staticmethod
    def select(sockets: Sequence["BaseSocket"], timeout: float) -> None:
        """Wait for data on the sockets and run their receive callbacks.

        Keeps waiting until ``timeout`` seconds have passed with no socket ready.
        """
        sockets = list(sockets)
        if not sockets:
            raise ValueError("no sockets to select on")
        start = time.monotonic()
        stop = start + _clamp(timeout)
        while True:
            ready, _, _ = _select.select(sockets, [], [], _clamp(stop - start))
            for sock in ready:
                sock.begin_receive()
            start = time.monotonic()
            if not ready:
                break


class TCPSocket(BaseSocket):
    """A connected TCP stream socket."""

    def __init__(self, endpoint: EndPointLike, conn_timeout: float = 1.0) -> None:
        super().__init__(endpoint)
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        log(LogLevel.DEBUG, f"Opened TCP socket fd={self._sock.fileno()}")
        log(LogLevel.DEBUG, f"Connecting to {self._remote_endpoint}")
        try:
            self._sock.settimeout(_clamp(conn_timeout))
            self._sock.connect(_sockaddr(self._remote_endpoint))
            self._sock.settimeout(None)
        except BaseException:
            self.close()
            raise

    def close(self) -> None:
        if self._sock is not None:
            log(LogLevel.DEBUG, f"Close TCP socket fd={self._sock.fileno()}")
        super().close()

    def send(self, data: bytes) -> None:
        sock = self._socket
        log(LogLevel.TRACE, f"Send {len(data)} bytes from TCP socket #{sock.fileno()}.")
        sock.sendall(bytes(data))

    def receive(self, size: int) -> bytes:
        sock = self._socket
        buffer = bytearray(size)
        view = memoryview(buffer)
        count = 0
        while count < size:
            received = sock.recv_into(view[count:], size - count)
            log(LogLevel.TRACE,
                f"Received {received} bytes from TCP socket #{sock.fileno()}.")
            if received == 0:
                break
            count += received
        if count != size:
            log(LogLevel.WARNING,
                f"Received from {self._remote_endpoint} {count} of {size}")
        return bytes(buffer)


class UDPSocket(BaseSocket):
    """A UDP datagram socket sending to a fixed end point."""

    def __init__(self, endpoint: EndPointLike) -> None:
        super().__init__(endpoint)
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
        log(LogLevel.DEBUG, f"Opened UDP socket fd={self._sock.fileno()}")

    def close(self) -> None:
        if self._sock is not None:
            log(LogLevel.DEBUG, f"Close UDP socket fd={self._sock.fileno()}")
        super().close()

    def send(self, data: bytes) -> None:
        sock = self._socket
        data = bytes(data)
        log(LogLevel.TRACE, f"Send {len(data)} bytes from UDP socket #{sock.fileno()}.")
        count = sock.sendto(data, _sockaddr(self._remote_endpoint))
        if count < len(data):
            raise OSError(f"sent only {count} of {len(data)} bytes")

    def receive(self, size: int) -> bytes:
        sock = self._socket
        buffer = bytearray(size)
        received = sock.recv_into(buffer, size)
        log(LogLevel.TRACE, f"Received {received} bytes from UDP socket #{sock.fileno()}.")
        return bytes(buffer)

    def receive_from(self, size: int) -> Tuple[bytes, EndPoint]:
        """Receive a datagram and return it with the sender's end point."""
        sock = self._socket
        buffer = bytearray(size)
        received, (host, port) = sock.recvfrom_into(buffer, size)
        log(LogLevel.TRACE, f"Received {received} bytes from UDP socket #{sock.fileno()}.")
        return bytes(buffer), EndPoint(host, port)


class UDPBoundSocket(UDPSocket):
    """A UDP socket bound to all interfaces on the end point's port."""

    def __init__(self, endpoint: EndPointLike) -> None:
        super().__init__(endpoint)
        try:
            self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            self._sock.bind(("", self._remote_endpoint.port))
        except BaseException:
            self.close()
            raise