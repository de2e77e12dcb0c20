"""EtherNet/IP encoding, encapsulation and common packets, end points, sockets and logging."""

__version__ = "1.1.0"