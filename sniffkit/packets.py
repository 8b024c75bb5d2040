"""Decoding of link, network and transport layer headers of captured packets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Union

from sniffkit.protocols import (
    AppProtocol,
    IpVersion,
    TransProtocol,
    from_port_to_application_protocol,
)

_MAC_LENGTH = 6
_IPV4_LENGTH = 4
_IPV6_LENGTH = 16

ByteSource = Union[bytes, bytearray, Iterable[int]]


def _as_bytes(value: ByteSource, length: int, what: str) -> bytes:
    data = bytes(value)
    if len(data) != length:
        raise ValueError(f"{what} must be {length} bytes long, got {len(data)}")
    return data


def _check_port(port: int) -> int:
    if not 0 <= port <= 0xFFFF:
        raise ValueError(f"port out of range: {port}")
    return port


@dataclass(frozen=True)
class EthernetHeader:
    """Ethernet II header: source and destination MAC addresses."""

    source: bytes
    destination: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "source", _as_bytes(self.source, _MAC_LENGTH, "MAC address"))
        object.__setattr__(
            self, "destination", _as_bytes(self.destination, _MAC_LENGTH, "MAC address")
        )


@dataclass(frozen=True)
class Ipv4Header:
    """IPv4 header fields used by the analysis."""

    source: bytes
    destination: bytes
    payload_len: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "source", _as_bytes(self.source, _IPV4_LENGTH, "IPv4 address"))
        object.__setattr__(
            self, "destination", _as_bytes(self.destination, _IPV4_LENGTH, "IPv4 address")
        )
        if self.payload_len < 0:
            raise ValueError(f"negative payload length: {self.payload_len}")


@dataclass(frozen=True)
class Ipv6Header:
    """IPv6 header fields used by the analysis."""

    source: bytes
    destination: bytes
    payload_length: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "source", _as_bytes(self.source, _IPV6_LENGTH, "IPv6 address"))
        object.__setattr__(
            self, "destination", _as_bytes(self.destination, _IPV6_LENGTH, "IPv6 address")
        )
        if self.payload_length < 0:
            raise ValueError(f"negative payload length: {self.payload_length}")


@dataclass(frozen=True)
class TransportHeader:
    """TCP or UDP header: protocol and ports."""

    protocol: TransProtocol
    source_port: int
    destination_port: int

    def __post_init__(self) -> None:
        if self.protocol not in (TransProtocol.TCP, TransProtocol.UDP):
            raise ValueError(f"unsupported transport protocol: {self.protocol}")
        _check_port(self.source_port)
        _check_port(self.destination_port)


@dataclass(frozen=True)
class NetworkInfo:
    """What the network layer header tells about a packet."""

    ip_version: IpVersion
    address1: str
    address2: str
    exchanged_bytes: int


@dataclass(frozen=True)
class TransportInfo:
    """What the transport layer header tells about a packet."""

    port1: int
    port2: int
    app_protocol: AppProtocol
    trans_protocol: TransProtocol


def mac_from_dec_to_hex(mac_dec: ByteSource) -> str:
    """Format a 6-byte MAC address as colon-separated lower-case hex."""
    return ":".join(f"{octet:02x}" for octet in _as_bytes(mac_dec, _MAC_LENGTH, "MAC address"))


def _longest_zero_run(groups: list[str]) -> tuple[int, int]:
    """Start and length of the first longest run of "0" groups."""
    best_start, best_length = 0, 0
    run_start, run_length = 0, 0
    for position, group in enumerate(groups):
        if group == "0":
            if run_length == 0:
                run_start = position
            run_length += 1
            if run_length > best_length:
                best_start, best_length = run_start, run_length
        else:
            run_length = 0
    return best_start, best_length


def ipv6_from_long_dec_to_short_hex(ipv6_long: ByteSource) -> str:
    """Format a 16-byte IPv6 address in compressed hexadecimal notation."""
    data = _as_bytes(ipv6_long, _IPV6_LENGTH, "IPv6 address")
    groups = [f"{(hi << 8) | lo:x}" for hi, lo in zip(data[::2], data[1::2])]
    start, length = _longest_zero_run(groups)
    if length < 2:
        return ":".join(groups)
    head = ":".join(groups[:start])
    tail = ":".join(groups[start + length :])
    return f"{head}::{tail}"


def analyze_link_header(link_header: Optional[EthernetHeader]) -> Optional[tuple[str, str]]:
    """Source and destination MAC addresses, or None if the packet is to be skipped."""
    if link_header is None:
        return None
    return (
        mac_from_dec_to_hex(link_header.source),
        mac_from_dec_to_hex(link_header.destination),
    )


def analyze_network_header(
    network_header: Union[Ipv4Header, Ipv6Header, None],
) -> Optional[NetworkInfo]:
    """Addresses, IP version and payload size, or None if the packet is to be skipped."""
    if isinstance(network_header, Ipv4Header):
        return NetworkInfo(
            ip_version=IpVersion.IPV4,
            address1=".".join(str(octet) for octet in network_header.source),
            address2=".".join(str(octet) for octet in network_header.destination),
            exchanged_bytes=network_header.payload_len,
        )
    if isinstance(network_header, Ipv6Header):
        return NetworkInfo(
            ip_version=IpVersion.IPV6,
            address1=ipv6_from_long_dec_to_short_hex(network_header.source),
            address2=ipv6_from_long_dec_to_short_hex(network_header.destination),
            exchanged_bytes=network_header.payload_length,
        )
    return None


def analyze_transport_header(
    transport_header: Optional[TransportHeader],
) -> Optional[TransportInfo]:
    """Ports and protocols, or None if the packet is to be skipped.

    The application protocol is taken from the source port, or from the
    destination port when the source port is not a well-known one.
    """
    if transport_header is None:
        return None
    port1 = transport_header.source_port
    port2 = transport_header.destination_port
    app_protocol = from_port_to_application_protocol(port1)
    if app_protocol is AppProtocol.OTHER:
        app_protocol = from_port_to_application_protocol(port2)
    return TransportInfo(
        port1=port1,
        port2=port2,
        app_protocol=app_protocol,
        trans_protocol=transport_header.protocol,
    )