"""Protocol, direction, traffic-type and byte-multiple enumerations."""

from __future__ import annotations

from enum import Enum

_MIN_PORT = 0
_MAX_PORT = 65535


class AppProtocol(Enum):
    """Application layer protocols recognised from well-known port numbers."""

    FTP = "FTP"
    SSH = "SSH"
    TELNET = "Telnet"
    SMTP = "SMTP"
    TACACS = "TACACS"
    DNS = "DNS"
    DHCP = "DHCP"
    TFTP = "TFTP"
    HTTP = "HTTP"
    POP = "POP"
    NTP = "NTP"
    NETBIOS = "NetBIOS"
    POP3S = "POP3S"
    IMAP = "IMAP"
    SNMP = "SNMP"
    BGP = "BGP"
    LDAP = "LDAP"
    HTTPS = "HTTPS"
    LDAPS = "LDAPS"
    FTPS = "FTPS"
    MDNS = "mDNS"
    IMAPS = "IMAPS"
    SSDP = "SSDP"
    XMPP = "XMPP"
    OTHER = "Other"

    def __str__(self) -> str:
        return "-" if self is AppProtocol.OTHER else self.value


_PORT_ASSIGNMENTS: tuple[tuple[tuple[int, ...], AppProtocol], ...] = (
    ((20, 21), AppProtocol.FTP),
    ((22,), AppProtocol.SSH),
    ((23,), AppProtocol.TELNET),
    ((25,), AppProtocol.SMTP),
    ((49,), AppProtocol.TACACS),
    ((53,), AppProtocol.DNS),
    ((67, 68), AppProtocol.DHCP),
    ((69,), AppProtocol.TFTP),
    ((80, 8080), AppProtocol.HTTP),
    ((109, 110), AppProtocol.POP),
    ((123,), AppProtocol.NTP),
    ((137, 138, 139), AppProtocol.NETBIOS),
    ((143, 220), AppProtocol.IMAP),
    ((161, 162, 199), AppProtocol.SNMP),
    ((179,), AppProtocol.BGP),
    ((389,), AppProtocol.LDAP),
    ((443,), AppProtocol.HTTPS),
    ((636,), AppProtocol.LDAPS),
    ((989, 990), AppProtocol.FTPS),
    ((993,), AppProtocol.IMAPS),
    ((995,), AppProtocol.POP3S),
    ((1900,), AppProtocol.SSDP),
    ((5222,), AppProtocol.XMPP),
    ((5353,), AppProtocol.MDNS),
)

_PORT_TABLE: dict[int, AppProtocol] = {
    port: protocol for ports, protocol in _PORT_ASSIGNMENTS for port in ports
}


def from_port_to_application_protocol(port: int) -> AppProtocol:
    """Map a transport port to its well-known application protocol, or OTHER."""
    if not _MIN_PORT <= port <= _MAX_PORT:
        raise ValueError(f"port out of range: {port}")
    return _PORT_TABLE.get(port, AppProtocol.OTHER)


class TransProtocol(Enum):
    """Transport layer protocols."""

    TCP = "TCP"
    UDP = "UDP"
    OTHER = "Other"

    def __str__(self) -> str:
        return self.value


class IpVersion(Enum):
    """Internet Protocol versions."""

    IPV4 = "IPv4"
    IPV6 = "IPv6"
    OTHER = "Other"

    def __str__(self) -> str:
        return self.value


class TrafficDirection(Enum):
    """Direction of traffic relative to the local interface."""

    INCOMING = "Incoming"
    OUTGOING = "Outgoing"


class TrafficType(Enum):
    """Kind of traffic with respect to the remote host."""

    UNICAST = "Unicast"
    MULTICAST = "Multicast"
    BROADCAST = "Broadcast"


class ByteMultiple(Enum):
    """Decimal multiples of a byte."""

    B = "B"
    KB = "KB"
    MB = "MB"
    GB = "GB"

    def __str__(self) -> str:
        return self.value

    def get_multiplier(self) -> int:
        """Number of bytes this multiple stands for."""
        return _MULTIPLIERS[self]

    def get_char(self) -> str:
        """Single-letter prefix of this multiple ("" for plain bytes)."""
        return _PREFIXES[self]


_MULTIPLIERS = {
    ByteMultiple.B: 1,
    ByteMultiple.KB: 1_000,
    ByteMultiple.MB: 1_000_000,
    ByteMultiple.GB: 1_000_000_000,
}

_PREFIXES = {
    ByteMultiple.B: "",
    ByteMultiple.KB: "K",
    ByteMultiple.MB: "M",
    ByteMultiple.GB: "G",
}

_FROM_PREFIX = {
    "K": ByteMultiple.KB,
    "M": ByteMultiple.MB,
    "G": ByteMultiple.GB,
}


def from_char_to_multiple(ch: str) -> ByteMultiple:
    """Interpret a suffix character (case-insensitive) as a byte multiple."""
    key = ch.upper() if ch.isascii() else ch
    return _FROM_PREFIX.get(key, ByteMultiple.B)