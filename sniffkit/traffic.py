"""Data structures describing observed connections, hosts and traffic totals."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union

from sniffkit.protocols import (
    AppProtocol,
    IpVersion,
    TrafficDirection,
    TrafficType,
    TransProtocol,
)

IpAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

_LONG_ADDRESS = 25


@dataclass(frozen=True)
class AddressPortPair:
    """A source address:port and destination address:port over a transport protocol."""

    address1: str
    port1: int
    address2: str
    port2: int
    trans_protocol: TransProtocol

    def __str__(self) -> str:
        width = 45 if max(len(self.address1), len(self.address2)) > _LONG_ADDRESS else 25
        return (
            f"|{self.address1:^{width}}|{self.port1:>8}  "
            f"|{self.address2:^{width}}|{self.port2:>8}  "
            f"|   {self.trans_protocol}   |"
        )

    def print_gui(self) -> str:
        """Table row without the column separators."""
        return str(self).replace("|", "")


@dataclass(frozen=True)
class Asn:
    """An Autonomous System."""

    number: int = 0
    name: str = ""


@dataclass(frozen=True)
class Host:
    """A remote network host."""

    domain: str = ""
    asn: Asn = field(default_factory=Asn)
    country: str = ""


@dataclass
class DataInfo:
    """Incoming and outgoing packet and byte counts."""

    incoming_packets: int = 0
    outgoing_packets: int = 0
    incoming_bytes: int = 0
    outgoing_bytes: int = 0

    def tot_packets(self) -> int:
        return self.incoming_packets + self.outgoing_packets

    def tot_bytes(self) -> int:
        return self.incoming_bytes + self.outgoing_bytes


@dataclass
class DataInfoHost:
    """Traffic counts and properties of a host."""

    data_info: DataInfo = field(default_factory=DataInfo)
    is_favorite: bool = False
    is_local: bool = False
    traffic_type: TrafficType = TrafficType.UNICAST


@dataclass
class Filters:
    """Filters applicable to captured traffic."""

    ip: IpVersion = IpVersion.OTHER
    transport: TransProtocol = TransProtocol.OTHER
    application: AppProtocol = AppProtocol.OTHER


def _epoch() -> datetime:
    return datetime.fromtimestamp(0, timezone.utc).astimezone()


@dataclass
class InfoAddressPortPair:
    """Statistics of the traffic exchanged by one address:port pair."""

    mac_address1: str = ""
    mac_address2: str = ""
    transmitted_bytes: int = 0
    transmitted_packets: int = 0
    initial_timestamp: datetime = field(default_factory=_epoch)
    final_timestamp: datetime = field(default_factory=_epoch)
    app_protocol: AppProtocol = AppProtocol.OTHER
    very_long_address: bool = False
    index: int = 0
    traffic_direction: TrafficDirection = TrafficDirection.INCOMING


@dataclass
class InfoTraffic:
    """Traffic totals and collections shared between capture and reporting."""

    tot_received_bytes: int = 0
    tot_sent_bytes: int = 0
    tot_received_packets: int = 0
    tot_sent_packets: int = 0
    all_packets: int = 0
    all_bytes: int = 0
    dropped_packets: int = 0
    map: dict[AddressPortPair, InfoAddressPortPair] = field(default_factory=dict)
    addresses_last_interval: set[int] = field(default_factory=set)
    favorite_hosts: set[Host] = field(default_factory=set)
    favorites_last_interval: set[Host] = field(default_factory=set)
    app_protocols: dict[AppProtocol, DataInfo] = field(default_factory=dict)
    addresses_waiting_resolution: dict[str, DataInfo] = field(default_factory=dict)
    addresses_resolved: dict[str, tuple[str, Host]] = field(default_factory=dict)
    hosts: dict[Host, DataInfoHost] = field(default_factory=dict)


def _to_ip(value: Union[str, IpAddress, None]) -> Optional[IpAddress]:
    if value is None:
        return None
    return ipaddress.ip_address(value)


@dataclass(frozen=True)
class InterfaceAddress:
    """An address assigned to a network interface; strings are parsed as IPs."""

    addr: IpAddress
    netmask: Optional[IpAddress] = None
    broadcast_addr: Optional[IpAddress] = None
    dst_addr: Optional[IpAddress] = None

    def __post_init__(self) -> None:
        for name in ("addr", "netmask", "broadcast_addr", "dst_addr"):
            object.__setattr__(self, name, _to_ip(getattr(self, name)))
        if self.addr is None:
            raise ValueError("an interface address is required")


@dataclass
class MyDevice:
    """The network adapter being inspected."""

    name: str
    desc: Optional[str] = None
    addresses: list[InterfaceAddress] = field(default_factory=list)


@dataclass(frozen=True)
class SearchParameters:
    """Search filters for the connection inspection view."""

    app: str = ""
    domain: str = ""
    country: str = ""
    as_name: str = ""
    only_favorites: bool = False


class FilterInputType(Enum):
    """Text inputs of the search filters."""

    APP = "App"
    DOMAIN = "Domain"
    COUNTRY = "Country"
    AS = "AS"