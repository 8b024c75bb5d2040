"""Classification of addresses and bookkeeping of observed connections."""

from __future__ import annotations

import ipaddress
import re
from dataclasses import replace
from datetime import datetime
from typing import Sequence, Union

from sniffkit.protocols import AppProtocol, TrafficDirection, TrafficType
from sniffkit.traffic import (
    AddressPortPair,
    InfoAddressPortPair,
    InfoTraffic,
    InterfaceAddress,
)

_LIMITED_BROADCAST = "255.255.255.255"
_UNSPECIFIED_V4 = "0.0.0.0"
_LONG_ADDRESS = 25
_OCTET = re.compile(r"\+?[0-9]+")

IpAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


def _address_strings(my_interface_addresses: Sequence[InterfaceAddress]) -> list[str]:
    return [str(address.addr) for address in my_interface_addresses]


def get_traffic_direction(
    source_ip: str,
    destination_ip: str,
    my_interface_addresses: Sequence[InterfaceAddress],
) -> TrafficDirection:
    """Tell whether a packet from ``source_ip`` to ``destination_ip`` is incoming or outgoing."""
    mine = _address_strings(my_interface_addresses)
    if source_ip in mine:
        return TrafficDirection.OUTGOING
    if source_ip != _UNSPECIFIED_V4:
        return TrafficDirection.INCOMING
    # The source has not been assigned an address yet.
    if destination_ip not in mine:
        return TrafficDirection.OUTGOING
    return TrafficDirection.INCOMING


def get_traffic_type(
    destination_ip: str,
    my_interface_addresses: Sequence[InterfaceAddress],
    traffic_direction: TrafficDirection,
) -> TrafficType:
    """Unicast, multicast or broadcast, as seen from the remote host."""
    if traffic_direction is not TrafficDirection.OUTGOING:
        return TrafficType.UNICAST
    if is_multicast_address(destination_ip):
        return TrafficType.MULTICAST
    if is_broadcast_address(destination_ip, my_interface_addresses):
        return TrafficType.BROADCAST
    return TrafficType.UNICAST


def is_multicast_address(address: str) -> bool:
    """Whether the textual IPv4 or IPv6 address is a multicast one."""
    if ":" in address:
        return address.startswith("ff")
    first_group = address.split(".", 1)[0]
    if not _OCTET.fullmatch(first_group) or int(first_group) > 255:
        raise ValueError(f"not an IPv4 address: {address!r}")
    return 224 <= int(first_group) <= 239


def is_broadcast_address(
    address: str, my_interface_addresses: Sequence[InterfaceAddress]
) -> bool:
    """Whether the address is the limited broadcast or a directed broadcast of an interface."""
    if address == _LIMITED_BROADCAST:
        return True
    broadcasts = [
        _LIMITED_BROADCAST if item.broadcast_addr is None else str(item.broadcast_addr)
        for item in my_interface_addresses
    ]
    return address in broadcasts


def _same_subnet(local: IpAddress, remote: IpAddress, netmask: IpAddress) -> bool:
    mask = int(netmask)
    return int(local) & mask == int(remote) & mask


def _parse_or_zero(address: str, kind: type) -> IpAddress:
    try:
        return kind(address)
    except ValueError:
        return kind(0)


def is_local_connection(
    address_to_lookup: str, my_interface_addresses: Sequence[InterfaceAddress]
) -> bool:
    """Whether the remote address is link-local or in the subnet of an interface."""
    is_v6 = ":" in address_to_lookup
    local = False
    for item in my_interface_addresses:
        if isinstance(item.addr, ipaddress.IPv4Address) and not is_v6:
            remote = _parse_or_zero(address_to_lookup, ipaddress.IPv4Address)
            if remote.is_link_local:
                local = True
            elif isinstance(item.netmask, ipaddress.IPv4Address):
                if _same_subnet(item.addr, remote, item.netmask):
                    local = True
        elif isinstance(item.addr, ipaddress.IPv6Address) and is_v6:
            remote = _parse_or_zero(address_to_lookup, ipaddress.IPv6Address)
            if address_to_lookup.startswith("fe80"):
                local = True
            elif isinstance(item.netmask, ipaddress.IPv6Address):
                if _same_subnet(item.addr, remote, item.netmask):
                    local = True
    return local


def is_my_address(
    address_to_lookup: str, my_interface_addresses: Sequence[InterfaceAddress]
) -> bool:
    """Whether the address belongs to the inspected adapter."""
    return address_to_lookup in _address_strings(my_interface_addresses)


def get_address_to_lookup(
    key: AddressPortPair, traffic_direction: TrafficDirection
) -> str:
    """The remote address of a connection: destination if outgoing, source if incoming."""
    if traffic_direction is TrafficDirection.OUTGOING:
        return key.address2
    return key.address1


def modify_or_insert_in_map(
    info_traffic: InfoTraffic,
    key: AddressPortPair,
    my_interface_addresses: Sequence[InterfaceAddress],
    mac_addresses: tuple[str, str],
    exchanged_bytes: int,
    application_protocol: AppProtocol,
) -> InfoAddressPortPair:
    """Record a packet of ``key`` in the traffic map and return a copy of its updated entry."""
    now = datetime.now().astimezone()
    traffic_direction = TrafficDirection.INCOMING
    very_long_address = (
        len(key.address1) > _LONG_ADDRESS or len(key.address2) > _LONG_ADDRESS
    )

    existing = info_traffic.map.get(key)
    if existing is None:
        index = len(info_traffic.map)
        traffic_direction = get_traffic_direction(
            key.address1, key.address2, my_interface_addresses
        )
        entry = InfoAddressPortPair(
            mac_address1=mac_addresses[0],
            mac_address2=mac_addresses[1],
            transmitted_bytes=exchanged_bytes,
            transmitted_packets=1,
            initial_timestamp=now,
            final_timestamp=now,
            app_protocol=application_protocol,
            very_long_address=very_long_address,
            index=index,
            traffic_direction=traffic_direction,
        )
        info_traffic.map[key] = entry
    else:
        index = existing.index
        existing.transmitted_bytes += exchanged_bytes
        existing.transmitted_packets += 1
        existing.final_timestamp = now
        entry = existing

    info_traffic.addresses_last_interval.add(index)

    resolved = info_traffic.addresses_resolved.get(
        get_address_to_lookup(key, traffic_direction)
    )
    if resolved is not None and resolved[1] in info_traffic.favorite_hosts:
        info_traffic.favorites_last_interval.add(resolved[1])

    return replace(entry)