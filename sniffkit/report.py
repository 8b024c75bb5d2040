"""Selection and ordering of connections, hosts and protocols for reports."""

from __future__ import annotations

import copy
from dataclasses import replace
from enum import Enum
from typing import Optional

from sniffkit.addressing import get_address_to_lookup
from sniffkit.protocols import AppProtocol
from sniffkit.traffic import (
    AddressPortPair,
    DataInfo,
    DataInfoHost,
    Host,
    InfoAddressPortPair,
    InfoTraffic,
    SearchParameters,
)

PAGE_SIZE = 20
MAX_HOST_ENTRIES = 30


class ReportSortType(Enum):
    """Orderings of the connections in the inspection report."""

    MOST_RECENT = "MostRecent"
    MOST_BYTES = "MostBytes"
    MOST_PACKETS = "MostPackets"


def _host_filters_active(search: SearchParameters) -> bool:
    return bool(search.domain or search.country or search.as_name or search.only_favorites)


def _matches(
    info_traffic: InfoTraffic,
    key: AddressPortPair,
    value: InfoAddressPortPair,
    search: SearchParameters,
) -> bool:
    address = get_address_to_lookup(key, value.traffic_direction)
    resolved: Optional[tuple[str, Host]] = info_traffic.addresses_resolved.get(address)
    if resolved is None:
        # Host-related filters cannot be evaluated on an unresolved address.
        return not _host_filters_active(search)

    r_dns, host = resolved
    if search.app and value.app_protocol.value.lower() != search.app.lower():
        return False
    if search.domain and search.domain.lower() not in r_dns.lower():
        return False
    if search.country and not host.country.lower().startswith(search.country.lower()):
        return False
    if search.as_name and search.as_name.lower() not in host.asn.name.lower():
        return False
    if search.only_favorites and not info_traffic.hosts[host].is_favorite:
        return False
    return True


def _matches_unresolved(value: InfoAddressPortPair, search: SearchParameters) -> bool:
    return not search.app or value.app_protocol.value.lower() == search.app.lower()


_SORT_KEYS = {
    ReportSortType.MOST_RECENT: lambda item: item[1].final_timestamp,
    ReportSortType.MOST_BYTES: lambda item: item[1].transmitted_bytes,
    ReportSortType.MOST_PACKETS: lambda item: item[1].transmitted_packets,
}


def get_searched_entries(
    info_traffic: InfoTraffic,
    search: SearchParameters,
    report_sort_type: ReportSortType,
    page_number: int,
) -> tuple[list[tuple[AddressPortPair, InfoAddressPortPair]], int]:
    """Connections matching ``search`` on the given 1-based page, and how many match in all."""
    if page_number < 1:
        raise ValueError(f"page number must be at least 1, got {page_number}")

    results = []
    for key, value in info_traffic.map.items():
        address = get_address_to_lookup(key, value.traffic_direction)
        if address in info_traffic.addresses_resolved:
            keep = _matches(info_traffic, key, value, search)
        else:
            keep = not _host_filters_active(search) and _matches_unresolved(value, search)
        if keep:
            results.append((key, value))

    results.sort(key=_SORT_KEYS[report_sort_type], reverse=True)

    start = (page_number - 1) * PAGE_SIZE
    end = min(page_number * PAGE_SIZE, len(results))
    page = [(key, replace(value)) for key, value in results[start:end]]
    return page, len(results)


def get_host_entries(
    info_traffic: InfoTraffic, by_packets: bool
) -> list[tuple[Host, DataInfoHost]]:
    """Up to 30 hosts with the most traffic, by packets or by bytes."""
    if by_packets:
        def total(item: tuple[Host, DataInfoHost]) -> int:
            return item[1].data_info.tot_packets()
    else:
        def total(item: tuple[Host, DataInfoHost]) -> int:
            return item[1].data_info.tot_bytes()

    ranked = sorted(info_traffic.hosts.items(), key=total, reverse=True)
    return [(host, copy.deepcopy(info)) for host, info in ranked[:MAX_HOST_ENTRIES]]


def get_app_entries(
    info_traffic: InfoTraffic, by_packets: bool
) -> list[tuple[AppProtocol, DataInfo]]:
    """Application protocols by decreasing traffic, with unidentified traffic last."""

    def rank(item: tuple[AppProtocol, DataInfo]) -> tuple[bool, int]:
        protocol, data = item
        amount = data.tot_packets() if by_packets else data.tot_bytes()
        return (protocol is AppProtocol.OTHER, -amount)

    ranked = sorted(info_traffic.app_protocols.items(), key=rank)
    return [(protocol, replace(data)) for protocol, data in ranked]