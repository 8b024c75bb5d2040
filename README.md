# sniffkit

Bookkeeping for observed network traffic. You give sniffkit header data that
has already been decoded. It turns that data into connection records and
per-host statistics, classifies addresses relative to your own interface, and
decides when notifications are due. The package is pure Python and has no
dependencies.

## Modules

### `sniffkit.protocols`

This module holds the enumerations used throughout the package:

- `AppProtocol`
- `TransProtocol`
- `IpVersion`
- `TrafficDirection`
- `TrafficType`
- `ByteMultiple`

`from_port_to_application_protocol(port)` maps a well-known port to an
`AppProtocol`. Unknown ports give `AppProtocol.OTHER`. Ports outside 0–65535
raise `ValueError`.

`from_char_to_multiple(ch)` reads a byte-unit suffix, case-insensitively:
`k`, `M` or `g`. Any other character means plain bytes.
`ByteMultiple.get_multiplier()` and `get_char()` give the decimal factor and
the prefix letter.

### `sniffkit.traffic`

This module holds the records and the shared traffic store:

- `AddressPortPair`: a connection key. `str()` gives a table row and
  `print_gui()` gives the same row without the separators.
- `Asn` and `Host`.
- `DataInfo`, with `tot_packets()` and `tot_bytes()`.
- `DataInfoHost`.
- `InfoAddressPortPair`.
- `InfoTraffic`: totals, the connection map, resolved addresses, hosts,
  favourites and per-protocol data.
- `Filters`, `SearchParameters` and `FilterInputType`.
- `MyDevice` and `InterfaceAddress`. `InterfaceAddress` accepts strings and
  parses them as IP addresses.

### `sniffkit.packets`

This module turns decoded headers into strings and values.

The header types are:

- `EthernetHeader`
- `Ipv4Header`
- `Ipv6Header`
- `TransportHeader`

Formatting:

- `mac_from_dec_to_hex` formats a 6-byte MAC address.
- `ipv6_from_long_dec_to_short_hex` produces compressed IPv6 text. The
  longest run of zero groups, of at least two groups, becomes `::`.

Analysis:

- `analyze_link_header` returns `None` for a missing header, meaning the
  packet should be skipped. Otherwise it returns the two MAC address strings.
- `analyze_network_header` also returns `None` for a missing header.
  Otherwise it returns a `NetworkInfo`.
- `analyze_transport_header` also returns `None` for a missing header.
  Otherwise it returns a `TransportInfo`. The application protocol comes from
  the source port. If the source port is not a well-known one, it comes from
  the destination port.

### `sniffkit.addressing`

This module classifies traffic against a list of `InterfaceAddress` values:

- `get_traffic_direction`
- `get_traffic_type`: unicast, multicast or broadcast, as seen from the
  remote host.
- `is_multicast_address`
- `is_broadcast_address`
- `is_local_connection`: a link-local address, or one in the same subnet as
  an interface.
- `is_my_address`
- `get_address_to_lookup`: the remote side of a connection.

`modify_or_insert_in_map` records one packet in an `InfoTraffic`. It returns a
copy of the updated connection entry. It marks favourite hosts that were seen
during the interval.

### `sniffkit.notifications`

Notification settings:

- `PacketsNotification`
- `BytesNotification`
- `FavoriteNotification`
- `Notifications`

Other types:

- `Sound`
- Log entries: `PacketsThresholdExceeded`, `BytesThresholdExceeded` and
  `FavoriteTransmitted`.

`PacketsNotification.from_str` and `BytesNotification.from_str` parse a
threshold typed by a user, for example `"500k"` or `" 888 g"`. Text that
cannot be parsed falls back to the previous threshold.
`FavoriteNotification.on(sound)` and `off(sound)` build the two states.

### `sniffkit.runtime`

- `RunTimeData` holds the counters for the current and previous interval, and
  the notification log.
- `Status` is `INIT` or `RUNNING`.

`notify_and_log(runtime_data, notifications, info_traffic, play_sound=None)`:

- It checks the packet threshold, the byte threshold and the favourites.
- It adds the due notifications to the front of the log and keeps the 30 most
  recent.
- It returns how many notifications it emitted.
- If you pass `play_sound(sound, volume)`, it is called at most once per
  interval.

### `sniffkit.report`

- `get_searched_entries(info_traffic, search, report_sort_type, page_number)`
  returns one 1-based page of 20 matching connections, together with the total
  number of matches. `report_sort_type` is a `ReportSortType` value.
- `get_host_entries(info_traffic, by_packets)` returns up to 30 hosts by
  decreasing traffic.
- `get_app_entries(info_traffic, by_packets)` returns the application
  protocols by decreasing traffic, with `OTHER` last.

## Example

```python
from sniffkit.addressing import get_traffic_type, modify_or_insert_in_map
from sniffkit.notifications import BytesNotification, Notifications, PacketsNotification
from sniffkit.packets import ipv6_from_long_dec_to_short_hex, mac_from_dec_to_hex
from sniffkit.protocols import AppProtocol, TrafficDirection, TransProtocol
from sniffkit.report import ReportSortType, get_searched_entries
from sniffkit.runtime import RunTimeData, notify_and_log
from sniffkit.traffic import AddressPortPair, InfoTraffic, InterfaceAddress, SearchParameters

mac_from_dec_to_hex([2, 0, 0, 0, 0, 1])        # '02:00:00:00:00:01'
ipv6_from_long_dec_to_short_hex(
    [255, 10, 10, 255, 0, 0, 0, 0, 28, 4, 4, 28, 255, 1, 0, 0]
)                                               # 'ff0a:aff::1c04:41c:ff01:0'
BytesNotification.from_str("500k").threshold    # 500000

mine = [InterfaceAddress("192.168.1.10", netmask="255.255.255.0",
                         broadcast_addr="192.168.1.255")]
get_traffic_type("192.168.1.255", mine, TrafficDirection.OUTGOING)  # TrafficType.BROADCAST

traffic = InfoTraffic()
key = AddressPortPair("192.168.1.10", 50000, "203.0.113.7", 443, TransProtocol.TCP)
entry = modify_or_insert_in_map(
    traffic, key, mine, ("02:00:00:00:00:01", "02:00:00:00:00:02"), 1200, AppProtocol.HTTPS
)
entry.traffic_direction                         # TrafficDirection.OUTGOING
page, total = get_searched_entries(traffic, SearchParameters(), ReportSortType.MOST_BYTES, 1)

runtime = RunTimeData(tot_sent_packets=500, tot_received_packets=400)
settings = Notifications(packets_notification=PacketsNotification.from_str("750"))
notify_and_log(runtime, settings, traffic)      # 1
```

## What it does not do

The package works only on data it is given. It leaves the following to the
caller:

- It does not open network interfaces or capture packets.
- It does not look up the interfaces of the machine.
- It does not resolve host names, countries or autonomous systems. You fill
  in `InfoTraffic.addresses_resolved` and `InfoTraffic.hosts` yourself.
- It does not play sounds. It only calls the `play_sound` callback you pass
  in.
- It has no graphical interface and no command-line program.
- It does not write report files.
- It does not store settings on disk.

## Installation and tests

```
pip install sniffkit
pip install "sniffkit[test]"
pytest
```