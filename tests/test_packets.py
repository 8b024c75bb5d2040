import pytest

from sniffkit.packets import (
    EthernetHeader,
    Ipv4Header,
    Ipv6Header,
    NetworkInfo,
    TransportHeader,
    TransportInfo,
    analyze_link_header,
    analyze_network_header,
    analyze_transport_header,
    ipv6_from_long_dec_to_short_hex,
    mac_from_dec_to_hex,
)
from sniffkit.protocols import AppProtocol, IpVersion, TransProtocol


def test_mac_simple():
    assert mac_from_dec_to_hex([255, 255, 10, 177, 9, 15]) == "ff:ff:0a:b1:09:0f"


def test_mac_all_zero():
    assert mac_from_dec_to_hex([0, 0, 0, 0, 0, 0]) == "00:00:00:00:00:00"


def test_mac_wrong_length():
    with pytest.raises(ValueError):
        mac_from_dec_to_hex([1, 2, 3])


@pytest.mark.parametrize(
    "octets, expected",
    [
        (
            [255, 10, 10, 255, 255, 10, 10, 255, 255, 10, 10, 255, 255, 10, 10, 255],
            "ff0a:aff:ff0a:aff:ff0a:aff:ff0a:aff",
        ),
        (
            [255, 10, 10, 255, 0, 0, 0, 0, 28, 4, 4, 28, 255, 1, 0, 0],
            "ff0a:aff::1c04:41c:ff01:0",
        ),
        ([0, 0, 0, 0, 0, 0, 0, 0, 28, 4, 4, 28, 255, 1, 0, 10], "::1c04:41c:ff01:a"),
        ([28, 4, 4, 28, 255, 1, 0, 10, 0, 0, 0, 0, 0, 0, 0, 1], "1c04:41c:ff01:a::1"),
        ([28, 4, 4, 28, 255, 1, 0, 10, 0, 0, 0, 0, 0, 0, 0, 0], "1c04:41c:ff01:a::"),
        ([32, 0, 0, 0, 0, 0, 0, 0, 1, 1, 0, 0, 0, 0, 0, 1], "2000::101:0:0:1"),
        ([0, 0, 0, 0, 0, 0, 0, 0, 1, 1, 0, 0, 0, 0, 0, 1], "::101:0:0:1"),
        ([1, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 3, 118], "100:0:0:1::376"),
        ([32, 0, 0, 0, 0, 0, 0, 1, 1, 1, 0, 0, 0, 0, 0, 0], "2000:0:0:1:101::"),
        ([118, 3, 0, 0, 0, 0, 0, 1, 1, 1, 0, 0, 0, 0, 0, 1], "7603::1:101:0:0:1"),
        ([0] * 16, "::"),
        ([161] + [0] * 15, "a100::"),
        ([0] * 15 + [176], "::b0"),
        (
            [0, 16, 16, 0, 0, 1, 7, 0, 0, 2, 216, 0, 1, 0, 0, 1],
            "10:1000:1:700:2:d800:100:1",
        ),
    ],
)
def test_ipv6_compression(octets, expected):
    assert ipv6_from_long_dec_to_short_hex(octets) == expected


def test_ipv6_wrong_length():
    with pytest.raises(ValueError):
        ipv6_from_long_dec_to_short_hex([0] * 15)


def test_link_header_present():
    header = EthernetHeader(source=[2, 0, 0, 0, 0, 1], destination=[2, 0, 0, 0, 0, 2])
    assert analyze_link_header(header) == ("02:00:00:00:00:01", "02:00:00:00:00:02")


def test_link_header_missing():
    assert analyze_link_header(None) is None


def test_network_header_ipv4():
    header = Ipv4Header(source=[192, 168, 1, 10], destination=[8, 8, 8, 8], payload_len=120)
    assert analyze_network_header(header) == NetworkInfo(
        ip_version=IpVersion.IPV4,
        address1="192.168.1.10",
        address2="8.8.8.8",
        exchanged_bytes=120,
    )


def test_network_header_ipv6():
    header = Ipv6Header(
        source=[254, 128] + [0] * 13 + [1],
        destination=[255, 2] + [0] * 13 + [251],
        payload_length=64,
    )
    assert analyze_network_header(header) == NetworkInfo(
        ip_version=IpVersion.IPV6,
        address1="fe80::1",
        address2="ff02::fb",
        exchanged_bytes=64,
    )


def test_network_header_missing():
    assert analyze_network_header(None) is None


def test_ipv4_header_wrong_length():
    with pytest.raises(ValueError):
        Ipv4Header(source=[1, 2, 3], destination=[1, 2, 3, 4], payload_len=0)


def test_transport_header_source_port_known():
    header = TransportHeader(TransProtocol.TCP, source_port=443, destination_port=51000)
    assert analyze_transport_header(header) == TransportInfo(
        port1=443,
        port2=51000,
        app_protocol=AppProtocol.HTTPS,
        trans_protocol=TransProtocol.TCP,
    )


def test_transport_header_falls_back_to_destination_port():
    header = TransportHeader(TransProtocol.UDP, source_port=51000, destination_port=53)
    info = analyze_transport_header(header)
    assert info.app_protocol is AppProtocol.DNS
    assert info.trans_protocol is TransProtocol.UDP


def test_transport_header_unknown_ports():
    header = TransportHeader(TransProtocol.UDP, source_port=50000, destination_port=50001)
    assert analyze_transport_header(header).app_protocol is AppProtocol.OTHER


def test_transport_header_missing():
    assert analyze_transport_header(None) is None


def test_transport_header_rejects_other_protocol():
    with pytest.raises(ValueError):
        TransportHeader(TransProtocol.OTHER, source_port=1, destination_port=2)


def test_transport_header_rejects_bad_port():
    with pytest.raises(ValueError):
        TransportHeader(TransProtocol.TCP, source_port=70000, destination_port=2)