"""Tests for network descriptor assembly, equality and ANQP merge."""

import dataclasses
import json

import pytest

from hotspot_analyzer.core.element_parser import scan_information_elements
from hotspot_analyzer.core.models import (
    AccessNetworkType,
    HSRelease,
    ANQPElement,
    ANQPElementType,
    InvalidInput,
    InvalidAddress,
    MalformedElement,
)
from hotspot_analyzer.core.network import NetworkDescriptor, parse_ie_text
from hotspot_analyzer.core.venue import VenueGroup, VenueType

BSSID = "61:04:08:62:12:05"

IE = ("ie="
      "000477696e67"                  # SSID wing
      "0b052a00cf611e"                # BSS Load 42:207:7777
      "6b091e0a01610408621205"        # Interworking
      "6f0a0e530111112222222229"      # Roaming Consortium
      "dd07506f9a10143a01")           # HS2.0 R2, domain ID 314

IE2 = ("ie=000f4578616d706c65204e6574776f726b010882848b960c1218240301012a010432043048606c"
       "30140100000fac040100000fac040100000fac0100007f04000000806b091e07010203040506076c02"
       "7f006f1001531122331020304050010203040506dd05506f9a1000")


def test_ssid_only_entry():
    descriptor = NetworkDescriptor.from_scan_text("610408621205", "ie=000477696e67")

    assert descriptor.ssid == "wing"
    assert descriptor.bssid == 0x610408621205
    assert descriptor.hessid == 0
    assert descriptor.station_count == 0
    assert descriptor.channel_utilization == 0
    assert descriptor.capacity == 0
    assert descriptor.access_network_type is None
    assert descriptor.internet_available is False
    assert descriptor.venue_group is None
    assert descriptor.venue_type is None
    assert descriptor.hs_release is None
    assert descriptor.anqp_domain_id == -1
    assert descriptor.anqp_oi_count == 0
    assert descriptor.roaming_consortium_ois is None
    assert descriptor.extended_capabilities is None
    assert dict(descriptor.anqp_elements) == {}
    assert not descriptor.has_interworking()
    assert not descriptor.has_80211u_info()


def test_full_entry():
    descriptor = NetworkDescriptor.from_scan_text(BSSID, IE)

    assert descriptor.ssid == "wing"
    assert descriptor.station_count == 42
    assert descriptor.channel_utilization == 207
    assert descriptor.capacity == 7777
    assert descriptor.access_network_type is AccessNetworkType.TEST_OR_EXPERIMENTAL
    assert descriptor.internet_available is True
    assert descriptor.venue_group is VenueGroup.VEHICULAR
    assert descriptor.venue_type is VenueType.AUTOMOBILE_OR_TRUCK
    assert descriptor.hessid == 0x610408621205
    assert descriptor.anqp_oi_count == 14
    assert descriptor.roaming_consortium_ois == (0x011111, 0x2222222229)
    assert descriptor.hs_release is HSRelease.R2
    assert descriptor.anqp_domain_id == 314
    assert descriptor.has_interworking()
    assert descriptor.is_interworking
    assert descriptor.has_80211u_info()


def test_supplicant_style_entry():
    descriptor = NetworkDescriptor.from_scan_text(BSSID, IE2)

    assert descriptor.ssid == "Example Network"
    assert descriptor.extended_capabilities == 0x80000000
    assert not descriptor.is_ssid_utf8
    assert descriptor.access_network_type is AccessNetworkType.TEST_OR_EXPERIMENTAL
    assert descriptor.venue_group is VenueGroup.RESIDENTIAL
    assert descriptor.venue_type is VenueType.PRIVATE_RESIDENCE
    assert descriptor.hessid == 0x020304050607
    assert descriptor.roaming_consortium_ois == (0x112233, 0x1020304050, 0x010203040506)
    assert descriptor.anqp_oi_count == 1
    assert descriptor.hs_release is HSRelease.R1
    assert descriptor.anqp_domain_id == -1


def test_utf8_ssid():
    descriptor = NetworkDescriptor.from_scan_text(BSSID, "ie=0005636166c3a97f0700000000000001")
    assert descriptor.is_ssid_utf8
    assert descriptor.ssid == "café"


def test_missing_separator_is_rejected():
    with pytest.raises(InvalidInput):
        NetworkDescriptor.from_scan_text(BSSID, "000477696e67")


def test_null_elements_are_rejected():
    with pytest.raises(InvalidInput):
        NetworkDescriptor.from_scan_text(BSSID, None)


def test_non_hex_elements_are_rejected():
    with pytest.raises(InvalidInput):
        parse_ie_text("ie=0g")


def test_parse_ie_text_ignores_prefix():
    assert parse_ie_text("ie=000161") == b'\x00\x01a'
    assert parse_ie_text("=") == b''


def test_bad_bssid_is_rejected():
    with pytest.raises(InvalidAddress):
        NetworkDescriptor.from_scan_text("610408", "ie=000477696e67")


def test_malformed_buffer_yields_no_descriptor():
    with pytest.raises(MalformedElement):
        NetworkDescriptor.from_scan_text(BSSID, "ie=000577696e67")


def test_from_ie_bytes():
    descriptor = NetworkDescriptor.from_ie_bytes("aa:bb:cc:dd:ee:ff", bytes.fromhex("000161"))
    assert descriptor.ssid == "a"
    assert descriptor.bssid_string == "aa:bb:cc:dd:ee:ff"


def test_equality_uses_ssid_and_bssid_only():
    plain = NetworkDescriptor.from_scan_text(BSSID, "ie=000477696e67")
    full = NetworkDescriptor.from_scan_text(BSSID, IE)

    assert plain == full
    assert hash(plain) == hash(full)
    assert len({plain, full}) == 1


def test_different_bssid_or_ssid_not_equal():
    base = NetworkDescriptor.from_scan_text(BSSID, "ie=000477696e67")
    other_bssid = NetworkDescriptor.from_scan_text("61:04:08:62:12:06", "ie=000477696e67")
    other_ssid = NetworkDescriptor.from_scan_text(BSSID, "ie=000477696e66")

    assert base != other_bssid
    assert base != other_ssid
    assert base != "wing"


def test_descriptors_without_ssid_compare_by_bssid():
    first = NetworkDescriptor.from_scan_text(BSSID, "ie=")
    second = NetworkDescriptor.from_scan_text(BSSID, "ie=0b052a00cf611e")
    assert first.ssid is None
    assert first == second


def test_descriptor_is_immutable():
    descriptor = NetworkDescriptor.from_scan_text(BSSID, IE)
    with pytest.raises(dataclasses.FrozenInstanceError):
        descriptor.ssid = "other"
    with pytest.raises(TypeError):
        descriptor.anqp_elements[ANQPElementType.ANQP_VENUE_NAME] = None


def test_complete_returns_new_descriptor():
    descriptor = NetworkDescriptor.from_scan_text(BSSID, IE)
    element = ANQPElement(ANQPElementType.ANQP_DOMAIN_NAME, b'\x07example')

    completed = descriptor.complete({ANQPElementType.ANQP_DOMAIN_NAME: element})

    assert completed is not descriptor
    assert dict(descriptor.anqp_elements) == {}
    assert completed.anqp_elements[ANQPElementType.ANQP_DOMAIN_NAME] is element
    assert completed == descriptor
    for name in ('ssid', 'bssid', 'hessid', 'station_count', 'channel_utilization',
                 'capacity', 'access_network_type', 'internet_available', 'venue_group',
                 'venue_type', 'hs_release', 'anqp_domain_id', 'anqp_oi_count',
                 'roaming_consortium_ois', 'extended_capabilities'):
        assert getattr(completed, name) == getattr(descriptor, name)


def test_complete_copies_the_mapping():
    descriptor = NetworkDescriptor.from_scan_text(BSSID, "ie=000161")
    elements = {}
    completed = descriptor.complete(elements)
    elements[ANQPElementType.ANQP_NAI_REALM] = ANQPElement(ANQPElementType.ANQP_NAI_REALM)
    assert dict(completed.anqp_elements) == {}


def test_anqp_lines_are_parsed_at_construction():
    descriptor = NetworkDescriptor.from_scan_text(
        BSSID, "ie=000161", ["anqp_domain_name=0007", "hs20_wan_metrics=01"]
    )
    assert set(descriptor.anqp_elements) == {
        ANQPElementType.ANQP_DOMAIN_NAME,
        ANQPElementType.HS_WAN_METRICS
    }


def test_custom_anqp_parser_is_used():
    seen = []
    element = ANQPElement(ANQPElementType.ANQP_VENUE_NAME, b'\x0a\x01')

    def parser(lines):
        seen.append(lines)
        return {ANQPElementType.ANQP_VENUE_NAME: element}

    descriptor = NetworkDescriptor.from_scan_text(BSSID, "ie=000161", ["x"], anqp_parser=parser)
    assert seen == [["x"]]
    assert descriptor.anqp_elements[ANQPElementType.ANQP_VENUE_NAME] is element


def test_roaming_consortium_alone_is_80211u_info():
    descriptor = NetworkDescriptor.from_scan_text(BSSID, "ie=6f020500")
    assert descriptor.roaming_consortium_ois == ()
    assert not descriptor.has_interworking()
    assert descriptor.has_80211u_info()


def test_hotspot_alone_is_80211u_info():
    descriptor = NetworkDescriptor.from_scan_text(BSSID, "ie=dd05506f9a1000")
    assert descriptor.has_80211u_info()


def test_from_scanned_matches_text_construction():
    data = parse_ie_text(IE)
    descriptor = NetworkDescriptor.from_scanned(0x610408621205, scan_information_elements(data))
    assert descriptor == NetworkDescriptor.from_scan_text(BSSID, IE)
    assert descriptor.capacity == 7777


def test_key_string():
    descriptor = NetworkDescriptor.from_scan_text("610408621205", IE)
    assert descriptor.bssid_string == "61:04:08:62:12:05"
    assert descriptor.to_key_string() == "'wing':61:04:08:62:12:05"


def test_debug_rendering_lists_fields():
    text = str(NetworkDescriptor.from_scan_text(BSSID, IE))
    assert "SSID='wing'" in text
    assert "HESSID=610408621205" in text
    assert "BSSID=610408621205" in text
    assert "StationCount=42" in text
    assert "Ant=TEST_OR_EXPERIMENTAL" in text
    assert "HSRelease=R2" in text
    assert "AnqpDomainID=314" in text
    assert "RoamingConsortiums=[11111, 2222222229]" in text


def test_to_json():
    descriptor = NetworkDescriptor.from_scan_text(BSSID, IE).complete({
        ANQPElementType.HS_FRIENDLY_NAME: ANQPElement(ANQPElementType.HS_FRIENDLY_NAME, b'\x01')
    })
    data = json.loads(descriptor.to_json())

    assert data['ssid'] == "wing"
    assert data['bssid'] == BSSID
    assert data['hessid'] == "61:04:08:62:12:05"
    assert data['access_network_type'] == "TEST_OR_EXPERIMENTAL"
    assert data['venue_type'] == "AUTOMOBILE_OR_TRUCK"
    assert data['hs_release'] == "R2"
    assert data['roaming_consortium_ois'] == ["11111", "2222222229"]
    assert data['extended_capabilities'] is None
    assert data['anqp_elements'] == [
        {'element_type': 'HS_FRIENDLY_NAME', 'code': 3, 'payload': '01'}
    ]


@pytest.mark.parametrize("text", ["ie=00 04 77 69 6e 67", "ie=0004\t77696e67", "ie=0004\n77696e67"])
def test_whitespace_inside_hex_is_rejected(text):
    with pytest.raises(InvalidInput):
        parse_ie_text(text)


def test_surrounding_whitespace_is_tolerated():
    assert parse_ie_text("ie=000161\n") == b'\x00\x01a'


def test_interworking_checks_agree():
    with_interworking = NetworkDescriptor.from_scan_text(BSSID, "ie=6b0103")
    without = NetworkDescriptor.from_scan_text(BSSID, "ie=000161")

    assert with_interworking.is_interworking and with_interworking.has_interworking()
    assert not without.is_interworking and not without.has_interworking()
