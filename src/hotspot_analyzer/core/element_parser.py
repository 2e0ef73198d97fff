"""
Information element parsing for beacon and probe response frames.

The IE buffer is a run of ``(tag, length, value)`` records. The scanner
walks the records, hands each recognized tag exactly ``length`` octets,
and skips everything else. Multi-byte fields are little-endian unless a
decoder says otherwise.

SSID text is not decoded here: its character set depends on the
Extended Capabilities element, which may come later in the buffer, so
the raw octets are kept and decoded by ``decode_ssid`` after the scan.
"""

import logging
import struct
from dataclasses import dataclass
from typing import Optional, Tuple

from .models import AccessNetworkType, HSRelease, MalformedElement
from .venue import VenueInfo, decode_venue_info, VENUE_INFO_LENGTH

logger = logging.getLogger(__name__)

# Element IDs
EID_SSID = 0
EID_BSS_LOAD = 11
EID_INTERWORKING = 107
EID_ROAMING_CONSORTIUM = 111
EID_EXTENDED_CAPABILITIES = 127
EID_VENDOR_SPECIFIC = 221

ELEMENT_HEADER_LENGTH = 2
BSS_LOAD_LENGTH = 5
HESSID_LENGTH = 6
MAX_EXTENDED_CAPABILITIES_LENGTH = 8

# Wi-Fi Alliance OUI 50:6f:9a, OUI type 0x10 (HS2.0 Indication)
HS20_FRAME_PREFIX = b'\x50\x6f\x9a\x10'
HS20_MIN_LENGTH = len(HS20_FRAME_PREFIX) + 1

INTERNET_BIT = 0x10
ANQP_DOMAIN_ID_BIT = 0x04
SSID_UTF8_BIT = 0x0001000000000000

NO_ANQP_DOMAIN_ID = -1


@dataclass(frozen=True)
class BSSLoad:
    """BSS Load element fields."""
    station_count: int
    channel_utilization: int
    capacity: int


@dataclass(frozen=True)
class Interworking:
    """Interworking element fields."""
    access_network_type: AccessNetworkType
    internet: bool
    venue: Optional[VenueInfo] = None
    hessid: int = 0


@dataclass(frozen=True)
class RoamingConsortium:
    """Roaming Consortium element fields."""
    anqp_oi_count: int
    ois: Tuple[int, ...] = ()


@dataclass(frozen=True)
class HotspotIndication:
    """Hotspot 2.0 Indication vendor element fields."""
    release: HSRelease
    anqp_domain_id: int = NO_ANQP_DOMAIN_ID


@dataclass
class ScannedElements:
    """Fields accumulated while scanning an IE buffer."""
    ssid_octets: Optional[bytes] = None
    bss_load: Optional[BSSLoad] = None
    interworking: Optional[Interworking] = None
    roaming_consortium: Optional[RoamingConsortium] = None
    hotspot: Optional[HotspotIndication] = None
    extended_capabilities: Optional[int] = None

    # Scan bookkeeping
    elements_seen: int = 0
    elements_skipped: int = 0
    octets_consumed: int = 0

    @property
    def ssid(self) -> Optional[str]:
        return decode_ssid(self.ssid_octets, self.extended_capabilities)


def is_ssid_utf8(extended_capabilities: Optional[int]) -> bool:
    """Check the 'SSID is UTF-8' bit of Extended Capabilities."""
    return extended_capabilities is not None and bool(extended_capabilities & SSID_UTF8_BIT)


def decode_ssid(octets: Optional[bytes], extended_capabilities: Optional[int]) -> Optional[str]:
    """
    Decode SSID octets once the final Extended Capabilities value is known.

    Args:
        octets: Raw SSID octets, or None if no SSID element was seen
        extended_capabilities: Extended Capabilities bitfield, if present

    Returns:
        SSID text (UTF-8 when advertised, otherwise ISO-8859-1) or None
    """
    if octets is None:
        return None
    if is_ssid_utf8(extended_capabilities):
        return octets.decode('utf-8', errors='replace')
    return octets.decode('iso-8859-1')


def decode_bss_load(data: bytes) -> BSSLoad:
    """Decode a BSS Load element body."""
    if len(data) != BSS_LOAD_LENGTH:
        raise MalformedElement(
            f"BSS Load element length is not {BSS_LOAD_LENGTH}: {len(data)}",
            element_id=EID_BSS_LOAD
        )
    station_count, channel_utilization, capacity = struct.unpack('<HBH', data)
    return BSSLoad(
        station_count=station_count,
        channel_utilization=channel_utilization,
        capacity=capacity
    )


def decode_interworking(data: bytes) -> Optional[Interworking]:
    """
    Decode an Interworking element body.

    Layout by length: 1 options only, 3 options + venue info,
    7 options + HESSID, 9 options + venue info + HESSID.

    Args:
        data: Element body

    Returns:
        Interworking fields, or None for an empty element
    """
    if not data:
        logger.debug("Empty Interworking element ignored")
        return None

    options = data[0]
    access_network_type = AccessNetworkType.from_code(options & 0x0f)
    internet = bool(options & INTERNET_BIT)
    venue = None
    hessid = 0
    offset = 1

    if len(data) in (3, 9):
        # A failed venue decode only drops the venue fields
        venue = decode_venue_info(data[offset:offset + VENUE_INFO_LENGTH])
        offset += VENUE_INFO_LENGTH

    if len(data) in (7, 9):
        hessid = int.from_bytes(data[offset:offset + HESSID_LENGTH], 'big')

    return Interworking(
        access_network_type=access_network_type,
        internet=internet,
        venue=venue,
        hessid=hessid
    )


def decode_roaming_consortium(data: bytes) -> RoamingConsortium:
    """
    Decode a Roaming Consortium element body.

    The second octet packs the lengths of OI #1 (low nibble) and OI #2
    (high nibble); OI #3 takes whatever is left. Only OIs with a
    positive length are returned, in order.
    """
    if len(data) < 2:
        raise MalformedElement(
            f"Roaming Consortium element too short: {len(data)}",
            element_id=EID_ROAMING_CONSORTIUM
        )

    anqp_oi_count = data[0]
    oi1_length = data[1] & 0x0f
    oi2_length = (data[1] >> 4) & 0x0f
    oi3_length = len(data) - 2 - oi1_length - oi2_length
    if oi3_length < 0:
        raise MalformedElement(
            f"Roaming Consortium OI lengths {oi1_length}+{oi2_length} "
            f"exceed element length {len(data)}",
            element_id=EID_ROAMING_CONSORTIUM
        )

    ois = []
    offset = 2
    for oi_length in (oi1_length, oi2_length, oi3_length):
        if oi_length > 0:
            ois.append(int.from_bytes(data[offset:offset + oi_length], 'big'))
            offset += oi_length

    return RoamingConsortium(anqp_oi_count=anqp_oi_count, ois=tuple(ois))


def decode_hotspot_indication(data: bytes) -> Optional[HotspotIndication]:
    """
    Decode a vendor-specific element if it is a HS2.0 Indication.

    Returns:
        Hotspot fields, or None if the element is other vendor data
    """
    if len(data) < HS20_MIN_LENGTH or data[:len(HS20_FRAME_PREFIX)] != HS20_FRAME_PREFIX:
        return None

    config = data[len(HS20_FRAME_PREFIX)]
    release = HSRelease.from_code((config >> 4) & 0x0f)
    anqp_domain_id = NO_ANQP_DOMAIN_ID

    if config & ANQP_DOMAIN_ID_BIT:
        start = HS20_MIN_LENGTH
        if len(data) >= start + 2:
            anqp_domain_id = struct.unpack('<H', data[start:start + 2])[0]
        else:
            logger.debug("HS2.0 element flags an ANQP domain ID but is too short to carry one")

    return HotspotIndication(release=release, anqp_domain_id=anqp_domain_id)


def decode_extended_capabilities(data: bytes) -> int:
    """Decode Extended Capabilities as a little-endian bitfield (first 64 bits)."""
    if len(data) > MAX_EXTENDED_CAPABILITIES_LENGTH:
        logger.debug(f"Extended Capabilities truncated from {len(data)} octets")
    return int.from_bytes(data[:MAX_EXTENDED_CAPABILITIES_LENGTH], 'little')


def scan_information_elements(data: bytes) -> ScannedElements:
    """
    Scan an IE buffer and decode every recognized element.

    Args:
        data: Concatenated information elements

    Returns:
        ScannedElements with the decoded fields (SSID still undecoded)

    Raises:
        MalformedElement: If a length runs past the buffer or a
            recognized element violates its fixed layout
    """
    result = ScannedElements()
    offset = 0
    total = len(data)

    while offset < total:
        if total - offset < ELEMENT_HEADER_LENGTH:
            raise MalformedElement(
                f"Truncated element header at offset {offset}",
                element_id=data[offset],
                offset=offset
            )

        eid = data[offset]
        length = data[offset + 1]
        start = offset + ELEMENT_HEADER_LENGTH
        if length > total - start:
            raise MalformedElement(
                f"Length out of bounds: {length}",
                element_id=eid,
                offset=offset
            )
        body = bytes(data[start:start + length])

        try:
            if eid == EID_SSID:
                result.ssid_octets = body
            elif eid == EID_BSS_LOAD:
                result.bss_load = decode_bss_load(body)
            elif eid == EID_INTERWORKING:
                interworking = decode_interworking(body)
                if interworking is not None:
                    result.interworking = interworking
            elif eid == EID_ROAMING_CONSORTIUM:
                result.roaming_consortium = decode_roaming_consortium(body)
            elif eid == EID_VENDOR_SPECIFIC:
                hotspot = decode_hotspot_indication(body)
                if hotspot is not None:
                    result.hotspot = hotspot
                else:
                    result.elements_skipped += 1
            elif eid == EID_EXTENDED_CAPABILITIES:
                result.extended_capabilities = decode_extended_capabilities(body)
            else:
                result.elements_skipped += 1
        except MalformedElement as e:
            raise MalformedElement(str(e), element_id=eid, offset=offset) from e

        result.elements_seen += 1
        offset = start + length

    result.octets_consumed = offset
    logger.debug(
        f"Scanned {result.elements_seen} elements "
        f"({result.elements_skipped} skipped) in {total} octets"
    )
    return result
