"""
Network descriptor assembly.

A NetworkDescriptor is built once from a BSSID and a scanned IE buffer,
plus ANQP elements resolved elsewhere. It is immutable: ``complete``
returns a new descriptor carrying fresh ANQP data and leaves the original
untouched, so a descriptor can be shared while ANQP resolution runs.
"""

import dataclasses
import json
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Any, Iterable, Mapping, Optional, Tuple

from .anqp import ANQPParser, parse_anqp_lines
from .element_parser import (
    ScannedElements,
    scan_information_elements,
    decode_ssid,
    is_ssid_utf8,
    NO_ANQP_DOMAIN_ID,
)
from .models import (
    AccessNetworkType,
    ANQPElement,
    ANQPElementType,
    HSRelease,
    InvalidInput,
)
from .venue import VenueGroup, VenueType
from ..utils.mac_utils import parse_mac, format_mac

logger = logging.getLogger(__name__)

IE_SEPARATOR = '='


def parse_ie_text(info_elements: str) -> bytes:
    """
    Extract the IE buffer from ``<prefix>=<hex>`` scan text.

    Raises:
        InvalidInput: If the text is missing, has no separator or is not hex
    """
    if info_elements is None:
        raise InvalidInput("Null information element string")

    _, separator, hex_text = info_elements.partition(IE_SEPARATOR)
    if not separator:
        raise InvalidInput("No element separator")

    hex_text = hex_text.strip()
    if any(char.isspace() for char in hex_text):
        raise InvalidInput("Information elements must not contain separators")

    try:
        return bytes.fromhex(hex_text)
    except ValueError as e:
        raise InvalidInput(f"Information elements are not valid hex: {e}") from e


def _freeze_anqp(elements: Optional[Mapping[ANQPElementType, ANQPElement]]) -> Mapping[ANQPElementType, ANQPElement]:
    return MappingProxyType(dict(elements or {}))


@dataclass(frozen=True, eq=False)
class NetworkDescriptor:
    """Hotspot 2.0 relevant view of one BSS, decoded from its beacon IEs."""
    ssid: Optional[str]
    bssid: int
    hessid: int = 0

    # BSS Load element
    station_count: int = 0
    channel_utilization: int = 0
    capacity: int = 0

    # Interworking element; access_network_type is None iff it was absent
    access_network_type: Optional[AccessNetworkType] = None
    internet_available: bool = False
    venue_group: Optional[VenueGroup] = None
    venue_type: Optional[VenueType] = None

    # HS2.0 Indication element
    hs_release: Optional[HSRelease] = None
    anqp_domain_id: int = NO_ANQP_DOMAIN_ID

    # Roaming Consortium element; None iff it was absent
    anqp_oi_count: int = 0
    roaming_consortium_ois: Optional[Tuple[int, ...]] = None

    extended_capabilities: Optional[int] = None

    anqp_elements: Mapping[ANQPElementType, ANQPElement] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self):
        object.__setattr__(self, 'anqp_elements', _freeze_anqp(self.anqp_elements))
        if self.roaming_consortium_ois is not None:
            object.__setattr__(self, 'roaming_consortium_ois', tuple(self.roaming_consortium_ois))

    @classmethod
    def from_scan_text(
        cls,
        bssid: str,
        info_elements: str,
        anqp_lines: Optional[Iterable[str]] = None,
        anqp_parser: ANQPParser = parse_anqp_lines
    ) -> 'NetworkDescriptor':
        """
        Build a descriptor from scan result text.

        Args:
            bssid: BSSID as hex text, separators optional
            info_elements: IE buffer as ``ie=<hex>``
            anqp_lines: Raw ANQP response lines, if any
            anqp_parser: Callable turning ANQP lines into elements

        Returns:
            The assembled descriptor

        Raises:
            InvalidInput: If the IE text or BSSID cannot be read
            MalformedElement: If the IE buffer is malformed
        """
        data = parse_ie_text(info_elements)
        mac = parse_mac(bssid)
        return cls.from_scanned(mac, scan_information_elements(data), anqp_parser(anqp_lines))

    @classmethod
    def from_ie_bytes(
        cls,
        bssid: str,
        data: bytes,
        anqp_lines: Optional[Iterable[str]] = None,
        anqp_parser: ANQPParser = parse_anqp_lines
    ) -> 'NetworkDescriptor':
        """Build a descriptor from an already extracted IE buffer."""
        mac = parse_mac(bssid)
        return cls.from_scanned(mac, scan_information_elements(data), anqp_parser(anqp_lines))

    @classmethod
    def from_scanned(
        cls,
        bssid: int,
        scanned: ScannedElements,
        anqp_elements: Optional[Mapping[ANQPElementType, ANQPElement]] = None
    ) -> 'NetworkDescriptor':
        """Assemble a descriptor from scanner output."""
        fields: Dict[str, Any] = {
            'ssid': decode_ssid(scanned.ssid_octets, scanned.extended_capabilities),
            'bssid': bssid,
            'extended_capabilities': scanned.extended_capabilities,
            'anqp_elements': anqp_elements,
        }

        if scanned.bss_load is not None:
            fields['station_count'] = scanned.bss_load.station_count
            fields['channel_utilization'] = scanned.bss_load.channel_utilization
            fields['capacity'] = scanned.bss_load.capacity

        interworking = scanned.interworking
        if interworking is not None:
            fields['access_network_type'] = interworking.access_network_type
            fields['internet_available'] = interworking.internet
            fields['hessid'] = interworking.hessid
            if interworking.venue is not None:
                fields['venue_group'] = interworking.venue.group
                fields['venue_type'] = interworking.venue.venue_type

        if scanned.hotspot is not None:
            fields['hs_release'] = scanned.hotspot.release
            fields['anqp_domain_id'] = scanned.hotspot.anqp_domain_id

        if scanned.roaming_consortium is not None:
            fields['anqp_oi_count'] = scanned.roaming_consortium.anqp_oi_count
            fields['roaming_consortium_ois'] = scanned.roaming_consortium.ois

        descriptor = cls(**fields)
        logger.debug(f"Assembled {descriptor.to_key_string()}")
        return descriptor

    def complete(self, anqp_elements: Optional[Mapping[ANQPElementType, ANQPElement]]) -> 'NetworkDescriptor':
        """Return a copy of this descriptor carrying the given ANQP elements."""
        return dataclasses.replace(self, anqp_elements=anqp_elements)

    @property
    def bssid_string(self) -> str:
        return format_mac(self.bssid)

    @property
    def is_ssid_utf8(self) -> bool:
        return is_ssid_utf8(self.extended_capabilities)

    @property
    def is_interworking(self) -> bool:
        return self.access_network_type is not None

    def has_interworking(self) -> bool:
        """Check whether an Interworking element was present."""
        return self.is_interworking

    def has_80211u_info(self) -> bool:
        """Check for any 802.11u / Hotspot 2.0 data in the beacon."""
        return (self.access_network_type is not None
                or self.roaming_consortium_ois is not None
                or self.hs_release is not None)

    def to_key_string(self) -> str:
        return f"'{self.ssid}':{self.bssid_string}"

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, NetworkDescriptor):
            return NotImplemented
        return self.ssid == other.ssid and self.bssid == other.bssid

    def __hash__(self):
        return hash((self.ssid, self.bssid))

    def __str__(self):
        ois = _format_ois(self.roaming_consortium_ois)
        return (
            f"NetworkInfo{{SSID='{self.ssid}', HESSID={self.hessid:x}, BSSID={self.bssid:x}, "
            f"StationCount={self.station_count}, ChannelUtilization={self.channel_utilization}, "
            f"Capacity={self.capacity}, Ant={_name(self.access_network_type)}, "
            f"Internet={self.internet_available}, VenueGroup={_name(self.venue_group)}, "
            f"VenueType={_name(self.venue_type)}, HSRelease={_name(self.hs_release)}, "
            f"AnqpDomainID={self.anqp_domain_id}, AnqpOICount={self.anqp_oi_count}, "
            f"RoamingConsortiums={ois}}}"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert descriptor to dictionary for serialization."""
        return {
            'ssid': self.ssid,
            'bssid': self.bssid_string,
            'hessid': format_mac(self.hessid) if self.hessid else None,
            'station_count': self.station_count,
            'channel_utilization': self.channel_utilization,
            'capacity': self.capacity,
            'access_network_type': _name(self.access_network_type),
            'internet_available': self.internet_available,
            'venue_group': _name(self.venue_group),
            'venue_type': _name(self.venue_type),
            'hs_release': self.hs_release.value if self.hs_release else None,
            'anqp_domain_id': self.anqp_domain_id,
            'anqp_oi_count': self.anqp_oi_count,
            'roaming_consortium_ois': (
                [f"{oi:x}" for oi in self.roaming_consortium_ois]
                if self.roaming_consortium_ois is not None else None
            ),
            'extended_capabilities': (
                f"{self.extended_capabilities:#x}"
                if self.extended_capabilities is not None else None
            ),
            'ssid_utf8': self.is_ssid_utf8,
            'anqp_elements': [e.to_dict() for e in self.anqp_elements.values()]
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert descriptor to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, default=str)


def _name(value) -> Optional[str]:
    return value.name if value is not None else None


def _format_ois(ois: Optional[Tuple[int, ...]]) -> str:
    if ois is None:
        return "null"
    return "[" + ", ".join(f"{oi:x}" for oi in ois) + "]"
