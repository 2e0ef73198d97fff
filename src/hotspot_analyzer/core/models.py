"""
Core data models for Hotspot 2.0 beacon analysis.

This module defines the enumerations decoded from information elements,
the ANQP element types consumed from the query collaborator, and the
exception hierarchy shared by the parser, loaders and CLI.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class AccessNetworkType(Enum):
    """Access network type carried in the Interworking element (4 bits)."""
    PRIVATE = 0
    PRIVATE_WITH_GUEST = 1
    CHARGEABLE_PUBLIC = 2
    FREE_PUBLIC = 3
    PERSONAL = 4
    EMERGENCY_ONLY = 5
    RESERVED_6 = 6
    RESERVED_7 = 7
    RESERVED_8 = 8
    RESERVED_9 = 9
    RESERVED_10 = 10
    RESERVED_11 = 11
    RESERVED_12 = 12
    RESERVED_13 = 13
    TEST_OR_EXPERIMENTAL = 14
    WILDCARD = 15

    @classmethod
    def from_code(cls, code: int) -> 'AccessNetworkType':
        """Look up the variant for a 4-bit wire code."""
        return cls(code & 0x0f)


class HSRelease(Enum):
    """Hotspot 2.0 release advertised in the HS2.0 Indication element."""
    R1 = "R1"
    R2 = "R2"
    UNKNOWN = "Unknown"

    @classmethod
    def from_code(cls, code: int) -> 'HSRelease':
        """Look up the release for the 4-bit release number."""
        return _HS_RELEASE_CODES.get(code, cls.UNKNOWN)


_HS_RELEASE_CODES: Dict[int, HSRelease] = {
    0: HSRelease.R1,
    1: HSRelease.R2,
}


class ANQPElementType(Enum):
    """
    ANQP element identifiers.

    Values are ``(id_space, code)`` pairs: IEEE 802.11u elements use their
    ANQP Info ID, Hotspot 2.0 elements use the HS2.0 subtype.
    """
    # IEEE 802.11u
    ANQP_QUERY_LIST = ("anqp", 256)
    ANQP_CAPABILITY_LIST = ("anqp", 257)
    ANQP_VENUE_NAME = ("anqp", 258)
    ANQP_EMERGENCY_NUMBER = ("anqp", 259)
    ANQP_NETWORK_AUTH_TYPE = ("anqp", 260)
    ANQP_ROAMING_CONSORTIUM = ("anqp", 261)
    ANQP_IP_ADDR_AVAILABILITY = ("anqp", 262)
    ANQP_NAI_REALM = ("anqp", 263)
    ANQP_3GPP_NETWORK = ("anqp", 264)
    ANQP_GEO_LOC = ("anqp", 265)
    ANQP_CIVIC_LOC = ("anqp", 266)
    ANQP_LOC_URI = ("anqp", 267)
    ANQP_DOMAIN_NAME = ("anqp", 268)
    ANQP_EMERGENCY_ALERT = ("anqp", 269)
    ANQP_TDLS_CAPABILITY = ("anqp", 270)
    ANQP_EMERGENCY_NAI = ("anqp", 271)
    ANQP_NEIGHBOR_REPORT = ("anqp", 272)
    ANQP_VENDOR_SPEC = ("anqp", 56797)

    # Hotspot 2.0 vendor-specific
    HS_CAPABILITY_LIST = ("hs20", 2)
    HS_FRIENDLY_NAME = ("hs20", 3)
    HS_WAN_METRICS = ("hs20", 4)
    HS_CONN_CAPABILITY = ("hs20", 5)
    HS_NAI_HOME_REALM_QUERY = ("hs20", 6)
    HS_OPERATING_CLASS = ("hs20", 7)
    HS_OSU_PROVIDERS = ("hs20", 8)
    HS_ICON_REQUEST = ("hs20", 10)
    HS_ICON_FILE = ("hs20", 11)

    @property
    def code(self) -> int:
        return self.value[1]

    @property
    def is_hotspot(self) -> bool:
        return self.value[0] == "hs20"


@dataclass(frozen=True)
class ANQPElement:
    """An ANQP element resolved outside the beacon; payload is kept opaque."""
    element_type: ANQPElementType
    payload: bytes = b''

    def to_dict(self) -> Dict[str, object]:
        """Convert element to dictionary for serialization."""
        return {
            'element_type': self.element_type.name,
            'code': self.element_type.code,
            'payload': self.payload.hex()
        }


# Exception classes for the framework
class AnalysisError(Exception):
    """Base exception for analysis errors."""
    pass


class InvalidInput(AnalysisError, ValueError):
    """Exception raised when scan text cannot be decoded at all."""
    pass


class InvalidAddress(InvalidInput):
    """Exception raised for a MAC address without exactly 12 hex digits."""
    pass


class MalformedElement(AnalysisError, ValueError):
    """Exception raised when an information element violates its layout."""

    def __init__(self, message: str, element_id: Optional[int] = None,
                 offset: Optional[int] = None):
        super().__init__(message)
        self.element_id = element_id
        self.offset = offset


class ConfigurationError(AnalysisError):
    """Exception raised for configuration issues."""
    pass
