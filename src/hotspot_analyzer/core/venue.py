"""
Venue info decoding.

The two-octet venue info field (IEEE 802.11u) appears in the Interworking
element and in the ANQP Venue Name element. Group and type codes are
looked up in explicit tables; codes outside the tables decode to RESERVED.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)

VENUE_INFO_LENGTH = 2


class VenueGroup(Enum):
    """Venue group codes."""
    UNSPECIFIED = 0
    ASSEMBLY = 1
    BUSINESS = 2
    EDUCATIONAL = 3
    FACTORY_INDUSTRIAL = 4
    INSTITUTIONAL = 5
    MERCANTILE = 6
    RESIDENTIAL = 7
    STORAGE = 8
    UTILITY_MISCELLANEOUS = 9
    VEHICULAR = 10
    OUTDOOR = 11
    RESERVED = -1

    @classmethod
    def from_code(cls, code: int) -> 'VenueGroup':
        if code < 0:
            return cls.RESERVED
        try:
            return cls(code)
        except ValueError:
            return cls.RESERVED


class VenueType(Enum):
    """Venue type codes, keyed by ``(group, type)``."""
    UNSPECIFIED = (0, 0)

    UNSPECIFIED_ASSEMBLY = (1, 0)
    ARENA = (1, 1)
    STADIUM = (1, 2)
    PASSENGER_TERMINAL = (1, 3)
    AMPHITHEATER = (1, 4)
    AMUSEMENT_PARK = (1, 5)
    PLACE_OF_WORSHIP = (1, 6)
    CONVENTION_CENTER = (1, 7)
    LIBRARY = (1, 8)
    MUSEUM = (1, 9)
    RESTAURANT = (1, 10)
    THEATER = (1, 11)
    BAR = (1, 12)
    COFFEE_SHOP = (1, 13)
    ZOO_OR_AQUARIUM = (1, 14)
    EMERGENCY_COORDINATION_CENTER = (1, 15)

    UNSPECIFIED_BUSINESS = (2, 0)
    DOCTOR_OR_DENTIST_OFFICE = (2, 1)
    BANK = (2, 2)
    FIRE_STATION = (2, 3)
    POLICE_STATION = (2, 4)
    POST_OFFICE = (2, 6)
    PROFESSIONAL_OFFICE = (2, 7)
    RESEARCH_AND_DEVELOPMENT_FACILITY = (2, 8)
    ATTORNEY_OFFICE = (2, 9)

    UNSPECIFIED_EDUCATIONAL = (3, 0)
    SCHOOL_PRIMARY = (3, 1)
    SCHOOL_SECONDARY = (3, 2)
    UNIVERSITY_OR_COLLEGE = (3, 3)

    UNSPECIFIED_FACTORY_INDUSTRIAL = (4, 0)
    FACTORY = (4, 1)

    UNSPECIFIED_INSTITUTIONAL = (5, 0)
    HOSPITAL = (5, 1)
    LONG_TERM_CARE_FACILITY = (5, 2)
    ALCOHOL_AND_DRUG_REHABILITATION_CENTER = (5, 3)
    GROUP_HOME = (5, 4)
    PRISON_OR_JAIL = (5, 5)

    UNSPECIFIED_MERCANTILE = (6, 0)
    RETAIL_STORE = (6, 1)
    GROCERY_MARKET = (6, 2)
    AUTOMOTIVE_SERVICE_STATION = (6, 3)
    SHOPPING_MALL = (6, 4)
    GAS_STATION = (6, 5)

    UNSPECIFIED_RESIDENTIAL = (7, 0)
    PRIVATE_RESIDENCE = (7, 1)
    HOTEL_OR_MOTEL = (7, 2)
    DORMITORY = (7, 3)
    BOARDING_HOUSE = (7, 4)

    UNSPECIFIED_STORAGE = (8, 0)

    UNSPECIFIED_UTILITY_MISCELLANEOUS = (9, 0)

    UNSPECIFIED_VEHICULAR = (10, 0)
    AUTOMOBILE_OR_TRUCK = (10, 1)
    AIRPLANE = (10, 2)
    BUS = (10, 3)
    FERRY = (10, 4)
    SHIP_OR_BOAT = (10, 5)
    TRAIN = (10, 6)
    MOTOR_BIKE = (10, 7)

    UNSPECIFIED_OUTDOOR = (11, 0)
    MUNI_MESH_NETWORK = (11, 1)
    CITY_PARK = (11, 2)
    REST_AREA = (11, 3)
    TRAFFIC_CONTROL = (11, 4)
    BUS_STOP = (11, 5)
    KIOSK = (11, 6)

    RESERVED = (-1, -1)

    @classmethod
    def from_code(cls, group: int, venue_type: int) -> 'VenueType':
        try:
            return cls((group, venue_type))
        except ValueError:
            return cls.RESERVED


@dataclass(frozen=True)
class VenueInfo:
    """Decoded venue info field."""
    group: VenueGroup
    venue_type: VenueType


def decode_venue_info(data: bytes) -> Optional[VenueInfo]:
    """
    Decode a venue info field.

    Args:
        data: Octets starting at the venue group code

    Returns:
        VenueInfo, or None if the field is too short to decode
    """
    if len(data) < VENUE_INFO_LENGTH:
        logger.debug(f"Runt venue info: {len(data)} octets")
        return None

    group_code = data[0]
    type_code = data[1]
    group = VenueGroup.from_code(group_code)
    if group is VenueGroup.RESERVED:
        return VenueInfo(group=VenueGroup.RESERVED, venue_type=VenueType.RESERVED)

    return VenueInfo(group=group, venue_type=VenueType.from_code(group_code, type_code))
