"""
Hotspot 2.0 beacon analyzer.

Decodes the information elements of 802.11 beacon and probe response
frames into NetworkDescriptor objects for Passpoint network discovery.
"""

__version__ = "0.1.0"

from .core.models import (
    AccessNetworkType,
    HSRelease,
    ANQPElement,
    ANQPElementType,
    AnalysisError,
    InvalidInput,
    InvalidAddress,
    MalformedElement,
    ConfigurationError,
)
from .core.venue import VenueGroup, VenueType
from .core.anqp import parse_anqp_lines
from .core.element_parser import scan_information_elements
from .core.network import NetworkDescriptor
from .utils.mac_utils import parse_mac, format_mac

__all__ = [
    'NetworkDescriptor',
    'scan_information_elements',
    'parse_anqp_lines',
    'parse_mac',
    'format_mac',
    'AccessNetworkType',
    'HSRelease',
    'VenueGroup',
    'VenueType',
    'ANQPElement',
    'ANQPElementType',
    'AnalysisError',
    'InvalidInput',
    'InvalidAddress',
    'MalformedElement',
    'ConfigurationError'
]
