"""
ANQP response line parsing.

ANQP data is resolved by a separate query exchange, outside the beacon.
The network descriptor only needs a ``parse(lines) -> mapping`` callable;
this module supplies the default one, which reads ``key=<hex>`` lines as
printed by wpa_supplicant's BSS command and keeps each payload opaque.
"""

import logging
from typing import Callable, Dict, Iterable, Mapping, Optional

from .models import ANQPElement, ANQPElementType

logger = logging.getLogger(__name__)

ANQPParser = Callable[[Optional[Iterable[str]]], Mapping[ANQPElementType, ANQPElement]]

SUPPLICANT_KEYS: Dict[str, ANQPElementType] = {
    'anqp_capability_list': ANQPElementType.ANQP_CAPABILITY_LIST,
    'anqp_venue_name': ANQPElementType.ANQP_VENUE_NAME,
    'anqp_network_auth_type': ANQPElementType.ANQP_NETWORK_AUTH_TYPE,
    'anqp_roaming_consortium': ANQPElementType.ANQP_ROAMING_CONSORTIUM,
    'anqp_ip_addr_type_availability': ANQPElementType.ANQP_IP_ADDR_AVAILABILITY,
    'anqp_nai_realm': ANQPElementType.ANQP_NAI_REALM,
    'anqp_3gpp': ANQPElementType.ANQP_3GPP_NETWORK,
    'anqp_domain_name': ANQPElementType.ANQP_DOMAIN_NAME,
    'hs20_operator_friendly_name': ANQPElementType.HS_FRIENDLY_NAME,
    'hs20_wan_metrics': ANQPElementType.HS_WAN_METRICS,
    'hs20_connection_capability': ANQPElementType.HS_CONN_CAPABILITY,
    'hs20_operating_class': ANQPElementType.HS_OPERATING_CLASS,
    'hs20_osu_providers_list': ANQPElementType.HS_OSU_PROVIDERS,
}


def parse_anqp_lines(lines: Optional[Iterable[str]]) -> Dict[ANQPElementType, ANQPElement]:
    """
    Parse supplicant ANQP lines into elements.

    Args:
        lines: Raw ``key=<hex>`` lines, or None when no ANQP data exists

    Returns:
        Mapping of element type to element; empty for None
    """
    elements: Dict[ANQPElementType, ANQPElement] = {}
    if lines is None:
        return elements

    for line in lines:
        line = line.strip()
        if not line:
            continue

        key, separator, value = line.partition('=')
        if not separator:
            logger.warning(f"Skipping ANQP line without separator: {line!r}")
            continue

        element_type = SUPPLICANT_KEYS.get(key.strip())
        if element_type is None:
            logger.warning(f"Skipping unrecognized ANQP key: {key}")
            continue

        try:
            payload = bytes.fromhex(value.strip())
        except ValueError:
            logger.warning(f"Skipping ANQP line with bad hex payload: {key}")
            continue

        elements[element_type] = ANQPElement(element_type=element_type, payload=payload)

    return elements
