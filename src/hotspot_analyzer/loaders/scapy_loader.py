"""
Scapy-based beacon loader.

This loader uses Scapy to read PCAP files, picks out beacon and probe
response frames, and decodes their information elements into
NetworkDescriptor objects.
"""

import time
import logging
from pathlib import Path
from typing import List, Dict, Any, Optional, Tuple

from scapy.all import rdpcap, Packet
from scapy.error import Scapy_Exception
from scapy.layers.dot11 import Dot11, Dot11Beacon, Dot11ProbeResp

from ..config import ScanConfig
from ..core.models import AnalysisError, InvalidAddress, MalformedElement
from ..core.network import NetworkDescriptor

# Timestamp (8), beacon interval (2), capability info (2)
FIXED_FIELDS_LENGTH = 12


class ScapyBeaconLoader:
    """Builds network descriptors from beacons in a capture."""

    def __init__(self, config: Optional[ScanConfig] = None):
        self.config = config or ScanConfig()
        self.logger = logging.getLogger(__name__)
        self.stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, Any]:
        return {
            'files_loaded': 0,
            'total_packets_loaded': 0,
            'beacon_frames': 0,
            'probe_responses': 0,
            'malformed_frames': 0,
            'descriptors_built': 0,
            'total_loading_time': 0.0,
            'errors': []
        }

    def load_packets(self, pcap_file: str) -> List[Packet]:
        """
        Load packets from PCAP file using Scapy.

        Args:
            pcap_file: Path to PCAP file

        Returns:
            List of packets, limited to max_packets if configured

        Raises:
            FileNotFoundError: If PCAP file doesn't exist
            AnalysisError: If the file is not a readable capture
        """
        pcap_path = Path(pcap_file)
        if not pcap_path.exists():
            raise FileNotFoundError(f"PCAP file not found: {pcap_file}")

        self.logger.info(f"Loading packets from {pcap_file} with Scapy")

        try:
            # rdpcap's count limit stops reading early
            if self.config.max_packets:
                packets = rdpcap(str(pcap_path), count=self.config.max_packets)
            else:
                packets = rdpcap(str(pcap_path))
        except (Scapy_Exception, OSError, EOFError) as e:
            error_msg = f"Scapy parsing error: {e}"
            self.logger.error(error_msg)
            self.stats['errors'].append(error_msg)
            raise AnalysisError(error_msg) from e

        self.stats['files_loaded'] += 1
        self.stats['total_packets_loaded'] += len(packets)
        return list(packets)

    def load_descriptors(self, pcap_file: str) -> List[NetworkDescriptor]:
        """
        Decode every beacon (and probe response) in a capture.

        Descriptors are unique by SSID and BSSID; a later frame replaces
        an earlier one for the same network.

        Args:
            pcap_file: Path to PCAP file

        Returns:
            Descriptors in first-seen order
        """
        start_time = time.time()
        packets = self.load_packets(pcap_file)

        descriptors: Dict[NetworkDescriptor, NetworkDescriptor] = {}
        for index, packet in enumerate(packets):
            descriptor = self.descriptor_from_packet(packet, index)
            if descriptor is None:
                continue
            if self.config.passpoint_only and not descriptor.has_80211u_info():
                continue
            descriptors[descriptor] = descriptor

        loading_time = time.time() - start_time
        self.stats['total_loading_time'] += loading_time
        self.stats['descriptors_built'] += len(descriptors)

        self.logger.info(
            f"Decoded {len(descriptors)} networks "
            f"from {pcap_file} in {loading_time:.2f}s"
        )
        return list(descriptors.values())

    def descriptor_from_packet(self, packet: Packet, packet_index: int = 0) -> Optional[NetworkDescriptor]:
        """
        Build a descriptor from one frame.

        Returns:
            Descriptor, or None if the frame is not a usable beacon

        Raises:
            MalformedElement: If the IEs are malformed and skip_malformed is off
        """
        extracted = self.extract_information_elements(packet)
        if extracted is None:
            return None
        bssid, data = extracted

        try:
            return NetworkDescriptor.from_ie_bytes(bssid, data)
        except (MalformedElement, InvalidAddress) as e:
            self.stats['malformed_frames'] += 1
            if not self.config.skip_malformed:
                raise
            self.logger.warning(f"Skipping malformed frame #{packet_index} from {bssid}: {e}")
            return None

    def extract_information_elements(self, packet: Packet) -> Optional[Tuple[str, bytes]]:
        """Return ``(bssid, ie_bytes)`` for a beacon or probe response frame."""
        if not packet.haslayer(Dot11):
            return None

        if packet.haslayer(Dot11Beacon):
            body = packet[Dot11Beacon]
            self.stats['beacon_frames'] += 1
        elif self.config.include_probe_responses and packet.haslayer(Dot11ProbeResp):
            body = packet[Dot11ProbeResp]
            self.stats['probe_responses'] += 1
        else:
            return None

        bssid = packet[Dot11].addr3
        if not bssid:
            return None

        return str(bssid), bytes(body)[FIXED_FIELDS_LENGTH:]

    def get_stats(self) -> Dict[str, Any]:
        """Get loader statistics."""
        stats = dict(self.stats)

        if stats['files_loaded'] > 0:
            stats['average_loading_time'] = stats['total_loading_time'] / stats['files_loaded']

        return stats

    def reset_stats(self) -> None:
        """Reset loader statistics."""
        self.stats = self._empty_stats()
