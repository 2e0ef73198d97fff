"""
Capture loaders that turn packet files into network descriptors.
"""

from .scapy_loader import ScapyBeaconLoader

__all__ = [
    'ScapyBeaconLoader'
]
