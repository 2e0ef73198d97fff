#!/usr/bin/env python3
"""
Command line interface for the hotspot beacon analyzer.

This module provides the main CLI entry point for decoding scan entries
and listing Hotspot 2.0 networks found in wireless captures.
"""

import json
import logging
import sys
from importlib.metadata import version as package_version, PackageNotFoundError
from typing import Optional

import click

from .. import __version__
from ..config import ScanConfig, load_config
from ..core.models import AnalysisError
from ..core.network import NetworkDescriptor
from ..loaders.scapy_loader import ScapyBeaconLoader


def setup_logging(level: str = "INFO"):
    """Setup logging configuration."""
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f'Invalid log level: {level}')

    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr)
        ],
        force=True
    )


@click.group()
@click.option('--log-level', default=None,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              help='Set logging level')
@click.option('--config-file', type=click.Path(exists=True),
              help='Configuration file path (JSON or YAML)')
@click.pass_context
def cli(ctx, log_level: Optional[str], config_file: Optional[str]):
    """Hotspot 2.0 beacon analyzer CLI."""
    config = ScanConfig()
    if config_file:
        try:
            config = load_config(config_file)
        except AnalysisError as e:
            click.echo(f"Error loading config file: {e}", err=True)
            sys.exit(1)

    if log_level:
        config = config.merged(log_level=log_level)
    setup_logging(config.log_level)

    ctx.ensure_object(dict)
    ctx.obj['config'] = config


@cli.command()
@click.argument('bssid')
@click.argument('info_elements')
@click.option('--anqp-file', type=click.Path(exists=True),
              help='File of raw ANQP response lines')
@click.option('--json', 'json_output', is_flag=True, help='Output results in JSON format')
def decode(bssid: str, info_elements: str, anqp_file: Optional[str], json_output: bool):
    """Decode one scan entry: BSSID and 'ie=<hex>' elements."""
    anqp_lines = None
    if anqp_file:
        with open(anqp_file, 'r') as f:
            anqp_lines = f.read().splitlines()

    try:
        descriptor = NetworkDescriptor.from_scan_text(bssid, info_elements, anqp_lines)
    except AnalysisError as e:
        click.echo(f"Decode failed: {e}", err=True)
        sys.exit(1)

    if json_output:
        click.echo(descriptor.to_json())
    else:
        click.echo(str(descriptor))


@cli.command()
@click.argument('pcap_file', type=click.Path(exists=True))
@click.option('--max-packets', type=int,
              help='Maximum packets to read')
@click.option('--passpoint-only', is_flag=True,
              help='Only list networks advertising 802.11u / Hotspot 2.0 data')
@click.option('--no-probe-responses', is_flag=True,
              help='Ignore probe response frames')
@click.option('--strict', is_flag=True,
              help='Abort on the first malformed frame')
@click.option('--format', '-f', 'output_format', default=None,
              type=click.Choice(['text', 'json']),
              help='Output format')
@click.pass_context
def scan(ctx, pcap_file: str, max_packets: Optional[int], passpoint_only: bool,
         no_probe_responses: bool, strict: bool, output_format: Optional[str]):
    """List networks decoded from beacons in a PCAP file."""
    try:
        config = ctx.obj['config'].merged(
            max_packets=max_packets,
            passpoint_only=True if passpoint_only else None,
            include_probe_responses=False if no_probe_responses else None,
            skip_malformed=False if strict else None,
            output_format=output_format
        )
        loader = ScapyBeaconLoader(config)
        descriptors = loader.load_descriptors(pcap_file)
    except AnalysisError as e:
        click.echo(f"Scan failed: {e}", err=True)
        sys.exit(1)

    if config.output_format == 'json':
        click.echo(json.dumps({
            'pcap_file': pcap_file,
            'networks': [d.to_dict() for d in descriptors],
            'stats': loader.get_stats()
        }, indent=2, default=str))
        return

    click.echo(f"Networks found: {len(descriptors)}")
    for descriptor in descriptors:
        flags = []
        if descriptor.hs_release is not None:
            flags.append(f"HS2.0 {descriptor.hs_release.value}")
        if descriptor.access_network_type is not None:
            flags.append(descriptor.access_network_type.name)
        if descriptor.internet_available:
            flags.append("internet")
        suffix = f"  [{', '.join(flags)}]" if flags else ""
        click.echo(f"  {descriptor.to_key_string()}{suffix}")

    stats = loader.get_stats()
    if stats['malformed_frames']:
        click.echo(f"Malformed frames skipped: {stats['malformed_frames']}")


@cli.command()
def version():
    """Show version information."""
    click.echo("Hotspot Beacon Analyzer")
    click.echo(f"Version: {__version__}")
    click.echo("\nDependencies:")

    try:
        import scapy
        click.echo(f"  Scapy: {scapy.__version__}")
    except ImportError:
        click.echo("  Scapy: Not available")

    try:
        click.echo(f"  Click: {package_version('click')}")
    except PackageNotFoundError:
        click.echo("  Click: Version unknown")


def main():
    """Main CLI entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled by user", err=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
