#!/usr/bin/env python3
"""
kafka-sizer CLI - Command-line interface for Kafka ECKU sizing.

Usage:
    kafka-sizer estimate [--topology shared|per-domain] [--format FORMAT] [--summary] [-o FILE|DIR]
    kafka-sizer set DOMAIN FIELD VALUE
    kafka-sizer env DOMAIN ENV [--scale SCALE] [--enable | --disable]
    kafka-sizer topology shared|per-domain
    kafka-sizer reset
    kafka-sizer tiers
    kafka-sizer domains
    kafka-sizer topics DOMAIN [--type events|commands] [--limit N]
"""

import argparse
import logging
import sys
from typing import Optional

from kafka_sizer.application import SizingPlanner, SizingReport, export
from kafka_sizer.core import suggest_topics
from kafka_sizer.domain import KafkaSizerError, parse_topology
from kafka_sizer.domain.inputs import EDITABLE_FIELDS
from kafka_sizer.domain.topology import TOPOLOGY_DESCRIPTIONS
from kafka_sizer.infrastructure.reference_db import DomainDatabase, PricingDatabase
from kafka_sizer.infrastructure.snapshot import FileSnapshotStore

DEFAULT_STATE_DIR = "~/.kafka-sizer"


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="kafka-sizer",
        description="ECKU capacity and cost estimator for managed Kafka clusters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--state-dir",
        default=DEFAULT_STATE_DIR,
        help=f"Directory holding the saved snapshot (default: {DEFAULT_STATE_DIR})",
    )
    parser.add_argument(
        "--pricing-file",
        help="YAML file overriding the ECKU pricing table",
    )
    parser.add_argument(
        "--catalog-file",
        help="YAML file overriding the domain catalog",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Estimate command
    estimate_parser = subparsers.add_parser(
        "estimate",
        help="Show sizing results",
        description="Compute throughput, storage, ECKUs and cost for all domains",
    )
    estimate_parser.add_argument(
        "--topology",
        choices=["shared", "per-domain"],
        help="Override the saved topology for this run only",
    )
    estimate_parser.add_argument(
        "--format",
        choices=["text", "json", "yaml", "csv", "html", "markdown"],
        default="text",
        help="Output format (default: text)",
    )
    estimate_parser.add_argument(
        "--output",
        "-o",
        help=(
            "Output file (supports .json, .yaml, .md, .csv, .html) or directory "
            "(writes kafka-sizing-YYYY-MM-DD.csv)"
        ),
    )
    estimate_parser.add_argument(
        "--summary",
        action="store_true",
        help="Prepend the summary block to CSV output",
    )

    # Set command
    set_parser = subparsers.add_parser(
        "set",
        help="Set a domain input",
        description=f"Set one domain input. Fields: {', '.join(EDITABLE_FIELDS)}",
    )
    set_parser.add_argument("domain", help="Domain id (e.g., cust)")
    set_parser.add_argument("field", help="Field name (e.g., messages_per_second)")
    set_parser.add_argument("value", help="New value (clamped to the field's range)")

    # Env command
    env_parser = subparsers.add_parser(
        "env",
        help="Configure a domain environment",
        description="Set the scale factor or enable/disable an environment of a domain",
    )
    env_parser.add_argument("domain", help="Domain id (e.g., cust)")
    env_parser.add_argument("environment", help="Environment id (dev, tst, pre, prd)")
    env_parser.add_argument(
        "--scale",
        type=float,
        help="Scale factor relative to production (clamped to 0.1-2.0)",
    )
    toggle = env_parser.add_mutually_exclusive_group()
    toggle.add_argument("--enable", dest="enabled", action="store_true", default=None)
    toggle.add_argument("--disable", dest="enabled", action="store_false")

    # Topology command
    topology_parser = subparsers.add_parser(
        "topology",
        help="Set cluster topology",
        description="Choose between one shared cluster and one cluster per domain",
    )
    topology_parser.add_argument("policy", choices=["shared", "per-domain"])

    subparsers.add_parser("reset", help="Reset all inputs to defaults")
    subparsers.add_parser("tiers", help="List ECKU pricing tiers")
    subparsers.add_parser("domains", help="List business domains")

    # Topics command
    topics_parser = subparsers.add_parser(
        "topics",
        help="Preview recommended topic names",
        description="Preview names following {domain}.{subdomain}.{type}.v{version}",
    )
    topics_parser.add_argument("domain", help="Domain id (e.g., cust)")
    topics_parser.add_argument(
        "--type",
        choices=["events", "commands"],
        default="events",
        help="Topic type (default: events)",
    )
    topics_parser.add_argument(
        "--limit",
        type=int,
        default=3,
        help="Number of subdomains to show (default: 3)",
    )

    return parser


def create_planner(args: argparse.Namespace) -> SizingPlanner:
    """Build a planner from global options."""
    catalog = DomainDatabase.from_yaml(args.catalog_file) if args.catalog_file else None
    pricing = PricingDatabase.from_yaml(args.pricing_file) if args.pricing_file else None
    return SizingPlanner(
        catalog=catalog,
        pricing=pricing,
        store=FileSnapshotStore(args.state_dir),
    )


def print_report(report: SizingReport) -> None:
    """Print summary and per-cell table."""
    symbol = report.pricing.currency_symbol
    totals = report.totals

    print(f"\nCluster Mode: {totals.topology_label}")
    print(f"  {TOPOLOGY_DESCRIPTIONS[totals.topology]}")
    print("\nSummary:")
    print(f"  • Monthly: {symbol}{totals.total_monthly_cost:,.2f}")
    print(f"  • Annual: {symbol}{totals.total_annual_cost:,.2f}")
    print(f"  • ECKUs: {totals.total_capacity_units}")
    print(f"  • Storage: {totals.total_storage_gb:,.0f} GB")

    print(
        f"\n{'Domain':<20} {'Env':<12} {'MB/s':>8} {'Storage GB':>11} "
        f"{'Partitions':>10} {'ECKUs':>6} {'Tier':<10} {'Monthly':>12}"
    )
    print("-" * 96)
    for cell in report.results:
        print(
            f"{report.catalog.domain(cell.domain).name:<20} "
            f"{report.catalog.environment(cell.environment).label:<12} "
            f"{cell.throughput_mbps:>8.2f} "
            f"{cell.storage_gb:>11,.0f} "
            f"{cell.partitions:>10} "
            f"{cell.capacity_units:>6} "
            f"{cell.tier:<10} "
            f"{symbol}{cell.costs.monthly:>11,.2f}"
        )

    print("\nBy Domain:")
    for domain in report.catalog.domains:
        print(f"  {domain.name:<20} {symbol}{totals.domain_totals.get(domain.id, 0.0):>12,.2f}")


def cmd_estimate(args: argparse.Namespace) -> int:
    """Execute estimate command."""
    try:
        planner = create_planner(args)
        report = planner.load()

        if args.topology:
            report = planner.recompute(report.inputs, parse_topology(args.topology))

        if args.format == "text":
            print_report(report)
        else:
            print(export.render(report, args.format, include_summary=args.summary))

        # Save to file if requested
        if args.output:
            path = export.save(report, args.output, include_summary=args.summary)
            print(f"\n✓ Saved to {path}")

        return 0

    except (KafkaSizerError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_set(args: argparse.Namespace) -> int:
    """Execute set command."""
    try:
        planner = create_planner(args)
        planner.load()
        report = planner.update_value(args.domain, args.field, args.value)

        value = getattr(report.inputs[args.domain], args.field)
        print(f"✓ {args.domain}.{args.field} = {value}")
        print_report(report)
        return 0

    except KafkaSizerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_env(args: argparse.Namespace) -> int:
    """Execute env command."""
    try:
        if args.scale is None and args.enabled is None:
            print("Error: nothing to change, pass --scale, --enable or --disable", file=sys.stderr)
            return 1

        planner = create_planner(args)
        planner.load()
        report = planner.update_environment(
            args.domain, args.environment, scale=args.scale, enabled=args.enabled
        )

        config = report.inputs[args.domain].environments[args.environment]
        state = "enabled" if config.enabled else "disabled"
        print(f"✓ {args.domain}/{args.environment}: scale {config.scale}, {state}")
        return 0

    except KafkaSizerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_topology(args: argparse.Namespace) -> int:
    """Execute topology command."""
    try:
        planner = create_planner(args)
        planner.load()
        report = planner.set_topology(parse_topology(args.policy))
        print(f"✓ Cluster Mode: {report.totals.topology_label}")
        print(f"  ECKUs: {report.totals.total_capacity_units}")
        print(f"  Storage: {report.totals.total_storage_gb:,.0f} GB")
        return 0

    except KafkaSizerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_reset(args: argparse.Namespace) -> int:
    """Execute reset command."""
    try:
        planner = create_planner(args)
        planner.reset()
        print("✓ Inputs reset to defaults")
        return 0

    except KafkaSizerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_tiers(args: argparse.Namespace) -> int:
    """Execute tiers command."""
    try:
        pricing = PricingDatabase.from_yaml(args.pricing_file) if args.pricing_file else PricingDatabase.default()
        symbol = pricing.currency_symbol

        print(
            f"\n{'Tier':<12} {'ECKUs':<7} {'Monthly':<10} {'Throughput':<12} "
            f"{'Partitions':<11} {'Connections':<12} {'Retention':<10} {'Storage/GB':<10}"
        )
        print("-" * 90)
        for tier in pricing.tiers:
            print(
                f"{tier.name:<12} "
                f"{tier.units_per_price_step:<7} "
                f"{symbol}{tier.monthly_price:<9.0f} "
                f"{tier.throughput_mbps:<6.0f} MB/s  "
                f"{tier.max_partitions:<11} "
                f"{tier.max_connections:<12} "
                f"{tier.retention_days:<4} days  "
                f"{symbol}{tier.storage_price_per_gb:.2f}"
            )
        return 0

    except KafkaSizerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_domains(args: argparse.Namespace) -> int:
    """Execute domains command."""
    try:
        catalog = DomainDatabase.from_yaml(args.catalog_file) if args.catalog_file else DomainDatabase.default()

        print(f"\n{'Id':<6} {'Name':<22} {'Subdomains':<11} {'Suggested topics':<16}")
        print("-" * 60)
        for domain in catalog.domains:
            print(
                f"{domain.id:<6} {domain.name:<22} "
                f"{len(domain.subdomains):<11} {domain.suggested_topics_count:<16}"
            )

        print(f"\nEnvironments: {', '.join(f'{e.id} ({e.label})' for e in catalog.environments)}")
        return 0

    except KafkaSizerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_topics(args: argparse.Namespace) -> int:
    """Execute topics command."""
    try:
        catalog = DomainDatabase.from_yaml(args.catalog_file) if args.catalog_file else DomainDatabase.default()
        suggestion = suggest_topics(catalog.domain(args.domain), args.type, limit=args.limit)

        for name in suggestion.names:
            print(name)
        if suggestion.remaining > 0:
            print(f"... and {suggestion.remaining} more")
        return 0

    except KafkaSizerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "estimate":
        return cmd_estimate(args)
    elif args.command == "set":
        return cmd_set(args)
    elif args.command == "env":
        return cmd_env(args)
    elif args.command == "topology":
        return cmd_topology(args)
    elif args.command == "reset":
        return cmd_reset(args)
    elif args.command == "tiers":
        return cmd_tiers(args)
    elif args.command == "domains":
        return cmd_domains(args)
    elif args.command == "topics":
        return cmd_topics(args)
    else:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
