"""
Export utilities for sizing reports.

Supports CSV, HTML, JSON, YAML, and Markdown output.
"""

import csv
import html
import io
import json
import os
from datetime import date
from typing import Any

import yaml

from kafka_sizer.application.planner import SizingReport

CSV_COLUMNS = (
    "Domain",
    "Environment",
    "Throughput (MB/s)",
    "Storage (GB)",
    "Topics",
    "Partitions",
    "ECKUs",
    "Tier",
    "Monthly Cost ({symbol})",
    "Annual Cost ({symbol})",
)


def summary(report: SizingReport) -> dict[str, Any]:
    """
    Summary block of a report.

    Args:
        report: Sizing report

    Returns:
        Dictionary with grand totals and the topology label
    """
    totals = report.totals
    return {
        "total_monthly_cost": totals.total_monthly_cost,
        "total_annual_cost": totals.total_annual_cost,
        "total_ecku": totals.total_capacity_units,
        "total_storage_gb": totals.total_storage_gb,
        "topology": totals.topology,
        "topology_label": totals.topology_label,
        "currency": report.pricing.currency,
    }


def rows(report: SizingReport) -> list[list[str]]:
    """
    Tabular rows, one per sized cell, formatted for export.

    Throughput has 2 decimals, storage 0 decimals, costs 2 decimals.
    """
    table = []
    for cell in report.results:
        table.append([
            report.catalog.domain(cell.domain).name,
            report.catalog.environment(cell.environment).label,
            f"{cell.throughput_mbps:.2f}",
            f"{cell.storage_gb:.0f}",
            str(cell.topics),
            str(cell.partitions),
            str(cell.capacity_units),
            cell.tier,
            f"{cell.costs.monthly:.2f}",
            f"{cell.costs.annual:.2f}",
        ])
    return table


def to_dict(report: SizingReport) -> dict[str, Any]:
    """
    Convert SizingReport to dictionary.

    Args:
        report: Sizing report

    Returns:
        Dictionary representation
    """
    return {
        "generated_at": report.generated_at.isoformat(),
        "summary": summary(report),
        "domain_totals": dict(report.totals.domain_totals),
        "environment_totals": dict(report.totals.environment_totals),
        "cells": [
            {
                "domain": cell.domain,
                "domain_name": report.catalog.domain(cell.domain).name,
                "environment": cell.environment,
                "environment_label": report.catalog.environment(cell.environment).label,
                "throughput_mbps": cell.throughput_mbps,
                "raw_throughput_mbps": cell.raw_throughput_mbps,
                "storage_gb": cell.storage_gb,
                "raw_storage_gb": cell.raw_storage_gb,
                "topics": cell.topics,
                "partitions": cell.partitions,
                "tier": cell.tier,
                "ecku": cell.capacity_units,
                "costs": {
                    "ecku": cell.costs.unit_cost,
                    "storage": cell.costs.storage_cost,
                    "monthly": cell.costs.monthly,
                    "annual": cell.costs.annual,
                },
                "scaling": {
                    "scale": cell.scaling.scale,
                    "peak_multiplier": cell.scaling.peak_multiplier,
                    "compression_ratio": cell.scaling.compression_ratio,
                },
            }
            for cell in report.results
        ],
    }


def to_json(report: SizingReport, indent: int = 2) -> str:
    """
    Export report to JSON.

    Args:
        report: Sizing report
        indent: JSON indentation

    Returns:
        JSON string
    """
    return json.dumps(to_dict(report), indent=indent)


def to_yaml(report: SizingReport) -> str:
    """
    Export report to YAML.

    Args:
        report: Sizing report

    Returns:
        YAML string
    """
    return yaml.safe_dump(to_dict(report), default_flow_style=False, sort_keys=False)


def to_csv(report: SizingReport, include_summary: bool = False) -> str:
    """
    Export cells to CSV.

    Args:
        report: Sizing report
        include_summary: Prepend the summary block followed by a blank line

    Returns:
        CSV string
    """
    symbol = report.pricing.currency_symbol.strip()
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    if include_summary:
        s = summary(report)
        writer.writerow(["Total Monthly Cost", f"{s['total_monthly_cost']:.2f}"])
        writer.writerow(["Total Annual Cost", f"{s['total_annual_cost']:.2f}"])
        writer.writerow(["Total ECKUs", s["total_ecku"]])
        writer.writerow(["Total Storage (GB)", f"{s['total_storage_gb']:.0f}"])
        writer.writerow(["Cluster Mode", s["topology_label"]])
        writer.writerow([])

    writer.writerow([column.format(symbol=symbol) for column in CSV_COLUMNS])
    writer.writerows(rows(report))
    return buffer.getvalue()


_HTML_STYLE = """\
    body { font-family: Arial, sans-serif; margin: 20px; }
    h1 { color: #1f2937; }
    table { width: 100%; border-collapse: collapse; margin: 20px 0; }
    th, td { border: 1px solid #d1d5db; padding: 8px; text-align: left; }
    th { background-color: #f9fafb; }
    .summary { background-color: #eff6ff; padding: 15px; border-radius: 8px; margin: 20px 0; }"""


def to_html(report: SizingReport) -> str:
    """
    Export report to a standalone HTML page.

    Args:
        report: Sizing report

    Returns:
        HTML string
    """
    symbol = html.escape(report.pricing.currency_symbol.strip())
    totals = report.totals

    body_rows = []
    for cell in report.results:
        cells = [
            report.catalog.domain(cell.domain).name,
            report.catalog.environment(cell.environment).label,
            f"{cell.throughput_mbps:.2f}",
            f"{cell.storage_gb:.0f}",
            str(cell.capacity_units),
            cell.tier,
        ]
        tds = "".join(f"<td>{html.escape(value)}</td>" for value in cells)
        body_rows.append(f"      <tr>{tds}<td>{symbol}{cell.costs.monthly:.2f}</td></tr>")

    lines = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        '  <meta charset="utf-8">',
        "  <title>Kafka Sizing Report</title>",
        "  <style>",
        _HTML_STYLE,
        "  </style>",
        "</head>",
        "<body>",
        "  <h1>Kafka Sizing Report</h1>",
        '  <div class="summary">',
        "    <h3>Summary</h3>",
        f"    <p>Total Monthly Cost: {symbol}{totals.total_monthly_cost:.2f}</p>",
        f"    <p>Total Annual Cost: {symbol}{totals.total_annual_cost:.2f}</p>",
        f"    <p>Total ECKUs: {totals.total_capacity_units}</p>",
        f"    <p>Total Storage: {totals.total_storage_gb:.0f} GB</p>",
        f"    <p>Cluster Mode: {html.escape(totals.topology_label)}</p>",
        "  </div>",
        "  <table>",
        "    <thead>",
        "      <tr><th>Domain</th><th>Environment</th><th>Throughput (MB/s)</th>"
        f"<th>Storage (GB)</th><th>ECKUs</th><th>Tier</th><th>Monthly Cost ({symbol})</th></tr>",
        "    </thead>",
        "    <tbody>",
        *body_rows,
        "    </tbody>",
        "  </table>",
        "</body>",
        "</html>",
        "",
    ]
    return "\n".join(lines)


def to_markdown(report: SizingReport) -> str:
    """
    Export report to Markdown, including the domain × environment cost matrix.

    Args:
        report: Sizing report

    Returns:
        Markdown string
    """
    symbol = report.pricing.currency_symbol.strip()
    totals = report.totals
    env_ids = report.catalog.environment_ids

    lines = [
        "# Kafka Sizing Report",
        "",
        f"**Cluster Mode**: {totals.topology_label}",
        "",
        "## Summary",
        "",
        f"- **Monthly cost**: {symbol}{totals.total_monthly_cost:,.2f}",
        f"- **Annual cost**: {symbol}{totals.total_annual_cost:,.2f}",
        f"- **Total ECKUs**: {totals.total_capacity_units}",
        f"- **Total storage**: {totals.total_storage_gb:,.0f} GB",
        "",
        "## Cost by Domain and Environment",
        "",
        "| Domain | "
        + " | ".join(report.catalog.environment(e).label for e in env_ids)
        + " | Total |",
        "|---" * (len(env_ids) + 2) + "|",
    ]

    for domain in report.catalog.domains:
        costs = [
            f"{symbol}{report.results.monthly_cost(domain.id, e):,.2f}"
            if report.results.get(domain.id, e)
            else "-"
            for e in env_ids
        ]
        domain_total = totals.domain_totals.get(domain.id, 0.0)
        lines.append(f"| {domain.name} | " + " | ".join(costs) + f" | {symbol}{domain_total:,.2f} |")

    lines.append(
        "| **Total** | "
        + " | ".join(f"{symbol}{totals.environment_total(e):,.2f}" for e in env_ids)
        + f" | {symbol}{totals.total_monthly_cost:,.2f} |"
    )

    lines.extend([
        "",
        "## Sizing",
        "",
        "| Domain | Environment | MB/s | Storage (GB) | Topics | Partitions | ECKUs | Tier | Monthly |",
        "|---|---|---|---|---|---|---|---|---|",
    ])
    for row in rows(report):
        lines.append("| " + " | ".join(row[:8]) + f" | {symbol}{row[8]} |")

    lines.append("")
    return "\n".join(lines)


def default_filename(format: str, on: date | None = None) -> str:
    """
    Dated default export file name.

    Args:
        format: "csv" or "html" (others use the generic report prefix)
        on: Date to stamp (today if None)
    """
    stamp = (on or date.today()).isoformat()
    if format == "csv":
        return f"kafka-sizing-{stamp}.csv"
    extension = "md" if format == "markdown" else format
    return f"kafka-sizing-report-{stamp}.{extension}"


_EXTENSIONS = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".md": "md",
    ".csv": "csv",
    ".html": "html",
    ".htm": "html",
}


def render(report: SizingReport, format: str, include_summary: bool = False) -> str:
    """
    Render a report in the given format.

    Args:
        report: Sizing report
        format: 'json', 'yaml', 'md'/'markdown', 'csv' or 'html'
        include_summary: Prepend the summary block to CSV output (other
            formats always carry it)

    Raises:
        ValueError: If the format is unknown
    """
    if format == "json":
        return to_json(report)
    elif format == "yaml":
        return to_yaml(report)
    elif format in ("md", "markdown"):
        return to_markdown(report)
    elif format == "csv":
        return to_csv(report, include_summary=include_summary)
    elif format == "html":
        return to_html(report)
    else:
        raise ValueError(f"Unknown format: {format}")


def save(
    report: SizingReport,
    filepath: str,
    format: str = "auto",
    include_summary: bool = False,
) -> str:
    """
    Save report to file.

    Args:
        report: Sizing report
        filepath: Output file path, or an existing directory to write a
            dated default file name into
        format: Format ('json', 'yaml', 'md', 'csv', 'html', or 'auto' to detect from extension)
        include_summary: Prepend the summary block to CSV output

    Returns:
        Path of the written file
    """
    if os.path.isdir(filepath):
        filepath = os.path.join(filepath, default_filename("csv" if format == "auto" else format))

    if format == "auto":
        format = "json"  # Default
        for extension, detected in _EXTENSIONS.items():
            if filepath.lower().endswith(extension):
                format = detected
                break

    content = render(report, format, include_summary=include_summary)

    with open(filepath, "w", encoding="utf-8", newline="") as f:
        f.write(content)

    return filepath
