"""
Application layer - sizing session and exports.

Provides high-level API for interactive sizing:
- SizingPlanner - Loads, mutates, recomputes and saves the inputs
- SizingReport - Consistent snapshot of inputs, results and totals
- Export utilities - CSV, HTML, JSON, YAML, Markdown
"""

from kafka_sizer.application.planner import SizingPlanner, SizingReport
from kafka_sizer.application import export

__all__ = [
    "SizingPlanner",
    "SizingReport",
    "export",
]
