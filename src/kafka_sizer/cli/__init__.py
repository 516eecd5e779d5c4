"""
Command-line interface for kafka-sizer.

Provides commands to edit inputs, estimate sizing, and export reports.
"""

from kafka_sizer.cli.main import main

__all__ = ["main"]
