"""Aggregation of sized cells into totals."""

from kafka_sizer.core.aggregation.aggregator import Aggregator, ResultSet, Totals, aggregate

__all__ = ["Aggregator", "ResultSet", "Totals", "aggregate"]
