"""Core business logic and interfaces."""

from kafka_sizer.core.interfaces import SnapshotStore
from kafka_sizer.core.sizing import (
    CellSizer,
    CostBreakdown,
    ResultCell,
    ScalingFactors,
    TierSelection,
    TierSelector,
)
from kafka_sizer.core.aggregation import Aggregator, ResultSet, Totals, aggregate
from kafka_sizer.core.engine import SizingEngine, SizingOutcome, recompute
from kafka_sizer.core.naming import TopicSuggestion, suggest_topics, topic_name

__all__ = [
    "SnapshotStore",
    "CellSizer",
    "CostBreakdown",
    "ResultCell",
    "ScalingFactors",
    "TierSelection",
    "TierSelector",
    "Aggregator",
    "ResultSet",
    "Totals",
    "aggregate",
    "SizingEngine",
    "SizingOutcome",
    "recompute",
    "TopicSuggestion",
    "suggest_topics",
    "topic_name",
]
