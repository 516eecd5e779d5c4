"""
Sizing of individual (domain, environment) cells.

- TierSelector - tier and ECKU count from throughput and partitions
- CellSizer - throughput, storage and cost for one cell
"""

from kafka_sizer.core.sizing.tiers import TierSelection, TierSelector
from kafka_sizer.core.sizing.cell import CellSizer, CostBreakdown, ResultCell, ScalingFactors

__all__ = [
    "TierSelection",
    "TierSelector",
    "CellSizer",
    "CostBreakdown",
    "ResultCell",
    "ScalingFactors",
]
