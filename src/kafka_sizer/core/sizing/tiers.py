"""
ECKU tier selection.

Maps effective throughput and partition count to a capacity tier and the
number of ECKUs required within it. Each tier provisions in bundles of
``units_per_price_step`` ECKUs sized by its throughput ceiling, so with the
canonical pricing table:

- dedicated: ceil(MB/s / 500) × 4
- standard:  ceil(MB/s / 250) × 2
- basic:     ceil(MB/s / 100)

A dedicated durability level always forces the dedicated tier with at least
one full dedicated bundle.
"""

import math
from dataclasses import dataclass

from kafka_sizer.domain import DurabilityLevel, PricingTable, TierId

# Escalation thresholds (strictly greater than)
DEDICATED_THROUGHPUT_MBPS = 400.0
DEDICATED_PARTITIONS = 8000
STANDARD_THROUGHPUT_MBPS = 200.0
STANDARD_PARTITIONS = 3000


@dataclass(frozen=True)
class TierSelection:
    """
    Result of tier selection.

    Attributes:
        tier: Selected tier
        required_units: ECKUs required within the tier
    """

    tier: TierId
    required_units: int


class TierSelector:
    """
    Selects the capacity tier for a workload.

    Attributes:
        pricing: Pricing table supplying bundle sizes and throughput ceilings
    """

    def __init__(self, pricing: PricingTable):
        self.pricing = pricing

    def _units(self, tier_id: TierId, throughput_mbps: float) -> int:
        tier = self.pricing.tier(tier_id)
        return math.ceil(throughput_mbps / tier.throughput_mbps) * tier.units_per_price_step

    def select(
        self,
        effective_throughput_mbps: float,
        total_partitions: int,
        durability: DurabilityLevel,
    ) -> TierSelection:
        """
        Select tier and required ECKUs.

        Args:
            effective_throughput_mbps: Compressed peak throughput in MB/s
            total_partitions: Partitions across all topics
            durability: Requested durability level

        Returns:
            TierSelection
        """
        if (
            effective_throughput_mbps > DEDICATED_THROUGHPUT_MBPS
            or total_partitions > DEDICATED_PARTITIONS
        ):
            tier: TierId = "dedicated"
        elif (
            effective_throughput_mbps > STANDARD_THROUGHPUT_MBPS
            or total_partitions > STANDARD_PARTITIONS
        ):
            tier = "standard"
        else:
            tier = "basic"

        units = self._units(tier, effective_throughput_mbps)

        # Durability can only upgrade, never downgrade
        if durability == "dedicated":
            tier = "dedicated"
            units = max(units, self.pricing.tier("dedicated").units_per_price_step)

        return TierSelection(tier=tier, required_units=units)
