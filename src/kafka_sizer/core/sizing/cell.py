"""
Per-cell sizing for one (domain, environment) pair.

Throughput:
    MB/s = msg/s × scale × peak × bytes / 1024²  (then × compression ratio)

Storage:
    GB = msg/s × scale × bytes × 86400 / 1024³ × compression × retention × replication

Peak multiplier applies to throughput only; storage is sized on the average rate.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from kafka_sizer.core.sizing.tiers import TierSelector
from kafka_sizer.domain import DomainInput, PricingTable, TierId

BYTES_PER_MB = 1024 * 1024
BYTES_PER_GB = 1024 * 1024 * 1024
SECONDS_PER_DAY = 86400
MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class CostBreakdown:
    """
    Monthly and annual cost of one cell.

    Attributes:
        unit_cost: Monthly ECKU cost
        storage_cost: Monthly storage cost
        monthly: Total monthly cost
        annual: Total annual cost (monthly × 12)
    """

    unit_cost: float
    storage_cost: float
    monthly: float
    annual: float


@dataclass(frozen=True)
class ScalingFactors:
    """Scaling inputs a cell was computed with, kept for traceability."""

    scale: float
    peak_multiplier: float
    compression_ratio: float


@dataclass(frozen=True)
class ResultCell:
    """
    Sizing result for one (domain, environment) pair.

    Attributes:
        domain: Domain id
        environment: Environment id
        throughput_mbps: Compressed peak throughput in MB/s
        raw_throughput_mbps: Uncompressed peak throughput in MB/s
        storage_gb: Compressed, replicated storage over the retention window
        raw_storage_gb: Uncompressed equivalent of storage_gb
        topics: Topic count
        partitions: Total partition count
        tier: Selected tier
        capacity_units: Required ECKUs
        costs: Cost breakdown
        scaling: Scaling inputs used
    """

    domain: str
    environment: str
    throughput_mbps: float
    raw_throughput_mbps: float
    storage_gb: float
    raw_storage_gb: float
    topics: int
    partitions: int
    tier: TierId
    capacity_units: int
    costs: CostBreakdown
    scaling: ScalingFactors


class CellSizer:
    """
    Sizes throughput, storage, tier and cost for a single cell.

    Pure computation over pre-validated inputs; never raises for inputs that
    passed the InputSet boundary.
    """

    def __init__(
        self,
        pricing: PricingTable,
        tier_selector: TierSelector | None = None,
    ):
        """
        Initialize CellSizer.

        Args:
            pricing: Pricing table
            tier_selector: Tier selector (creates one over ``pricing`` if None)
        """
        self._pricing = pricing
        self._tiers = tier_selector or TierSelector(pricing)
        self._logger = logging.getLogger(__name__)

    def size_cell(
        self,
        domain_id: str,
        domain_input: DomainInput,
        env_id: str,
    ) -> Optional[ResultCell]:
        """
        Size one domain in one environment.

        Args:
            domain_id: Domain id
            domain_input: Domain workload parameters
            env_id: Environment id

        Returns:
            ResultCell, or None if the environment is disabled
        """
        env_config = domain_input.environments[env_id]
        if not env_config.enabled:
            return None

        scale = env_config.scale
        scaled_mps = domain_input.messages_per_second * scale
        scaled_peak_mps = scaled_mps * domain_input.peak_multiplier

        # Throughput
        raw_throughput_mbps = (scaled_peak_mps * domain_input.avg_message_size) / BYTES_PER_MB
        throughput_mbps = raw_throughput_mbps * domain_input.compression_ratio

        # Storage
        daily_data_gb = (
            scaled_mps * domain_input.avg_message_size * SECONDS_PER_DAY
        ) / BYTES_PER_GB
        compressed_daily_data_gb = daily_data_gb * domain_input.compression_ratio
        storage_gb = (
            compressed_daily_data_gb
            * domain_input.retention_days
            * domain_input.replication_factor
        )
        raw_storage_gb = storage_gb / domain_input.compression_ratio

        partitions = domain_input.topics_count * domain_input.partitions_per_topic

        selection = self._tiers.select(
            throughput_mbps, partitions, domain_input.durability_level
        )
        tier = self._pricing.tier(selection.tier)

        # Cost
        unit_cost = (selection.required_units / tier.units_per_price_step) * tier.monthly_price
        storage_cost = storage_gb * tier.storage_price_per_gb
        monthly = unit_cost + storage_cost
        annual = monthly * MONTHS_PER_YEAR

        self._logger.debug(
            f"{domain_id}/{env_id}: {throughput_mbps:.2f} MB/s, {storage_gb:.0f} GB, "
            f"{partitions} partitions -> {selection.required_units} ECKU {tier.id}, "
            f"{self._pricing.currency_symbol}{monthly:.2f}/month"
        )

        return ResultCell(
            domain=domain_id,
            environment=env_id,
            throughput_mbps=throughput_mbps,
            raw_throughput_mbps=raw_throughput_mbps,
            storage_gb=storage_gb,
            raw_storage_gb=raw_storage_gb,
            topics=domain_input.topics_count,
            partitions=partitions,
            tier=selection.tier,
            capacity_units=selection.required_units,
            costs=CostBreakdown(
                unit_cost=unit_cost,
                storage_cost=storage_cost,
                monthly=monthly,
                annual=annual,
            ),
            scaling=ScalingFactors(
                scale=scale,
                peak_multiplier=domain_input.peak_multiplier,
                compression_ratio=domain_input.compression_ratio,
            ),
        )
