"""Capacity tier pricing value objects."""

from dataclasses import dataclass
from typing import Literal

from kafka_sizer.domain.exceptions import InvalidConfigurationError


TierId = Literal["basic", "standard", "dedicated"]

TIER_ORDER: tuple[TierId, ...] = ("basic", "standard", "dedicated")


@dataclass(frozen=True)
class TierDefinition:
    """
    Capacity tier definition.

    The monthly price buys a bundle of ``units_per_price_step`` ECKUs, so the
    cost of N units is ``N / units_per_price_step * monthly_price``.

    Attributes:
        id: Tier identifier
        name: Display name
        units_per_price_step: ECKUs in one priced bundle
        monthly_price: Price of one bundle per month (GBP)
        throughput_mbps: Throughput ceiling of one bundle in MB/s
        max_partitions: Partition ceiling
        max_connections: Connection ceiling (reference only)
        retention_days: Retention ceiling in days (reference only)
        storage_price_per_gb: Storage price per GB per month (GBP)
    """

    id: TierId
    name: str
    units_per_price_step: int
    monthly_price: float
    throughput_mbps: float
    max_partitions: int
    max_connections: int
    retention_days: int
    storage_price_per_gb: float

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.id not in TIER_ORDER:
            raise InvalidConfigurationError(
                f"tier id must be one of {', '.join(TIER_ORDER)}, got {self.id!r}"
            )

        if self.units_per_price_step <= 0:
            raise InvalidConfigurationError(
                f"units_per_price_step must be positive, got {self.units_per_price_step}"
            )

        if self.monthly_price < 0:
            raise InvalidConfigurationError(
                f"monthly_price must be non-negative, got {self.monthly_price}"
            )

        if self.throughput_mbps <= 0:
            raise InvalidConfigurationError(
                f"throughput_mbps must be positive, got {self.throughput_mbps}"
            )

        if self.storage_price_per_gb < 0:
            raise InvalidConfigurationError(
                f"storage_price_per_gb must be non-negative, got {self.storage_price_per_gb}"
            )

    @property
    def price_per_unit(self) -> float:
        """Monthly price of a single ECKU."""
        return self.monthly_price / self.units_per_price_step


@dataclass(frozen=True)
class PricingTable:
    """
    Ordered set of the three capacity tiers.

    Attributes:
        tiers: Tier definitions in basic, standard, dedicated order
        currency: ISO currency code of all prices
    """

    tiers: tuple[TierDefinition, ...]
    currency: str = "GBP"

    def __post_init__(self) -> None:
        """Validate invariants."""
        ids = tuple(t.id for t in self.tiers)
        if ids != TIER_ORDER:
            raise InvalidConfigurationError(
                f"pricing table must define tiers {', '.join(TIER_ORDER)} in order, "
                f"got {', '.join(ids) or 'none'}"
            )

    def tier(self, tier_id: TierId) -> TierDefinition:
        """Get the definition of a tier."""
        for tier in self.tiers:
            if tier.id == tier_id:
                return tier
        raise InvalidConfigurationError(f"Unknown tier: {tier_id}")

    @property
    def storage_prices(self) -> dict[str, float]:
        """Storage price per GB per month, keyed by tier."""
        return {t.id: t.storage_price_per_gb for t in self.tiers}

    @property
    def currency_symbol(self) -> str:
        return {"GBP": "£", "USD": "$", "EUR": "€"}.get(self.currency, self.currency + " ")
