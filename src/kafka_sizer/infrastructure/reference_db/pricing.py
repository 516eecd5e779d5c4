"""
ECKU pricing database.

Canonical Confluent Cloud ECKU tier pricing (GBP, monthly). These values are
part of the snapshot/export contract and must not drift.

Overrides can be loaded from YAML:

    currency: GBP
    tiers:
      basic:
        name: Basic
        units_per_price_step: 1
        monthly_price: 75
        throughput_mbps: 100
        max_partitions: 4000
        max_connections: 100
        retention_days: 30
        storage_price_per_gb: 0.08
      standard: ...
      dedicated: ...
"""

from pathlib import Path
from typing import Any

import yaml

from kafka_sizer.domain import InvalidConfigurationError, PricingTable, TierDefinition
from kafka_sizer.domain.pricing import TIER_ORDER


class PricingDatabase:
    """
    Database of capacity tier pricing.

    Data sources:
    - Confluent Cloud ECKU pricing (approximate, GBP)
    """

    _TIERS = {
        "basic": TierDefinition(
            id="basic",
            name="Basic",
            units_per_price_step=1,
            monthly_price=75.0,  # ~£75/month per ECKU
            throughput_mbps=100.0,
            max_partitions=4000,
            max_connections=100,
            retention_days=30,
            storage_price_per_gb=0.08,
        ),
        "standard": TierDefinition(
            id="standard",
            name="Standard",
            units_per_price_step=2,
            monthly_price=150.0,
            throughput_mbps=250.0,
            max_partitions=4000,
            max_connections=500,
            retention_days=90,
            storage_price_per_gb=0.10,
        ),
        "dedicated": TierDefinition(
            id="dedicated",
            name="Dedicated",
            units_per_price_step=4,
            monthly_price=300.0,
            throughput_mbps=500.0,
            max_partitions=10000,
            max_connections=1000,
            retention_days=365,
            storage_price_per_gb=0.12,
        ),
    }

    @classmethod
    def default(cls) -> PricingTable:
        """Canonical pricing table."""
        return PricingTable(tiers=tuple(cls._TIERS[t] for t in TIER_ORDER), currency="GBP")

    @classmethod
    def from_dict(cls, data: Any) -> PricingTable:
        """
        Build a pricing table from parsed YAML/JSON data.

        Raises:
            InvalidConfigurationError: If the data has the wrong shape
        """
        if not isinstance(data, dict) or not isinstance(data.get("tiers"), dict):
            raise InvalidConfigurationError("pricing data must be a mapping with a 'tiers' mapping")

        tiers = []
        for tier_id in TIER_ORDER:
            entry = data["tiers"].get(tier_id)
            if not isinstance(entry, dict):
                raise InvalidConfigurationError(f"pricing data is missing tier '{tier_id}'")
            try:
                tiers.append(
                    TierDefinition(
                        id=tier_id,  # type: ignore[arg-type]
                        name=str(entry.get("name", tier_id.capitalize())),
                        units_per_price_step=int(entry["units_per_price_step"]),
                        monthly_price=float(entry["monthly_price"]),
                        throughput_mbps=float(entry["throughput_mbps"]),
                        max_partitions=int(entry["max_partitions"]),
                        max_connections=int(entry.get("max_connections", 0)),
                        retention_days=int(entry.get("retention_days", 0)),
                        storage_price_per_gb=float(entry["storage_price_per_gb"]),
                    )
                )
            except KeyError as e:
                raise InvalidConfigurationError(
                    f"tier '{tier_id}' is missing field {e.args[0]}"
                ) from e
            except (TypeError, ValueError) as e:
                raise InvalidConfigurationError(f"tier '{tier_id}' has an invalid value: {e}") from e

        return PricingTable(tiers=tuple(tiers), currency=str(data.get("currency", "GBP")))

    @classmethod
    def from_yaml(cls, filepath: str | Path) -> PricingTable:
        """
        Load a pricing table from a YAML file.

        Raises:
            InvalidConfigurationError: If the file cannot be read or parsed
        """
        try:
            with open(filepath, "r") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise InvalidConfigurationError(f"Cannot load pricing file {filepath}: {e}") from e

        return cls.from_dict(data)
