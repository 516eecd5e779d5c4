"""Unit tests for SizingEngine."""

import dataclasses
import math

import pytest

from kafka_sizer.core import SizingEngine, recompute
from kafka_sizer.domain import DomainInput, InputSet, PricingTable


class TestSizingEngine:
    """Test suite for SizingEngine."""

    def test_recompute_defaults(self, engine: SizingEngine, default_inputs: InputSet) -> None:
        outcome = engine.recompute(default_inputs, "shared")

        assert len(outcome.results) == 20
        assert all(cell.tier == "basic" for cell in outcome.results)
        assert outcome.totals.total_capacity_units == 1

    def test_topology_only_changes_totals(
        self, engine: SizingEngine, default_inputs: InputSet
    ) -> None:
        shared = engine.recompute(default_inputs, "shared")
        per_domain = engine.recompute(default_inputs, "per_domain")

        assert shared.results == per_domain.results
        assert shared.totals.total_monthly_cost == per_domain.totals.total_monthly_cost
        assert shared.totals.total_capacity_units != per_domain.totals.total_capacity_units

    def test_previous_outcome_untouched(
        self, engine: SizingEngine, default_inputs: InputSet
    ) -> None:
        first = engine.recompute(default_inputs, "shared")
        first_cost = first.totals.total_monthly_cost

        engine.recompute(default_inputs.with_value("cust", "messages_per_second", 100_000), "shared")

        assert first.totals.total_monthly_cost == first_cost
        assert first.results.get("cust", "prd").throughput_mbps == pytest.approx(1.5869140625)

    def test_high_volume_domain(
        self,
        engine: SizingEngine,
        default_inputs: InputSet,
        high_volume_input: DomainInput,
    ) -> None:
        inputs = default_inputs.with_domain("hols", high_volume_input)
        shared = engine.recompute(inputs, "shared")
        per_domain = engine.recompute(inputs, "per_domain")

        assert [shared.results.get("hols", env).tier for env in ("dev", "tst", "pre", "prd")] == [
            "basic",
            "dedicated",
            "dedicated",
            "dedicated",
        ]
        assert shared.totals.total_capacity_units == 12
        # 16 basic cells of one unit, plus 2 + 4 + 12 + 12
        assert per_domain.totals.total_capacity_units == 16 + 30

    def test_recompute_function(self, pricing: PricingTable, default_inputs: InputSet) -> None:
        outcome = recompute(default_inputs, "per_domain", pricing)
        assert outcome.totals.total_capacity_units == 20

    def test_custom_pricing(self, pricing: PricingTable, default_inputs: InputSet) -> None:
        """Doubling the basic price doubles the unit cost of every default cell."""
        basic = dataclasses.replace(pricing.tier("basic"), monthly_price=150.0)
        custom = PricingTable(tiers=(basic, *pricing.tiers[1:]))

        outcome = SizingEngine(custom).recompute(default_inputs, "shared")

        assert all(cell.costs.unit_cost == 150.0 for cell in outcome.results)

    def test_largest_accepted_inputs_size(self, engine: SizingEngine, default_inputs: InputSet) -> None:
        """Inputs clamped to their upper bounds still produce finite sizing."""
        inputs = (
            default_inputs.with_value("cust", "messages_per_second", "1e308")
            .with_value("cust", "avg_message_size", "1e308")
            .with_value("cust", "peak_multiplier", 10)
            .with_value("cust", "compression_ratio", 1)
            .with_value("cust", "retention_days", 365)
            .with_value("cust", "replication_factor", 5)
            .with_environment("cust", "prd", scale=2.0)
        )

        outcome = engine.recompute(inputs, "per_domain")
        cell = outcome.results.get("cust", "prd")

        assert cell is not None
        assert cell.throughput_mbps == pytest.approx(10_000_000 * 2.0 * 10 * 20)
        assert cell.tier == "dedicated"
        assert math.isfinite(cell.costs.annual)
        assert math.isfinite(outcome.totals.total_storage_gb)
