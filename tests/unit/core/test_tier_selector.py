"""Unit tests for TierSelector."""

import dataclasses
import itertools

import pytest

from kafka_sizer.core import TierSelection, TierSelector
from kafka_sizer.domain import PricingTable

TIER_RANK = {"basic": 0, "standard": 1, "dedicated": 2}


class TestTierSelector:
    """Test suite for TierSelector."""

    @pytest.fixture
    def selector(self, pricing: PricingTable) -> TierSelector:
        return TierSelector(pricing)

    @pytest.mark.parametrize(
        "throughput, partitions, expected",
        [
            (1.587, 60, TierSelection("basic", 1)),
            (100.0, 0, TierSelection("basic", 1)),
            (100.5, 0, TierSelection("basic", 2)),
            (200.0, 3000, TierSelection("basic", 2)),
            (200.1, 0, TierSelection("standard", 2)),
            (400.0, 0, TierSelection("standard", 4)),
            (10.0, 3001, TierSelection("standard", 2)),
            (400.1, 0, TierSelection("dedicated", 4)),
            (1200.0, 0, TierSelection("dedicated", 12)),
            (10.0, 8001, TierSelection("dedicated", 4)),
            (10.0, 8000, TierSelection("standard", 2)),
        ],
    )
    def test_thresholds(
        self,
        selector: TierSelector,
        throughput: float,
        partitions: int,
        expected: TierSelection,
    ) -> None:
        """Thresholds are strict and branch formulas match the bundle sizes."""
        assert selector.select(throughput, partitions, "standard") == expected

    def test_zero_throughput_yields_zero_units(self, selector: TierSelector) -> None:
        """No floor outside the durability override."""
        assert selector.select(0.0, 0, "basic") == TierSelection("basic", 0)
        assert selector.select(0.0, 9000, "standard") == TierSelection("dedicated", 0)

    @pytest.mark.parametrize("throughput", [0.0, 1.0, 150.0, 300.0, 1200.0, 5000.0])
    @pytest.mark.parametrize("partitions", [0, 60, 3500, 9000])
    def test_dedicated_durability_forces_dedicated(
        self, selector: TierSelector, throughput: float, partitions: int
    ) -> None:
        selection = selector.select(throughput, partitions, "dedicated")
        assert selection.tier == "dedicated"
        assert selection.required_units >= 4

    def test_dedicated_durability_keeps_larger_unit_count(self, selector: TierSelector) -> None:
        assert selector.select(1.0, 60, "dedicated") == TierSelection("dedicated", 4)
        assert selector.select(1200.0, 0, "dedicated") == TierSelection("dedicated", 12)

    def test_dedicated_override_uses_branch_units(self, selector: TierSelector) -> None:
        """Units from the basic and standard branches are raised to one dedicated bundle."""
        # standard branch: ceil(390 / 250) * 2 = 4
        assert selector.select(390.0, 0, "dedicated") == TierSelection("dedicated", 4)
        assert selector.select(150.0, 0, "dedicated") == TierSelection("dedicated", 4)

    @pytest.mark.parametrize("durability", ["basic", "standard"])
    def test_monotonic(self, selector: TierSelector, durability: str) -> None:
        """Increasing throughput or partitions never downgrades the tier."""
        throughputs = [0.0, 50.0, 100.0, 199.9, 200.0, 200.1, 300.0, 400.0, 400.1, 900.0]
        partitions = [0, 100, 2999, 3000, 3001, 5000, 8000, 8001, 12000]

        for (t1, t2), p in itertools.product(zip(throughputs, throughputs[1:]), partitions):
            low = selector.select(t1, p, durability)  # type: ignore[arg-type]
            high = selector.select(t2, p, durability)  # type: ignore[arg-type]
            assert TIER_RANK[high.tier] >= TIER_RANK[low.tier]

        for t, (p1, p2) in itertools.product(throughputs, zip(partitions, partitions[1:])):
            low = selector.select(t, p1, durability)  # type: ignore[arg-type]
            high = selector.select(t, p2, durability)  # type: ignore[arg-type]
            assert TIER_RANK[high.tier] >= TIER_RANK[low.tier]

    def test_alternate_pricing_changes_bundles(self, pricing: PricingTable) -> None:
        """Bundle size and throughput ceiling come from the injected table."""
        basic = dataclasses.replace(pricing.tier("basic"), throughput_mbps=50.0)
        custom = PricingTable(tiers=(basic, *pricing.tiers[1:]))

        assert TierSelector(custom).select(120.0, 0, "standard") == TierSelection("basic", 3)
