"""
Sizing engine.

``recompute`` is the single entry point the presentation layer calls after
every input change: it sizes every enabled cell into a fresh ResultSet and
aggregates it, without touching any previously returned outcome.
"""

import logging
from dataclasses import dataclass

from kafka_sizer.core.aggregation import Aggregator, ResultSet, Totals
from kafka_sizer.core.sizing import CellSizer, ResultCell
from kafka_sizer.domain import InputSet, PricingTable, TopologyPolicy


@dataclass(frozen=True)
class SizingOutcome:
    """
    Results and totals of one recompute.

    Attributes:
        results: Sized cells
        totals: Aggregated totals
    """

    results: ResultSet
    totals: Totals


class SizingEngine:
    """
    Computes ResultSet and Totals from an InputSet.

    Usage:
        engine = SizingEngine(pricing)
        outcome = engine.recompute(inputs, "shared")
        print(outcome.totals.total_monthly_cost)
    """

    def __init__(
        self,
        pricing: PricingTable,
        cell_sizer: CellSizer | None = None,
        aggregator: Aggregator | None = None,
    ):
        """
        Initialize SizingEngine.

        Args:
            pricing: Pricing table
            cell_sizer: Cell sizer (creates default over ``pricing`` if None)
            aggregator: Aggregator (creates default if None)
        """
        self.pricing = pricing
        self._cell_sizer = cell_sizer or CellSizer(pricing)
        self._aggregator = aggregator or Aggregator()
        self._logger = logging.getLogger(__name__)

    def size(self, inputs: InputSet) -> ResultSet:
        """Size every enabled (domain, environment) cell."""
        cells: dict[str, dict[str, ResultCell]] = {}

        for domain_id, domain_input in inputs.items():
            cells[domain_id] = {}
            for env_id in inputs.catalog.environment_ids:
                cell = self._cell_sizer.size_cell(domain_id, domain_input, env_id)
                if cell is not None:
                    cells[domain_id][env_id] = cell

        return ResultSet(cells=cells)

    def recompute(self, inputs: InputSet, topology: TopologyPolicy) -> SizingOutcome:
        """
        Recompute results and totals.

        Args:
            inputs: Complete input set
            topology: Topology policy

        Returns:
            SizingOutcome
        """
        results = self.size(inputs)
        totals = self._aggregator.aggregate(results, topology)

        self._logger.info(
            f"Sized {len(results)} cells ({totals.topology_label}): "
            f"{totals.total_capacity_units} ECKUs, {totals.total_storage_gb:,.0f} GB, "
            f"{self.pricing.currency_symbol}{totals.total_monthly_cost:,.2f}/month"
        )

        return SizingOutcome(results=results, totals=totals)


def recompute(
    inputs: InputSet,
    topology: TopologyPolicy,
    pricing: PricingTable,
) -> SizingOutcome:
    """
    Convenience function: size and aggregate with default components.

    Args:
        inputs: Complete input set
        topology: Topology policy
        pricing: Pricing table

    Returns:
        SizingOutcome
    """
    return SizingEngine(pricing).recompute(inputs, topology)
