"""
Roll-up of sized cells into cluster-wide totals.

Capacity and storage combine according to the topology policy:
- shared: one cluster sized for its largest tenant (max over cells)
- per_domain: independent clusters (sum over cells)

Cost is always the sum over cells, because every enabled
(domain, environment) pair is billed on its own.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, Mapping, Optional

from kafka_sizer.core.sizing import ResultCell
from kafka_sizer.domain import TOPOLOGY_LABELS, TopologyPolicy


@dataclass(frozen=True)
class ResultSet:
    """
    Sized cells keyed by domain, then by enabled environment.

    Every domain of the input set has an entry, which is empty when all of
    its environments are disabled.
    """

    cells: Mapping[str, Mapping[str, ResultCell]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "cells", {domain: dict(envs) for domain, envs in self.cells.items()}
        )

    def __iter__(self) -> Iterator[ResultCell]:
        """Iterate over all cells, domain by domain."""
        for envs in self.cells.values():
            yield from envs.values()

    def __len__(self) -> int:
        return sum(len(envs) for envs in self.cells.values())

    @property
    def domains(self) -> list[str]:
        return list(self.cells)

    def domain_cells(self, domain_id: str) -> dict[str, ResultCell]:
        """Cells of one domain keyed by environment."""
        return dict(self.cells.get(domain_id, {}))

    def get(self, domain_id: str, env_id: str) -> Optional[ResultCell]:
        """Get one cell, or None if the environment is disabled."""
        return self.cells.get(domain_id, {}).get(env_id)

    def monthly_cost(self, domain_id: str, env_id: str) -> float:
        """Monthly cost of one cell, 0.0 if it does not exist."""
        cell = self.get(domain_id, env_id)
        return cell.costs.monthly if cell else 0.0


@dataclass(frozen=True)
class Totals:
    """
    Cluster-wide totals.

    Attributes:
        topology: Topology policy the totals were computed under
        total_monthly_cost: Sum of monthly cost over all cells
        total_annual_cost: total_monthly_cost × 12
        total_capacity_units: ECKUs, max or sum over cells depending on topology
        total_storage_gb: Storage, max or sum over cells depending on topology
        domain_totals: Monthly cost per domain
        environment_totals: Monthly cost per environment with at least one cell
    """

    topology: TopologyPolicy
    total_monthly_cost: float
    total_annual_cost: float
    total_capacity_units: int
    total_storage_gb: float
    domain_totals: dict[str, float] = field(default_factory=dict)
    environment_totals: dict[str, float] = field(default_factory=dict)

    @property
    def topology_label(self) -> str:
        return TOPOLOGY_LABELS[self.topology]

    def environment_total(self, env_id: str) -> float:
        """Monthly cost of an environment, 0.0 if no cell contributed."""
        return self.environment_totals.get(env_id, 0.0)


class Aggregator:
    """Combines a ResultSet into Totals under a topology policy."""

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def aggregate(self, results: ResultSet, topology: TopologyPolicy) -> Totals:
        """
        Aggregate cells into totals.

        Args:
            results: Sized cells
            topology: "shared" (max) or "per_domain" (sum) for capacity and storage

        Returns:
            Totals
        """
        total_cost = 0.0
        total_units = 0
        total_storage = 0.0
        domain_totals: dict[str, float] = {}
        environment_totals: dict[str, float] = {}

        for domain_id, envs in results.cells.items():
            domain_totals[domain_id] = 0.0
            for env_id, cell in envs.items():
                if topology == "shared":
                    total_units = max(total_units, cell.capacity_units)
                    total_storage = max(total_storage, cell.storage_gb)
                else:
                    total_units += cell.capacity_units
                    total_storage += cell.storage_gb

                total_cost += cell.costs.monthly
                domain_totals[domain_id] += cell.costs.monthly
                environment_totals[env_id] = environment_totals.get(env_id, 0.0) + cell.costs.monthly

        self._logger.debug(
            f"Aggregated {len(results)} cells ({topology}): {total_units} ECKUs, "
            f"{total_storage:.0f} GB, {total_cost:.2f}/month"
        )

        return Totals(
            topology=topology,
            total_monthly_cost=total_cost,
            total_annual_cost=total_cost * 12,
            total_capacity_units=total_units,
            total_storage_gb=total_storage,
            domain_totals=domain_totals,
            environment_totals=environment_totals,
        )


def aggregate(results: ResultSet, topology: TopologyPolicy) -> Totals:
    """Convenience function to aggregate with a default Aggregator."""
    return Aggregator().aggregate(results, topology)
