"""
Sizing planner session.

Owns the current input set and topology, recomputes the sizing after every
mutation, and keeps the snapshot store in sync. Persistence failures never
stop the planner: a failed or malformed load falls back to defaults, a
failed save leaves the in-memory state unsaved.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from kafka_sizer.core import ResultSet, SizingEngine, SnapshotStore, Totals
from kafka_sizer.domain import (
    DomainCatalog,
    InputSet,
    MalformedSnapshotError,
    PersistenceUnavailableError,
    PricingTable,
    TopologyPolicy,
)
from kafka_sizer.infrastructure.reference_db import DomainDatabase, PricingDatabase
from kafka_sizer.infrastructure.snapshot import (
    SNAPSHOT_KEY,
    InMemorySnapshotStore,
    Snapshot,
    decode,
    encode,
)


@dataclass(frozen=True)
class SizingReport:
    """
    Complete, self-consistent sizing state.

    Attributes:
        catalog: Domain catalog
        pricing: Pricing table
        inputs: Input set the results were computed from
        topology: Topology policy the totals were computed under
        results: Sized cells
        totals: Aggregated totals
        generated_at: Recompute time (UTC)
    """

    catalog: DomainCatalog
    pricing: PricingTable
    inputs: InputSet
    topology: TopologyPolicy
    results: ResultSet
    totals: Totals
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class SizingPlanner:
    """
    Interactive sizing session.

    Usage:
        planner = SizingPlanner(store=FileSnapshotStore("~/.kafka-sizer"))
        planner.load()
        planner.update_value("cust", "messages_per_second", 5000)
        print(planner.report.totals.total_monthly_cost)
    """

    def __init__(
        self,
        catalog: DomainCatalog | None = None,
        pricing: PricingTable | None = None,
        store: SnapshotStore | None = None,
        engine: SizingEngine | None = None,
        autosave: bool = True,
    ):
        """
        Initialize SizingPlanner.

        Args:
            catalog: Domain catalog (uses canonical catalog if None)
            pricing: Pricing table (uses canonical pricing if None)
            store: Snapshot store (in-memory if None)
            engine: Sizing engine (creates default over ``pricing`` if None)
            autosave: Save the snapshot after every mutation
        """
        self.catalog = catalog or DomainDatabase.default()
        self.pricing = pricing or PricingDatabase.default()
        self._store = store if store is not None else InMemorySnapshotStore()
        self._engine = engine or SizingEngine(self.pricing)
        self.autosave = autosave
        self.last_saved: Optional[datetime] = None
        self._report: Optional[SizingReport] = None
        self._logger = logging.getLogger(__name__)

    @property
    def report(self) -> SizingReport:
        """Current sizing report (loads the snapshot on first access)."""
        if self._report is None:
            self.load()
        assert self._report is not None
        return self._report

    @property
    def inputs(self) -> InputSet:
        return self.report.inputs

    @property
    def topology(self) -> TopologyPolicy:
        return self.report.topology

    def recompute(self, inputs: InputSet, topology: TopologyPolicy) -> SizingReport:
        """
        Recompute and publish a new report.

        The previous report stays visible until the new one is complete.
        """
        outcome = self._engine.recompute(inputs, topology)
        report = SizingReport(
            catalog=self.catalog,
            pricing=self.pricing,
            inputs=inputs,
            topology=topology,
            results=outcome.results,
            totals=outcome.totals,
        )
        self._report = report
        return report

    def load(self) -> SizingReport:
        """
        Load the saved snapshot, or seed defaults if there is none.

        Unreadable or malformed snapshots are logged and replaced by defaults.
        """
        snapshot = None
        try:
            blob = self._store.read(SNAPSHOT_KEY)
            if blob is not None:
                snapshot = decode(blob, self.catalog)
        except PersistenceUnavailableError as e:
            self._logger.warning(f"Snapshot storage unavailable, using defaults: {e}")
        except MalformedSnapshotError as e:
            self._logger.warning(f"Ignoring malformed snapshot, using defaults: {e}")

        if snapshot is None:
            self.last_saved = None
            return self.recompute(InputSet.defaults(self.catalog), "shared")

        self.last_saved = snapshot.saved_at
        self._logger.info(f"Loaded snapshot saved at {snapshot.saved_at.isoformat()}")
        return self.recompute(snapshot.inputs, snapshot.topology)

    def save(self) -> bool:
        """
        Save the current inputs and topology.

        Returns:
            True if saved, False if the store was unavailable
        """
        report = self.report
        snapshot = Snapshot(inputs=report.inputs, topology=report.topology)
        try:
            self._store.write(SNAPSHOT_KEY, encode(snapshot))
        except PersistenceUnavailableError as e:
            self._logger.warning(f"Unable to save snapshot, continuing unsaved: {e}")
            return False

        self.last_saved = snapshot.saved_at
        self._logger.info(f"Saved snapshot at {snapshot.saved_at.isoformat()}")
        return True

    def _apply(self, inputs: InputSet, topology: TopologyPolicy) -> SizingReport:
        report = self.recompute(inputs, topology)
        if self.autosave:
            self.save()
        return report

    def update_value(self, domain_id: str, field_name: str, value: Any) -> SizingReport:
        """
        Set one domain field (coerced and clamped) and recompute.

        Raises:
            InvalidConfigurationError: If the domain, field or value is rejected
        """
        inputs = self.inputs.with_value(domain_id, field_name, value)
        self._logger.info(f"Set {domain_id}.{field_name} = {getattr(inputs[domain_id], field_name)}")
        return self._apply(inputs, self.topology)

    def update_environment(
        self,
        domain_id: str,
        env_id: str,
        scale: Any = None,
        enabled: Optional[bool] = None,
    ) -> SizingReport:
        """
        Update a domain's environment scale and/or enabled flag and recompute.

        Raises:
            InvalidConfigurationError: If the domain, environment or scale is rejected
        """
        inputs = self.inputs.with_environment(domain_id, env_id, scale=scale, enabled=enabled)
        return self._apply(inputs, self.topology)

    def set_topology(self, topology: TopologyPolicy) -> SizingReport:
        """Change the topology policy; cells are unchanged, totals are re-aggregated."""
        return self._apply(self.inputs, topology)

    def reset(self) -> SizingReport:
        """Discard all inputs and reseed defaults."""
        self._logger.info("Resetting inputs to defaults")
        return self._apply(InputSet.defaults(self.catalog), "shared")
