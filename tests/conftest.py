"""Pytest configuration and fixtures."""

import pytest

from kafka_sizer.core import SizingEngine
from kafka_sizer.domain import DomainCatalog, DomainInput, EnvironmentConfig, InputSet, PricingTable
from kafka_sizer.infrastructure.reference_db import DomainDatabase, PricingDatabase


@pytest.fixture
def catalog() -> DomainCatalog:
    """Canonical five-domain, four-environment catalog."""
    return DomainDatabase.default()


@pytest.fixture
def pricing() -> PricingTable:
    """Canonical ECKU pricing table."""
    return PricingDatabase.default()


@pytest.fixture
def default_inputs(catalog: DomainCatalog) -> InputSet:
    """Default inputs for every domain."""
    return InputSet.defaults(catalog)


@pytest.fixture
def cust_input() -> DomainInput:
    """Customer domain with default parameters and all environments enabled."""
    return DomainInput(
        messages_per_second=1000,
        avg_message_size=1024,
        retention_days=7,
        replication_factor=3,
        partitions_per_topic=6,
        topics_count=10,
        peak_multiplier=2.5,
        compression_ratio=0.65,
        durability_level="standard",
        environments={
            "dev": EnvironmentConfig(scale=0.1),
            "tst": EnvironmentConfig(scale=0.3),
            "pre": EnvironmentConfig(scale=0.7),
            "prd": EnvironmentConfig(scale=1.0),
        },
    )


@pytest.fixture
def high_volume_input(cust_input: DomainInput) -> DomainInput:
    """Workload heavy enough to need the dedicated tier in production."""
    return DomainInput(
        messages_per_second=500_000,
        avg_message_size=2048,
        retention_days=3,
        replication_factor=3,
        partitions_per_topic=12,
        topics_count=40,
        peak_multiplier=3.0,
        compression_ratio=0.5,
        durability_level="standard",
        environments=cust_input.environments,
    )


@pytest.fixture
def engine(pricing: PricingTable) -> SizingEngine:
    """Sizing engine over canonical pricing."""
    return SizingEngine(pricing)
