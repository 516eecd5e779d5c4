"""Domain models following Domain-Driven Design principles."""

from kafka_sizer.domain.exceptions import (
    InvalidConfigurationError,
    KafkaSizerError,
    MalformedSnapshotError,
    PersistenceUnavailableError,
)
from kafka_sizer.domain.catalog import Domain, DomainCatalog, Environment
from kafka_sizer.domain.pricing import PricingTable, TierDefinition, TierId
from kafka_sizer.domain.workload import DomainInput, DurabilityLevel, EnvironmentConfig
from kafka_sizer.domain.inputs import InputSet
from kafka_sizer.domain.topology import TOPOLOGY_LABELS, TopologyPolicy, parse_topology

__all__ = [
    "KafkaSizerError",
    "InvalidConfigurationError",
    "PersistenceUnavailableError",
    "MalformedSnapshotError",
    "Domain",
    "DomainCatalog",
    "Environment",
    "PricingTable",
    "TierDefinition",
    "TierId",
    "DomainInput",
    "DurabilityLevel",
    "EnvironmentConfig",
    "InputSet",
    "TopologyPolicy",
    "TOPOLOGY_LABELS",
    "parse_topology",
]
