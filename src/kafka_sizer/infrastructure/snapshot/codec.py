"""
Snapshot serialization.

The snapshot is a JSON document holding the full input set, the cluster
topology and a save timestamp. Field names and topology values follow the
format the browser calculator keeps in local storage, so snapshots saved
there load unchanged:

    {"inputs": {"cust": {"messagesPerSecond": 1000, ...,
                         "environments": {"dev": {"scale": 0.1, "enabled": true}}}},
     "clusterMode": "single",
     "timestamp": "2025-01-01T00:00:00+00:00"}
"""

import json
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from kafka_sizer.domain import (
    DomainCatalog,
    DomainInput,
    EnvironmentConfig,
    InputSet,
    KafkaSizerError,
    MalformedSnapshotError,
    TopologyPolicy,
)

SNAPSHOT_KEY = "kafka-sizing-data"

# python attribute -> snapshot field
_FIELD_NAMES = {
    "messages_per_second": "messagesPerSecond",
    "avg_message_size": "avgMessageSize",
    "retention_days": "retentionDays",
    "replication_factor": "replicationFactor",
    "partitions_per_topic": "partitionsPerTopic",
    "topics_count": "topicsCount",
    "peak_multiplier": "peakMultiplier",
    "compression_ratio": "compressionRatio",
    "durability_level": "durabilityLevel",
}

_INT_FIELDS = {
    "messages_per_second",
    "avg_message_size",
    "retention_days",
    "replication_factor",
    "partitions_per_topic",
    "topics_count",
}
_FLOAT_FIELDS = {"peak_multiplier", "compression_ratio"}

_CLUSTER_MODES = {"shared": "single", "per_domain": "domain"}
_TOPOLOGIES = {mode: topology for topology, mode in _CLUSTER_MODES.items()}


@dataclass(frozen=True)
class Snapshot:
    """
    Persisted state.

    Attributes:
        inputs: Complete input set
        topology: Cluster topology policy
        saved_at: Save timestamp (UTC)
    """

    inputs: InputSet
    topology: TopologyPolicy = "shared"
    saved_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def _encode_domain(domain_input: DomainInput) -> dict[str, Any]:
    data: dict[str, Any] = {
        wire: getattr(domain_input, attr) for attr, wire in _FIELD_NAMES.items()
    }
    data["environments"] = {
        env_id: {"scale": cfg.scale, "enabled": cfg.enabled}
        for env_id, cfg in domain_input.environments.items()
    }
    return data


def to_dict(snapshot: Snapshot) -> dict[str, Any]:
    """Convert a snapshot to its wire dictionary."""
    return {
        "inputs": {
            domain_id: _encode_domain(domain_input)
            for domain_id, domain_input in snapshot.inputs.items()
        },
        "clusterMode": _CLUSTER_MODES[snapshot.topology],
        "timestamp": snapshot.saved_at.isoformat(),
    }


def encode(snapshot: Snapshot) -> str:
    """Serialize a snapshot to JSON."""
    return json.dumps(to_dict(snapshot), indent=2)


def _number(domain_id: str, attr: str, value: Any, kind: type) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedSnapshotError(f"{domain_id}.{_FIELD_NAMES.get(attr, attr)} must be a number")
    try:
        finite = math.isfinite(value)
    except OverflowError:
        # Integers beyond float range
        finite = False
    if not finite:
        raise MalformedSnapshotError(f"{domain_id}.{_FIELD_NAMES.get(attr, attr)} must be finite")
    if kind is int:
        if value != int(value):
            raise MalformedSnapshotError(
                f"{domain_id}.{_FIELD_NAMES[attr]} must be an integer, got {value}"
            )
        return int(value)
    return float(value)


def _decode_domain(domain_id: str, data: Any, catalog: DomainCatalog) -> DomainInput:
    if not isinstance(data, dict):
        raise MalformedSnapshotError(f"inputs.{domain_id} must be an object")

    kwargs: dict[str, Any] = {}
    for attr, wire in _FIELD_NAMES.items():
        if wire not in data:
            raise MalformedSnapshotError(f"inputs.{domain_id} is missing {wire}")
        value = data[wire]
        if attr in _INT_FIELDS:
            kwargs[attr] = _number(domain_id, attr, value, int)
        elif attr in _FLOAT_FIELDS:
            kwargs[attr] = _number(domain_id, attr, value, float)
        else:
            if not isinstance(value, str):
                raise MalformedSnapshotError(f"inputs.{domain_id}.{wire} must be a string")
            kwargs[attr] = value

    environments = data.get("environments")
    if not isinstance(environments, dict):
        raise MalformedSnapshotError(f"inputs.{domain_id}.environments must be an object")

    configs = {}
    for env_id in catalog.environment_ids:
        env = environments.get(env_id)
        if not isinstance(env, dict) or "scale" not in env or "enabled" not in env:
            raise MalformedSnapshotError(
                f"inputs.{domain_id}.environments.{env_id} must have scale and enabled"
            )
        if not isinstance(env["enabled"], bool):
            raise MalformedSnapshotError(
                f"inputs.{domain_id}.environments.{env_id}.enabled must be a boolean"
            )
        configs[env_id] = EnvironmentConfig(
            scale=_number(domain_id, "scale", env["scale"], float),
            enabled=env["enabled"],
        )

    return DomainInput(environments=configs, **kwargs)


def from_dict(data: Any, catalog: DomainCatalog) -> Snapshot:
    """
    Rebuild a snapshot from its wire dictionary.

    Raises:
        MalformedSnapshotError: If keys are missing or values have the wrong shape
    """
    if not isinstance(data, dict) or not isinstance(data.get("inputs"), dict):
        raise MalformedSnapshotError("snapshot must be an object with an 'inputs' object")

    cluster_mode = data.get("clusterMode") or "single"
    if cluster_mode not in _TOPOLOGIES:
        raise MalformedSnapshotError(f"unknown clusterMode: {cluster_mode!r}")

    try:
        domains = {
            domain_id: _decode_domain(domain_id, data["inputs"].get(domain_id), catalog)
            for domain_id in catalog.domain_ids
        }
        inputs = InputSet(catalog=catalog, domains=domains)
    except MalformedSnapshotError:
        raise
    except KafkaSizerError as e:
        # Invariant violations on decoded values
        raise MalformedSnapshotError(f"snapshot values are invalid: {e}") from e

    saved_at = datetime.now(timezone.utc)
    timestamp = data.get("timestamp")
    if isinstance(timestamp, str):
        try:
            saved_at = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
        except ValueError:
            raise MalformedSnapshotError(f"invalid timestamp: {timestamp!r}") from None

    return Snapshot(inputs=inputs, topology=_TOPOLOGIES[cluster_mode], saved_at=saved_at)


def decode(blob: str, catalog: DomainCatalog) -> Snapshot:
    """
    Parse a JSON snapshot.

    Raises:
        MalformedSnapshotError: If the blob is not valid JSON or has the wrong shape
    """
    try:
        data = json.loads(blob)
    except (TypeError, ValueError) as e:
        raise MalformedSnapshotError(f"snapshot is not valid JSON: {e}") from e

    return from_dict(data, catalog)
