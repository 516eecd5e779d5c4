"""Cluster topology policy."""

from typing import Literal

from kafka_sizer.domain.exceptions import InvalidConfigurationError


TopologyPolicy = Literal["shared", "per_domain"]

TOPOLOGY_POLICIES: tuple[TopologyPolicy, ...] = ("shared", "per_domain")

TOPOLOGY_LABELS: dict[str, str] = {
    "shared": "Single Shared Cluster",
    "per_domain": "Cluster per Domain",
}

TOPOLOGY_DESCRIPTIONS: dict[str, str] = {
    "shared": (
        "All business domains share a single cluster. "
        "ECKUs and storage are sized for the largest single requirement."
    ),
    "per_domain": (
        "Each business domain has its own cluster for complete isolation "
        "and independent scaling. ECKUs and storage are summed."
    ),
}


def parse_topology(value: str) -> TopologyPolicy:
    """
    Parse a user-supplied topology name.

    Accepts "shared" and "per_domain" plus the CLI spelling "per-domain".

    Raises:
        InvalidConfigurationError: If the name is not a known policy
    """
    normalized = value.strip().lower().replace("-", "_")
    if normalized not in TOPOLOGY_POLICIES:
        raise InvalidConfigurationError(
            f"topology must be one of shared, per-domain, got {value!r}"
        )
    return normalized  # type: ignore[return-value]
