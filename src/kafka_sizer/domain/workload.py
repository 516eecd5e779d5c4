"""Per-domain workload parameters."""

from dataclasses import dataclass, field
from typing import Iterable, Literal, Mapping

from kafka_sizer.domain.catalog import Domain, Environment
from kafka_sizer.domain.exceptions import InvalidConfigurationError


DurabilityLevel = Literal["basic", "standard", "dedicated"]

DURABILITY_LEVELS: tuple[DurabilityLevel, ...] = ("basic", "standard", "dedicated")
REPLICATION_FACTORS: tuple[int, ...] = (1, 3, 5)

# Upper bounds keeping derived throughput and storage finite
MAX_MESSAGES_PER_SECOND = 10_000_000
MAX_MESSAGE_SIZE = 20 * 1024 * 1024  # 20 MiB
MAX_SCALE = 2.0


@dataclass(frozen=True)
class EnvironmentConfig:
    """
    Scaling configuration of one domain in one environment.

    Attributes:
        scale: Fraction of the domain's production load seen in this environment
        enabled: Whether the environment is provisioned at all
    """

    scale: float
    enabled: bool = True

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.scale <= 0:
            raise InvalidConfigurationError(f"scale must be positive, got {self.scale}")
        if self.scale > MAX_SCALE:
            raise InvalidConfigurationError(f"scale must be at most {MAX_SCALE}, got {self.scale}")


@dataclass(frozen=True)
class DomainInput:
    """
    Workload parameters of one business domain.

    Attributes:
        messages_per_second: Average production message rate
        avg_message_size: Average message size in bytes
        retention_days: Topic retention in days
        replication_factor: Replicas per partition (1, 3 or 5)
        partitions_per_topic: Partitions per topic
        topics_count: Number of topics
        peak_multiplier: Peak vs average message rate ratio
        compression_ratio: Fraction of bytes left after compression (1.0 = none)
        durability_level: Requested service level
        environments: Scaling configuration keyed by environment id
    """

    messages_per_second: int = 1000
    avg_message_size: int = 1024
    retention_days: int = 7
    replication_factor: int = 3
    partitions_per_topic: int = 6
    topics_count: int = 10
    peak_multiplier: float = 2.5
    compression_ratio: float = 0.65
    durability_level: DurabilityLevel = "standard"
    environments: Mapping[str, EnvironmentConfig] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate invariants."""
        # Use object.__setattr__ for frozen dataclass: detach from caller's dict
        object.__setattr__(self, "environments", dict(self.environments))

        if self.messages_per_second < 0:
            raise InvalidConfigurationError(
                f"messages_per_second must be non-negative, got {self.messages_per_second}"
            )
        if self.messages_per_second > MAX_MESSAGES_PER_SECOND:
            raise InvalidConfigurationError(
                f"messages_per_second must be at most {MAX_MESSAGES_PER_SECOND}, "
                f"got {self.messages_per_second}"
            )

        if self.avg_message_size < 1:
            raise InvalidConfigurationError(
                f"avg_message_size must be positive, got {self.avg_message_size}"
            )
        if self.avg_message_size > MAX_MESSAGE_SIZE:
            raise InvalidConfigurationError(
                f"avg_message_size must be at most {MAX_MESSAGE_SIZE}, got {self.avg_message_size}"
            )

        if not 1 <= self.retention_days <= 365:
            raise InvalidConfigurationError(
                f"retention_days must be in [1, 365], got {self.retention_days}"
            )

        if self.replication_factor not in REPLICATION_FACTORS:
            raise InvalidConfigurationError(
                f"replication_factor must be one of 1, 3, 5, got {self.replication_factor}"
            )

        if not 1 <= self.partitions_per_topic <= 100:
            raise InvalidConfigurationError(
                f"partitions_per_topic must be in [1, 100], got {self.partitions_per_topic}"
            )

        if self.topics_count < 1:
            raise InvalidConfigurationError(
                f"topics_count must be positive, got {self.topics_count}"
            )

        if not 1 <= self.peak_multiplier <= 10:
            raise InvalidConfigurationError(
                f"peak_multiplier must be in [1, 10], got {self.peak_multiplier}"
            )

        if not 0 < self.compression_ratio <= 1:
            raise InvalidConfigurationError(
                f"compression_ratio must be in (0, 1], got {self.compression_ratio}"
            )

        if self.durability_level not in DURABILITY_LEVELS:
            raise InvalidConfigurationError(
                f"durability_level must be one of {', '.join(DURABILITY_LEVELS)}, "
                f"got {self.durability_level!r}"
            )

    @classmethod
    def default(cls, domain: Domain, environments: Iterable[Environment]) -> "DomainInput":
        """
        Create the default workload for a domain.

        Topic count defaults to two topics per subdomain; every environment is
        enabled at its default scale.
        """
        return cls(
            topics_count=domain.suggested_topics_count,
            environments={
                env.id: EnvironmentConfig(scale=env.default_scale, enabled=True)
                for env in environments
            },
        )

    @property
    def total_partitions(self) -> int:
        """Partitions across all topics of the domain."""
        return self.topics_count * self.partitions_per_topic

    @property
    def enabled_environments(self) -> list[str]:
        return [env_id for env_id, cfg in self.environments.items() if cfg.enabled]

    def __repr__(self) -> str:
        """Human-readable representation."""
        return (
            f"DomainInput({self.messages_per_second} msg/s × {self.avg_message_size} B, "
            f"peak×{self.peak_multiplier}, {self.topics_count} topics × "
            f"{self.partitions_per_topic} partitions, durability={self.durability_level})"
        )
