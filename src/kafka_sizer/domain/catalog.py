"""Business domain and environment catalog value objects."""

from dataclasses import dataclass
from typing import Iterator

from kafka_sizer.domain.exceptions import InvalidConfigurationError


@dataclass(frozen=True)
class Domain:
    """
    Business domain owning a set of topics.

    Attributes:
        id: Short identifier used in topic names (e.g., "cust")
        name: Display name (e.g., "Customer")
        subdomains: Ordered subdomain names
    """

    id: str
    name: str
    subdomains: tuple[str, ...]

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.id:
            raise InvalidConfigurationError("domain id must not be empty")

        if not self.subdomains:
            raise InvalidConfigurationError(f"domain {self.id} must have at least one subdomain")

    @property
    def suggested_topics_count(self) -> int:
        """Two topics (events + commands) per subdomain."""
        return len(self.subdomains) * 2


@dataclass(frozen=True)
class Environment:
    """
    Deployment environment.

    Attributes:
        id: Short identifier (dev, tst, pre, prd)
        label: Display label
        default_scale: Default load scale relative to production
    """

    id: str
    label: str
    default_scale: float

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.default_scale <= 0:
            raise InvalidConfigurationError(
                f"default_scale must be positive, got {self.default_scale}"
            )


@dataclass(frozen=True)
class DomainCatalog:
    """
    Fixed taxonomy of domains and environments.

    Order matters: domains and environments are iterated, exported and
    aggregated in the order they are declared here.
    """

    domains: tuple[Domain, ...]
    environments: tuple[Environment, ...]

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.domains:
            raise InvalidConfigurationError("catalog must define at least one domain")

        if not self.environments:
            raise InvalidConfigurationError("catalog must define at least one environment")

        domain_ids = [d.id for d in self.domains]
        if len(set(domain_ids)) != len(domain_ids):
            raise InvalidConfigurationError(f"duplicate domain ids: {domain_ids}")

        env_ids = [e.id for e in self.environments]
        if len(set(env_ids)) != len(env_ids):
            raise InvalidConfigurationError(f"duplicate environment ids: {env_ids}")

    @property
    def domain_ids(self) -> tuple[str, ...]:
        return tuple(d.id for d in self.domains)

    @property
    def environment_ids(self) -> tuple[str, ...]:
        return tuple(e.id for e in self.environments)

    def domain(self, domain_id: str) -> Domain:
        """
        Look up a domain by identifier.

        Raises:
            InvalidConfigurationError: If the domain is not in the catalog
        """
        for domain in self.domains:
            if domain.id == domain_id:
                return domain
        raise InvalidConfigurationError(
            f"Unknown domain: {domain_id}. Available domains: {', '.join(self.domain_ids)}"
        )

    def environment(self, env_id: str) -> Environment:
        """
        Look up an environment by identifier.

        Raises:
            InvalidConfigurationError: If the environment is not in the catalog
        """
        for env in self.environments:
            if env.id == env_id:
                return env
        raise InvalidConfigurationError(
            f"Unknown environment: {env_id}. "
            f"Available environments: {', '.join(self.environment_ids)}"
        )

    def __iter__(self) -> Iterator[Domain]:
        return iter(self.domains)
