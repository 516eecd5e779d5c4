"""
Complete input set and the input mutation boundary.

Every value entering an InputSet through ``with_value`` or
``with_environment`` is coerced and clamped here, so the sizing engine never
has to validate its inputs.
"""

import dataclasses
import math
from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Optional, Union

from kafka_sizer.domain.catalog import DomainCatalog
from kafka_sizer.domain.exceptions import InvalidConfigurationError
from kafka_sizer.domain.workload import (
    DURABILITY_LEVELS,
    MAX_MESSAGE_SIZE,
    MAX_MESSAGES_PER_SECOND,
    MAX_SCALE,
    REPLICATION_FACTORS,
    DomainInput,
    EnvironmentConfig,
)

Number = Union[int, float]

# field -> (type, lower bound, upper bound); None means unbounded
FIELD_LIMITS: dict[str, tuple[type, Optional[Number], Optional[Number]]] = {
    "messages_per_second": (int, 0, MAX_MESSAGES_PER_SECOND),
    "avg_message_size": (int, 1, MAX_MESSAGE_SIZE),
    "retention_days": (int, 1, 365),
    "partitions_per_topic": (int, 1, 100),
    "topics_count": (int, 1, None),
    "peak_multiplier": (float, 1.0, 10.0),
    "compression_ratio": (float, None, 1.0),
}

SCALE_LIMITS: tuple[float, float] = (0.1, MAX_SCALE)

EDITABLE_FIELDS: tuple[str, ...] = (
    *FIELD_LIMITS,
    "replication_factor",
    "durability_level",
)


def _to_number(field_name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise InvalidConfigurationError(f"{field_name} must be numeric, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidConfigurationError(
            f"{field_name} must be numeric, got {value!r}"
        ) from None
    except OverflowError:
        raise InvalidConfigurationError(f"{field_name} must be finite, got {value!r}") from None
    if not math.isfinite(number):
        raise InvalidConfigurationError(f"{field_name} must be finite, got {value!r}")
    return number


def _clamp(number: Number, lower: Optional[Number], upper: Optional[Number]) -> Number:
    if lower is not None:
        number = max(number, lower)
    if upper is not None:
        number = min(number, upper)
    return number


def coerce_field(field_name: str, value: Any) -> Any:
    """
    Coerce and clamp a user-supplied domain field value.

    Integer fields truncate like an integer parse of the raw value. Bounded
    numeric fields are clamped into range; replication factor and durability
    level only accept their enumerated values.

    Args:
        field_name: DomainInput attribute name
        value: Raw value (number or string)

    Returns:
        Value safe to store on a DomainInput

    Raises:
        InvalidConfigurationError: If the field is unknown or the value is rejected
    """
    if field_name == "replication_factor":
        factor = int(_to_number(field_name, value))
        if factor not in REPLICATION_FACTORS:
            raise InvalidConfigurationError(
                f"replication_factor must be one of 1, 3, 5, got {value!r}"
            )
        return factor

    if field_name == "durability_level":
        level = str(value).strip().lower()
        if level not in DURABILITY_LEVELS:
            raise InvalidConfigurationError(
                f"durability_level must be one of {', '.join(DURABILITY_LEVELS)}, got {value!r}"
            )
        return level

    if field_name not in FIELD_LIMITS:
        raise InvalidConfigurationError(
            f"Unknown field: {field_name}. Editable fields: {', '.join(EDITABLE_FIELDS)}"
        )

    kind, lower, upper = FIELD_LIMITS[field_name]
    number = _to_number(field_name, value)

    if field_name == "compression_ratio" and number <= 0:
        raise InvalidConfigurationError(
            f"compression_ratio must be in (0, 1], got {value!r}"
        )

    if kind is int:
        return int(_clamp(int(number), lower, upper))
    return float(_clamp(number, lower, upper))


def coerce_scale(value: Any) -> float:
    """Coerce and clamp an environment scale factor into [0.1, 2.0]."""
    lower, upper = SCALE_LIMITS
    return float(_clamp(_to_number("scale", value), lower, upper))


@dataclass(frozen=True)
class InputSet:
    """
    Workload inputs for every domain of a catalog.

    An InputSet is always complete: every catalog domain is present and every
    domain carries a configuration for every catalog environment.

    Attributes:
        catalog: Catalog the inputs were built for
        domains: DomainInput keyed by domain id, in catalog order
    """

    catalog: DomainCatalog
    domains: Mapping[str, DomainInput]

    def __post_init__(self) -> None:
        """Validate completeness and normalize ordering."""
        missing = [d for d in self.catalog.domain_ids if d not in self.domains]
        if missing:
            raise InvalidConfigurationError(f"input set is missing domains: {', '.join(missing)}")

        unknown = [d for d in self.domains if d not in self.catalog.domain_ids]
        if unknown:
            raise InvalidConfigurationError(f"input set has unknown domains: {', '.join(unknown)}")

        env_ids = set(self.catalog.environment_ids)
        for domain_id, domain_input in self.domains.items():
            if set(domain_input.environments) != env_ids:
                raise InvalidConfigurationError(
                    f"domain {domain_id} must configure environments "
                    f"{', '.join(self.catalog.environment_ids)}, "
                    f"got {', '.join(domain_input.environments) or 'none'}"
                )

        object.__setattr__(
            self,
            "domains",
            {domain_id: self.domains[domain_id] for domain_id in self.catalog.domain_ids},
        )

    @classmethod
    def defaults(cls, catalog: DomainCatalog) -> "InputSet":
        """Seed default inputs for every domain in the catalog."""
        return cls(
            catalog=catalog,
            domains={
                domain.id: DomainInput.default(domain, catalog.environments)
                for domain in catalog.domains
            },
        )

    def __getitem__(self, domain_id: str) -> DomainInput:
        if domain_id not in self.domains:
            # Raises with the list of known domains
            self.catalog.domain(domain_id)
        return self.domains[domain_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self.domains)

    def __len__(self) -> int:
        return len(self.domains)

    def items(self):
        return self.domains.items()

    def with_domain(self, domain_id: str, domain_input: DomainInput) -> "InputSet":
        """Return a copy with one domain's input replaced."""
        self.catalog.domain(domain_id)
        domains = dict(self.domains)
        domains[domain_id] = domain_input
        return InputSet(catalog=self.catalog, domains=domains)

    def with_value(self, domain_id: str, field_name: str, value: Any) -> "InputSet":
        """
        Return a copy with one domain field set to a coerced, clamped value.

        Raises:
            InvalidConfigurationError: If domain, field or value is rejected
        """
        current = self[domain_id]
        coerced = coerce_field(field_name, value)
        return self.with_domain(domain_id, dataclasses.replace(current, **{field_name: coerced}))

    def with_environment(
        self,
        domain_id: str,
        env_id: str,
        scale: Any = None,
        enabled: Optional[bool] = None,
    ) -> "InputSet":
        """
        Return a copy with one domain's environment configuration updated.

        Args:
            domain_id: Domain to update
            env_id: Environment to update
            scale: New scale factor, clamped to [0.1, 2.0] (unchanged if None)
            enabled: New enabled flag (unchanged if None)
        """
        current = self[domain_id]
        self.catalog.environment(env_id)
        config = current.environments[env_id]

        updated = EnvironmentConfig(
            scale=config.scale if scale is None else coerce_scale(scale),
            enabled=config.enabled if enabled is None else bool(enabled),
        )
        environments = dict(current.environments)
        environments[env_id] = updated
        return self.with_domain(domain_id, dataclasses.replace(current, environments=environments))
