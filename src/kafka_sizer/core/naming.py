"""Topic naming convention: ``{domain}.{subdomain}.{type}.v{version}``."""

from dataclasses import dataclass
from typing import Literal

from kafka_sizer.domain import Domain, InvalidConfigurationError

TopicType = Literal["events", "commands"]

TOPIC_TYPES: tuple[TopicType, ...] = ("events", "commands")


def topic_name(domain_id: str, subdomain: str, topic_type: TopicType, version: int = 1) -> str:
    """
    Build a topic name.

    Raises:
        InvalidConfigurationError: If the type is unknown or the version is not positive
    """
    if topic_type not in TOPIC_TYPES:
        raise InvalidConfigurationError(
            f"topic type must be one of {', '.join(TOPIC_TYPES)}, got {topic_type!r}"
        )
    if version < 1:
        raise InvalidConfigurationError(f"version must be positive, got {version}")
    return f"{domain_id}.{subdomain}.{topic_type}.v{version}"


@dataclass(frozen=True)
class TopicSuggestion:
    """
    Preview of recommended topic names for a domain.

    Attributes:
        names: Topic names for the first subdomains
        remaining: Number of subdomains not shown
    """

    names: tuple[str, ...]
    remaining: int


def suggest_topics(
    domain: Domain,
    topic_type: TopicType = "events",
    limit: int = 3,
    version: int = 1,
) -> TopicSuggestion:
    """Suggest topic names for the first ``limit`` subdomains of a domain."""
    shown = domain.subdomains[: max(limit, 0)]
    return TopicSuggestion(
        names=tuple(topic_name(domain.id, sub, topic_type, version) for sub in shown),
        remaining=len(domain.subdomains) - len(shown),
    )
