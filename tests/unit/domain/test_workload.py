"""Unit tests for DomainInput and EnvironmentConfig."""

import dataclasses

import pytest

from kafka_sizer.domain import (
    DomainCatalog,
    DomainInput,
    EnvironmentConfig,
    InvalidConfigurationError,
)


class TestEnvironmentConfig:
    """Test suite for EnvironmentConfig value object."""

    def test_defaults_to_enabled(self) -> None:
        assert EnvironmentConfig(scale=0.5).enabled is True

    @pytest.mark.parametrize("scale", [0.0, -0.1])
    def test_invalid_scale(self, scale: float) -> None:
        with pytest.raises(InvalidConfigurationError, match="scale must be positive"):
            EnvironmentConfig(scale=scale)

    def test_scale_upper_bound(self) -> None:
        assert EnvironmentConfig(scale=2.0).scale == 2.0
        with pytest.raises(InvalidConfigurationError, match="scale must be at most 2.0"):
            EnvironmentConfig(scale=2.5)


class TestDomainInput:
    """Test suite for DomainInput value object."""

    def test_default_for_domain(self, catalog: DomainCatalog) -> None:
        """Default topic count is two per subdomain; environments at default scale."""
        hols = catalog.domain("hols")
        domain_input = DomainInput.default(hols, catalog.environments)

        assert domain_input.topics_count == 16
        assert domain_input.messages_per_second == 1000
        assert domain_input.avg_message_size == 1024
        assert domain_input.retention_days == 7
        assert domain_input.replication_factor == 3
        assert domain_input.partitions_per_topic == 6
        assert domain_input.peak_multiplier == 2.5
        assert domain_input.compression_ratio == 0.65
        assert domain_input.durability_level == "standard"
        assert {k: v.scale for k, v in domain_input.environments.items()} == {
            "dev": 0.1,
            "tst": 0.3,
            "pre": 0.7,
            "prd": 1.0,
        }
        assert all(cfg.enabled for cfg in domain_input.environments.values())

    def test_total_partitions(self, cust_input: DomainInput) -> None:
        assert cust_input.total_partitions == 60

    def test_enabled_environments(self, cust_input: DomainInput) -> None:
        environments = dict(cust_input.environments)
        environments["tst"] = EnvironmentConfig(scale=0.3, enabled=False)
        updated = dataclasses.replace(cust_input, environments=environments)

        assert updated.enabled_environments == ["dev", "pre", "prd"]

    def test_environments_detached_from_caller(self) -> None:
        """Mutating the dict passed in does not change the value object."""
        environments = {"prd": EnvironmentConfig(scale=1.0)}
        domain_input = DomainInput(environments=environments)
        environments["dev"] = EnvironmentConfig(scale=0.1)

        assert list(domain_input.environments) == ["prd"]

    @pytest.mark.parametrize(
        "field_name, value, message",
        [
            ("messages_per_second", -1, "messages_per_second must be non-negative"),
            ("messages_per_second", 10_000_001, "messages_per_second must be at most"),
            ("avg_message_size", 20 * 1024 * 1024 + 1, "avg_message_size must be at most"),
            ("avg_message_size", 0, "avg_message_size must be positive"),
            ("retention_days", 0, "retention_days must be in"),
            ("retention_days", 366, "retention_days must be in"),
            ("replication_factor", 2, "replication_factor must be one of"),
            ("partitions_per_topic", 101, "partitions_per_topic must be in"),
            ("topics_count", 0, "topics_count must be positive"),
            ("peak_multiplier", 0.5, "peak_multiplier must be in"),
            ("peak_multiplier", 10.5, "peak_multiplier must be in"),
            ("compression_ratio", 0.0, "compression_ratio must be in"),
            ("compression_ratio", 1.2, "compression_ratio must be in"),
            ("durability_level", "premium", "durability_level must be one of"),
        ],
    )
    def test_invalid_values(self, field_name: str, value: object, message: str) -> None:
        with pytest.raises(InvalidConfigurationError, match=message):
            DomainInput(**{field_name: value})

    def test_zero_message_rate_allowed(self) -> None:
        assert DomainInput(messages_per_second=0).messages_per_second == 0

    def test_immutability(self, cust_input: DomainInput) -> None:
        with pytest.raises(AttributeError):
            cust_input.topics_count = 20  # type: ignore

    def test_repr(self, cust_input: DomainInput) -> None:
        repr_str = repr(cust_input)
        assert "1000 msg/s" in repr_str
        assert "durability=standard" in repr_str
