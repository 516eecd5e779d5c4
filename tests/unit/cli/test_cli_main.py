"""Tests for the kafka-sizer command line."""

import json
from pathlib import Path

import pytest

from kafka_sizer.cli import main


@pytest.fixture
def state_args(tmp_path: Path) -> list[str]:
    return ["--state-dir", str(tmp_path / "state")]


class TestEstimate:
    """Test suite for the estimate command."""

    def test_text_report(self, state_args: list[str], capsys: pytest.CaptureFixture) -> None:
        assert main([*state_args, "estimate"]) == 0

        out = capsys.readouterr().out
        assert "Cluster Mode: Single Shared Cluster" in out
        assert "ECKUs: 1" in out
        assert "easyJet Holidays" in out

    def test_json_report(self, state_args: list[str], capsys: pytest.CaptureFixture) -> None:
        assert main([*state_args, "estimate", "--format", "json", "--topology", "per-domain"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["summary"]["topology"] == "per_domain"
        assert data["summary"]["total_ecku"] == 20

    def test_topology_override_not_saved(
        self, state_args: list[str], capsys: pytest.CaptureFixture
    ) -> None:
        main([*state_args, "estimate", "--topology", "per-domain"])
        capsys.readouterr()

        main([*state_args, "estimate", "--format", "json"])
        assert json.loads(capsys.readouterr().out)["summary"]["topology"] == "shared"

    def test_output_file(self, state_args: list[str], tmp_path: Path) -> None:
        output = tmp_path / "sizing.csv"

        assert main([*state_args, "estimate", "--output", str(output)]) == 0
        assert output.read_text(encoding="utf-8").startswith("Domain,Environment")

    def test_csv_summary(self, state_args: list[str], capsys: pytest.CaptureFixture) -> None:
        assert main([*state_args, "estimate", "--format", "csv", "--summary"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith("Total Monthly Cost,")
        assert "Cluster Mode,Single Shared Cluster" in lines

    def test_csv_without_summary(self, state_args: list[str], capsys: pytest.CaptureFixture) -> None:
        assert main([*state_args, "estimate", "--format", "csv"]) == 0
        assert capsys.readouterr().out.startswith("Domain,Environment")

    def test_output_directory(
        self, state_args: list[str], tmp_path: Path, capsys: pytest.CaptureFixture
    ) -> None:
        reports = tmp_path / "reports"
        reports.mkdir()

        assert main([*state_args, "estimate", "--summary", "-o", str(reports)]) == 0

        written = list(reports.iterdir())
        assert len(written) == 1
        assert written[0].name.startswith("kafka-sizing-")
        assert written[0].suffix == ".csv"
        assert written[0].read_text(encoding="utf-8").startswith("Total Monthly Cost,")
        assert str(written[0]) in capsys.readouterr().out


class TestMutations:
    """Test suite for commands that change the saved state."""

    def test_set_persists(self, state_args: list[str], capsys: pytest.CaptureFixture) -> None:
        assert main([*state_args, "set", "cust", "retention_days", "999"]) == 0
        assert "cust.retention_days = 365" in capsys.readouterr().out

        main([*state_args, "estimate", "--format", "json"])
        data = json.loads(capsys.readouterr().out)
        cell = next(c for c in data["cells"] if c["domain"] == "cust" and c["environment"] == "prd")
        assert cell["storage_gb"] == pytest.approx(1124.725341796875 / 7 * 365)

    def test_set_huge_value_is_clamped(
        self, state_args: list[str], capsys: pytest.CaptureFixture
    ) -> None:
        assert main([*state_args, "set", "cust", "messages_per_second", "1e308"]) == 0
        assert "cust.messages_per_second = 10000000" in capsys.readouterr().out

        assert main([*state_args, "estimate", "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["summary"]["total_ecku"] > 0

    def test_set_invalid_field(self, state_args: list[str], capsys: pytest.CaptureFixture) -> None:
        assert main([*state_args, "set", "cust", "colour", "blue"]) == 1
        assert "Unknown field" in capsys.readouterr().err

    def test_set_unknown_domain(self, state_args: list[str], capsys: pytest.CaptureFixture) -> None:
        assert main([*state_args, "set", "ops", "topics_count", "4"]) == 1
        assert "Unknown domain: ops" in capsys.readouterr().err

    def test_env_disable(self, state_args: list[str], capsys: pytest.CaptureFixture) -> None:
        assert main([*state_args, "env", "cust", "dev", "--disable"]) == 0
        assert "cust/dev: scale 0.1, disabled" in capsys.readouterr().out

        main([*state_args, "estimate", "--format", "json"])
        assert len(json.loads(capsys.readouterr().out)["cells"]) == 19

    def test_env_requires_change(self, state_args: list[str], capsys: pytest.CaptureFixture) -> None:
        assert main([*state_args, "env", "cust", "dev"]) == 1
        assert "nothing to change" in capsys.readouterr().err

    def test_topology_and_reset(self, state_args: list[str], capsys: pytest.CaptureFixture) -> None:
        assert main([*state_args, "topology", "per-domain"]) == 0
        out = capsys.readouterr().out
        assert "Cluster Mode: Cluster per Domain" in out
        assert "ECKUs: 20" in out

        assert main([*state_args, "reset"]) == 0
        capsys.readouterr()

        main([*state_args, "estimate", "--format", "json"])
        assert json.loads(capsys.readouterr().out)["summary"]["topology"] == "shared"


class TestReferenceCommands:
    """Test suite for read-only listing commands."""

    def test_tiers(self, capsys: pytest.CaptureFixture) -> None:
        assert main(["tiers"]) == 0

        out = capsys.readouterr().out
        assert "Basic" in out
        assert "Dedicated" in out
        assert "£0.12" in out

    def test_domains(self, capsys: pytest.CaptureFixture) -> None:
        assert main(["domains"]) == 0

        out = capsys.readouterr().out
        assert "Airline Operations" in out
        assert "prd (Production)" in out

    def test_topics(self, capsys: pytest.CaptureFixture) -> None:
        assert main(["topics", "hols", "--type", "commands"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "hols.search_compare.commands.v1",
            "hols.itinerary.commands.v1",
            "hols.scheduling.commands.v1",
            "... and 5 more",
        ]

    def test_topics_unknown_domain(self, capsys: pytest.CaptureFixture) -> None:
        assert main(["topics", "nope"]) == 1
        assert "Unknown domain" in capsys.readouterr().err

    def test_bad_pricing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        assert main(["--pricing-file", str(tmp_path / "missing.yaml"), "tiers"]) == 1
        assert "Cannot load pricing file" in capsys.readouterr().err


def test_no_command(capsys: pytest.CaptureFixture) -> None:
    assert main([]) == 1
    assert "usage: kafka-sizer" in capsys.readouterr().out
