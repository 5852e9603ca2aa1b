from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import pytest
from typer.testing import CliRunner

import octo.cli.commands.release_cmd as release_cmd
from octo import __version__
from octo.cli.app import app
from octo.octopus.client import Endpoint, OctopusClient
from octo.octopus.fake import FakeOctopusClient
from octo.octopus.model import SelectedPackage

ENV = {"COLUMNS": "200"}


@pytest.fixture
def endpoints(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, checkout: FakeOctopusClient
) -> list[Endpoint]:
    """Route open_client to the fake server and record each endpoint used."""
    opened: list[Endpoint] = []

    @contextmanager
    def fake_open_client(endpoint: Endpoint) -> Iterator[OctopusClient]:
        opened.append(endpoint)
        yield checkout

    monkeypatch.setattr(release_cmd, "open_client", fake_open_client)
    monkeypatch.delenv("OCTOPUS_SERVER", raising=False)
    monkeypatch.delenv("OCTOPUS_API_KEY", raising=False)
    monkeypatch.chdir(tmp_path)
    return opened


def test_all_required_parameters_missing(endpoints: list[Endpoint]) -> None:
    result = CliRunner().invoke(app, ["release"], env=ENV)

    assert result.exit_code == 1
    assert "Server parameter must be passed." in result.output
    assert "API Key parameter must be passed." in result.output
    assert "Project Name parameter must be passed." in result.output
    assert "SemVer parameter must be passed." in result.output
    assert endpoints == []


def test_creates_release(endpoints: list[Endpoint], checkout: FakeOctopusClient) -> None:
    result = CliRunner().invoke(
        app,
        [
            "release",
            "--server",
            "https://octopus.example.com",
            "--api-key",
            "API-KEY",
            "--project-name",
            "Checkout",
            "--sem-ver",
            "1.2.3",
            "--release-notes",
            "Built by CI",
        ],
        env=ENV,
    )

    assert result.exit_code == 0, result.output
    assert "Creating Octopus Deploy Release for project: Checkout 1.2.3" in result.output
    assert endpoints == [Endpoint(server="https://octopus.example.com", api_key="API-KEY")]
    assert len(checkout.releases) == 1
    release = checkout.releases[0]
    assert release.release_notes == "Built by CI"
    assert release.selected_packages == (
        SelectedPackage("web", "1.2.3"),
        SelectedPackage("worker", "1.2.3"),
    )


def test_short_flags(endpoints: list[Endpoint], checkout: FakeOctopusClient) -> None:
    result = CliRunner().invoke(
        app,
        ["release", "-s", "https://o", "-k", "K", "-p", "Checkout", "-sv", "2.0.0", "-rn", "n"],
        env=ENV,
    )

    assert result.exit_code == 0, result.output
    assert checkout.releases[0].version == "2.0.0"
    assert checkout.releases[0].release_notes == "n"


def test_unknown_project_fails(endpoints: list[Endpoint], checkout: FakeOctopusClient) -> None:
    result = CliRunner().invoke(
        app,
        ["release", "-s", "https://o", "-k", "K", "-p", "Payments", "-sv", "1.0.0"],
        env=ENV,
    )

    assert result.exit_code == 1
    assert "Octopus Deploy Create Release failed with message:" in result.output
    assert "project not found: Payments" in result.output
    assert checkout.create_calls == 0


def test_server_and_key_from_environment(endpoints: list[Endpoint]) -> None:
    result = CliRunner().invoke(
        app,
        ["release", "-p", "Checkout", "-sv", "1.2.3"],
        env={**ENV, "OCTOPUS_SERVER": "https://env.example.com", "OCTOPUS_API_KEY": "API-ENV"},
    )

    assert result.exit_code == 0, result.output
    assert endpoints[0].server == "https://env.example.com"
    assert endpoints[0].api_key == "API-ENV"


def test_server_and_key_from_config_file(endpoints: list[Endpoint], tmp_path: Path) -> None:
    (tmp_path / "octo.toml").write_text(
        '[server]\nurl = "https://file.example.com"\napi_key = "API-FILE"\ntimeout = 12\n',
        encoding="utf-8",
    )

    result = CliRunner().invoke(app, ["release", "-p", "Checkout", "-sv", "1.2.3"], env=ENV)

    assert result.exit_code == 0, result.output
    assert endpoints == [Endpoint(server="https://file.example.com", api_key="API-FILE", timeout=12.0)]


def test_options_override_config_file(endpoints: list[Endpoint], tmp_path: Path) -> None:
    config = tmp_path / "ci.toml"
    config.write_text('[server]\nurl = "https://file.example.com"\napi_key = "API-FILE"\n', encoding="utf-8")

    result = CliRunner().invoke(
        app,
        [
            "--config",
            str(config),
            "--timeout",
            "5",
            "release",
            "-s",
            "https://cli.example.com",
            "-p",
            "Checkout",
            "-sv",
            "1.2.3",
        ],
        env=ENV,
    )

    assert result.exit_code == 0, result.output
    assert endpoints == [Endpoint(server="https://cli.example.com", api_key="API-FILE", timeout=5.0)]


def test_missing_config_file_fails(endpoints: list[Endpoint], tmp_path: Path) -> None:
    result = CliRunner().invoke(
        app, ["--config", str(tmp_path / "missing.toml"), "release"], env=ENV
    )

    assert result.exit_code == 1
    assert "Config file not found" in result.output
    assert endpoints == []


def test_invalid_config_file_fails(endpoints: list[Endpoint], tmp_path: Path) -> None:
    (tmp_path / "octo.toml").write_text("[server\nurl = ", encoding="utf-8")

    result = CliRunner().invoke(app, ["release", "-p", "Checkout", "-sv", "1.2.3"], env=ENV)

    assert result.exit_code == 1
    assert "error: Invalid TOML syntax" in result.output
    assert "hint: config file:" in result.output
    assert endpoints == []


def test_verbose_shows_steps(endpoints: list[Endpoint]) -> None:
    result = CliRunner().invoke(
        app,
        ["--verbose", "release", "-s", "https://o", "-k", "K", "-p", "Checkout", "-sv", "1.2.3"],
        env=ENV,
    )

    assert result.exit_code == 0, result.output
    assert "project: Checkout (Projects-1)" in result.output
    assert "template packages: 2" in result.output


def test_version() -> None:
    result = CliRunner().invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.strip() == __version__
