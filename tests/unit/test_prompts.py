"""Unit tests for the init prompts."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from swarmcity_cli.installer import (
    DeploymentConfig,
    InstallationType,
    InstallSettings,
    InteractiveCollector,
    PlatformConfig,
    validate_hostname,
    validate_workpath,
)
from swarmcity_cli.shared.paths import DEFAULT_WORKSPACE


def answering(value):
    question = MagicMock()
    question.ask.return_value = value
    return question


@pytest.mark.cli_unit
class TestInstallSettings:
    """Tests for InstallSettings defaults."""

    def test_first_run_defaults(self):
        settings = InstallSettings.defaults()
        assert settings.workspace == DEFAULT_WORKSPACE
        assert settings.site_hostname == "www.example.com"
        assert settings.installation_type is InstallationType.DEVELOPMENT
        assert settings.debug == "Enable"

    def test_defaults_from_existing_config(self):
        deployment = DeploymentConfig(Path("/srv/swarm"), "site", "api")
        platform = PlatformConfig("Enable", "swarm.city")
        settings = InstallSettings.defaults(deployment, platform)
        assert settings.workspace == Path("/srv/swarm")
        assert settings.site_hostname == "swarm.city"


class TestInteractiveCollector:
    """Tests for InteractiveCollector with questionary mocked."""

    def test_collect_in_order(self):
        with (
            patch("questionary.text") as mock_text,
            patch("questionary.select") as mock_select,
        ):
            mock_text.side_effect = [answering("/srv/swarm "), answering("swarm.city")]
            mock_select.return_value = answering("Development")

            settings = InteractiveCollector().collect(InstallSettings.defaults())

        assert settings == InstallSettings(Path("/srv/swarm"), "swarm.city", InstallationType.DEVELOPMENT)
        messages = [c.args[0] for c in mock_text.call_args_list]
        assert messages == ["Workpath:", "Site domain name:"]
        assert mock_text.call_args_list[0].kwargs["validate"] is validate_workpath
        assert mock_text.call_args_list[1].kwargs["validate"] is validate_hostname
        assert mock_text.call_args_list[1].kwargs["default"] == "www.example.com"

    def test_only_development_offered(self):
        with (
            patch("questionary.text", side_effect=[answering("/w"), answering("localhost")]),
            patch("questionary.select") as mock_select,
        ):
            mock_select.return_value = answering("Development")
            InteractiveCollector().collect(InstallSettings.defaults())

        choices = mock_select.call_args.kwargs["choices"]
        assert [c.value for c in choices] == ["Development"]

    def test_cancel_raises(self):
        with patch("questionary.text", return_value=answering(None)):
            with pytest.raises(KeyboardInterrupt):
                InteractiveCollector().collect(InstallSettings.defaults())

    @pytest.mark.parametrize("answer,expected", [("Yes", True), ("No", False)])
    def test_confirm(self, answer, expected):
        with patch("questionary.select", return_value=answering(answer)) as mock_select:
            assert InteractiveCollector().confirm() is expected
        assert mock_select.call_args.kwargs["choices"] == ["No", "Yes"]
