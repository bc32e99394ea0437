"""Interactive Collector - prompts for the init flow.

Asks for the workspace, the site hostname and the installation type, then
asks for confirmation before anything is written.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import questionary
from questionary import Choice

from ..shared.paths import DEFAULT_WORKSPACE
from .store import DeploymentConfig, InstallationType, PlatformConfig
from .validators import validate_hostname, validate_workpath

DEFAULT_HOSTNAME = "www.example.com"


@dataclass(frozen=True)
class InstallSettings:
    """Answers collected by init; the only values init writes."""

    workspace: Path
    site_hostname: str
    installation_type: InstallationType = InstallationType.DEVELOPMENT

    @property
    def debug(self) -> str:
        return self.installation_type.debug

    @classmethod
    def defaults(
        cls,
        deployment: DeploymentConfig | None = None,
        platform: PlatformConfig | None = None,
    ) -> InstallSettings:
        """Seed prompt defaults from loaded config, else hard-coded defaults."""
        return cls(
            workspace=deployment.workspace if deployment else DEFAULT_WORKSPACE,
            site_hostname=platform.site_hostname if platform else DEFAULT_HOSTNAME,
        )


def _ask(question: questionary.Question):
    answer = question.ask()
    if answer is None:
        # User cancelled (Ctrl+C)
        raise KeyboardInterrupt("Installation cancelled by user")
    return answer


class InteractiveCollector:
    """Collect init answers with questionary prompts."""

    # Production is not offered yet
    choices: tuple[InstallationType, ...] = (InstallationType.DEVELOPMENT,)

    def collect(self, defaults: InstallSettings) -> InstallSettings:
        """Ask workpath, hostname and installation type, in that order.

        Raises:
            KeyboardInterrupt: If user cancels (Ctrl+C)
        """
        workpath = _ask(
            questionary.text(
                "Workpath:",
                default=str(defaults.workspace),
                validate=validate_workpath,
            )
        )
        hostname = _ask(
            questionary.text(
                "Site domain name:",
                default=defaults.site_hostname,
                validate=validate_hostname,
            )
        )
        default_type = (
            defaults.installation_type
            if defaults.installation_type in self.choices
            else self.choices[0]
        )
        installation_type = _ask(
            questionary.select(
                "Type of installation",
                choices=[Choice(title=t.value, value=t.value) for t in self.choices],
                default=default_type.value,
            )
        )
        return InstallSettings(
            workspace=Path(workpath.strip()),
            site_hostname=hostname.strip(),
            installation_type=InstallationType(installation_type),
        )

    def confirm(self) -> bool:
        """Ask whether to continue; No is listed first."""
        answer = _ask(
            questionary.select(
                "Continue on installation?",
                choices=["No", "Yes"],
            )
        )
        return answer == "Yes"
