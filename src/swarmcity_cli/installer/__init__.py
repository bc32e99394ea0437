"""Installer package for the Swarm City stack.

This package provides the pieces the `swarmcity` commands are built from:
1. Checks docker, docker-compose and git are installed
2. Prompts for workspace, hostname and installation type
3. Writes the config files and compose file
4. Clones and builds the site and API projects
5. Runs docker-compose for the lifecycle commands
"""

from .builder import Builder, BuildStage
from .commands import CommandResult, CommandRunner
from .compose import LOG_TAIL, LOG_TARGETS, ComposeStack
from .dispatcher import Dispatcher, DispatchState, LoadedConfig, Operation
from .prerequisites import PrerequisiteValidator, ToolCheck, ToolSpec
from .prompts import InstallSettings, InteractiveCollector
from .sources import SourceFetcher, repo_dir_name
from .store import (
    ConfigStore,
    DeploymentConfig,
    InstallationType,
    PlatformConfig,
    parse_properties,
    set_property,
)
from .validators import is_fqdn, validate_hostname, validate_workpath

__all__ = [
    # External commands
    "CommandResult",
    "CommandRunner",
    # Prerequisites
    "PrerequisiteValidator",
    "ToolCheck",
    "ToolSpec",
    # Configuration store
    "ConfigStore",
    "DeploymentConfig",
    "PlatformConfig",
    "InstallationType",
    "parse_properties",
    "set_property",
    # Prompts
    "InstallSettings",
    "InteractiveCollector",
    "is_fqdn",
    "validate_hostname",
    "validate_workpath",
    # Sources and build
    "SourceFetcher",
    "repo_dir_name",
    "Builder",
    "BuildStage",
    # Stack management
    "ComposeStack",
    "LOG_TAIL",
    "LOG_TARGETS",
    # Dispatch
    "Dispatcher",
    "DispatchState",
    "LoadedConfig",
    "Operation",
]
