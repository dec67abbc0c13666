"""Category orchestration: install, test, and configure across categories.

Usage:
    from devtoolkit.orchestrator import Orchestrator

    orchestrator = Orchestrator()
    result = orchestrator.test_category("development-tools")
    snapshot = orchestrator.get_status()
"""

from devtoolkit.orchestrator.categories import Category, ConfigureCategory
from devtoolkit.orchestrator.configurators import (
    CommandConfigurator,
    ConfigureOptions,
    Configurator,
)
from devtoolkit.orchestrator.installers import (
    InstallAction,
    Installer,
    InstallOptions,
    PackageManagerInstaller,
)
from devtoolkit.orchestrator.orchestrator import Orchestrator, PathDiagnosis, TestOptions
from devtoolkit.orchestrator.session import SessionSnapshot

__all__ = [
    "Category",
    "CommandConfigurator",
    "ConfigureCategory",
    "ConfigureOptions",
    "Configurator",
    "InstallAction",
    "InstallOptions",
    "Installer",
    "Orchestrator",
    "PackageManagerInstaller",
    "PathDiagnosis",
    "SessionSnapshot",
    "TestOptions",
]
