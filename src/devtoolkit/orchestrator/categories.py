"""Named tool categories and the single place they are parsed."""

from __future__ import annotations

from enum import Enum
from typing import List

from devtoolkit.core.errors import UnknownCategoryError

# Pseudo-category accepted by test_category
ALL_CATEGORIES = "all"


class Category(str, Enum):
    """Install/test categories."""

    PACKAGE_MANAGERS = "package-managers"
    DEVELOPMENT_TOOLS = "development-tools"
    CLOUD_TOOLS = "cloud-tools"
    APPLICATIONS = "applications"
    AI_TOOLS = "ai-tools"


class ConfigureCategory(str, Enum):
    """Configuration categories."""

    TERMINAL = "terminal"
    POWERSHELL = "powershell"
    TOOLS = "tools"
    AI_TOOLS = "ai-tools"


def category_names() -> List[str]:
    return [c.value for c in Category]


def configure_category_names() -> List[str]:
    return [c.value for c in ConfigureCategory]


def parse_category(name: str) -> Category:
    """Parse an install/test category name.

    Raises:
        UnknownCategoryError: If the name is not a known category.
    """
    try:
        return Category(name)
    except ValueError:
        raise UnknownCategoryError(name, category_names()) from None


def parse_test_target(name: str) -> List[Category]:
    """Parse a test target, expanding ``all`` to every category."""
    if name == ALL_CATEGORIES:
        return list(Category)
    return [parse_category(name)]


def parse_configure_category(name: str) -> ConfigureCategory:
    """Parse a configure category name.

    Raises:
        UnknownCategoryError: If the name is not a known configure category.
    """
    try:
        return ConfigureCategory(name)
    except ValueError:
        raise UnknownCategoryError(name, configure_category_names()) from None
