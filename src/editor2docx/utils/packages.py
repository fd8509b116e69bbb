"""Installed-package version lookups used by the dependency checks."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/editor2docx/utils/packages.py
from __future__ import annotations

from importlib import metadata
from typing import Optional, Tuple

from packaging import version
from packaging.specifiers import InvalidSpecifier, SpecifierSet


def get_package_version(distribution_name: str) -> Optional[str]:
    """Return the installed version of a distribution, or None if absent.

    Parameters
    ----------
    distribution_name : str
        Name of the distribution on the package index (e.g. "python-docx"),
        which may differ from its import name.

    """
    try:
        return metadata.version(distribution_name)
    except metadata.PackageNotFoundError:
        return None


def check_version_requirement(distribution_name: str, version_spec: str) -> Tuple[bool, Optional[str]]:
    """Check whether the installed distribution satisfies ``version_spec``.

    Parameters
    ----------
    distribution_name : str
        Name of the distribution on the package index
    version_spec : str
        Version specification (e.g., ">=1.1.0")

    Returns
    -------
    tuple
        (meets_requirement, installed_version)

    """
    installed_version = get_package_version(distribution_name)
    if not installed_version:
        return False, None

    try:
        spec = SpecifierSet(version_spec)
    except InvalidSpecifier:
        return True, installed_version

    return version.parse(installed_version) in spec, installed_version
