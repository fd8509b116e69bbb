#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/editor2docx/utils/decorators.py
"""Decorators and context managers shared by the conversion stages.

The converter imports BeautifulSoup, python-docx and httpx lazily, inside the
stage that needs them. ``requires_dependencies`` turns a missing or outdated
package into a ``DependencyError`` with an install hint before the stage
starts, instead of an ``ImportError`` halfway through a conversion.

"""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, List, Tuple

from editor2docx.exceptions import DependencyError
from editor2docx.utils.packages import check_version_requirement


def requires_dependencies(component_name: str, packages: List[Tuple[str, str, str]]) -> Callable:
    """Check required dependencies and versions before a method runs.

    Parameters
    ----------
    component_name : str
        Name of the stage needing the packages (e.g. "html", "docx",
        "network"). Appears in the error message.
    packages : list of tuple
        Required packages as (install_name, import_name, version_spec) tuples,
        e.g. ``("python-docx", "docx", ">=1.1.0")``. An empty version_spec
        accepts any installed version.

    Returns
    -------
    Callable
        Decorated callable that checks dependencies before execution

    Raises
    ------
    DependencyError
        If any required package is missing or has an incompatible version.

    Examples
    --------
        >>> @requires_dependencies("docx", [("python-docx", "docx", ">=1.1.0")])
        ... def assemble(self, build):
        ...     from docx import Document
        ...     # assembly logic here

    """

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing = []
            version_mismatches = []
            original_error = None

            for install_name, import_name, version_spec in packages:
                try:
                    importlib.import_module(import_name)
                except ImportError as e:
                    missing.append((install_name, version_spec))
                    if original_error is None:
                        original_error = e
                    continue

                if version_spec:
                    meets_requirement, installed_version = check_version_requirement(install_name, version_spec)
                    if not meets_requirement:
                        version_mismatches.append((install_name, version_spec, installed_version or "unknown"))

            if missing or version_mismatches:
                raise DependencyError(
                    component_name=component_name,
                    missing_packages=missing,
                    version_mismatches=version_mismatches,
                    original_import_error=original_error,
                ) from original_error

            return method(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Log the elapsed time of the wrapped block at DEBUG level.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance to use for DEBUG messages
    operation : str
        Description of the operation being timed (e.g., "Parsing HTML")

    Examples
    --------
        >>> with debug_timer(logger, "Assembling DOCX"):
        ...     data = assembler.assemble(build)
        ... # Logs: "Assembling DOCX completed in 0.04s" at DEBUG level

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug(f"{operation} completed in {elapsed:.2f}s")
    else:
        yield
