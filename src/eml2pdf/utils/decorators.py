#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/eml2pdf/utils/decorators.py
"""Dependency checks and timing helpers.

WeasyPrint is optional: it is imported inside the PDF renderer, and
``requires_dependencies`` verifies it up front so a missing engine surfaces as
a :class:`DependencyError` with an install hint rather than an ImportError in
the middle of a conversion.

"""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, List, Optional, Tuple

from eml2pdf.exceptions import DependencyError
from eml2pdf.utils.packages import check_version_requirement

PackageRequirement = Tuple[str, str, str]


def _check_packages(
    packages: List[PackageRequirement],
) -> Tuple[List[Tuple[str, str]], List[Tuple[str, str, str]], Optional[ImportError]]:
    """Return missing packages, version mismatches and the first ImportError."""
    missing: List[Tuple[str, str]] = []
    mismatched: List[Tuple[str, str, str]] = []
    first_error: Optional[ImportError] = None

    for install_name, import_name, version_spec in packages:
        try:
            importlib.import_module(import_name)
        except ImportError as e:
            missing.append((install_name, version_spec))
            first_error = first_error or e
            continue

        if not version_spec:
            continue
        satisfied, installed = check_version_requirement(install_name, version_spec)
        if not satisfied:
            mismatched.append((install_name, version_spec, installed or "unknown"))

    return missing, mismatched, first_error


def requires_dependencies(component: str, packages: List[PackageRequirement]) -> Callable:
    """Make a function fail early when its optional packages are unavailable.

    Parameters
    ----------
    component : str
        Name reported in the error message, e.g. ``"pdf"``
    packages : list of tuple
        ``(install_name, import_name, version_spec)`` triples; an empty
        ``version_spec`` accepts any installed version

    Raises
    ------
    DependencyError
        When the decorated function is called and a package is missing or
        too old

    Examples
    --------
        >>> @requires_dependencies("pdf", [("weasyprint", "weasyprint", ">=60.0")])
        ... def render(self, html, output):
        ...     from weasyprint import HTML

    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing, mismatched, first_error = _check_packages(packages)
            if missing or mismatched:
                raise DependencyError(
                    converter_name=component,
                    missing_packages=missing,
                    version_mismatches=mismatched,
                    original_import_error=first_error,
                ) from first_error
            return func(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Log how long the enclosed block took, at DEBUG level only.

    Nothing is measured when ``logger`` is not enabled for DEBUG. Exceptions
    from the block propagate and are not timed.

    Examples
    --------
        >>> with debug_timer(logger, "Resolving nested messages"):
        ...     artifact = find_deepest_message(message)

    """
    if not logger.isEnabledFor(logging.DEBUG):
        yield
        return

    started = time.perf_counter()
    yield
    logger.debug(f"{operation} completed in {time.perf_counter() - started:.2f}s")
