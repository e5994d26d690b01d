"""Load test sets from explicitly named suite files."""

from __future__ import annotations

import importlib.util
import logging
import sys
from pathlib import Path

from casework.compare import Tolerance
from casework.exceptions import ConfigError
from casework.testset import TestSet, default_tolerance

logger = logging.getLogger("casework.loader")


def load_suites(path: Path, tolerance: Tolerance | None = None) -> list[TestSet]:
    """Import the Python file at *path* and return its module-level test sets.

    Test sets run their tests while they are declared, so importing the file
    executes the whole suite. The returned list follows definition order.
    When *tolerance* is given, test sets created without their own tolerance
    use it for almost-equal comparisons.
    """
    if not path.is_file():
        raise ConfigError(f"suite file not found: {path}")

    module_name = f"casework_suite_{path.stem}_{abs(hash(str(path.resolve())))}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ConfigError(f"cannot import suite file: {path}")

    logger.debug(f"Loading suite file {path}")
    module = importlib.util.module_from_spec(spec)
    # dataclasses and typing resolve annotations through sys.modules
    sys.modules[module_name] = module
    try:
        if tolerance is None:
            spec.loader.exec_module(module)
        else:
            with default_tolerance(tolerance):
                spec.loader.exec_module(module)
    finally:
        sys.modules.pop(module_name, None)

    suites: list[TestSet] = []
    for value in vars(module).values():
        if TestSet.is_instance(value) and not any(value is s for s in suites):
            suites.append(value)

    if not suites:
        logger.warning(f"No TestSet found in {path}")
    else:
        logger.debug(f"Found {len(suites)} test set(s) in {path}")
    return suites
