"""Loading helpers for the command-line interface.

This module locates the module tree named by a ``package.module:attribute``
target and loads the optional bundling options file.
"""

import importlib
import sys
from pathlib import Path
from typing import Any

from loguru import logger

from gqlbundle.models import BundleOptions


def parse_target(target: str) -> tuple[str, str]:
    """Split a ``package.module:attribute`` target into its two parts.

    Args:
        target: The target string.

    Returns:
        Tuple of (module path, attribute path).

    Raises:
        ValueError: If the target is not in ``module:attribute`` form.

    Examples:
        >>> parse_target("app.schema:modules")
        ('app.schema', 'modules')
    """
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        msg = f"Target must be in format 'package.module:attribute', got: {target}"
        raise ValueError(msg)
    return module_name, attribute


def load_target(target: str, search_path: Path | None = None) -> Any:
    """Import the object named by ``target``.

    Args:
        target: A ``package.module:attribute`` string. The attribute may be
            dotted to reach nested objects.
        search_path: Directory prepended to ``sys.path`` before importing,
            usually the current working directory.

    Returns:
        The referenced object, typically a module list or a factory.

    Raises:
        ValueError: If the target is malformed.
        ImportError: If the Python module cannot be imported.
        AttributeError: If the attribute does not exist.
    """
    module_name, attribute = parse_target(target)

    if search_path is not None:
        path = str(search_path.resolve())
        if path not in sys.path:
            logger.debug(f"Adding {path} to sys.path")
            sys.path.insert(0, path)

    logger.debug(f"Importing {module_name}")
    obj: Any = importlib.import_module(module_name)
    for name in attribute.split("."):
        obj = getattr(obj, name)
    return obj


def load_options(options_file: Path | None) -> BundleOptions:
    """Load bundling options from a YAML file, or return the defaults.

    Args:
        options_file: Path to the options YAML file, or None.

    Returns:
        The loaded options.
    """
    if options_file is None:
        return BundleOptions()
    logger.debug(f"Loading options from {options_file}")
    return BundleOptions.from_yaml(options_file)
