"""Command for bundling schema modules into SDL.

This module implements the `build` command. It imports the module tree
named by the target, bundles it, and writes the resulting SDL (or a JSON
summary of the schema and its resolvers) to stdout or a file.
"""

import json
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from gqlbundle.bundler import bundle
from gqlbundle.loader import load_options, load_target
from gqlbundle.models import BundleResult

FORMATS = ("sdl", "json")


def as_module_list(obj: Any) -> list[Any]:
    """Wrap a single module so the bundler always receives a list."""
    if isinstance(obj, list):
        return obj
    return [obj]


def render(result: BundleResult, output_format: str) -> str:
    """Render a bundle result in the requested output format.

    Args:
        result: The bundled result.
        output_format: ``sdl`` for the type definitions only, ``json`` for
            the type definitions plus the resolved field names per type.

    Returns:
        The rendered text.

    Raises:
        ValueError: If the format is unknown.
    """
    if output_format == "sdl":
        return result.type_defs
    if output_format == "json":
        resolvers = {
            type_name: sorted(fields) if isinstance(fields, dict) else type(fields).__name__
            for type_name, fields in result.resolvers.items()
        }
        return json.dumps({"typeDefs": result.type_defs, "resolvers": resolvers}, indent=2) + "\n"
    msg = f"Unknown output format {output_format!r}; expected one of {', '.join(FORMATS)}"
    raise ValueError(msg)


def build(
    target: str,
    options_file: Path | None = None,
    output: Path | None = None,
    output_format: str = "sdl",
    search_path: Path | None = None,
) -> bool:
    """Bundle the modules named by ``target``.

    Args:
        target: ``package.module:attribute`` naming the module tree.
        options_file: Optional YAML file with bundling options.
        output: File to write to. Stdout is used when None.
        output_format: ``sdl`` or ``json``.
        search_path: Directory added to ``sys.path`` before importing.

    Returns:
        True if the bundle was produced, False otherwise.
    """
    try:
        options = load_options(options_file)
    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        logger.error(f"Failed to load options from {options_file}: {e}")
        return False

    try:
        modules = load_target(target, search_path)
    except (ValueError, ImportError, AttributeError) as e:
        logger.error(f"Failed to load target {target}: {e}")
        return False

    logger.info(f"Bundling schema modules from {target}")
    try:
        result = bundle(as_module_list(modules), options)
    except TypeError as e:
        logger.error(f"Failed to bundle {target}: {e}")
        return False

    text = render(result, output_format)

    if output is None:
        print(text, end="")
        return True

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text)
    logger.success(f"Wrote bundled schema to {output}")
    return True
