"""Command for inspecting the resolved module order.

Shows every schema module in the order the bundler processes it, with the
categories it contributes to. Useful when a resolver is unexpectedly
overridden by a later module.
"""

from pathlib import Path

from loguru import logger

from gqlbundle.commands.build import as_module_list
from gqlbundle.loader import load_target
from gqlbundle.module_resolver import resolve_modules


def inspect(target: str, search_path: Path | None = None) -> bool:
    """Log the flat module list for ``target``.

    Args:
        target: ``package.module:attribute`` naming the module tree.
        search_path: Directory added to ``sys.path`` before importing.

    Returns:
        True if the modules could be resolved, False otherwise.
    """
    try:
        modules = load_target(target, search_path)
    except (ValueError, ImportError, AttributeError) as e:
        logger.error(f"Failed to load target {target}: {e}")
        return False

    try:
        resolved = resolve_modules(as_module_list(modules))
    except TypeError as e:
        logger.error(f"Failed to resolve {target}: {e}")
        return False

    logger.info(f"{target} resolves to {len(resolved)} schema module(s)")
    for index, module in enumerate(resolved, start=1):
        contributions = module.contributions()
        logger.info(f"  {index}. {', '.join(contributions) if contributions else '(empty)'}")
    return True
