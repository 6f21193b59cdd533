"""Module resolution logic.

This module turns the nested module tree handed to the bundler (records,
factories, collections and record dependencies) into a flat, ordered list
of SchemaModule records in which every module instance appears once.
"""

from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any

from loguru import logger

from gqlbundle.models import ModuleKind, SchemaModule


def classify_module(module: Any) -> ModuleKind:
    """Map a module value onto its ModuleKind.

    Args:
        module: A SchemaModule, a mapping, a zero-argument callable or a
            list/tuple of modules.

    Returns:
        The kind of the module.

    Raises:
        TypeError: If the value is none of the supported shapes.
    """
    if isinstance(module, (SchemaModule, Mapping)):
        return ModuleKind.RECORD
    if callable(module):
        return ModuleKind.FACTORY
    if isinstance(module, (list, tuple)):
        return ModuleKind.COLLECTION
    msg = f"Cannot resolve module of type {type(module).__name__}"
    raise TypeError(msg)


def flatten(nested: Iterable[Any]) -> list[Any]:
    """Flatten arbitrarily nested lists into a single list, depth first.

    Uses an explicit stack of iterators, so nesting depth is not limited by
    the interpreter's recursion limit.

    Examples:
        >>> flatten([1, [2, [3, [4]]], [], 5])
        [1, 2, 3, 4, 5]
    """
    flat: list[Any] = []
    stack = [iter(nested)]
    while stack:
        for item in stack[-1]:
            if isinstance(item, list):
                stack.append(iter(item))
                break
            flat.append(item)
        else:
            stack.pop()
    return flat


class ModuleResolver:
    """Resolve modules while remembering which instances were already visited.

    The visited set lives as long as the resolver, so use one resolver per
    top-level bundling call. Values are kept alongside their ids so that an
    id cannot be recycled by a new object while the resolver is alive.
    """

    def __init__(self) -> None:
        self._seen: dict[int, Any] = {}

    def seen(self, module: Any) -> bool:
        """Return True if ``module`` (by identity) was already resolved."""
        return id(module) in self._seen

    def resolve(self, module: Any) -> list[SchemaModule]:
        """Resolve one module into a flat list of records.

        Modules are visited depth first: a factory is replaced by its product,
        a collection by its elements, and a record is followed by its
        dependencies. Already resolved modules contribute nothing. Pending
        modules are kept on an explicit stack, so deep dependency chains do
        not hit the recursion limit.

        Args:
            module: Module of any supported shape.

        Returns:
            Ordered list of SchemaModule leaves.

        Raises:
            TypeError: If the module has an unsupported shape.
        """
        resolved: list[SchemaModule] = []
        pending = [module]
        while pending:
            current = pending.pop()
            if self.seen(current):
                logger.debug(f"Skipping already resolved {type(current).__name__} module at {id(current):#x}")
                continue
            self._seen[id(current)] = current

            kind = classify_module(current)

            if kind is ModuleKind.FACTORY:
                pending.append(current())
                continue

            if kind is ModuleKind.COLLECTION:
                pending.extend(reversed(current))
                continue

            record = current if isinstance(current, SchemaModule) else SchemaModule.from_dict(current)
            resolved.append(replace(record, modules=[]))
            pending.extend(reversed(record.modules))
        return resolved


def resolve_modules(modules: Iterable[Any]) -> list[SchemaModule]:
    """Resolve top-level modules into a flat list of records.

    A fresh ModuleResolver is used for every call, so reusing module objects
    across independent calls gives the same result each time.

    Args:
        modules: Top-level modules, each of any supported shape.

    Returns:
        Flat, ordered list of SchemaModule records without dependencies.
    """
    resolver = ModuleResolver()
    resolved = flatten(resolver.resolve(module) for module in modules)
    logger.debug(f"Resolved {len(resolved)} schema module(s)")
    return resolved
