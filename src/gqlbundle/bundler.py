"""Bundle schema modules into one schema definition and resolver map.

The bundler resolves the module tree, concatenates the SDL fragments of
every module per category, merges the resolver maps (later modules win on
collisions), synthesizes the root operation types and the ``schema``
declaration, and finally runs every module's ``alter`` hook over the result.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from loguru import logger

from gqlbundle.models import (
    RESOLVER_CATEGORIES,
    TEXT_CATEGORIES,
    BundleOptions,
    BundleResult,
    SchemaModule,
)
from gqlbundle.module_resolver import resolve_modules

_SCHEMA_FIELDS = {
    "queries": "query",
    "mutations": "mutation",
    "subscriptions": "subscription",
}


def merge_mappings(mappings: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
    """Shallow-merge mappings in order; later keys overwrite earlier ones.

    Examples:
        >>> merge_mappings([{"a": 1, "b": 1}, {"b": 2}, {}])
        {'a': 1, 'b': 2}
    """
    merged: dict[str, Any] = {}
    for mapping in mappings:
        for key, value in mapping.items():
            merged[key] = value
    return merged


def join_fragments(modules: list[SchemaModule], category: str) -> str:
    """Join the non-empty fragments of ``category`` with newlines, in module order."""
    return "\n".join(fragment for fragment in (module.fragment(category) for module in modules) if fragment)


def build_type_defs(texts: Mapping[str, str], options: BundleOptions) -> str:
    """Assemble the SDL document from merged fragments.

    Args:
        texts: Merged text per category in ``TEXT_CATEGORIES``.
        options: Bundling options providing the root type names.

    Returns:
        The schema text, one ``type`` block per non-empty root category and
        the ``schema`` declaration listing those root types.
    """
    sections = [texts["schema"]] if texts["schema"] else []
    operations = []
    for category, operation in _SCHEMA_FIELDS.items():
        if not texts[category]:
            continue
        root_key = options.root_keys.for_category(category)
        sections.append(f"type {root_key} {{\n{texts[category]}\n}}")
        operations.append(f"  {operation}: {root_key}\n")

    sections.append("schema {\n" + "".join(operations) + "}")
    return "\n\n".join(sections) + "\n"


def build_resolvers(
    modules: list[SchemaModule],
    texts: Mapping[str, str],
    options: BundleOptions,
) -> dict[str, Any]:
    """Assemble the resolver map.

    Root resolvers are attached only for categories with SDL text. A category
    with resolvers but no text is dropped (and logged), not rejected.
    """
    resolvers = merge_mappings(module.field_resolvers() for module in modules)

    for category in RESOLVER_CATEGORIES:
        category_resolvers = merge_mappings(module.category_resolvers(category) for module in modules)
        root_key = options.root_keys.for_category(category)
        if texts[category]:
            resolvers[root_key] = category_resolvers
        elif category_resolvers:
            logger.warning(
                f"Dropping {category} resolvers without {category} definitions: {', '.join(category_resolvers)}"
            )

    return resolvers


def bundle(
    modules: Iterable[Any] | None = None,
    options: BundleOptions | Mapping[str, Any] | None = None,
) -> BundleResult:
    """Compile schema modules into SDL and resolvers for a GraphQL server.

    Each module can be a SchemaModule (or an equivalent mapping), a list of
    modules, or a zero-argument factory returning one of those. Module
    dependencies listed in ``modules`` are pulled in after their parent.

    Args:
        modules: Top-level modules.
        options: BundleOptions or an options mapping merged over the defaults,
            e.g. ``{"rootKeys": {"query": "RootQuery"}}``.

    Returns:
        The bundled result after all ``alter`` hooks ran.

    Raises:
        TypeError: If a module has an unsupported shape.
    """
    options = BundleOptions().merged(options)
    resolved = resolve_modules(modules or [])

    texts = {category: join_fragments(resolved, category) for category in TEXT_CATEGORIES}
    result = BundleResult(
        type_defs=build_type_defs(texts, options),
        resolvers=build_resolvers(resolved, texts, options),
    )
    logger.debug(f"Bundled {len(resolved)} module(s) into {len(result.resolvers)} resolver group(s)")

    for module in resolved:
        if module.alter is not None:
            result = module.alter(result)

    return result
