"""Data models for gqlbundle.

This module defines the dataclasses that describe schema modules, the
bundling configuration and the bundled result, so the resolver and the
bundler can work with typed values instead of loose dictionaries.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

__all__ = [
    "RESOLVER_CATEGORIES",
    "TEXT_CATEGORIES",
    "BundleOptions",
    "BundleResult",
    "ModuleKind",
    "RootKeys",
    "SchemaModule",
]

TEXT_CATEGORIES = ("schema", "queries", "mutations", "subscriptions")
RESOLVER_CATEGORIES = ("queries", "mutations", "subscriptions")


class ModuleKind(Enum):
    """The three shapes a module can take."""

    RECORD = "record"
    FACTORY = "factory"
    COLLECTION = "collection"


@dataclass(frozen=True)
class BundleResult:
    """The bundled schema definition and resolver map.

    Attributes:
        type_defs: The full SDL text (schema fragments, root types and the
            ``schema { ... }`` declaration).
        resolvers: Mapping of type name to a mapping of field name to resolver.
    """

    type_defs: str
    resolvers: dict[str, Any] = field(default_factory=dict)

    def with_type_defs(self, type_defs: str) -> "BundleResult":
        """Return a copy with ``type_defs`` replaced."""
        return replace(self, type_defs=type_defs)

    def with_resolvers(self, resolvers: dict[str, Any]) -> "BundleResult":
        """Return a copy with ``resolvers`` replaced."""
        return replace(self, resolvers=resolvers)

    def to_dict(self) -> dict[str, Any]:
        """Return the ``{"typeDefs", "resolvers"}`` form expected by most GraphQL servers."""
        return {"typeDefs": self.type_defs, "resolvers": self.resolvers}


@dataclass
class SchemaModule:
    """A single schema module record.

    Attributes:
        schema: Free-standing SDL (types, inputs, enums, scalars...).
        queries: Field definitions to add to the root query type.
        mutations: Field definitions to add to the root mutation type.
        subscriptions: Field definitions to add to the root subscription type.
        resolvers: Resolver bundle. The ``queries``, ``mutations`` and
            ``subscriptions`` keys hold root field resolvers, any other key is
            a type name mapping to its field resolvers.
        modules: Dependencies, resolved and placed after this module.
        alter: Hook applied to the bundled result after assembly.
    """

    schema: str = ""
    queries: str = ""
    mutations: str = ""
    subscriptions: str = ""
    resolvers: dict[str, Any] = field(default_factory=dict)
    modules: list[Any] = field(default_factory=list)
    alter: Callable[[BundleResult], BundleResult] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SchemaModule":
        """Build a SchemaModule from a plain mapping.

        Missing or falsy fields fall back to their defaults. Unknown keys are
        ignored.

        Args:
            data: Mapping using the SchemaModule field names as keys.

        Returns:
            The corresponding SchemaModule.
        """
        return cls(
            schema=data.get("schema") or "",
            queries=data.get("queries") or "",
            mutations=data.get("mutations") or "",
            subscriptions=data.get("subscriptions") or "",
            resolvers=dict(data.get("resolvers") or {}),
            modules=list(data.get("modules") or []),
            alter=data.get("alter"),
        )

    def fragment(self, category: str) -> str:
        """Return the text fragment for one of ``TEXT_CATEGORIES``."""
        return getattr(self, category) or ""

    def category_resolvers(self, category: str) -> Mapping[str, Any]:
        """Return the root resolvers for one of ``RESOLVER_CATEGORIES``."""
        return self.resolvers.get(category) or {}

    def field_resolvers(self) -> dict[str, Any]:
        """Return the type-level resolvers, i.e. everything but the root categories.

        Per-type mappings are copied, so editing the returned mappings leaves
        this module untouched. The resolver functions themselves are shared.
        """
        return {
            key: dict(value) if isinstance(value, Mapping) else value
            for key, value in self.resolvers.items()
            if key not in RESOLVER_CATEGORIES
        }

    def contributions(self) -> list[str]:
        """List the categories this module contributes to, for diagnostics."""
        contributed = [category for category in TEXT_CATEGORIES if self.fragment(category)]
        contributed.extend(f"resolvers.{key}" for key, value in self.resolvers.items() if value)
        if self.alter is not None:
            contributed.append("alter")
        return contributed


@dataclass
class RootKeys:
    """Names of the root operation types.

    Attributes:
        query: Root query type name.
        mutation: Root mutation type name.
        subscription: Root subscription type name.
    """

    query: str = "Query"
    mutation: str = "Mutation"
    subscription: str = "Subscription"

    def for_category(self, category: str) -> str:
        """Map a resolver category (``queries`` ...) to its root type name."""
        return {
            "queries": self.query,
            "mutations": self.mutation,
            "subscriptions": self.subscription,
        }[category]


@dataclass
class BundleOptions:
    """Bundling configuration.

    Attributes:
        root_keys: Names used for the synthesized root types.
    """

    root_keys: RootKeys = field(default_factory=RootKeys)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "BundleOptions":
        """Build options from a mapping, overriding the defaults field by field.

        Both ``rootKeys`` and ``root-keys`` are accepted for the root type names.

        Args:
            data: Options mapping, or None for the defaults.

        Returns:
            The resulting options.

        Raises:
            TypeError: If the root keys entry is not a mapping.
        """
        return cls().merged(data)

    @classmethod
    def from_yaml(cls, file_path: Path) -> "BundleOptions":
        """Load BundleOptions from a YAML file.

        Args:
            file_path: Path to the options file.

        Returns:
            The loaded options.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the YAML is malformed.
            ValueError: If the file is empty.
            TypeError: If the file or its root keys entry is not a mapping.
        """
        with open(file_path) as f:
            config = yaml.safe_load(f)

        if not config:
            raise ValueError("Options file is empty")  # noqa: TRY003
        if not isinstance(config, dict):
            msg = "Options file must contain a mapping"
            raise TypeError(msg)

        return cls.from_dict(config)

    def merged(self, overrides: "BundleOptions | Mapping[str, Any] | None") -> "BundleOptions":
        """Return new options with ``overrides`` applied over these ones."""
        if overrides is None:
            return replace(self, root_keys=replace(self.root_keys))
        if isinstance(overrides, BundleOptions):
            return replace(overrides, root_keys=replace(overrides.root_keys))

        root_keys = overrides.get("rootKeys", overrides.get("root-keys", overrides.get("root_keys")))
        if root_keys is None:
            root_keys = {}
        if isinstance(root_keys, RootKeys):
            return replace(self, root_keys=replace(root_keys))
        if not isinstance(root_keys, Mapping):
            msg = f"rootKeys must be a mapping, got {type(root_keys).__name__}"
            raise TypeError(msg)

        return replace(
            self,
            root_keys=RootKeys(
                query=root_keys.get("query") or self.root_keys.query,
                mutation=root_keys.get("mutation") or self.root_keys.mutation,
                subscription=root_keys.get("subscription") or self.root_keys.subscription,
            ),
        )
