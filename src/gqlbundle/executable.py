"""Build an executable GraphQL schema from a bundle result with ariadne.

Resolvers are bound as ariadne resolvers, so they receive ``(obj, info,
**arguments)``. Resolvers of the root subscription type are bound as
subscription sources (async generators) and each event is passed through
unchanged as the field value.
"""

from collections.abc import Mapping
from typing import Any

from ariadne import ObjectType, SubscriptionType, make_executable_schema as _make_executable_schema
from graphql import GraphQLSchema
from loguru import logger

from gqlbundle.models import BundleOptions, BundleResult, RootKeys


def _pass_through(event: Any, info: Any, **kwargs: Any) -> Any:
    return event


def _subscription_type(type_name: str, sources: Mapping[str, Any]) -> SubscriptionType:
    subscription = SubscriptionType()
    # SubscriptionType() always targets "Subscription"; rebind to the configured root
    subscription.name = type_name
    for field_name, source in sources.items():
        subscription.set_source(field_name, source)
        subscription.set_field(field_name, _pass_through)
    return subscription


def to_bindables(resolvers: Mapping[str, Any], root_keys: RootKeys | None = None) -> list[Any]:
    """Convert a resolver map into ariadne bindables.

    Mappings become ObjectType instances with one field resolver per entry,
    except the root subscription mapping, which becomes a SubscriptionType
    whose entries are the subscription sources. Values that are already
    bindables (anything with ``bind_to_schema``), such as ScalarType or
    EnumType, are passed through unchanged.

    Raises:
        TypeError: If a value is neither a mapping nor a bindable.
    """
    root_keys = root_keys or RootKeys()
    bindables: list[Any] = []
    for type_name, value in resolvers.items():
        if isinstance(value, Mapping):
            if type_name == root_keys.subscription:
                bindables.append(_subscription_type(type_name, value))
                continue
            object_type = ObjectType(type_name)
            for field_name, resolver in value.items():
                object_type.set_field(field_name, resolver)
            bindables.append(object_type)
        elif hasattr(value, "bind_to_schema"):
            bindables.append(value)
        else:
            msg = f"Resolvers for '{type_name}' must be a mapping or a schema bindable, got {type(value).__name__}"
            raise TypeError(msg)
    return bindables


def make_executable_schema(
    result: BundleResult,
    options: BundleOptions | Mapping[str, Any] | None = None,
) -> GraphQLSchema:
    """Create a graphql-core schema from a bundle result.

    Args:
        result: The bundled result.
        options: The options the result was bundled with, used to find the
            root subscription type.

    Returns:
        The executable schema.
    """
    options = BundleOptions().merged(options)
    bindables = to_bindables(result.resolvers, options.root_keys)
    logger.debug(f"Binding {len(bindables)} resolver group(s) to the schema")
    return _make_executable_schema(result.type_defs, *bindables)
