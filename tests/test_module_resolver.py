"""Tests for module resolution and flattening."""

import sys

import pytest

from gqlbundle.models import ModuleKind, SchemaModule
from gqlbundle.module_resolver import ModuleResolver, classify_module, flatten, resolve_modules


class TestClassifyModule:
    """Test classify_module."""

    def test_schema_module_is_record(self) -> None:
        """Test that SchemaModule instances are records."""
        assert classify_module(SchemaModule()) is ModuleKind.RECORD

    def test_dict_is_record(self) -> None:
        """Test that plain mappings are records."""
        assert classify_module({"schema": "type A { a: Int }"}) is ModuleKind.RECORD

    def test_callable_is_factory(self) -> None:
        """Test that callables are factories."""
        assert classify_module(lambda: {}) is ModuleKind.FACTORY

    def test_list_and_tuple_are_collections(self) -> None:
        """Test that lists and tuples are collections."""
        assert classify_module([]) is ModuleKind.COLLECTION
        assert classify_module(()) is ModuleKind.COLLECTION

    @pytest.mark.parametrize("value", [None, 1, "type A { a: Int }"])
    def test_unsupported_shapes_raise(self, value) -> None:
        """Test that None and primitives are rejected."""
        with pytest.raises(TypeError, match="Cannot resolve module"):
            classify_module(value)


class TestFlatten:
    """Test flatten."""

    def test_deeply_nested(self) -> None:
        """Test flattening is depth-unbounded and order-preserving."""
        assert flatten([1, [2, [3, [4, [5]]]], [], [[6]], 7]) == [1, 2, 3, 4, 5, 6, 7]

    def test_empty(self) -> None:
        """Test flattening an empty list."""
        assert flatten([]) == []

    def test_deeper_than_recursion_limit(self) -> None:
        """Test flattening nesting deeper than the interpreter recursion limit."""
        nested: list = ["leaf"]
        for _ in range(sys.getrecursionlimit() * 5):
            nested = [nested]

        assert flatten([1, nested, 2]) == [1, "leaf", 2]


class TestModuleResolver:
    """Test ModuleResolver.resolve."""

    def test_factory_returning_record(self) -> None:
        """Test that a factory producing a record yields that single record."""
        resolved = resolve_modules([lambda: SchemaModule(schema="type A { a: Int }")])

        assert resolved == [SchemaModule(schema="type A { a: Int }")]

    def test_factory_returning_factory(self) -> None:
        """Test that factory output is resolved recursively."""
        resolved = resolve_modules([lambda: lambda: [{"schema": "type A { a: Int }"}]])

        assert [module.schema for module in resolved] == ["type A { a: Int }"]

    def test_dict_is_converted(self) -> None:
        """Test that mapping records become SchemaModule leaves."""
        resolved = resolve_modules([{"queries": "a: Int", "resolvers": {"queries": {}}}])

        assert len(resolved) == 1
        assert isinstance(resolved[0], SchemaModule)
        assert resolved[0].queries == "a: Int"

    def test_dependencies_follow_parent(self) -> None:
        """Test that dependencies are placed after their parent, in list order."""
        child_a = {"schema": "a"}
        child_b = {"schema": "b", "modules": [{"schema": "b1"}]}
        parent = {"schema": "parent", "modules": [child_a, child_b]}

        resolved = resolve_modules([parent, {"schema": "sibling"}])

        assert [module.schema for module in resolved] == ["parent", "a", "b", "b1", "sibling"]

    def test_leaves_have_no_dependencies(self) -> None:
        """Test that resolved records carry no nested modules."""
        resolved = resolve_modules([SchemaModule(schema="parent", modules=[SchemaModule(schema="child")])])

        assert all(module.modules == [] for module in resolved)

    def test_input_is_not_mutated(self) -> None:
        """Test that the caller's module objects keep their dependencies."""
        child = {"schema": "child"}
        parent = {"schema": "parent", "modules": [child]}
        record = SchemaModule(schema="record", modules=[child])

        resolve_modules([parent, record])

        assert parent["modules"] == [child]
        assert record.modules == [child]

    def test_shared_module_resolved_once(self) -> None:
        """Test that a module reachable from two parents contributes once."""
        shared = {"schema": "shared"}
        first = {"schema": "first", "modules": [shared]}
        second = {"schema": "second", "modules": [shared]}

        resolved = resolve_modules([first, second])

        assert [module.schema for module in resolved] == ["first", "shared", "second"]

    def test_cyclic_dependencies_terminate(self) -> None:
        """Test that A -> B -> A resolves to A and B once, in first-seen order."""
        module_a = {"schema": "a", "modules": []}
        module_b = {"schema": "b", "modules": [module_a]}
        module_a["modules"].append(module_b)

        resolved = resolve_modules([module_a])

        assert [module.schema for module in resolved] == ["a", "b"]

    def test_factory_reached_twice_is_invoked_once(self) -> None:
        """Test that the same factory is only invoked once per call."""
        calls = []

        def factory():
            calls.append(1)
            return {"schema": "made"}

        resolved = resolve_modules([factory, {"modules": [factory]}])

        assert len(calls) == 1
        assert [module.schema for module in resolved] == ["made", ""]

    def test_already_seen_returns_empty(self) -> None:
        """Test that resolving the same instance twice yields nothing the second time."""
        resolver = ModuleResolver()
        module = {"schema": "a"}

        assert len(resolver.resolve(module)) == 1
        assert resolver.seen(module)
        assert resolver.resolve(module) == []

    def test_collection_preserves_order(self) -> None:
        """Test that nested collections resolve left to right, depth first."""
        resolver = ModuleResolver()

        resolved = resolver.resolve([{"schema": "a"}, [{"schema": "b"}, ({"schema": "c"},)], {"schema": "d"}])

        assert [module.schema for module in resolved] == ["a", "b", "c", "d"]

    def test_deep_dependency_chain(self) -> None:
        """Test that a chain deeper than the recursion limit resolves in order."""
        depth = sys.getrecursionlimit() * 5
        root = current = {"schema": "0"}
        for index in range(1, depth):
            child = {"schema": str(index)}
            current["modules"] = [child]
            current = child

        resolved = resolve_modules([root])

        assert len(resolved) == depth
        assert resolved[0].schema == "0"
        assert resolved[-1].schema == str(depth - 1)

    def test_deep_factory_chain(self) -> None:
        """Test that factories returning factories do not exhaust the stack."""
        depth = sys.getrecursionlimit() * 5
        module = {"schema": "leaf"}
        for _ in range(depth):
            module = (lambda product: lambda: product)(module)

        assert [record.schema for record in resolve_modules([module])] == ["leaf"]

    def test_empty_dependency_list(self) -> None:
        """Test that an empty dependency list contributes nothing extra."""
        resolved = resolve_modules([{"schema": "a", "modules": []}])

        assert [module.schema for module in resolved] == ["a"]

    def test_seen_set_is_per_call(self) -> None:
        """Test that independent calls do not share the seen set."""
        shared = {"schema": "shared"}

        assert len(resolve_modules([shared])) == 1
        assert len(resolve_modules([shared])) == 1

    def test_malformed_dependency_raises(self) -> None:
        """Test that a None dependency surfaces a TypeError."""
        with pytest.raises(TypeError):
            resolve_modules([{"schema": "a", "modules": [None]}])
