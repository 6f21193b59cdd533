"""gqlbundle - Compose GraphQL schema modules into one schema and resolver map.

gqlbundle lets you split a GraphQL API into small, independently authored
schema modules. Each module contributes SDL fragments and resolvers, may
depend on other modules, and may alter the final result. The bundler turns
the whole module tree into the ``type_defs`` and ``resolvers`` pair expected
by schema-first GraphQL servers.

Key Features
------------
- **Flexible module shapes**: a module can be a ``SchemaModule`` (or plain
  dict), a list of modules, or a zero-argument factory returning either.

- **Dependencies**: modules listed in ``modules`` are pulled in after their
  parent. Shared and cyclic dependencies are included exactly once.

- **Root type synthesis**: ``queries``, ``mutations`` and ``subscriptions``
  fragments are gathered into the root types and the ``schema`` declaration.

- **Alter hooks**: every module may rewrite the final result.

Quick Start
-----------
    >>> from gqlbundle import bundle
    >>> users = {
    ...     "schema": "type User { name: String }",
    ...     "queries": "me: User",
    ...     "resolvers": {"queries": {"me": lambda obj, info: {"name": "Ada"}}},
    ... }
    >>> result = bundle([users])
    >>> sorted(result.resolvers)
    ['Query']

From the command line:

    $ gqlbundle build app.schema:modules

Main Modules
------------
bundler : module
    The ``bundle`` function and its merge helpers.

module_resolver : module
    Flattening of the module tree.

models : module
    Data models for modules, options and results.

cli : module
    Typer-based command-line interface and entry points.
"""

from importlib.metadata import PackageNotFoundError, version

from loguru import logger

from gqlbundle.bundler import bundle
from gqlbundle.models import BundleOptions, BundleResult, RootKeys, SchemaModule
from gqlbundle.module_resolver import resolve_modules

try:
    __version__ = version("gqlbundle")
except PackageNotFoundError:
    # Package is not installed, use a fallback version
    __version__ = "0.0.0+dev"

# Library code stays quiet unless the application opts in
logger.disable("gqlbundle")

__all__ = [
    "BundleOptions",
    "BundleResult",
    "RootKeys",
    "SchemaModule",
    "bundle",
    "resolve_modules",
]
