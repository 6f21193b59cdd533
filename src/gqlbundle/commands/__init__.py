"""Command implementations for the gqlbundle CLI.

This package contains the functions that back Typer commands exposed by
`gqlbundle.cli`, such as `build` and `inspect`.
"""

from .build import build  # noqa: F401
from .inspect import inspect  # noqa: F401
