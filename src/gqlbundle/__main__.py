"""Allow running gqlbundle as a module: ``python -m gqlbundle``."""

from gqlbundle.cli import app

if __name__ == "__main__":
    app(prog_name="gqlbundle")
