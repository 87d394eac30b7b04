"""Module entry point for `python -m oas_schema_compiler`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
