"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "oas-build.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Build configuration template for oas-schema-compiler.
# Replace every <REQUIRED> placeholder before running build.
# Remove version entries you do not want to build.

# Output root; each version is written to <output_dir>/<version>/ and fully
# replaced on every build.
output_dir: "schemas"

# Worker threads used to emit the component artifacts of one version.
parallelism: 1

versions:
  # Version identifiers: 2.0, 3.0, 3.1, 3.2 (patch aliases such as 3.0.3 are accepted).
  "2.0":
    source:
      # Provide either an inline YAML/JSON source document or a source path.
      # The document holds a `definitions` mapping (name -> schema) and an
      # optional `collections` mapping (e.g. parameters, responses).
      path: "<REQUIRED>"
      # inline: "<OPTIONAL>"
    # Optional allow-list override; defaults to Schema, Parameter, Response, PathItem.
    # components:
    #   - "<OPTIONAL>"
  "3.1":
    source:
      path: "<REQUIRED>"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML build configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder build configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Build configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
