"""Pydantic model for the project config file (gqlnorm.yaml)."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, ValidationError
import yaml

from gqlnorm.errors import ConfigError


class ProjectConfig(BaseModel):
    schema_path: str = Field(default="schema.graphql", alias="schema")
    documents: list[str] = Field(default_factory=lambda: ["**/*.graphql"])
    output: str = "generated"
    key_fields: list[str] = Field(default_factory=list)
    report: str | None = None

    model_config = {"populate_by_name": True}

    def resolve(self, base_dir: Path) -> ProjectConfig:
        """Return a copy with relative paths anchored at ``base_dir``."""

        def anchor(p: str) -> str:
            return str(base_dir / p) if not Path(p).is_absolute() else p

        return self.model_copy(
            update={
                "schema_path": anchor(self.schema_path),
                "documents": [anchor(d) for d in self.documents],
                "output": anchor(self.output),
                "report": anchor(self.report) if self.report else None,
            }
        )


def load_config(path: str | Path) -> ProjectConfig:
    """Load a YAML project config; relative paths are resolved next to it."""
    path = Path(path)
    try:
        raw = yaml.safe_load(path.read_text())
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config {path} must be a mapping")
    try:
        config = ProjectConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e
    return config.resolve(path.parent)
