"""Runtime configuration.

Values come from an optional YAML file; non-empty environment variables
override them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from verdict.engine.taxonomy import DEFAULT_TAXONOMIES, Taxonomy, TaxonomyDomain, load_taxonomies
from verdict.errors import ConfigurationError

ENV_VARS: dict[str, str] = {
    "credentials_path": "GOOGLE_APPLICATION_CREDENTIALS",
    "taxonomy_path": "VERDICT_TAXONOMY",
    "log_level": "VERDICT_LOG_LEVEL",
}


@dataclass
class ModerationConfig:
    credentials_path: str = ""
    taxonomy_path: str = ""
    log_level: str = "INFO"

    def taxonomies(self) -> dict[TaxonomyDomain, Taxonomy]:
        """Taxonomy tables in effect: the file at ``taxonomy_path`` or the defaults."""
        if not self.taxonomy_path:
            return dict(DEFAULT_TAXONOMIES)
        return load_taxonomies(self.taxonomy_path)


def load_config(path: str | Path | None = None, environ: Optional[dict] = None) -> ModerationConfig:
    """Load a :class:`ModerationConfig` from *path* and the environment."""
    environ = os.environ if environ is None else environ
    values: dict[str, str] = {}

    if path is not None:
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationError(f"Cannot read config file {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        known = {f.name for f in fields(ModerationConfig)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown config keys: {', '.join(unknown)}")
        values.update({k: str(v) for k, v in data.items() if v is not None})

    for key, env_name in ENV_VARS.items():
        env_value = environ.get(env_name, "")
        if env_value:
            values[key] = env_value

    return ModerationConfig(**values)
