"""Generator settings.

Defaults can be overridden by environment variables, and the CLI
overrides both:

  SCAFFOLD_TARGET     code generation target (fastapi | axum)
  SCAFFOLD_LOG_LEVEL  logging level name (DEBUG, INFO, ...)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

from .dialects import TARGET_DIALECTS, Dialect, get_dialect
from .errors import ScaffoldError
from .routes import DEFAULT_SCHEMA, DEFAULT_TAG

DEFAULT_TARGET = "fastapi"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class ScaffoldConfig:
    target: str = DEFAULT_TARGET
    default_tag: str = DEFAULT_TAG
    default_schema: str = DEFAULT_SCHEMA
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        if self.target not in TARGET_DIALECTS:
            known = ", ".join(sorted(TARGET_DIALECTS))
            raise ScaffoldError(f"unknown target {self.target!r} (known: {known})")

    @property
    def dialect(self) -> Dialect:
        return get_dialect(self.target)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "ScaffoldConfig":
        """Build a config from SCAFFOLD_* environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            target=env.get("SCAFFOLD_TARGET", DEFAULT_TARGET),
            log_level=env.get("SCAFFOLD_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )

    def with_overrides(self, **overrides) -> "ScaffoldConfig":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
