"""Application settings loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


def _parse_mapping(raw: str) -> dict[str, str]:
    """Parse ``"a=level1,b=level2"`` into a dict, skipping malformed pairs."""
    mapping: dict[str, str] = {}
    for pair in raw.split(","):
        name, sep, value = pair.partition("=")
        if sep and name.strip() and value.strip():
            mapping[name.strip()] = value.strip()
    return mapping


@dataclass(frozen=True)
class CosmosConfig:
    endpoint: str = field(default_factory=lambda: _env("COSMOS_ENDPOINT"))
    key: str = field(default_factory=lambda: _env("COSMOS_KEY"))
    database: str = field(default_factory=lambda: _env("COSMOS_DATABASE", "gutcheck-content"))


@dataclass(frozen=True)
class ContentConfig:
    """Content resolution settings.

    ``level_aliases`` maps legacy avatar identifiers onto canonical
    ``level1``..``level4`` keys for the bundled results packs.
    """

    level_aliases: dict[str, str] = field(
        default_factory=lambda: _parse_mapping(_env("RESULTS_LEVEL_ALIASES"))
    )
    default_assessment_type: str = field(
        default_factory=lambda: _env("DEFAULT_ASSESSMENT_TYPE", "gut-check")
    )


@dataclass(frozen=True)
class AppConfig:
    env: str = field(default_factory=lambda: _env("APP_ENV", "production"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: _env("LOG_FILE"))
    session_secret: str = field(default_factory=lambda: _env("SESSION_SECRET"))
    host: str = field(default_factory=lambda: _env("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(_env("PORT", "8000")))

    @property
    def is_development(self) -> bool:
        return self.env == "development"


@dataclass(frozen=True)
class Settings:
    cosmos: CosmosConfig = field(default_factory=CosmosConfig)
    content: ContentConfig = field(default_factory=ContentConfig)
    app: AppConfig = field(default_factory=AppConfig)


def load_settings() -> Settings:
    """Build settings from the current process environment."""
    return Settings()
