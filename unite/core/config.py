"""Global configuration for unite.

Manages default settings for code emission and the CLI.
Settings can be overridden via environment variables or explicit configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class UniteConfig:
    """Top-level configuration for unite."""

    # Emission
    indent: int = 4
    emit_docs: bool = True
    runtime_module: str = "unite.runtime"

    # Logging
    log_level: str = "WARNING"

    @property
    def indent_unit(self) -> str:
        return " " * self.indent

    @classmethod
    def from_env(cls) -> UniteConfig:
        """Build config from environment variables, falling back to defaults."""
        config = cls()

        if val := os.environ.get("UNITE_INDENT"):
            config.indent = int(val)
        if val := os.environ.get("UNITE_EMIT_DOCS"):
            config.emit_docs = val.strip().lower() in _TRUTHY
        if val := os.environ.get("UNITE_RUNTIME_MODULE"):
            config.runtime_module = val
        if val := os.environ.get("UNITE_LOG_LEVEL"):
            config.log_level = val.upper()

        return config


# Module-level singleton
_config: UniteConfig | None = None


def get_config() -> UniteConfig:
    """Return the global unite config, lazily initialized from env."""
    global _config
    if _config is None:
        _config = UniteConfig.from_env()
    return _config


def set_config(config: UniteConfig | None) -> None:
    """Override the global config (useful in tests). None resets to env defaults."""
    global _config
    _config = config
