"""Configuration for INSERT assembly.

Builders read their defaults from an :class:`InsertConfig`. A process-wide
default is available through :func:`get_global_config` and can be replaced
with :func:`set_global_config` or loaded from ``SQLBATCH_*`` environment
variables with :func:`load_config_from_env`.
"""

import os
import threading
from dataclasses import dataclass, replace
from typing import Any, Optional, Union

from sqlglot.dialects.dialect import DialectType

from sqlbatch.exceptions import ImproperConfigurationError
from sqlbatch.parameters import ParameterStyle
from sqlbatch.resolution import DEFAULT_PARAMETER_PREFIX
from sqlbatch.utils.logging import get_logger

__all__ = (
    "InsertConfig",
    "get_global_config",
    "load_config_from_env",
    "reset_global_config",
    "set_global_config",
)

logger = get_logger("sqlbatch.config")

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True)
class InsertConfig:
    """Settings applied when a builder assembles a statement.

    Attributes:
        dialect: sqlglot dialect used by the default platform.
        parameter_prefix: Prefix of generated placeholder names.
        parameter_style: Placeholder style used by :meth:`InsertMultiple.build`.
        enable_literal_cache: Reuse rendered scalar literals per column.
    """

    dialect: Optional[DialectType] = None
    parameter_prefix: str = DEFAULT_PARAMETER_PREFIX
    parameter_style: Union[ParameterStyle, str] = ParameterStyle.NAMED_COLON
    enable_literal_cache: bool = True

    def __post_init__(self) -> None:
        if not self.parameter_prefix or not self.parameter_prefix.isidentifier():
            msg = f"parameter_prefix must be a valid identifier, got {self.parameter_prefix!r}"
            raise ImproperConfigurationError(msg)
        try:
            object.__setattr__(self, "parameter_style", ParameterStyle(self.parameter_style))
        except ValueError as exc:
            msg = f"Unknown parameter style: {self.parameter_style!r}"
            raise ImproperConfigurationError(msg) from exc

    def replace(self, **changes: Any) -> "InsertConfig":
        """Return a copy with the given fields changed."""
        return replace(self, **changes)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    msg = f"Environment variable {name} must be a boolean, got {raw!r}"
    raise ImproperConfigurationError(msg)


def load_config_from_env() -> InsertConfig:
    """Load configuration from environment variables.

    Environment Variables Supported:
    - SQLBATCH_DIALECT: sqlglot dialect name (string)
    - SQLBATCH_PARAMETER_PREFIX: Placeholder name prefix (string)
    - SQLBATCH_PARAMETER_STYLE: Parameter style value, e.g. ``qmark`` (string)
    - SQLBATCH_ENABLE_LITERAL_CACHE: Enable/disable literal caching (true/false)

    Returns:
        InsertConfig loaded from environment variables
    """
    config = InsertConfig(
        dialect=os.getenv("SQLBATCH_DIALECT") or None,
        parameter_prefix=os.getenv("SQLBATCH_PARAMETER_PREFIX", DEFAULT_PARAMETER_PREFIX),
        parameter_style=os.getenv("SQLBATCH_PARAMETER_STYLE", ParameterStyle.NAMED_COLON.value),
        enable_literal_cache=_env_bool("SQLBATCH_ENABLE_LITERAL_CACHE", True),
    )
    logger.debug("Loaded configuration from environment: %r", config)
    return config


_config_lock = threading.Lock()
_global_config: Optional[InsertConfig] = None


def get_global_config() -> InsertConfig:
    """Return the process-wide default configuration, creating it on first use."""
    global _global_config  # noqa: PLW0603
    with _config_lock:
        if _global_config is None:
            _global_config = InsertConfig()
        return _global_config


def set_global_config(config: InsertConfig) -> None:
    global _global_config  # noqa: PLW0603
    with _config_lock:
        _global_config = config
    logger.debug("Global configuration replaced: %r", config)


def reset_global_config() -> None:
    global _global_config  # noqa: PLW0603
    with _config_lock:
        _global_config = None
