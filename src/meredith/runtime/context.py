"""Application context holding the active configuration.

The configuration is kept in a ``ContextVar`` so tests and CLI commands can
swap it for the duration of a block without touching module globals.
"""

import os
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from src.meredith.runtime.config.config_data import ConfigData
from src.meredith.runtime.config.config_template import load_templated_yaml

CONFIG_FILE_ENV = "APP_CONFIG_FILE"


@dataclass(frozen=True)
class AppContext:
    """Process-wide state visible to services."""

    config: ConfigData


def load_config(path: Path | None = None) -> ConfigData:
    """Load ``config.yaml`` (or ``$APP_CONFIG_FILE``); defaults when absent."""
    path = path or Path(os.getenv(CONFIG_FILE_ENV, "config.yaml"))
    if not path.exists():
        return ConfigData()
    return load_templated_yaml(path)


_app_context: ContextVar[AppContext] = ContextVar(
    "meredith_app_context", default=AppContext(config=load_config())
)


def get_context() -> AppContext:
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    return _app_context.set(context)


def get_config() -> ConfigData:
    """Return the configuration of the current context."""
    return get_context().config


def set_config(config: ConfigData) -> None:
    """Replace the configuration of the current context wholesale."""
    set_context(replace(get_context(), config=config))


def _explicit_values(model: BaseModel) -> dict[str, Any]:
    """Collect the fields a caller actually set, descending into sub-models.

    A sub-model counts as set when any field below it was set, or when the
    sub-model itself was passed explicitly.
    """
    values: dict[str, Any] = {}
    for name in type(model).model_fields:
        value = getattr(model, name)
        if isinstance(value, BaseModel):
            nested = _explicit_values(value)
            if nested:
                values[name] = nested
            elif name in model.model_fields_set:
                values[name] = value.model_dump()
        elif name in model.model_fields_set:
            values[name] = value
    return values


def _deep_merge(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in updates.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def merge_config(base: ConfigData, override: ConfigData) -> ConfigData:
    """Overlay the explicitly set values of ``override`` on ``base``."""
    merged = _deep_merge(base.model_dump(), _explicit_values(override))
    return ConfigData.model_validate(merged)


@contextmanager
def with_context(config_override: ConfigData | None = None) -> Iterator[None]:
    """Run a block with a partially overridden configuration.

    Only fields set on ``config_override`` change; everything else keeps the
    value of the enclosing context::

        with with_context(ConfigData(jwt=JWTConfig(secret="test-secret"))):
            assert get_config().jwt.secret == "test-secret"
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    current = get_context()
    token = set_context(replace(current, config=merge_config(current.config, config_override)))
    try:
        yield
    finally:
        _app_context.reset(token)
