"""Loading of ``config.yaml`` with environment variable substitution.

Placeholders:

- ``${NAME}``: required, fails when ``NAME`` is unset
- ``${NAME:-default}``: ``default`` when ``NAME`` is unset
- ``${NAME:?message}``: required, fails with ``message``
"""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from src.meredith.runtime.config.config_data import ConfigData

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


def _resolve(expression: str) -> str:
    if ":-" in expression:
        name, default = expression.split(":-", 1)
        return os.getenv(name, default)

    if ":?" in expression:
        name, message = expression.split(":?", 1)
        detail = f"{name}: {message}"
    else:
        name, detail = expression, f"{expression} not set"

    value = os.getenv(name)
    if value is None:
        raise ValueError(f"Required environment variable {detail}")
    return value


def substitute_env_vars(text: str) -> str:
    """Replace every ``${...}`` placeholder in ``text``."""
    return _PLACEHOLDER.sub(lambda match: _resolve(match.group(1)), text)


def _strip_comment_lines(text: str) -> str:
    # Placeholders quoted in documentation comments must not be resolved
    return "\n".join(line for line in text.splitlines() if not line.lstrip().startswith("#"))


def apply_environment_overrides(env_mode: str) -> list[str]:
    """Promote ``<ENV_MODE>_``-prefixed variables to their unprefixed names.

    ``PRODUCTION_DATABASE_URL`` becomes ``DATABASE_URL`` when running with
    ``APP_ENVIRONMENT=production``. Returns the names that were set.
    """
    prefix = f"{env_mode.upper()}_"
    promoted = {
        name[len(prefix):]: value
        for name, value in os.environ.items()
        if name.startswith(prefix) and len(name) > len(prefix)
    }
    os.environ.update(promoted)
    for name in promoted:
        logger.debug("Environment override {} <- {}{}", name, prefix, name)
    return list(promoted)


def load_templated_yaml(file_path: Path) -> ConfigData:
    """Read ``file_path``, substitute placeholders and validate the ``config`` section.

    Raises:
        FileNotFoundError: the file does not exist
        ValueError: a required variable is missing, the YAML is malformed or
            the values do not validate
    """
    content = Path(file_path).read_text()

    env_mode = os.getenv("APP_ENVIRONMENT", "development")
    overrides = apply_environment_overrides(env_mode)
    logger.info("Loading {} for {} (overrides: {})", file_path, env_mode, overrides or "none")

    try:
        document = yaml.safe_load(substitute_env_vars(_strip_comment_lines(content)))
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e
    if not document:
        raise ValueError(f"Failed to parse YAML: {file_path} is empty")

    try:
        return ConfigData.model_validate(document.get("config") or {})
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e
