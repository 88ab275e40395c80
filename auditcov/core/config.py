"""
Verifier settings and their YAML loader.

Settings only affect the command-line host: where extra action lists come
from, how loud logging is and whether warnings fail a CI run. The verifier
itself takes no configuration beyond its action registry.

Example auditcov.yaml:

    log_level: INFO
    log_file: .auditcov/auditcov.log
    fail_on_warning: ${AUDITCOV_STRICT:false}
    actions:
      - stream:create
    action_files:
      - audit_actions.txt
"""

import os
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, List, Optional

import yaml

from auditcov.core.exceptions import ConfigValidationError

DEFAULT_CONFIG_FILE = "auditcov.yaml"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_ENV_PATTERN = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")
_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off", ""}


@dataclass
class VerifierSettings:
    """Settings for the auditcov command-line host."""

    log_level: str = "WARNING"
    log_file: Optional[Path] = None
    actions: List[str] = field(default_factory=list)
    action_files: List[Path] = field(default_factory=list)
    fail_on_warning: bool = False


def expand_env_vars(value: Any) -> Any:
    """Recursively expand environment variables in config values.

    Strings may use ${VAR_NAME} or ${VAR_NAME:default}. Dictionaries and
    lists are expanded element by element; other values are returned
    unchanged.
    """
    if isinstance(value, str):

        def replace_env_var(match: re.Match) -> str:
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return _ENV_PATTERN.sub(replace_env_var, value)
    elif isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value


def _coerce_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ConfigValidationError(
        f"'{name}' must be a boolean, got {value!r}", field=name, value=value
    )


def _coerce_str_list(name: str, value: Any) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigValidationError(
            f"'{name}' must be a list of strings", field=name, value=value
        )
    return list(value)


def _validate_level(value: Any) -> str:
    level = str(value).upper()
    if level not in VALID_LOG_LEVELS:
        raise ConfigValidationError(
            f"Invalid log_level {value!r}, expected one of {', '.join(VALID_LOG_LEVELS)}",
            field="log_level",
            value=value,
        )
    return level


def settings_from_dict(data: dict, base_dir: Optional[Path] = None) -> VerifierSettings:
    """Build settings from a parsed mapping.

    Args:
        data: Mapping as read from YAML (environment references are expanded).
        base_dir: Directory relative paths are resolved against.

    Returns:
        Validated VerifierSettings.

    Raises:
        ConfigValidationError: On unknown keys or invalid values.
    """
    known = {f.name for f in fields(VerifierSettings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigValidationError(
            f"Unknown settings: {', '.join(unknown)}", field=unknown[0]
        )

    data = expand_env_vars(data)
    base = base_dir or Path.cwd()
    settings = VerifierSettings()

    if "log_level" in data:
        settings.log_level = _validate_level(data["log_level"])
    if data.get("log_file"):
        settings.log_file = base / str(data["log_file"])
    if "fail_on_warning" in data:
        settings.fail_on_warning = _coerce_bool(
            "fail_on_warning", data["fail_on_warning"]
        )
    settings.actions = _coerce_str_list("actions", data.get("actions"))
    settings.action_files = [
        base / p for p in _coerce_str_list("action_files", data.get("action_files"))
    ]
    return settings


def load_settings(path: Optional[Path] = None) -> VerifierSettings:
    """Load settings from a YAML file.

    Args:
        path: Settings file. Defaults to ./auditcov.yaml.

    Returns:
        VerifierSettings; defaults when the file does not exist.

    Raises:
        ConfigValidationError: If the file is not valid YAML or has bad values.
    """
    config_path = path or Path.cwd() / DEFAULT_CONFIG_FILE
    if not config_path.exists():
        return VerifierSettings()

    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigValidationError(f"Cannot read {config_path}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return VerifierSettings()
    if not isinstance(data, dict):
        raise ConfigValidationError(
            f"{config_path} must contain a mapping at the top level"
        )
    return settings_from_dict(data, base_dir=config_path.parent)
