"""
Run configuration for apkfetch.

A DownloadConfig is built once at the entry point from (lowest to highest
precedence) defaults, a YAML config file, GitHub Actions style `INPUT_*`
environment inputs, and command-line flags, then passed to the components.
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import platformdirs
import yaml

from apkfetch.constants import (
    ACTIONS_INPUT_PREFIX,
    APKMIRROR_BASE_URL,
    APP_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_REQUEST_TIMEOUT,
)
from apkfetch.exceptions import ConfigFileError, ConfigValidationError

# Config directory using platformdirs
CONFIG_DIR = platformdirs.user_config_dir(APP_NAME)
CONFIG_FILE = os.path.join(CONFIG_DIR, CONFIG_FILE_NAME)

# Alternate spellings accepted in mappings (action input names)
KEY_ALIASES = {
    "versionPattern": "version_pattern",
    "includePrerelease": "include_prerelease",
    "outputDir": "output_dir",
    "baseUrl": "base_url",
    "requestTimeout": "request_timeout",
    "logLevel": "log_level",
}

# Action inputs read from the environment, keyed by field name
ACTION_INPUTS = {
    "org": "org",
    "repo": "repo",
    "version": "version",
    "version_pattern": "versionPattern",
    "include_prerelease": "includePrerelease",
    "bundle": "bundle",
    "arch": "arch",
    "dpi": "dpi",
    "filename": "filename",
    "overwrite": "overwrite",
}

_TRUE_VALUES = ("true", "True", "TRUE")
_FALSE_VALUES = ("false", "False", "FALSE")
_BOOL_FIELDS = ("include_prerelease", "bundle", "overwrite")
_STRING_FIELDS = (
    "org",
    "repo",
    "version",
    "version_pattern",
    "arch",
    "dpi",
    "filename",
    "output_dir",
    "base_url",
    "log_level",
)


def parse_bool(value: Any, name: str = "value") -> bool:
    """
    Parse a boolean input.

    Accepts real booleans and the YAML 1.2 core schema spellings
    (true/True/TRUE/false/False/FALSE).

    Raises:
        ConfigValidationError: For any other value.
    """
    if isinstance(value, bool):
        return value
    text = str(value).strip()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigValidationError(
        f"Input does not meet YAML 1.2 \"Core Schema\" specification: {name}",
        details="Support boolean input list: `true | True | TRUE | false | False | FALSE`",
    )


def _clean(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


@dataclass(frozen=True)
class DownloadConfig:
    """Every input of one resolution run."""

    org: str
    repo: str
    version: Optional[str] = None
    version_pattern: Optional[str] = None
    include_prerelease: bool = False
    bundle: bool = False
    arch: Optional[str] = None
    dpi: Optional[str] = None
    filename: Optional[str] = None
    overwrite: bool = True
    output_dir: str = "."
    base_url: str = APKMIRROR_BASE_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    log_level: Optional[str] = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "DownloadConfig":
        """
        Build a config from a mapping of inputs.

        Keys may be field names or the action's camelCase names. Strings are trimmed,
        empty strings and None count as absent, unknown keys are ignored.

        Raises:
            ConfigValidationError: If org/repo are missing or a value is malformed.
        """
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, raw in mapping.items():
            name = KEY_ALIASES.get(key, key)
            if name not in known:
                continue
            value = _clean(raw)
            if value is None:
                continue
            values[name] = value

        for name in ("org", "repo"):
            if not values.get(name):
                raise ConfigValidationError(f"Input required and not supplied: {name}")

        for name in _BOOL_FIELDS:
            if name in values:
                values[name] = parse_bool(values[name], name)

        if "request_timeout" in values:
            try:
                timeout = float(values["request_timeout"])
            except (TypeError, ValueError) as e:
                raise ConfigValidationError(
                    f"Invalid request timeout: {values['request_timeout']}"
                ) from e
            if timeout <= 0:
                raise ConfigValidationError(
                    f"Request timeout must be positive: {timeout}"
                )
            values["request_timeout"] = timeout

        for name in _STRING_FIELDS:
            if name in values:
                values[name] = str(values[name])

        return cls(**values)


def load_config_file(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load a YAML config file.

    Parameters:
        path (Optional[str]): Explicit file to read. When omitted, the platformdirs
            config file is read if it exists.

    Returns:
        dict: The parsed mapping; empty when no file applies.

    Raises:
        ConfigFileError: If an explicit file is missing, or any file is unreadable or not a mapping.
    """
    if path is None:
        if not os.path.exists(CONFIG_FILE):
            return {}
        path = CONFIG_FILE
    elif not os.path.exists(path):
        raise ConfigFileError(f"Configuration file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigFileError(f"Failed to load configuration: {path}", details=str(e)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigFileError(
            f"Configuration file must contain a mapping: {path}",
            details=f"got {type(data).__name__}",
        )
    return data


def inputs_from_env(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Read action inputs from `INPUT_<NAME>` environment variables.

    Names are upper-cased with spaces replaced by underscores, e.g. `INPUT_VERSIONPATTERN`.
    Unset and empty variables are omitted.
    """
    environ = os.environ if environ is None else environ
    inputs = {}
    for field_name, input_name in ACTION_INPUTS.items():
        env_name = ACTIONS_INPUT_PREFIX + input_name.replace(" ", "_").upper()
        value = environ.get(env_name, "")
        if value.strip():
            inputs[field_name] = value
    return inputs


def build_config(*layers: Optional[Mapping[str, Any]]) -> DownloadConfig:
    """
    Merge input layers (later layers win) into a DownloadConfig.

    Empty values in a later layer never override a value from an earlier one.
    """
    merged: Dict[str, Any] = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            if _clean(value) is None:
                continue
            merged[KEY_ALIASES.get(key, key)] = value
    return DownloadConfig.from_mapping(merged)


def default_output_dir(config: DownloadConfig) -> Path:
    return Path(config.output_dir).expanduser()
