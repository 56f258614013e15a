"""
Config loading - layered engine configuration.

Merge order (later overrides earlier):
1. Defaults
2. Config file (YAML or JSON; keys may sit under a `templates:` section)
3. .env file (QUIRE_* entries)
4. Environment variables (QUIRE_* prefix)
5. Manual overrides

Example:
    # quire.yaml
    templates:
      root: views
      partials: views/partials
      cache: true
      pipes: [iif, br]

    options = load_options("quire.yaml")
    engine = TemplateEngine(DirectoryStore("assets"), config=options)
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import dotenv_values

from .faults import ConfigInvalidFault
from .options import (
    Option,
    TemplateOptions,
    with_autoescape,
    with_cache,
    with_delimiters,
    with_dev,
    with_encoding,
    with_extension,
    with_partials,
    with_root,
    with_sandbox,
)
from .pipes import PIPES


ENV_PREFIX = "QUIRE_"

_STRING_KEYS = {
    "root": with_root,
    "partials": with_partials,
    "extension": with_extension,
    "encoding": with_encoding,
}

_FLAG_KEYS = {
    "dev": with_dev,
    "cache": with_cache,
    "autoescape": with_autoescape,
    "sandbox": with_sandbox,
}


def load_options(
    path: Optional[str] = None,
    *,
    env_prefix: str = ENV_PREFIX,
    env_file: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
    environ: Optional[Dict[str, str]] = None,
) -> TemplateOptions:
    """
    Load engine configuration from all sources.

    Args:
        path: YAML or JSON config file
        env_prefix: Prefix of environment variables to read
        env_file: Path to .env file
        overrides: Manual overrides (highest precedence)
        environ: Environment to read instead of os.environ

    Returns:
        Immutable engine options

    Raises:
        ConfigInvalidFault: If a key is unknown or a value malformed
    """
    data: Dict[str, Any] = {}

    if path:
        _merge_dict(data, _load_file(Path(path)))

    if env_file and Path(env_file).exists():
        _merge_dict(data, _from_env(dotenv_values(env_file), env_prefix))

    _merge_dict(data, _from_env(os.environ if environ is None else environ, env_prefix))

    if overrides:
        _merge_dict(data, overrides)

    return TemplateOptions().apply(*options_from_mapping(data))


def options_from_mapping(data: Dict[str, Any]) -> List[Option]:
    """
    Translate a configuration mapping into option functions.

    Raises:
        ConfigInvalidFault: If a key is unknown or a value malformed
    """
    options: List[Option] = []

    for key, value in data.items():
        if key in _STRING_KEYS:
            if not isinstance(value, str):
                raise ConfigInvalidFault(key, "expected a string")
            options.append(_STRING_KEYS[key](value))

        elif key in _FLAG_KEYS:
            if not isinstance(value, bool):
                raise ConfigInvalidFault(key, "expected a boolean")
            options.append(_FLAG_KEYS[key](value))

        elif key == "delimiters":
            if not isinstance(value, (list, tuple)) or len(value) != 2:
                raise ConfigInvalidFault(key, "expected a [left, right] pair")
            options.append(_delimiters(key, value[0], value[1]))

        elif key in ("left_delim", "right_delim"):
            continue

        elif key == "pipes":
            if isinstance(value, str):
                value = [name.strip() for name in value.split(",") if name.strip()]
            for name in value:
                if name not in PIPES:
                    raise ConfigInvalidFault(key, f"unknown pipe '{name}'")
                options.append(PIPES[name]())

        else:
            raise ConfigInvalidFault(key, "unknown configuration key")

    if "left_delim" in data or "right_delim" in data:
        options.append(_delimiters(
            "left_delim" if "left_delim" in data else "right_delim",
            data.get("left_delim", "{{"),
            data.get("right_delim", "}}"),
        ))

    return options


def _delimiters(key: str, left: Any, right: Any) -> Option:
    try:
        return with_delimiters(str(left), str(right))
    except ValueError as e:
        raise ConfigInvalidFault(key, str(e)) from None


def _load_file(path: Path) -> Dict[str, Any]:
    """Load config from YAML or JSON file."""
    with open(path) as f:
        if path.suffix == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigInvalidFault(str(path), "config file must contain a mapping")

    section = data.get("templates", data)
    if not isinstance(section, dict):
        raise ConfigInvalidFault("templates", "expected a mapping")
    return dict(section)


def _from_env(environ: Dict[str, Optional[str]], prefix: str) -> Dict[str, Any]:
    """Collect QUIRE_ROOT=views style entries into config keys."""
    data: Dict[str, Any] = {}
    for key, value in environ.items():
        if not key.startswith(prefix) or value is None:
            continue
        name = key[len(prefix):].lower()
        data[name] = _parse_value(name, value)
    return data


def _parse_value(name: str, value: str) -> Any:
    """Parse string value to appropriate type."""
    if name in _FLAG_KEYS:
        if value.lower() in ("true", "yes", "1", "on"):
            return True
        if value.lower() in ("false", "no", "0", "off"):
            return False
        raise ConfigInvalidFault(name, f"cannot parse '{value}' as a boolean")

    # JSON
    if value.startswith(("{", "[")):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            pass

    return value


def _merge_dict(target: dict, source: dict):
    """Deep merge source into target."""
    for key, value in source.items():
        if key in target and isinstance(target[key], dict) and isinstance(value, dict):
            _merge_dict(target[key], value)
        else:
            target[key] = value
