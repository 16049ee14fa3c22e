"""
Pipeline configuration.

Defaults live in DEFAULT_CONFIG; a JSON config file may override any of
them. Source paths are relative to data_dir unless absolute.
"""

import copy
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .constants import (
    COUNTRIES_FILE,
    COUNTRIES_URL,
    COUNTRY_LANGUAGES_FILE,
    COUNTRY_PATCH_FILE,
    DUPLICATE_FIRST,
    DUPLICATE_LAST,
    DUPLICATE_POLICY,
    LANGUAGE_PATCH_FILE,
    LANGUAGES_FILE,
    OUTPUT_DIR,
    TIMEZONES_FILE,
    TRANSLATIONS_FILE,
)

DEFAULT_CONFIG = {
    'data_dir': '.',
    'output_dir': OUTPUT_DIR,
    'countries_url': COUNTRIES_URL,
    'fetch_timeout': None,
    'duplicate_policy': DUPLICATE_POLICY,
    'sources': {
        'countries': COUNTRIES_FILE,
        'timezones': TIMEZONES_FILE,
        'languages': LANGUAGES_FILE,
        'country_languages': COUNTRY_LANGUAGES_FILE,
        'language_patches': [LANGUAGE_PATCH_FILE],
        'country_patches': [COUNTRY_PATCH_FILE],
        'translations': TRANSLATIONS_FILE,
    },
}

# Sources that accept a list of files
LIST_SOURCES = ('language_patches', 'country_patches')


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load pipeline configuration.

    Args:
        config_path: Optional JSON file overriding DEFAULT_CONFIG

    Returns:
        Validated configuration dict

    Raises:
        ValueError: On unknown keys or invalid values
        OSError, json.JSONDecodeError: If the config file can't be read
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path is not None:
        with open(config_path, encoding='utf-8') as f:
            overrides = json.load(f)
        if not isinstance(overrides, dict):
            raise ValueError(f"Config file must contain a JSON object: {config_path}")
        config = merge_config(config, overrides)

    validate_config(config)
    return config


def merge_config(config: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay overrides on config. 'sources' is merged key by key."""
    merged = copy.deepcopy(config)
    for key, value in overrides.items():
        if key not in DEFAULT_CONFIG:
            raise ValueError(f"Unknown config field: {key}")
        if key == 'sources':
            if not isinstance(value, dict):
                raise ValueError("Config field 'sources' must be an object")
            merged['sources'].update(value)
        else:
            merged[key] = value
    return merged


def validate_config(config: Dict[str, Any]) -> None:
    """Raise ValueError if config holds an invalid value."""
    policy = config.get('duplicate_policy')
    if policy not in (DUPLICATE_FIRST, DUPLICATE_LAST):
        raise ValueError(
            f"Invalid duplicate_policy: {policy!r} "
            f"(expected '{DUPLICATE_FIRST}' or '{DUPLICATE_LAST}')"
        )

    for key in ('data_dir', 'output_dir', 'countries_url'):
        if not isinstance(config.get(key), str):
            raise ValueError(f"Config field '{key}' must be a string, got {config.get(key)!r}")

    for name, value in config['sources'].items():
        if name not in DEFAULT_CONFIG['sources']:
            raise ValueError(f"Unknown source: {name}")
        if name in LIST_SOURCES:
            if not isinstance(value, list) or not all(isinstance(p, str) for p in value):
                raise ValueError(f"Source '{name}' must be a list of paths")
        elif value is not None and not isinstance(value, str):
            raise ValueError(f"Source '{name}' must be a path or null")

    timeout = config.get('fetch_timeout')
    if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, (int, float))):
        raise ValueError(f"Invalid fetch_timeout: {timeout!r}")


def resolve_path(config: Dict[str, Any], path: Union[str, Path]) -> Path:
    """Resolve a config path against data_dir."""
    path = Path(path)
    if path.is_absolute():
        return path
    return Path(config['data_dir']) / path


def source_path(config: Dict[str, Any], name: str) -> Optional[Path]:
    """Resolved path of a single-file source, or None if disabled."""
    value = config['sources'].get(name)
    if value is None:
        return None
    return resolve_path(config, value)


def source_paths(config: Dict[str, Any], name: str) -> List[Path]:
    """Resolved paths of a list source."""
    return [resolve_path(config, p) for p in config['sources'].get(name) or []]


def output_dir(config: Dict[str, Any]) -> Path:
    """Resolved output directory."""
    return resolve_path(config, config['output_dir'])
