#!/usr/bin/env python3
"""
Configuration Management Module for DLMM Terminal
Loads the JSON config file, fills in missing defaults and applies
environment (.env) overrides on top
"""

import copy
import json
import os

from dotenv import load_dotenv

from .constants import DEFAULT_CONFIG, CONFIG_FILE, ENV_OVERRIDES
from .errors import ConfigError


def load_config(path=None, use_env=True):
    """Load configuration; a missing file means defaults only"""
    path = path or CONFIG_FILE
    config = copy.deepcopy(DEFAULT_CONFIG)

    if os.path.exists(path):
        try:
            with open(path, "r") as f:
                file_config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Error reading config file {path}: {e}") from e
        if not isinstance(file_config, dict):
            raise ConfigError(f"Config file {path} must contain a JSON object")
        update_config_with_defaults(file_config)
        config = file_config

    if use_env:
        load_dotenv()
        apply_env_overrides(config, os.environ)

    return config


def save_config(config, path=None):
    """Save configuration to JSON file"""
    path = path or CONFIG_FILE
    with open(path, "w") as f:
        json.dump(config, f, indent=4)
    return path


def update_config_with_defaults(config):
    """Fill in missing default values in place; True when anything was added"""
    updated = False

    def update_nested_dict(target, source):
        nonlocal updated
        for key, value in source.items():
            if key not in target:
                target[key] = copy.deepcopy(value)
                updated = True
            elif isinstance(value, dict) and isinstance(target[key], dict):
                update_nested_dict(target[key], value)

    update_nested_dict(config, DEFAULT_CONFIG)
    return updated


def apply_env_overrides(config, environ):
    """Non-empty environment variables win over file values"""
    for env_name, path in ENV_OVERRIDES.items():
        value = environ.get(env_name, "").strip()
        if not value:
            continue
        target = config
        for key in path[:-1]:
            target = target.setdefault(key, {})
        target[path[-1]] = value
    return config


def validate_config(config):
    """Raise ConfigError describing the first problem found"""
    for key in ("api_base_url", "rpc_url"):
        if not config.get(key):
            raise ConfigError(f"{key} is not set. Please edit {CONFIG_FILE}")

    timeout = config.get("request_timeout")
    if not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(f"request_timeout must be a positive number, got {timeout!r}")

    interval = config.get("watch", {}).get("interval")
    if not isinstance(interval, (int, float)) or interval <= 0:
        raise ConfigError(f"watch.interval must be a positive number, got {interval!r}")

    min_interval = config.get("notifications", {}).get("min_interval")
    if not isinstance(min_interval, (int, float)) or min_interval < 0:
        raise ConfigError(f"notifications.min_interval must be >= 0, got {min_interval!r}")

    return True
