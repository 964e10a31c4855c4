"""Layered configuration: a YAML file overridden by environment variables."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml

_ALIASES = {"stripe-key": "STRIPE_KEY"}
_DEFAULT_PATHS = ("../common/config",)
_CONFIG_NAME = "global"


class Config:
    """Read-only view of configuration values addressed by dotted keys."""

    def __init__(self, data: Mapping[str, Any] | None = None,
                 environ: Mapping[str, str] | None = None, prefix: str = ""):
        self._data = dict(data or {})
        self._environ = dict(environ or {})
        self._prefix = prefix

    def _lookup(self, key: str) -> Any:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, Mapping):
                return None
            matched = next((v for k, v in node.items() if str(k).lower() == part.lower()), None)
            if matched is None:
                return None
            node = matched
        return node

    def _env_value(self, full_key: str) -> str | None:
        alias = _ALIASES.get(full_key.lower())
        if alias and alias in self._environ:
            return self._environ[alias]
        name = full_key.upper().replace("-", "_").replace(".", "_")
        return self._environ.get(name)

    def get(self, key: str, default: Any = None) -> Any:
        env = self._env_value(self._prefix + key)
        if env is not None:
            return env
        value = self._lookup(key)
        return default if value is None else value

    def get_string(self, key: str) -> str:
        value = self.get(key)
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def sub(self, key: str) -> "Config":
        value = self._lookup(key)
        data = value if isinstance(value, Mapping) else {}
        return Config(data, self._environ, prefix=f"{self._prefix}{key}.")


def load_config(paths=None, environ=None) -> Config:
    """Find global.yaml in the given directories and build a Config."""
    env = dict(os.environ if environ is None else environ)
    for directory in paths or _DEFAULT_PATHS:
        for suffix in (".yaml", ".yml"):
            candidate = Path(directory) / f"{_CONFIG_NAME}{suffix}"
            if candidate.is_file():
                with candidate.open(encoding="utf-8") as fh:
                    data = yaml.safe_load(fh) or {}
                return Config(data, env)
    raise FileNotFoundError(f'config file "{_CONFIG_NAME}" not found')