"""
Engine configuration.

Engine flags live in a single frozen value, built once and handed to
an Engine. Changing configuration means building a new
value (and a new Engine), never mutating one that is in use.

Flags consumed by the engine:
    alert_errors:
        True (default): failures render as inline markers and error panels.
        False: strict mode, errors propagate to the caller.
    allow_multi_set:
        Enables whitespace-separated value expressions and the
        values0/e0, values1/e1, ... bindings.
    debug:
        Log entry points and resolved value sets at debug level.

Presentation flags (carried for the page integration layer, not read by
the interpreter):
    show_processing_box, hide_body_on_process, show_processing_time
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping

import yaml

from ysttxt.errors import ConfigurationError


@dataclass(frozen=True)
class EngineConfig:
    alert_errors: bool = True
    allow_multi_set: bool = False
    debug: bool = False
    show_processing_box: bool = True
    hide_body_on_process: bool = False
    show_processing_time: bool = False

    def with_changes(self, **changes: Any) -> "EngineConfig":
        """Return a copy with *changes* applied (validated like config_from_dict)."""
        return config_from_dict({**config_to_dict(self), **changes})


# camelCase spelling used in page-level configuration blocks.
_CAMEL_CASE_KEYS = {
    "alertErrors": "alert_errors",
    "allowMultiSet": "allow_multi_set",
    "debug": "debug",
    "showProcessingBox": "show_processing_box",
    "hideBodyOnProcess": "hide_body_on_process",
    "showProcessingTime": "show_processing_time",
}


def config_from_dict(d: Mapping[str, Any] | None) -> EngineConfig:
    """Build an EngineConfig from a mapping with snake_case or camelCase keys."""
    if d is None:
        return EngineConfig()
    known = {f.name for f in fields(EngineConfig)}
    values: Dict[str, bool] = {}
    for key, value in d.items():
        name = _CAMEL_CASE_KEYS.get(key, key)
        if name not in known:
            raise ConfigurationError(f"Unknown configuration key: {key}")
        if not isinstance(value, bool):
            raise ConfigurationError(f"Configuration key {key} expects a boolean, got {value!r}")
        values[name] = value
    return replace(EngineConfig(), **values)


def config_to_dict(config: EngineConfig) -> Dict[str, bool]:
    return asdict(config)


def config_from_yaml(s: str) -> EngineConfig:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid configuration document: {exc}") from exc
    if d is not None and not isinstance(d, Mapping):
        raise ConfigurationError("Configuration document must be a mapping")
    return config_from_dict(d)


def config_to_yaml(config: EngineConfig) -> str:
    return yaml.safe_dump(config_to_dict(config))
