from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple

from .filters import STRATEGIES, STRATEGY_DELETION
from .io_utils import read_json_content

logger = logging.getLogger(__name__)

CONFIG_KEYS = ('target', 'whitelist', 'blacklist', 'group', 'mapping', 'strategy')


def _string(raw: Mapping[str, Any], key: str, default: str = '') -> str:
    value = raw.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string, got {type(value).__name__}.")
    return value


def _string_list(raw: Mapping[str, Any], key: str) -> Tuple[str, ...]:
    value = raw.get(key)
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ValueError(f"'{key}' must be a list of dot paths, got {type(value).__name__}.")
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"'{key}' entries must be strings, got {type(item).__name__}.")
    return tuple(value)


def _string_map(raw: Mapping[str, Any], key: str) -> Dict[str, str]:
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"'{key}' must be an object of field names, got {type(value).__name__}.")
    for k, v in value.items():
        if not isinstance(v, str):
            raise ValueError(f"'{key}.{k}' must be a string, got {type(v).__name__}.")
    return dict(value)


@dataclass(frozen=True)
class FormatterConfig:
    """Per-route formatter settings, as read from a backend's configuration."""

    target: str = ''
    whitelist: Tuple[str, ...] = ()
    blacklist: Tuple[str, ...] = ()
    group: str = ''
    mapping: Dict[str, str] = field(default_factory=dict)
    strategy: str = STRATEGY_DELETION

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "FormatterConfig":
        if raw is None:
            raw = {}
        if not isinstance(raw, Mapping):
            raise ValueError(f"Formatter config must be an object, got {type(raw).__name__}.")

        unknown = sorted(set(raw) - set(CONFIG_KEYS))
        if unknown:
            logger.warning("Ignoring unknown formatter config keys: %s", ', '.join(unknown))

        strategy = _string(raw, 'strategy', STRATEGY_DELETION)
        if strategy not in STRATEGIES:
            raise ValueError(f"'strategy' must be one of {', '.join(STRATEGIES)}, got {strategy!r}.")

        config = cls(
            target=_string(raw, 'target'),
            whitelist=_string_list(raw, 'whitelist'),
            blacklist=_string_list(raw, 'blacklist'),
            group=_string(raw, 'group'),
            mapping=_string_map(raw, 'mapping'),
            strategy=strategy,
        )
        if config.whitelist and config.blacklist:
            logger.warning("Both whitelist and blacklist configured; the blacklist is ignored.")
        return config


def load_config(file_obj) -> FormatterConfig:
    """Read a formatter config from an uploaded file or a file path."""
    return FormatterConfig.from_dict(read_json_content(file_obj))
