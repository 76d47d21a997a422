from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from .config import FormatterConfig
from .entity import Response, is_mapping
from .filters import STRATEGY_DELETION, exclusion_filter, inclusion_filter
from .paths import first_segment

logger = logging.getLogger(__name__)


class EntityFormatter(ABC):
    """Anything that shapes one Response into another."""

    @abstractmethod
    def format(self, entity: Response) -> Response:
        ...


class FormatterFunc(EntityFormatter):
    """Adapt a plain function to the EntityFormatter interface."""

    def __init__(self, func: Callable[[Response], Response]):
        self.func = func

    def format(self, entity: Response) -> Response:
        return self.func(entity)


def extract_target(target: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """Return the mapping stored under ``target``, or an empty mapping."""
    value = data.get(target)
    if is_mapping(value):
        return value
    logger.debug("Target %r missing or not an object; nothing survives", target)
    return {}


def rename_fields(mapping: Mapping[str, str], data: Dict[str, Any]) -> Dict[str, Any]:
    """Move top-level values to their new keys, in place."""
    for old_key, new_key in mapping.items():
        if old_key in data:
            value = data.pop(old_key)
            data[new_key] = value
    return data


def group_under(group: str, data: Dict[str, Any]) -> Dict[str, Any]:
    return {group: data}


class ResponseFormatter(EntityFormatter):
    """Extract, filter, rename and group backend response data.

    Everything configurable is compiled here, once. Instances hold no
    per-call state and can be shared between threads, as long as each call
    gets its own data tree: ``format`` mutates the tree it is given.
    """

    def __init__(
        self,
        target: str = '',
        whitelist: Iterable[str] = (),
        blacklist: Iterable[str] = (),
        group: str = '',
        mapping: Optional[Mapping[str, str]] = None,
        strategy: str = STRATEGY_DELETION,
    ):
        whitelist = list(whitelist or ())
        self.target = target or ''
        self.group = group or ''
        if whitelist:
            self.property_filter = inclusion_filter(whitelist, strategy)
        else:
            self.property_filter = exclusion_filter(blacklist or ())
        # Only the first segment of a destination is honoured.
        self.mapping = {k: first_segment(v) for k, v in (mapping or {}).items()}

    def format(self, entity: Response) -> Response:
        entity = replace(entity)
        if self.target:
            entity.data = extract_target(self.target, entity.data)
        if entity.data:
            self.property_filter(entity)
        if entity.data:
            rename_fields(self.mapping, entity.data)
        if self.group:
            entity.data = group_under(self.group, entity.data)
        return entity


def new_entity_formatter(config: FormatterConfig) -> ResponseFormatter:
    return ResponseFormatter(
        target=config.target,
        whitelist=config.whitelist,
        blacklist=config.blacklist,
        group=config.group,
        mapping=config.mapping,
        strategy=config.strategy,
    )
