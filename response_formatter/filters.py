from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Tuple

from .entity import Response, is_mapping
from .paths import split_path

logger = logging.getLogger(__name__)

# Marks a declared terminal field inside an inclusion tree.
LEAF = True

STRATEGY_DELETION = 'deletion'
STRATEGY_ACCUMULATE = 'accumulate'
STRATEGIES = (STRATEGY_DELETION, STRATEGY_ACCUMULATE)

PropertyFilter = Callable[[Response], None]


def build_dict_path(root: Dict[str, Any], parts: List[str]) -> Dict[str, Any]:
    """Walk ``parts`` from ``root``, creating mapping nodes where missing.

    An existing non-mapping value along the way is replaced by a new node.
    Returns the innermost node.
    """
    current = root
    for part in parts:
        nxt = current.get(part)
        if not is_mapping(nxt):
            nxt = {}
            current[part] = nxt
        current = nxt
    return current


def find_dict_path(root: Dict[str, Any], parts: List[str]):
    """Follow ``parts`` through nested mappings, or return None on a miss."""
    current = root
    for part in parts:
        current = current.get(part)
        if not is_mapping(current):
            return None
    return current


def build_inclusion_tree(paths: Iterable[str]) -> Dict[str, Any]:
    """Compile dot paths into a nested tree.

    Branch nodes are dictionaries, terminal segments map to ``LEAF``.
    Paths sharing a prefix share branch nodes. When one path is a prefix of
    another, whichever is compiled last decides the shape of the shared node.
    """
    tree: Dict[str, Any] = {}
    for path in paths:
        parts = split_path(path)
        if not parts:
            continue
        node = build_dict_path(tree, parts[:-1])
        node[parts[-1]] = LEAF
    return tree


def prune_by_inclusion(tree: Dict[str, Any], data: Dict[str, Any]) -> Tuple[Dict[str, Any], bool]:
    """Delete every field of ``data`` not reachable through ``tree``.

    ``data`` is pruned in place and returned together with a flag telling
    whether the whole subtree can be discarded, i.e. no declared leaf was
    found anywhere below this level. ``tree`` is only read.
    """
    can_discard = True
    for key in list(data):
        rule = tree.get(key)
        if rule is None:
            del data[key]
        elif is_mapping(rule):
            value = data[key]
            if not is_mapping(value):
                del data[key]
                continue
            _, discard_child = prune_by_inclusion(rule, value)
            if discard_child:
                del data[key]
            else:
                can_discard = False
        else:
            can_discard = False
    return data, can_discard


def select_by_inclusion(paths: Iterable[str], data: Dict[str, Any]) -> Dict[str, Any]:
    """Copy the declared fields of ``data`` into a new tree.

    Unlike ``prune_by_inclusion`` the input is left untouched; the kept
    values themselves are shared, not copied.
    """
    result: Dict[str, Any] = {}
    for path in paths:
        parts = split_path(path)
        if not parts:
            continue
        parent = find_dict_path(data, parts[:-1])
        if parent is None or parts[-1] not in parent:
            continue
        node = build_dict_path(result, parts[:-1])
        node[parts[-1]] = parent[parts[-1]]
    return result


def build_exclusion_table(paths: Iterable[str]) -> Dict[str, List[str]]:
    """Compile dot paths into ``{top_level_key: [sub_keys]}``.

    An empty list removes the whole top-level field. Only the first two
    segments of a path are used.
    """
    table: Dict[str, List[str]] = {}
    for path in paths:
        parts = split_path(path)
        if not parts:
            continue
        if len(parts) > 1:
            table.setdefault(parts[0], []).append(parts[1])
        else:
            table[parts[0]] = []
    return table


def prune_by_exclusion(table: Dict[str, List[str]], data: Dict[str, Any]) -> Dict[str, Any]:
    """Remove the fields named by ``table`` from ``data`` in place."""
    for key, sub_keys in table.items():
        if not sub_keys:
            data.pop(key, None)
            continue
        value = data.get(key)
        if not is_mapping(value):
            continue
        for sub_key in sub_keys:
            value.pop(sub_key, None)
    return data


def inclusion_filter(paths: Iterable[str], strategy: str = STRATEGY_DELETION) -> PropertyFilter:
    paths = list(paths)
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown whitelist strategy: {strategy!r}. Expected one of {', '.join(STRATEGIES)}.")
    logger.debug("Compiling whitelist of %d paths (%s)", len(paths), strategy)

    if strategy == STRATEGY_ACCUMULATE:
        def accumulate(entity: Response) -> None:
            entity.data = select_by_inclusion(paths, entity.data)

        return accumulate

    tree = build_inclusion_tree(paths)

    def delete(entity: Response) -> None:
        _, discard = prune_by_inclusion(tree, entity.data)
        if discard:
            logger.debug("No whitelisted field matched; dropping %d remaining keys", len(entity.data))
            entity.data.clear()

    return delete


def exclusion_filter(paths: Iterable[str]) -> PropertyFilter:
    table = build_exclusion_table(paths)
    logger.debug("Compiled blacklist for %d top-level fields", len(table))

    def exclude(entity: Response) -> None:
        prune_by_exclusion(table, entity.data)

    return exclude
