from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List

from .entity import Response
from .formatter import ResponseFormatter
from .io_utils import dump_json_text, read_json_content, read_json_text, write_json_file
from .paths import split_path_list

logger = logging.getLogger(__name__)


def load_payload_handler(file_obj):
    if file_obj is None:
        return None, "", "No file uploaded."

    try:
        payload = read_json_content(file_obj)
    except Exception as e:
        logger.warning("Could not parse uploaded payload: %s", e)
        return None, "", f"Error parsing JSON: {str(e)}"

    if not isinstance(payload, dict):
        return payload, dump_json_text(payload), "Loaded, but the top level is not an object; formatting will yield {}."
    return payload, dump_json_text(payload), f"Successfully loaded. Found {len(payload)} top-level fields."


def parse_mapping_table(rows) -> Dict[str, str]:
    """Turn a two-column (source, destination) table into a rename mapping."""
    if rows is None:
        return {}

    try:
        pairs = list(zip(rows.iloc[:, 0].tolist(), rows.iloc[:, 1].tolist()))
    except AttributeError:
        pairs = [tuple(row[:2]) for row in rows if len(row) >= 2]

    mapping: Dict[str, str] = {}
    for source, destination in pairs:
        source = "" if source is None else str(source).strip()
        destination = "" if destination is None else str(destination).strip()
        if source and destination:
            mapping[source] = destination
    return mapping


def format_payload_handler(
    payload_text,
    target,
    whitelist_text,
    blacklist_text,
    group,
    mapping_rows,
    strategy,
    is_complete=True,
):
    try:
        payload = read_json_text(payload_text)
    except Exception as e:
        return None, f"Error parsing JSON: {str(e)}"

    whitelist: List[str] = split_path_list(whitelist_text)
    blacklist: List[str] = split_path_list(blacklist_text)

    try:
        formatter = ResponseFormatter(
            target=(target or "").strip(),
            whitelist=whitelist,
            blacklist=blacklist,
            group=(group or "").strip(),
            mapping=parse_mapping_table(mapping_rows),
            strategy=strategy or "deletion",
        )
    except ValueError as e:
        return None, f"Invalid configuration: {str(e)}"

    # The formatter prunes in place; keep the loaded payload intact for the next run.
    entity = Response.from_payload(copy.deepcopy(payload), is_complete=bool(is_complete))
    result = formatter.format(entity)

    mode = "whitelist" if whitelist else ("blacklist" if blacklist else "no filter")
    status = f"Formatted with {mode}. {len(result.data)} top-level fields in result."
    if whitelist and blacklist:
        status += " Blacklist ignored because a whitelist is set."
    return result.to_dict(), status


def export_result_handler(result: Any, file_name: str):
    if result is None:
        return None, "Nothing to export. Format a payload first."

    try:
        path = write_json_file(result, file_name)
    except Exception as e:
        logger.exception("Export failed")
        return None, f"Error during export: {str(e)}"
    return path, f"Export successful! Saved to {path}"
