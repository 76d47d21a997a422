from __future__ import annotations

import json
import os
import tempfile
from typing import Any


def read_json_content(file_obj):
    """Read JSON from an uploaded file object or a file path."""
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, bytes):
            content = content.decode('utf-8')
        return json.loads(content)

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def read_json_text(text: str) -> Any:
    if text is None or not str(text).strip():
        raise ValueError("No JSON payload given.")
    return json.loads(text)


def dump_json_text(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def write_json_file(data: Any, file_name: str = '') -> str:
    """Write ``data`` as JSON into the temp directory and return the path."""
    if not file_name or not file_name.strip():
        file_name = "formatted"
    if not file_name.lower().endswith('.json'):
        file_name += '.json'

    path = os.path.join(tempfile.gettempdir(), os.path.basename(file_name))
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    return path
