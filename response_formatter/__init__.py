"""Core logic for the Response Formatter.

The Gradio UI lives in `app.py`. This package contains the pieces that:
- narrow a backend response to a target field
- keep (whitelist) or drop (blacklist) dot-path fields
- rename top-level fields and group the result under one key
"""
from .config import FormatterConfig, load_config
from .entity import Response
from .formatter import EntityFormatter, FormatterFunc, ResponseFormatter, new_entity_formatter

__all__ = [
    "EntityFormatter",
    "FormatterConfig",
    "FormatterFunc",
    "Response",
    "ResponseFormatter",
    "load_config",
    "new_entity_formatter",
]
