from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


def is_mapping(value: Any) -> bool:
    """True when a value is a nested mapping node of a data tree.

    Sequences and scalars are leaves as far as path traversal goes.
    """
    return isinstance(value, dict)


@dataclass
class Response:
    """One backend result travelling through the formatter.

    ``is_complete`` reports whether the upstream call finished; the
    formatter carries it through untouched and only ever replaces ``data``.
    """

    data: Dict[str, Any] = field(default_factory=dict)
    is_complete: bool = False

    @classmethod
    def from_payload(cls, payload: Any, is_complete: bool = True) -> "Response":
        if not is_mapping(payload):
            return cls(data={}, is_complete=is_complete)
        return cls(data=payload, is_complete=is_complete)

    def to_dict(self) -> Dict[str, Any]:
        return {'data': self.data, 'is_complete': self.is_complete}
