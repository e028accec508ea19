"""Cookie value serialization.

Strings are stored as-is. Everything else is stored as compact JSON, so a
root cookie carrying several dotted sub-values holds one JSON object.

On read, ``decode`` restores whatever JSON value a raw string holds and
``try_deserialize`` picks out the structures. Failing to parse is the
normal way of saying "this is plain text" and never raises.
"""

import json
from typing import Any, TypeAlias

StructuredValue: TypeAlias = dict[str, Any] | list[Any]

_NOT_JSON = object()


def serialize(value: Any) -> str:
    """Encode *value* for transmission.

    ``str`` passes through unchanged; other values become compact JSON.
    """
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _parse(raw: str | None) -> Any:
    """Parse *raw* as JSON, returning ``_NOT_JSON`` on any failure."""
    if not raw:
        return _NOT_JSON
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        return _NOT_JSON


def try_deserialize(raw: str | None) -> StructuredValue | None:
    """Return the structure encoded in *raw*, or ``None`` for scalars.

    Only JSON objects and arrays are structures; ``"5"`` or ``"true"``
    give ``None`` here even though ``decode`` types them.
    """
    result = _parse(raw)
    if isinstance(result, (dict, list)):
        return result
    return None


def decode(raw: str) -> Any:
    """Return the JSON value in *raw*, or *raw* itself when it is not JSON.

    ``"5"`` decodes to ``5``, ``"true"`` to ``True`` and ``"null"`` to
    ``None``, so non-string values written with ``serialize`` come back
    typed.
    """
    result = _parse(raw)
    return raw if result is _NOT_JSON else result
