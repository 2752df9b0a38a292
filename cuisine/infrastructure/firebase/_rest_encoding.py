"""Convert between Python values and Firestore REST typed values.

Firestore REST wraps every value in a one-key object naming its type, e.g.
{"stringValue": "Tarte"} or {"arrayValue": {"values": [...]}}.
"""

import base64
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class Reference:
    """Full document resource name, encoded as a Firestore referenceValue.

    Used for __name__ ordering and cursors (projects/.../documents/coll/id).
    """

    path: str


def _encode_value(v: Any) -> dict:
    # bool before int: bool is an int subclass.
    if v is None:
        return {"nullValue": None}
    if isinstance(v, bool):
        return {"booleanValue": v}
    if isinstance(v, int):
        return {"integerValue": str(v)}
    if isinstance(v, float):
        return {"doubleValue": v}
    if isinstance(v, str):
        return {"stringValue": v}
    if isinstance(v, Reference):
        return {"referenceValue": v.path}
    if isinstance(v, datetime):
        return {"timestampValue": v.strftime("%Y-%m-%dT%H:%M:%S.%fZ")}
    if isinstance(v, bytes):
        return {"bytesValue": base64.standard_b64encode(v).decode("ascii")}
    if isinstance(v, (list, tuple)):
        return {"arrayValue": {"values": [_encode_value(x) for x in v]}}
    if isinstance(v, dict):
        return {"mapValue": {"fields": {k: _encode_value(x) for k, x in v.items()}}}
    raise TypeError(f"Unsupported Firestore value type: {type(v)}")


def encode_document(data: dict[str, Any]) -> dict:
    """Python dict -> REST Document body ({"fields": {...}})."""
    return {"fields": {k: _encode_value(v) for k, v in data.items()}}


_FRACTION = re.compile(r"\.(\d+)")


def _parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp; Firestore may send nanoseconds (9 digits)."""
    value = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), value, count=1)
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


_DECODERS: dict[str, Callable[[Any], Any]] = {
    "nullValue": lambda _: None,
    "booleanValue": bool,
    "integerValue": int,
    "doubleValue": float,
    "stringValue": str,
    "referenceValue": str,
    "timestampValue": _parse_timestamp,
    "bytesValue": base64.standard_b64decode,
    "arrayValue": lambda a: [_decode_value(x) for x in (a or {}).get("values") or []],
    "mapValue": lambda m: decode_document((m or {}).get("fields")),
}


def _decode_value(obj: dict) -> Any:
    """Typed value -> Python; unknown types (geoPoint, ...) decode to None."""
    for kind, raw in obj.items():
        decoder = _DECODERS.get(kind)
        if decoder is not None:
            return decoder(raw)
    return None


def decode_document(fields: dict | None) -> dict:
    """REST Document.fields mapping -> Python dict."""
    if not fields:
        return {}
    return {k: _decode_value(v) for k, v in fields.items()}
