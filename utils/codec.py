"""
utils/codec.py
--------------
JSON codec for request payloads and response bodies.

Decoding is strict: the payload must be a JSON object holding every
field of the target query with the right type. Unknown keys are ignored.
"""

import dataclasses
import json
from decimal import Decimal
from typing import Any, Type, TypeVar

from exceptions import QueryDecodeError
from models.response import (
    ConsultResponse,
    DeleteResponse,
    ErrorResponse,
    NewCustomerResponse,
    ServerResponse,
    WithdrawalResponse,
)

Q = TypeVar("Q")

# Older clients spell the customer address field "adress"
_FIELD_ALIASES = {"address": ("adress",)}


def _reject_constant(name: str) -> Any:
    raise QueryDecodeError(f"Unsupported JSON constant: {name}")


def _coerce(name: str, value: Any, expected: type) -> Any:
    """Check one decoded value against the dataclass field type."""
    if expected is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif expected is str:
        if isinstance(value, str):
            return value
    elif expected is Decimal:
        if isinstance(value, Decimal):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return Decimal(value)
    raise QueryDecodeError(
        f"Field '{name}' expects {expected.__name__}, got {type(value).__name__}"
    )


def decode_query(payload: str, query_cls: Type[Q]) -> Q:
    """
    Decode a JSON payload into a query dataclass.

    Args:
        payload: The text following the command prefix.
        query_cls: One of the dataclasses in models.query.

    Returns:
        A populated, immutable query instance.

    Raises:
        QueryDecodeError: On invalid JSON, a non-object payload, a missing
            field or a field of the wrong type.
    """
    try:
        data = json.loads(payload, parse_float=Decimal, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise QueryDecodeError(f"Invalid JSON payload: {e}") from e

    if not isinstance(data, dict):
        raise QueryDecodeError(f"Expected a JSON object, got {type(data).__name__}")

    values = {}
    for field in dataclasses.fields(query_cls):
        keys = (field.name, *_FIELD_ALIASES.get(field.name, ()))
        key = next((k for k in keys if k in data), None)
        if key is None:
            raise QueryDecodeError(f"Missing field '{field.name}' for {query_cls.__name__}")
        values[field.name] = _coerce(field.name, data[key], field.type)
    return query_cls(**values)


def response_body(response: ServerResponse) -> dict:
    """Return the JSON-ready inner payload of a response."""
    if isinstance(response, ErrorResponse):
        return {"message": response.message}
    if isinstance(response, (ConsultResponse, WithdrawalResponse)):
        return {"balance": float(response.balance)}
    if isinstance(response, (NewCustomerResponse, DeleteResponse)):
        return {"status": response.status.value}
    raise TypeError(f"Unsupported response type: {type(response).__name__}")


def encode_response(response: ServerResponse) -> str:
    """Serialize the inner payload of a response to compact JSON."""
    return json.dumps(response_body(response), separators=(",", ":"))
