# src/agency_desk/store/timestamps.py

"""
Timestamp normalization for records read from the document store.

Store reads carry StoreTimestamp values; the rest of the app works with aware
datetime objects. Decoding is schema-driven: a RecordSchema maps field names
to decoders, and nested()/list_of() descend into sub-records.

Contract for every decoder here:
- never raises (unconvertible values pass through unchanged),
- idempotent (datetime values pass through), so decode(decode(r)) == decode(r).
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .documents import StoreTimestamp

Decoder = Callable[[Any], Any]


def passthrough(value: Any) -> Any:
    return value


def as_datetime(value: Any) -> Any:
    """StoreTimestamp (or its wire dict) -> aware datetime; anything else unchanged."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, StoreTimestamp):
        return value.to_datetime()
    ts = StoreTimestamp.from_wire(value)
    if ts is not None:
        return ts.to_datetime()
    return value


@dataclass(frozen=True, slots=True)
class RecordSchema:
    fields: Mapping[str, Decoder] = field(default_factory=dict)
    default: Decoder = passthrough

    def decode(self, record: Mapping[str, Any]) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for key, value in record.items():
            decoder = self.fields.get(key, self.default)
            out[key] = decoder(value)
        return out


def nested(schema: RecordSchema) -> Decoder:
    """Decoder for a sub-record (or a list of sub-records); scalars pass through."""

    def _decode(value: Any) -> Any:
        if isinstance(value, Mapping) and StoreTimestamp.from_wire(value) is None:
            return schema.decode(value)
        if isinstance(value, list):
            return [schema.decode(v) if isinstance(v, Mapping) else v for v in value]
        return value

    return _decode


def list_of(schema: RecordSchema) -> Decoder:
    """Decoder for a list of sub-records; non-list values pass through."""

    def _decode(value: Any) -> Any:
        if not isinstance(value, list):
            return value
        return [schema.decode(v) if isinstance(v, Mapping) else v for v in value]

    return _decode


def convert_timestamps(value: Any) -> Any:
    """
    Schema-free variant for untyped records.

    Every StoreTimestamp found in mappings or in lists of mappings becomes a
    datetime; lists of scalars are returned untouched.
    """
    if isinstance(value, Mapping):
        converted = as_datetime(value)
        if converted is not value:
            return converted
        return {k: convert_timestamps(v) for k, v in value.items()}
    if isinstance(value, list):
        if not any(isinstance(v, (Mapping, StoreTimestamp)) for v in value):
            return value
        return [convert_timestamps(v) for v in value]
    return as_datetime(value)
