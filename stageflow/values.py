"""Variant-typed map holding values accumulated by a workflow instance."""

from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, Tuple, Type

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from .errors import ValueReferenceError, ValueTypeError

# Kinds a stage output or acceptor result may store.
SUPPORTED_KINDS: Tuple[type, ...] = (str, bool, int, float, list, dict, type(None))


def kind_name(value: Any) -> str:
    return type(value).__name__


def _is_kind(value: Any, kind: Type) -> bool:
    # bool is a subclass of int but never stands in for one
    if kind is int and isinstance(value, bool):
        return False
    if kind is float and isinstance(value, bool):
        return False
    if kind is float and isinstance(value, int):
        return True
    return isinstance(value, kind)


class ValueMap(MutableMapping[str, Any]):
    """Mapping of string keys to values of a fixed set of kinds.

    Plain item access behaves like a ``dict``. The ``get_*`` accessors check
    the stored kind and raise :class:`ValueTypeError` on a mismatch instead of
    handing back something the caller then has to cast.
    """

    def __init__(self, initial: Optional[Mapping[str, Any]] = None) -> None:
        self._data: Dict[str, Any] = {}
        if initial:
            self.merge(initial)

    # -- mapping protocol -------------------------------------------------
    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if not isinstance(key, str):
            raise ValueTypeError(f"Value keys must be strings, got {kind_name(key)}")
        if not isinstance(value, SUPPORTED_KINDS):
            raise ValueTypeError(
                f"Unsupported value kind {kind_name(value)} for key {key!r}"
            )
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"ValueMap({self._data!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ValueMap):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    # -- typed access -----------------------------------------------------
    def require(self, key: str) -> Any:
        try:
            return self._data[key]
        except KeyError:
            raise ValueReferenceError(key) from None

    def get_typed(self, key: str, kind: Type) -> Any:
        """Return the value under ``key`` if it is of ``kind``."""
        value = self.require(key)
        if not _is_kind(value, kind):
            raise ValueTypeError(
                f"Value {key!r} is {kind_name(value)}, expected {kind.__name__}"
            )
        return value

    def get_str(self, key: str) -> str:
        return self.get_typed(key, str)

    def get_bool(self, key: str) -> bool:
        return self.get_typed(key, bool)

    def get_int(self, key: str) -> int:
        return self.get_typed(key, int)

    def get_float(self, key: str) -> float:
        return float(self.get_typed(key, float))

    def check_equals(self, key: str, value: Any) -> bool:
        """Return ``True`` only if ``key`` exists, has the kind of ``value`` and equals it."""
        if key not in self._data:
            return False
        stored = self._data[key]
        if not _is_kind(stored, type(value)):
            return False
        return stored == value

    def text(self, key: str) -> str:
        """Return the textual form of the value under ``key``."""
        return str(self.require(key))

    def merge(self, other: Optional[Mapping[str, Any]]) -> None:
        """Copy every entry of ``other`` in order; later keys overwrite earlier ones."""
        if not other:
            return
        for key, value in other.items():
            self[key] = value

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._data)

    # -- pydantic integration ---------------------------------------------
    @classmethod
    def _validate(cls, value: Any) -> "ValueMap":
        if isinstance(value, ValueMap):
            return value
        if isinstance(value, Mapping):
            return cls(value)
        raise ValueTypeError(f"Cannot build a ValueMap from {kind_name(value)}")

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda v: v.to_dict()
            ),
        )


def coerce_text(value: str) -> Any:
    """Turn console input into the closest supported kind."""
    lowered = value.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return value
