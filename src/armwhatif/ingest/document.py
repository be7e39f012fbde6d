"""Lazily materialized views over raw before/after JSON payloads."""

import json
from typing import Any, Iterator, Optional, Union
from ..utils.errors import DocumentError
from ..utils.logging import get_logger

logger = get_logger("ingest.document")

RawPayload = Union[bytes, bytearray, str, dict, list, int, float, bool, None]

_MISSING = object()


class DocumentView:
    """Read-only, path-addressable view over a parsed JSON value."""

    __slots__ = ("_value",)

    def __init__(self, value: Any = _MISSING):
        self._value = value

    @classmethod
    def empty(cls) -> "DocumentView":
        return cls()

    def exists(self) -> bool:
        """True when the view points at a value that is present (JSON null counts as absent)."""
        return self._value is not _MISSING and self._value is not None

    @property
    def value(self) -> Any:
        """The underlying value, or None when absent."""
        if self._value is _MISSING:
            return None
        return self._value

    def get(self, path: str) -> "DocumentView":
        """
        Walk a dotted path through objects and arrays.

        Numeric segments index into arrays, e.g. ``properties.ipConfigurations.0.name``.
        A path that cannot be followed yields an empty view.
        """
        current = self._value
        for segment in path.split("."):
            if isinstance(current, dict):
                current = current.get(segment, _MISSING)
            elif isinstance(current, list) and segment.lstrip("-").isdigit():
                index = int(segment)
                current = current[index] if -len(current) <= index < len(current) else _MISSING
            else:
                return DocumentView()
            if current is _MISSING:
                return DocumentView()
        return DocumentView(current)

    def as_str(self, default: str = "") -> str:
        """The value as a string; scalars are converted, containers give ``default``."""
        value = self.value
        if value is None or isinstance(value, (dict, list)):
            return default
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def is_object(self) -> bool:
        return isinstance(self._value, dict)

    def is_array(self) -> bool:
        return isinstance(self._value, list)

    def keys(self) -> Iterator[str]:
        if isinstance(self._value, dict):
            yield from self._value.keys()

    def items(self) -> Iterator["DocumentView"]:
        """Iterate array elements as views."""
        if isinstance(self._value, list):
            for item in self._value:
                yield DocumentView(item)

    def __bool__(self) -> bool:
        return self.exists()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DocumentView):
            return NotImplemented
        return self.value == other.value and self.exists() == other.exists()

    def __repr__(self) -> str:
        if not self.exists():
            return "DocumentView(<empty>)"
        return f"DocumentView({self._value!r})"


class Document:
    """
    Owner of one raw payload that parses it on first access.

    The raw payload is either JSON text (``encoded``, the default for bytes)
    or a value that was already decoded together with its envelope. Absent
    payloads (None, empty or whitespace-only text, JSON null) materialize
    into an empty view instead of raising.
    """

    __slots__ = ("raw", "encoded", "_view", "_materialized")

    def __init__(self, raw: RawPayload = None, encoded: Optional[bool] = None):
        self.raw = raw
        if encoded is None:
            encoded = isinstance(raw, (bytes, bytearray))
        self.encoded = encoded
        self._view: Optional[DocumentView] = None
        self._materialized = False

    @classmethod
    def from_json(cls, text: Union[bytes, bytearray, str, None]) -> "Document":
        return cls(text, encoded=True)

    def is_absent(self) -> bool:
        raw = self.raw
        if raw is None:
            return True
        if self.encoded:
            return len(raw.strip()) == 0
        return False

    def view(self) -> DocumentView:
        """Return the parsed view, parsing at most once."""
        if self._materialized:
            return self._view
        self._view = self._materialize()
        self._materialized = True
        return self._view

    def _materialize(self) -> DocumentView:
        if self.is_absent():
            return DocumentView.empty()

        raw = self.raw
        if self.encoded:
            try:
                parsed = json.loads(raw)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise DocumentError(f"Invalid JSON payload: {e}") from e
            logger.debug(f"Materialized {len(raw)} byte payload")
            return DocumentView(parsed)

        return DocumentView(raw)

    def __repr__(self) -> str:
        state = "materialized" if self._materialized else "pending"
        return f"Document({state})"
