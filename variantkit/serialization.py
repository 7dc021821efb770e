"""JSON encoding and decoding of context data, events and variant variables."""

from __future__ import annotations

import json
from typing import Any

from variantkit.models import ContextData, PublishEvent

_HTML_ESCAPES = str.maketrans(
    {
        "<": "\\u003c",
        ">": "\\u003e",
        "&": "\\u0026",
        "\u2028": "\\u2028",
        "\u2029": "\\u2029",
    }
)


class DeserializationError(ValueError):
    """Raised when context data cannot be decoded."""


class DefaultContextDataDeserializer:
    """Decodes context data from JSON."""

    def deserialize(self, data: bytes | str) -> ContextData:
        """Decode ``data`` into :class:`ContextData`; a JSON ``null`` yields empty data."""
        try:
            parsed = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise DeserializationError(str(exc)) from exc
        if parsed is None:
            return ContextData()
        try:
            return ContextData.from_dict(parsed)
        except TypeError as exc:
            raise DeserializationError(str(exc)) from exc


class DefaultContextEventSerializer:
    """Encodes publish events as compact JSON."""

    def serialize(self, event: PublishEvent) -> bytes:
        """Return the UTF-8 JSON encoding of ``event``.

        Raises :class:`ValueError` for values JSON cannot carry, such as NaN.
        """
        text = json.dumps(
            event.to_dict(),
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
        return text.translate(_HTML_ESCAPES).encode("utf-8")


class DefaultVariableParser:
    """Parses a variant's configuration into its variables."""

    def parse(
        self, context: Any, experiment_name: str, variant_name: str, config: str
    ) -> dict[str, Any] | None:
        """Return the configuration's JSON object, or None if it is not one."""
        try:
            data = json.loads(config)
        except (json.JSONDecodeError, TypeError, UnicodeDecodeError):
            return None
        return data if isinstance(data, dict) else None