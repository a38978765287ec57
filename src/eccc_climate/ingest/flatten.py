"""Flatten GeoJSON features into row dicts.

A column mapping is an ordered mapping of output column -> extraction rule.
Rules read from the feature's ``properties`` bag; a missing property, or one
that fails to convert, yields ``None`` for that column only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping


class Rule:
    key: str

    def extract(self, props: Mapping[str, Any]) -> Any:
        raise NotImplementedError


@dataclass(frozen=True)
class Copy(Rule):
    """Copy a property, optionally through ``cast`` (e.g. ``int``, ``float``)."""

    key: str
    cast: Callable[[Any], Any] | None = None

    def extract(self, props):
        value = props.get(self.key)
        if value is None or self.cast is None:
            return value
        try:
            return self.cast(value)
        except (TypeError, ValueError):
            return None


@dataclass(frozen=True)
class Scale(Rule):
    """Numeric property divided by a constant (GeoMet encodes lat/lon * 1e7)."""

    key: str
    divisor: float

    def extract(self, props):
        value = props.get(self.key)
        if value is None:
            return None
        try:
            return float(value) / self.divisor
        except (TypeError, ValueError):
            return None


@dataclass(frozen=True)
class TrimUpper(Rule):
    key: str

    def extract(self, props):
        value = props.get(self.key)
        if value is None:
            return None
        value = str(value).strip().upper()
        return value or None


@dataclass(frozen=True)
class Present(Rule):
    """True when the property exists and is not an empty string."""

    key: str

    def extract(self, props):
        value = props.get(self.key)
        return value is not None and str(value) != ""


@dataclass(frozen=True)
class Equals(Rule):
    key: str
    literal: Any

    def extract(self, props):
        return props.get(self.key) == self.literal


class RecordFlattener:
    """Callable turning one feature into one row.

    Row layout: ``prefix`` constants, then the ``columns`` mapping in order, then
    (with ``passthrough``) every other property under its original key, and
    finally ``geometry`` when ``include_geometry`` is set. Keys already in the
    row are never overwritten by passthrough properties.
    """

    def __init__(
        self,
        columns: Mapping[str, Rule] | None = None,
        passthrough: bool = False,
        prefix: Mapping[str, Any] | None = None,
        include_geometry: bool = False,
    ):
        self.columns = dict(columns or {})
        self.passthrough = passthrough
        self.prefix = dict(prefix or {})
        self.include_geometry = include_geometry

    def __call__(self, feature: Mapping[str, Any]) -> dict[str, Any]:
        props = feature.get("properties") or {}
        row = dict(self.prefix)
        for column, rule in self.columns.items():
            row[column] = rule.extract(props)
        if self.passthrough:
            for key, value in props.items():
                if key not in row:
                    row[key] = value
        if self.include_geometry:
            row["geometry"] = feature.get("geometry")
        return row
