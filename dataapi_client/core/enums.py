"""Data API enumerations."""

from __future__ import annotations

from enum import Enum


class TypeHint(str, Enum):
    """Tells the Data API how to reinterpret a string parameter."""

    DECIMAL = "DECIMAL"
    DATE = "DATE"
    TIME = "TIME"
    TIMESTAMP = "TIMESTAMP"
    UUID = "UUID"


class Population(Enum):
    """How a bare instance is populated when no all-args constructor matches."""

    PROPERTIES = "properties"
    FIELDS = "fields"
