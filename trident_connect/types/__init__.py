"""Trident connectivity type definitions (enums)."""

from trident_connect.types.modes import OperatingMode, OutputFormat

__all__ = [
    "OperatingMode",
    "OutputFormat",
]
