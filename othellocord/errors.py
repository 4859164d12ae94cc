"""Errors reported back to users about command options."""

from __future__ import annotations

from typing import Any, Sequence

TRACE_KEY = "trace"


class OptionError(ValueError):
    """A command option was missing or held an unusable value."""

    def __init__(self, name: str, invalid_value: Any = None, expected_value: str = "") -> None:
        self.name = name
        self.invalid_value = invalid_value
        self.expected_value = expected_value
        super().__init__(str(self))

    def __str__(self) -> str:
        expected = f", expected value to be: {self.expected_value}" if self.expected_value else ""
        if self.invalid_value is None or self.invalid_value == "":
            return f"Expected an option '{self.name}' to be provided{expected}"
        return f"Option '{self.name}' received invalid value '{self.invalid_value}'{expected}"


class SubCommandError(ValueError):
    """A subcommand was missing or not one of the expected names."""

    def __init__(self, name: str, expected_values: Sequence[str]) -> None:
        self.name = name
        self.expected_values = list(expected_values)
        super().__init__(str(self))

    def __str__(self) -> str:
        values = "[" + " ".join(self.expected_values) + "]"
        if not self.name:
            return f"Expected a subcommand with one of following values {values}"
        return f"Invalid subcommand '{self.name}', expected one of following values {values}"