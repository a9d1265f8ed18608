"""Table-driven field validation.

A validation table is an ordered sequence of ``FieldRules``.  Each entry
names the key the value is read from, the key its error is reported
under, and the ordered rules that apply.  ``validate`` interprets the
table and returns a ``{field: message}`` map holding the message of the
first violated rule per field.  An empty map means the input is valid.

Example::

    table = (
        FieldRules(
            field="Name",
            source="name",
            rules=(
                required("Product name is required."),
                max_length(255, "Product name must not exceed 255 characters."),
            ),
        ),
    )
    validate({"name": ""}, table)  # {"Name": "Product name is required."}
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from modules.core.exceptions import DomainException, ErrorKind


class RequestValidationError(DomainException):
    """Inbound data violated one or more validation rules."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("request validation failed", kind=ErrorKind.VALIDATION)
        self.errors = errors


class MalformedInput(DomainException):
    """Inbound data could not be parsed into the expected shape."""

    def __init__(self, message: str = "invalid JSON format") -> None:
        super().__init__(message, kind=ErrorKind.MALFORMED_INPUT)


@dataclass(frozen=True)
class Rule:
    """A named rule with an optional parameter and its failure message."""

    name: str
    message: str
    param: Any = None


@dataclass(frozen=True)
class FieldRules:
    field: str
    source: str
    rules: tuple[Rule, ...]


def required(message: str) -> Rule:
    return Rule("required", message)


def min_length(length: int, message: str) -> Rule:
    return Rule("min_length", message, length)


def max_length(length: int, message: str) -> Rule:
    return Rule("max_length", message, length)


def one_of(choices: Sequence[str], message: str) -> Rule:
    return Rule("one_of", message, frozenset(choices))


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


_CHECKS: dict[str, Callable[[Any, Any], bool]] = {
    "required": lambda value, _: not _is_blank(value),
    "min_length": lambda value, n: len(value) >= n,
    "max_length": lambda value, n: len(value) <= n,
    "one_of": lambda value, choices: value in choices,
}


def check(rule: Rule, value: Any) -> bool:
    """Return ``True`` when ``value`` satisfies ``rule``."""
    try:
        predicate = _CHECKS[rule.name]
    except KeyError:
        raise ValueError(f"Unknown validation rule: {rule.name!r}") from None
    return predicate(value, rule.param)


def validate(values: Mapping[str, Any], table: Sequence[FieldRules]) -> dict[str, str]:
    """Evaluate ``table`` against ``values``.

    Rules of a field run in declaration order and stop at the first
    failure.  A missing source key is treated as an empty value.
    """
    errors: dict[str, str] = {}
    for entry in table:
        value = values.get(entry.source)
        for rule in entry.rules:
            if not check(rule, value):
                errors[entry.field] = rule.message
                break
    return errors
