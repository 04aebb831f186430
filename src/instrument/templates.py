"""
Log message templates
Caller templates are checked up front so a typo fails at the call site,
not after the awaited work has already finished.
"""

from __future__ import annotations

import string
from typing import Any, Callable, Mapping, Union

from utils.exceptions import TemplateError

LogTemplate = Union[str, Callable[[float], str]]

_formatter = string.Formatter()


def format_elapsed(seconds: float) -> str:
    """Human readable duration, picking the unit by magnitude (1.204s, 15.310ms, 87.000µs)"""
    if seconds >= 1:
        return f"{seconds:.3f}s"
    if seconds >= 1e-3:
        return f"{seconds * 1e3:.3f}ms"
    if seconds >= 1e-6:
        return f"{seconds * 1e6:.3f}µs"
    return f"{seconds * 1e9:.0f}ns"


_NUMERIC_SPEC = set("eEfFgGn%.,_")


class Elapsed(float):
    """
    Seconds as a float that prints with a unit

    Width and alignment specs ({elapsed:>12}) pad the unit string;
    numeric specs ({elapsed:.3f}) format the raw seconds.
    """

    @property
    def ms(self) -> float:
        return float(self) * 1000

    def __str__(self) -> str:
        return format_elapsed(self)

    def __format__(self, spec: str) -> str:
        if _NUMERIC_SPEC.intersection(spec):
            return float.__format__(self, spec)
        return format(str(self), spec)


def _field_names(template: str) -> set[str]:
    names = set()
    try:
        parsed = list(_formatter.parse(template))
    except ValueError as e:
        raise TemplateError(f"Malformed log template {template!r}: {e}") from e
    for _, field_name, _, _ in parsed:
        if field_name is None:
            continue
        root = field_name.split(".", 1)[0].split("[", 1)[0]
        if not root or root.isdigit():
            raise TemplateError(f"Log template {template!r} uses positional placeholders; name them")
        names.add(root)
    return names


def validate_template(template: LogTemplate, fields: Mapping[str, Any]) -> None:
    if callable(template):
        if fields:
            raise TemplateError("Extra fields only apply to string templates")
        return
    if not isinstance(template, str):
        raise TemplateError(f"Log template must be a str or callable, got {type(template).__name__}")
    if "elapsed" in fields:
        raise TemplateError("'elapsed' is filled in by the timer and cannot be passed as a field")

    names = _field_names(template)
    if "elapsed" not in names:
        raise TemplateError(f"Log template {template!r} never references {{elapsed}}")
    missing = sorted(names - {"elapsed"} - set(fields))
    if missing:
        raise TemplateError(f"Log template {template!r} has no value for: {', '.join(missing)}")


def render(template: LogTemplate, elapsed: float, fields: Mapping[str, Any]) -> str:
    # Keep templates simple and explicit; avoid arbitrary eval.
    value = Elapsed(elapsed)
    if callable(template):
        return str(template(value))
    return template.format(elapsed=value, **fields)


def default_message(source: str, elapsed: float) -> str:
    return f"{source} completed in {format_elapsed(elapsed)}"
