"""
Instrumentation entry points
instrument() always logs how long an awaitable took;
dbg_instrument() only does so when debug mode is on and is a no-op otherwise.

Both take an awaitable that has not been awaited yet and return a new one
the caller must await, so the wrapped work can still be scheduled later:

    rows = await instrument(fetch_rows(query))
    rows = await instrument("fetched {n} rows in {elapsed}", fetch_rows(query), n=limit)
    page = await dbg_instrument(client.get(url))
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Optional, Tuple, TypeVar

from src.instrument.future import Clock, TimedFuture
from src.instrument.templates import LogTemplate, default_message, render, validate_template
from utils.exceptions import TemplateError
from utils.logger import get_logger
from utils.settings import get_settings

log = get_logger(__name__)

R = TypeVar("R")


def _split_args(args: Tuple[Any, ...]) -> Tuple[Optional[LogTemplate], Awaitable[Any]]:
    if len(args) == 1:
        return None, args[0]
    if len(args) == 2:
        return args[0], args[1]
    raise TypeError(f"expected (awaitable) or (log_template, awaitable), got {len(args)} positional arguments")


def _call_site() -> str:
    """file:line of whoever called the public entry point"""
    frame = inspect.currentframe()
    try:
        caller = frame.f_back.f_back
        return f"{caller.f_code.co_filename}:{caller.f_lineno}"
    finally:
        del frame


async def _instrument(
    awaitable: Awaitable[R],
    template: Optional[LogTemplate],
    fields: dict[str, Any],
    *,
    source: str,
    logger: logging.Logger,
    level: int,
    clock: Optional[Clock],
) -> R:
    timed = await TimedFuture(awaitable, clock=clock)

    if logger.isEnabledFor(level):
        if template is None:
            msg = default_message(source, timed.elapsed)
        else:
            msg = render(template, timed.elapsed, fields)
        logger.log(level, msg, extra={"elapsed": timed.elapsed, "source": source})

    return timed.result


def instrument(
    *args: Any,
    logger: Optional[logging.Logger] = None,
    level: int = logging.DEBUG,
    clock: Optional[Clock] = None,
    source: Optional[str] = None,
    **fields: Any,
) -> Awaitable[Any]:
    """
    Time an awaitable and always log the elapsed time

    Args:
        *args: (awaitable) or (log_template, awaitable)
        logger: Where the record goes (defaults to this module's logger)
        level: Record level, DEBUG unless overridden
        clock: Seconds source, time.perf_counter by default
        source: Label for the default message; the call site's file:line if omitted
        **fields: Extra values for placeholders in a string template

    Returns:
        A coroutine that resolves to the inner awaitable's result

    Raises:
        TypeError: If the argument is not awaitable
        TemplateError: If the template cannot be rendered with the given fields
    """
    template, awaitable = _split_args(args)
    if not inspect.isawaitable(awaitable):
        raise TypeError(f"instrument() expects an awaitable, got {type(awaitable).__name__}")

    if template is not None:
        validate_template(template, fields)
    elif fields:
        raise TemplateError(f"Fields {sorted(fields)} given without a log template")

    return _instrument(
        awaitable,
        template,
        fields,
        source=source if source is not None else _call_site(),
        logger=logger or log,
        level=level,
        clock=clock,
    )


def dbg_instrument(*args: Any, debug: Optional[bool] = None, **kwargs: Any) -> Awaitable[Any]:
    """
    Same as instrument(), but only in debug mode

    With debug off the awaitable is handed back as is: no timer, no clock
    reads, no log record. `debug` overrides Settings.debug for this call.
    """
    _, awaitable = _split_args(args)
    if not inspect.isawaitable(awaitable):
        raise TypeError(f"dbg_instrument() expects an awaitable, got {type(awaitable).__name__}")
    enabled = get_settings().debug if debug is None else debug
    if not enabled:
        return awaitable

    if kwargs.get("source") is None:
        kwargs["source"] = _call_site()
    return instrument(*args, **kwargs)
