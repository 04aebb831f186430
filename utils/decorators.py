from __future__ import annotations
import inspect
import logging
from functools import wraps

from src.instrument.service import instrument
from src.instrument.templates import validate_template
from utils.settings import get_settings

def instrumented(fn=None, *, template=None, logger: logging.Logger | None = None, level: int = logging.DEBUG):
    """
    Log how long every call of an async function takes.

    Works bare (@instrumented) or with options (@instrumented(template="{name}: {elapsed}")).
    String templates may use {name} for the function's qualified name.
    """
    def decorate(fn):
        if not inspect.iscoroutinefunction(fn):
            raise TypeError(f"{fn.__qualname__} is not an async function")
        name = fn.__qualname__
        if template is not None:
            validate_template(template, {} if callable(template) else {"name": name})

        @wraps(fn)
        async def wrapper(*args, **kwargs):
            if template is None:
                return await instrument(fn(*args, **kwargs), source=name, logger=logger, level=level)
            fields = {} if callable(template) else {"name": name}
            return await instrument(template, fn(*args, **kwargs), logger=logger, level=level, **fields)
        return wrapper

    return decorate(fn) if fn is not None else decorate

def dbg_instrumented(fn=None, *, debug: bool | None = None, **options):
    # Resolved once at decoration time; with debug off the function comes back undecorated.
    def decorate(fn):
        if not inspect.iscoroutinefunction(fn):
            raise TypeError(f"{fn.__qualname__} is not an async function")
        enabled = get_settings().debug if debug is None else debug
        if not enabled:
            return fn
        return instrumented(fn, **options)

    return decorate(fn) if fn is not None else decorate
