"""Run a few sleeps through the instrumentation helpers and show the log output.

Usage:
  INSTRUMENT_LOG_LEVEL=DEBUG python scripts/demo_instrument.py
  python scripts/demo_instrument.py --delay 0.25 --no-debug
"""

import argparse
import asyncio
import logging
import sys
import pathlib as _pl

# Ensure the project root is on sys.path so `from utils import ...` works
# whether the script is run from the repo root or directly from another folder.
sys.path.insert(0, str(_pl.Path(__file__).resolve().parents[1]))

from src.instrument.future import TimedFuture
from src.instrument.service import dbg_instrument, instrument
from utils.decorators import instrumented
from utils.logger import get_logger

log = get_logger(__name__)


async def work(delay: float, value: str) -> str:
    await asyncio.sleep(delay)
    return value


@instrumented(template="{name} finished in {elapsed}", level=logging.INFO)
async def decorated_work(delay: float) -> str:
    return await work(delay, "decorated")


async def run(delay: float, debug: bool | None) -> None:
    timed = await TimedFuture(work(delay, "raw"))
    log.info(f"TimedFuture: {timed.result!r} after {timed.elapsed_ms:.1f}ms")

    out = await instrument(work(delay, "default"), level=logging.INFO)
    log.info(f"instrument returned {out!r}")

    out = await instrument("custom {label} took {elapsed}", work(delay, "custom"), label="sleep", level=logging.INFO)
    log.info(f"instrument with template returned {out!r}")

    out = await dbg_instrument(work(delay, "gated"), debug=debug, level=logging.INFO)
    log.info(f"dbg_instrument returned {out!r}")

    await decorated_work(delay)


def main():
    parser = argparse.ArgumentParser(description="Demonstrate timed awaitables")
    parser.add_argument("--delay", type=float, default=0.1, help="Seconds each demo coroutine sleeps")
    parser.add_argument("--no-debug", action="store_true", help="Force dbg_instrument off")

    args = parser.parse_args()
    asyncio.run(run(args.delay, False if args.no_debug else None))


if __name__ == "__main__":
    main()
