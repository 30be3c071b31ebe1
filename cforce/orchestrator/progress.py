"""Synthetic progress indicator for in-flight runs."""

import asyncio
import contextlib
import random
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from cforce.config.settings import Settings
from cforce.orchestrator.state import RunState

COMPLETE = 100


async def _ramp(
    state: RunState,
    cap: int,
    max_step: int,
    interval: float,
    rng: random.Random,
) -> None:
    while True:
        await asyncio.sleep(interval)
        if state.progress < cap:
            state.progress = min(cap, state.progress + rng.randint(1, max_step))


@asynccontextmanager
async def progress_ramp(
    state: RunState,
    settings: Settings,
    rng: random.Random | None = None,
) -> AsyncGenerator[RunState, None]:
    """Ramp ``state.progress`` while the block runs, then snap it to 100.

    The ramp is purely cosmetic: it starts at ``progress_start``, climbs by
    random steps and never passes ``progress_cap``. The timer task is
    cancelled on every exit path.
    """
    state.progress = settings.progress_start
    task = asyncio.create_task(
        _ramp(
            state,
            cap=settings.progress_cap,
            max_step=settings.progress_max_step,
            interval=settings.progress_interval,
            rng=rng or random.Random(),
        )
    )
    try:
        yield state
    finally:
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        state.progress = COMPLETE
