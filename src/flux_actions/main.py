from __future__ import annotations

import asyncio
from typing import Any, List, Optional, Tuple

from flux_actions.action import Action
from flux_actions.config import FluxSettings
from flux_actions.core.logging import configure_logging, get_logger
from flux_actions.core.scheduler import Scheduler


async def run_demo(value: int) -> List[Tuple[Any, ...]]:
    """
    Trigger `root.save` twice, unsubscribing in between; returns what the subscriber saw.
    """
    log = get_logger(app="demo")
    scheduler = Scheduler()
    root = Action(scheduler=scheduler).with_children(["save"])

    seen: List[Tuple[Any, ...]] = []

    def on_save(*args: Any) -> None:
        log.info("received", args=args)
        seen.append(args)

    handle = root.save.listen(on_save)
    root.save.as_function(value)
    await scheduler.idle()

    handle()
    root.as_function.save(value + 1)
    await scheduler.idle()
    return seen


def main(value: Optional[int] = None) -> int:
    settings = FluxSettings()
    configure_logging(settings.log_level)
    log = get_logger(app=settings.name)

    v = settings.demo_value if value is None else value
    seen = asyncio.run(run_demo(v))
    if seen != [(v,)]:
        log.error("demo_failed", seen=seen)
        return 1
    log.info("demo_ok", seen=seen)
    return 0
