"""Fan-out / fan-in of blocking per-file parses.

XML parsing is blocking file I/O plus CPU work, so each file is parsed in a
shared thread pool and the results are gathered on the event loop.
"""
import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, List, Optional, Sequence, Tuple, TypeVar

from interfacedesign.core.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Singleton executor
_parse_executor: Optional[ThreadPoolExecutor] = None


def get_parse_executor() -> ThreadPoolExecutor:
    """Get or create the parse thread pool."""
    global _parse_executor
    if _parse_executor is None:
        _parse_executor = ThreadPoolExecutor(
            max_workers=settings.MAX_PARSE_WORKERS,
            thread_name_prefix="xml-parse",
        )
    return _parse_executor


def close_parse_executor() -> None:
    """Shut down the parse thread pool."""
    global _parse_executor
    if _parse_executor:
        _parse_executor.shutdown(wait=True)
        _parse_executor = None


def parse_or_none(parser: Callable[..., Optional[T]], file_path: Any, *args: Any) -> Optional[T]:
    """``parser(file_path, *args)``, with any failure logged and turned into ``None``."""
    try:
        return parser(file_path, *args)
    except Exception as e:
        logger.error("Error parsing %s: %s", file_path, e)
        return None


async def run_parse(parser: Callable[..., Optional[T]], *args: Any) -> Optional[T]:
    """Run a single blocking parse in the parse pool."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(get_parse_executor(), parser, *args)


async def parse_many(
    parser: Callable[..., Optional[T]],
    jobs: Sequence[Tuple[Any, ...]],
) -> List[T]:
    """Run ``parser(*job)`` for every job concurrently.

    Waits for all parses before returning. A parser that returns ``None``
    (not this kind of entity) or raises (logged) is left out; its siblings
    are unaffected. Results keep the order of ``jobs``.
    """
    if not jobs:
        return []

    loop = asyncio.get_running_loop()
    executor = get_parse_executor()
    results = await asyncio.gather(
        *(loop.run_in_executor(executor, parser, *job) for job in jobs),
        return_exceptions=True,
    )

    items: List[T] = []
    for job, result in zip(jobs, results):
        if isinstance(result, BaseException):
            logger.error("Error parsing %s: %s", job[0], result)
            continue
        if result is not None:
            items.append(result)
    return items
