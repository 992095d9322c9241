import asyncio
import functools
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable

from settings import settings

# Firebase Admin SDK синхронный: его вызовы идут в отдельный пул,
# корутина обработчика только ждёт результат
firebase_executor = ThreadPoolExecutor(
    max_workers=settings.FIREBASE_IO_WORKERS,
    thread_name_prefix="firebase-io",
)


async def run_blocking(func: Callable, *args, executor: ThreadPoolExecutor = firebase_executor, **kwargs) -> Any:
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(executor, functools.partial(func, *args, **kwargs))
