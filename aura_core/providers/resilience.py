"""重试策略与取消令牌。

RetryPolicy 描述一次逻辑调用的尝试预算与退避节奏；
CancellationToken 让调用方放弃一个已经过时的请求（例如切换语言前）。
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Optional

from aura_core.domain.exceptions import RequestCancelledError


@dataclass(frozen=True)
class RetryPolicy:
    """有界指数退避。

    默认 3 次尝试：失败后依次等待 1s、2s，最后一次失败后不再等待。
    deadline 为整个重试序列（含等待）的总时限，None 表示不限制。
    """

    max_attempts: int = 3
    initial_delay: float = 1.0
    multiplier: float = 2.0
    deadline: Optional[float] = None

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.initial_delay < 0:
            raise ValueError("initial_delay must be >= 0")

    def delays(self) -> list[float]:
        """两次尝试之间的等待序列，长度为 max_attempts - 1。"""

        out = []
        delay = self.initial_delay
        for _ in range(self.max_attempts - 1):
            out.append(delay)
            delay *= self.multiplier
        return out


class CancellationToken:
    """一次性取消信号，由 Orchestrator 持有并在需要时触发。"""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise RequestCancelledError(code="REQUEST_CANCELLED", message="Request cancelled by caller")

    async def guard(self, awaitable: Awaitable[Any]) -> Any:
        """等待 awaitable，若期间收到取消信号则中止它并抛出 RequestCancelledError。"""

        if self.cancelled:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            self.raise_if_cancelled()

        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            waiter.cancel()

        if task in done:
            return task.result()
        task.cancel()
        # 等待被中止的任务真正结束，吞掉其 CancelledError
        await asyncio.gather(task, return_exceptions=True)
        self.raise_if_cancelled()
