"""Completion Provider 抽象接口。

Orchestrator 不直接依赖具体厂商的 HTTP 细节，而是依赖此协议：

- 每个厂商实现一个 CompletionClient（如 GeminiClient）。
- 负责：将 RequestPayload 转成具体 API 请求，执行有界重试，并返回回复文本。
"""

from typing import Optional, Protocol

from aura_core.domain.models import RequestPayload
from aura_core.providers.resilience import CancellationToken


class CompletionClient(Protocol):
    """LLM 补全客户端协议。

    实现者需要提供：
    - name: Provider 名称，用于日志。
    - send(payload, cancel_token): 一次逻辑调用，成功返回文本；
      失败只抛出 CompletionUnavailableError，取消时抛出 RequestCancelledError。
    """

    name: str

    async def send(self, payload: RequestPayload, cancel_token: Optional[CancellationToken] = None) -> str:
        ...
