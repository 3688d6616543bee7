"""LLM Provider 集成层。

该包下的模块负责：
- 定义补全客户端抽象接口 (base)。
- 维护端点与模型配置 (registry)。
- 重试策略与取消令牌 (resilience)。
- 提供具体实现 (gemini_client)。
"""

from typing import Optional

from aura_core.config.settings import settings
from aura_core.providers.base import CompletionClient
from aura_core.providers.gemini_client import GeminiClient
from aura_core.providers.registry import get_provider_config
from aura_core.providers.resilience import CancellationToken, RetryPolicy


def create_client(cfg=None, name: Optional[str] = None) -> CompletionClient:
    """根据配置创建补全客户端，重试策略取自配置。"""

    cfg = cfg or settings
    # 目前只有 gemini 一个实现，未知名称由 registry 抛 KeyError
    get_provider_config(name or GeminiClient.name)
    policy = RetryPolicy(
        max_attempts=getattr(cfg, "retry_attempts", 3),
        initial_delay=getattr(cfg, "retry_initial_delay", 1.0),
        deadline=getattr(cfg, "request_deadline", None),
    )
    return GeminiClient(cfg, retry_policy=policy)


__all__ = ["CancellationToken", "CompletionClient", "GeminiClient", "RetryPolicy", "create_client"]
