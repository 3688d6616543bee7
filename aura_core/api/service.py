"""对外 API 服务模块。

提供进程级默认 Orchestrator 与可直接序列化的对话快照，
供展示层（Web / 桌面 / 终端）调用。
"""

import secrets
import string
import time
from typing import Any, Dict, Optional

from aura_core.agents.orchestrator import ConversationOrchestrator
from aura_core.config.settings import settings
from aura_core.prompts import PromptComposer
from aura_core.providers import create_client


_orchestrator: Optional[ConversationOrchestrator] = None

_ID_ALPHABET = string.ascii_lowercase + string.digits


def new_session_id() -> str:
    """生成匿名会话标识，格式 aura-user-<毫秒时间戳>-<9 位随机串>。

    持久化由调用方负责。
    """

    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"aura-user-{int(time.time() * 1000)}-{suffix}"


def get_default_orchestrator(session_id: Optional[str] = None) -> ConversationOrchestrator:
    """获取默认的 Orchestrator 实例（单例）。"""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = ConversationOrchestrator(
            client=create_client(settings),
            session_id=session_id or settings.session_id or new_session_id(),
            language=settings.default_language,
            composer=PromptComposer(
                chat_max_output_tokens=settings.chat_max_output_tokens,
                feature_max_output_tokens=settings.feature_max_output_tokens,
            ),
        )
    return _orchestrator


def reset_default_orchestrator() -> None:
    global _orchestrator
    _orchestrator = None


def conversation_snapshot(orchestrator: ConversationOrchestrator) -> Dict[str, Any]:
    """把当前对话状态转换为 JSON 友好的字典。

    Returns:
        包含语言、busy、最近错误码和消息列表的字典
    """

    return {
        "language": orchestrator.language,
        "busy": orchestrator.busy,
        "last_error": orchestrator.last_error,
        "messages": [
            {
                "text": m.text,
                "sender": m.sender.value,
                "kind": m.kind.value,
                "timestamp": m.timestamp.isoformat(),
            }
            for m in orchestrator.messages
        ],
    }
