"""对话与请求的数据模型。

- Message: 一条对话消息（用户 / 助手，普通 / 系统提示）。
- ContentTurn / GenerationConfig / RequestPayload: 发给远端模型的统一请求结构，
  由 Provider 适配层转换为具体的 HTTP JSON。
- FeatureKind: 选择提示词模板的功能类型。
- OperationOutcome: Orchestrator 每个操作的结果。
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Literal


class Sender(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class MessageKind(str, Enum):
    NORMAL = "normal"
    # 以用户名义展示的通知（如 "正在请求练习…"），不进入发给模型的历史
    SYSTEM_NOTICE = "system-notice"


class FeatureKind(str, Enum):
    CHAT = "chat"
    EXERCISE = "exercise"
    JOURNAL = "journal"


class OperationOutcome(str, Enum):
    """Orchestrator 操作的结果。

    - COMPLETED: 收到模型回复并已追加。
    - FALLBACK: 终止性失败，已追加本地化兜底消息。
    - CANCELLED: 请求被取消，不追加任何助手消息。
    - REJECTED: 输入为空或已有操作进行中，对话状态未改变。
    """

    COMPLETED = "completed"
    FALLBACK = "fallback"
    CANCELLED = "cancelled"
    REJECTED = "rejected"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Message:
    """一条对话消息，创建后不可修改。"""

    text: str
    sender: Sender
    kind: MessageKind = MessageKind.NORMAL
    timestamp: datetime = field(default_factory=_utcnow)

    @classmethod
    def user(cls, text: str) -> "Message":
        return cls(text=text, sender=Sender.USER)

    @classmethod
    def assistant(cls, text: str) -> "Message":
        return cls(text=text, sender=Sender.ASSISTANT)

    @classmethod
    def notice(cls, text: str) -> "Message":
        return cls(text=text, sender=Sender.USER, kind=MessageKind.SYSTEM_NOTICE)

    @property
    def is_notice(self) -> bool:
        return self.kind is MessageKind.SYSTEM_NOTICE


# 远端模型的对话角色：助手在 Gemini 中称为 "model"
TurnRole = Literal["user", "model"]


@dataclass(frozen=True)
class ContentTurn:
    role: TurnRole
    text: str


@dataclass(frozen=True)
class GenerationConfig:
    max_output_tokens: int
    temperature: float = 0.7
    top_k: int = 1
    top_p: float = 1.0


@dataclass
class RequestPayload:
    """一次完整的模型请求，每次调用重新构造，不做保留。"""

    contents: List[ContentTurn]
    system_instruction: str
    generation_config: GenerationConfig
    feature: FeatureKind = FeatureKind.CHAT
