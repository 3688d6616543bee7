"""Aura Core 顶层包。

该包提供支持型聊天伴侣的对话编排核心，
包括配置加载、领域模型、本地化表、提示词构造、
带退避重试的 Gemini 客户端以及对话编排器。
"""

from aura_core.agents import ConversationOrchestrator
from aura_core.domain.models import FeatureKind, Message, OperationOutcome
from aura_core.providers import create_client

__all__ = ["ConversationOrchestrator", "FeatureKind", "Message", "OperationOutcome", "create_client"]
