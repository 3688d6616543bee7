"""对话编排层。"""

from aura_core.agents.orchestrator import ConversationOrchestrator

__all__ = ["ConversationOrchestrator"]
