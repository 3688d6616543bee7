"""Prompt Composer：把对话状态转换为模型请求。

输入 {功能类型, 用户文本, 当前历史, LanguageProfile, session_id}，
输出一个全新的 RequestPayload：

- CHAT: 完整历史（剔除系统提示消息）+ 本次用户文本作为最后一轮。
- EXERCISE: 无历史，用户轮为固定的呼吸练习请求。
- JOURNAL: 无历史，用户轮把日记原文包进固定的反思请求。

空白输入由 Orchestrator 在上游拦截，这里不再校验。
"""

from typing import TYPE_CHECKING, List, Sequence

from aura_core.domain.models import (
    ContentTurn,
    FeatureKind,
    GenerationConfig,
    Message,
    RequestPayload,
    Sender,
)

if TYPE_CHECKING:
    from aura_core.localization import LanguageProfile


EXERCISE_REQUEST = (
    "Please guide me through a short, calming breathing exercise. "
    "Give me a simple step-by-step script I can follow right now to slow down and relax."
)

JOURNAL_REQUEST = (
    "Here is my journal entry:\n\n\"\"\"\n{entry}\n\"\"\"\n\n"
    "Please offer a short, empathetic reflection on what I wrote. "
    "Acknowledge my feelings without giving advice or trying to fix anything."
)


class PromptComposer:
    """按功能类型构造 RequestPayload。

    maxOutputTokens 是各功能之间唯一不同的生成参数：聊天使用较大的额度，
    练习和日记使用可配置的统一上限。
    """

    def __init__(self, chat_max_output_tokens: int = 256, feature_max_output_tokens: int = 200):
        self._chat_max_output_tokens = chat_max_output_tokens
        self._feature_max_output_tokens = feature_max_output_tokens

    def compose(
        self,
        feature: FeatureKind,
        text: str,
        history: Sequence[Message],
        profile: "LanguageProfile",
        session_id: str,
    ) -> RequestPayload:
        if feature is FeatureKind.CHAT:
            contents = self._history_turns(history)
            contents.append(ContentTurn(role="user", text=text))
            max_tokens = self._chat_max_output_tokens
        elif feature is FeatureKind.EXERCISE:
            contents = [ContentTurn(role="user", text=EXERCISE_REQUEST)]
            max_tokens = self._feature_max_output_tokens
        else:
            contents = [ContentTurn(role="user", text=JOURNAL_REQUEST.format(entry=text))]
            max_tokens = self._feature_max_output_tokens

        return RequestPayload(
            contents=contents,
            system_instruction=profile.system_instruction(feature, session_id),
            generation_config=GenerationConfig(max_output_tokens=max_tokens),
            feature=feature,
        )

    @staticmethod
    def _history_turns(history: Sequence[Message]) -> List[ContentTurn]:
        turns: List[ContentTurn] = []
        for msg in history:
            if msg.is_notice:
                continue
            role = "user" if msg.sender is Sender.USER else "model"
            turns.append(ContentTurn(role=role, text=msg.text))
        return turns
