"""提示词相关工具。

- personas: 各功能类型的人设模板与语言限定。
- composer: 根据对话状态构造 RequestPayload。
"""

from aura_core.prompts.composer import EXERCISE_REQUEST, JOURNAL_REQUEST, PromptComposer
from aura_core.prompts.personas import make_instruction_template

__all__ = ["EXERCISE_REQUEST", "JOURNAL_REQUEST", "PromptComposer", "make_instruction_template"]
