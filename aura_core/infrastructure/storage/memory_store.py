from typing import List, Tuple

from aura_core.domain.conversation import ConversationStore
from aura_core.domain.models import Message


class InMemoryMessageStore(ConversationStore):
    """进程内的消息日志，进程退出即丢弃。"""

    def __init__(self, seed: Message | None = None):
        self._messages: List[Message] = [seed] if seed is not None else []

    def append(self, message: Message) -> None:
        self._messages.append(message)

    def history(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    def reset(self, seed: Message) -> None:
        self._messages = [seed]

    def __len__(self) -> int:
        return len(self._messages)
