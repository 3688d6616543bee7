from typing import Protocol, Tuple

from .models import Message


class ConversationStore(Protocol):
    """按对话顺序保存 Message 的只追加日志。

    顺序即对话顺序，会作为历史原样发给模型。
    """

    def append(self, message: Message) -> None:
        ...

    def history(self) -> Tuple[Message, ...]:
        ...

    def reset(self, seed: Message) -> None:
        ...

    def __len__(self) -> int:
        ...
