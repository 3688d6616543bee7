import dataclasses

import pytest

from aura_core.domain.models import Message, MessageKind, Sender
from aura_core.infrastructure.storage.memory_store import InMemoryMessageStore


def test_message_constructors():
    u = Message.user("hi")
    a = Message.assistant("hello")
    n = Message.notice("requesting...")
    assert u.sender is Sender.USER and u.kind is MessageKind.NORMAL
    assert a.sender is Sender.ASSISTANT
    assert n.sender is Sender.USER and n.is_notice
    assert u.timestamp.tzinfo is not None


def test_message_is_immutable():
    m = Message.user("hi")
    with pytest.raises(dataclasses.FrozenInstanceError):
        m.text = "changed"


def test_store_append_history_reset():
    store = InMemoryMessageStore(seed=Message.assistant("greeting"))
    store.append(Message.user("a"))
    store.append(Message.assistant("b"))
    history = store.history()
    assert [m.text for m in history] == ["greeting", "a", "b"]
    assert len(store) == 3

    store.reset(Message.assistant("hola"))
    assert [m.text for m in store.history()] == ["hola"]
    # 之前取出的快照不受影响
    assert len(history) == 3


def test_store_history_is_read_only():
    store = InMemoryMessageStore()
    store.append(Message.user("a"))
    history = store.history()
    assert isinstance(history, tuple)
    store.append(Message.user("b"))
    assert len(history) == 1
