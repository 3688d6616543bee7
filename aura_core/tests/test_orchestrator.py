import asyncio

import pytest

from aura_core.agents.orchestrator import ConversationOrchestrator
from aura_core.domain.exceptions import (
    DeadlineExceededError,
    RequestCancelledError,
    RetryExhaustedError,
    ValidationError,
)
from aura_core.domain.models import FeatureKind, MessageKind, OperationOutcome, Sender
from aura_core.localization import get_profile


class FakeClient:
    """按调用顺序返回 replies 中的结果；元素为异常时抛出。"""

    name = "fake"

    def __init__(self, *replies):
        self.replies = list(replies) or ["ok"]
        self.payloads = []

    async def send(self, payload, cancel_token=None):
        self.payloads.append(payload)
        reply = self.replies[min(len(self.payloads), len(self.replies)) - 1]
        if isinstance(reply, Exception):
            raise reply
        return reply


class GatedClient:
    """send 会挂起直到 gate 被放行，或 token 被取消。"""

    name = "gated"

    def __init__(self):
        self.gate = asyncio.Event()
        self.entered = asyncio.Event()

    async def send(self, payload, cancel_token=None):
        self.entered.set()
        if cancel_token is not None:
            await cancel_token.guard(self.gate.wait())
        else:
            await self.gate.wait()
        return "released"


def exhausted():
    return RetryExhaustedError(code="RETRY_EXHAUSTED", message="boom")


def make(client=None, language="en"):
    return ConversationOrchestrator(client or FakeClient(), session_id="aura-user-test", language=language)


def test_initial_greeting():
    orch = make()
    assert len(orch.messages) == 1
    greeting = orch.messages[0]
    assert greeting.sender is Sender.ASSISTANT
    assert greeting.text == get_profile("en").text("greeting")
    assert orch.busy is False


def test_successful_operations_grow_by_two():
    client = FakeClient("reply-1", "reply-2", "reply-3")
    orch = make(client)

    async def scenario():
        assert await orch.send_chat_message("hello") is OperationOutcome.COMPLETED
        assert await orch.request_guided_exercise() is OperationOutcome.COMPLETED
        assert await orch.submit_journal_entry("today was long") is OperationOutcome.COMPLETED

    asyncio.run(scenario())
    assert len(orch.messages) == 1 + 2 * 3
    assert [m.text for m in orch.messages if m.sender is Sender.ASSISTANT][1:] == ["reply-1", "reply-2", "reply-3"]


def test_chat_history_excludes_current_turn_and_notices():
    client = FakeClient("first", "breathe", "second")
    orch = make(client)

    async def scenario():
        await orch.send_chat_message("hello")
        await orch.request_guided_exercise()
        await orch.send_chat_message("thanks")

    asyncio.run(scenario())
    last = client.payloads[-1]
    assert last.feature is FeatureKind.CHAT
    texts = [t.text for t in last.contents]
    assert texts[-1] == "thanks"
    assert texts.count("thanks") == 1
    assert get_profile("en").text("exercise_notice") not in texts
    assert "aura-user-test" in last.system_instruction


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_blank_chat_is_noop(text):
    client = FakeClient()
    orch = make(client)
    outcome = asyncio.run(orch.send_chat_message(text))
    assert outcome is OperationOutcome.REJECTED
    assert len(orch.messages) == 1
    assert orch.busy is False
    assert client.payloads == []


def test_fallback_on_terminal_failure():
    orch = make(FakeClient(exhausted()))
    outcome = asyncio.run(orch.send_chat_message("hello"))
    assert outcome is OperationOutcome.FALLBACK
    assert orch.messages[-1].sender is Sender.ASSISTANT
    assert orch.messages[-1].text == get_profile("en").text("fallback")
    assert orch.last_error == "RETRY_EXHAUSTED"
    assert orch.busy is False


def test_fallback_is_localized_per_feature():
    orch = make(FakeClient(DeadlineExceededError(code="DEADLINE_EXCEEDED", message="slow")), language="es")

    async def scenario():
        await orch.request_guided_exercise()
        await orch.submit_journal_entry("estoy cansada")

    asyncio.run(scenario())
    es = get_profile("es")
    assistant = [m.text for m in orch.messages if m.sender is Sender.ASSISTANT]
    assert assistant[1:] == [es.text("exercise_fallback"), es.text("journal_fallback")]
    assert orch.last_error == "DEADLINE_EXCEEDED"


def test_retry_after_failure_clears_error():
    orch = make(FakeClient(exhausted(), "better now"))

    async def scenario():
        await orch.send_chat_message("hello")
        return await orch.send_chat_message("hello again")

    assert asyncio.run(scenario()) is OperationOutcome.COMPLETED
    assert orch.last_error is None
    assert orch.messages[-1].text == "better now"


def test_exercise_appends_notice():
    orch = make(FakeClient("in for four"))
    asyncio.run(orch.request_guided_exercise())
    notice = orch.messages[1]
    assert notice.sender is Sender.USER
    assert notice.kind is MessageKind.SYSTEM_NOTICE
    assert notice.text == get_profile("en").text("exercise_notice")
    assert orch.messages[2].text == "in for four"


def test_journal_quotes_entry_and_clears_draft():
    client = FakeClient("That sounds exhausting.")
    orch = make(client)
    orch.set_journal_draft("I feel tired")
    outcome = asyncio.run(orch.submit_journal_entry())
    assert outcome is OperationOutcome.COMPLETED
    user_msg = orch.messages[1]
    assert user_msg.sender is Sender.USER
    assert '"I feel tired"' in user_msg.text
    assistant = [m for m in orch.messages if m.sender is Sender.ASSISTANT]
    assert len(assistant) == 2
    assert assistant[-1].text == "That sounds exhausting."
    assert orch.journal_draft == ""
    assert client.payloads[0].feature is FeatureKind.JOURNAL
    assert len(client.payloads[0].contents) == 1


def test_journal_draft_cleared_on_failure():
    orch = make(FakeClient(exhausted()))
    orch.set_journal_draft("something heavy")
    assert asyncio.run(orch.submit_journal_entry()) is OperationOutcome.FALLBACK
    assert orch.journal_draft == ""


def test_blank_journal_keeps_draft():
    orch = make()
    orch.set_journal_draft("   ")
    assert asyncio.run(orch.submit_journal_entry()) is OperationOutcome.REJECTED
    assert len(orch.messages) == 1


def test_switch_language_resets_to_single_greeting():
    orch = make(FakeClient(exhausted()))

    async def scenario():
        await orch.send_chat_message("hello")
        return await orch.switch_language("fr")

    assert asyncio.run(scenario()) is OperationOutcome.COMPLETED
    assert len(orch.messages) == 1
    only = orch.messages[0]
    assert only.sender is Sender.ASSISTANT
    assert only.text == get_profile("fr").text("greeting")
    assert orch.language == "fr"
    assert orch.last_error is None


def test_switch_language_unknown_code():
    orch = make()
    with pytest.raises(ValidationError):
        asyncio.run(orch.switch_language("tlh"))
    assert orch.language == "en"


def test_operations_rejected_while_busy():
    client = GatedClient()
    orch = make(client)

    async def scenario():
        task = asyncio.ensure_future(orch.send_chat_message("hello"))
        await client.entered.wait()
        assert orch.busy is True
        before = orch.messages
        outcomes = [
            await orch.send_chat_message("again"),
            await orch.request_guided_exercise(),
            await orch.submit_journal_entry("entry"),
            await orch.switch_language("es"),
        ]
        assert orch.messages == before
        client.gate.set()
        final = await task
        return outcomes, final

    outcomes, final = asyncio.run(scenario())
    assert outcomes == [OperationOutcome.REJECTED] * 4
    assert final is OperationOutcome.COMPLETED
    assert orch.busy is False
    assert len(orch.messages) == 3
    assert orch.language == "en"


def test_cancel_pending_resolves_without_fallback():
    client = GatedClient()
    orch = make(client)

    async def scenario():
        task = asyncio.ensure_future(orch.send_chat_message("hello"))
        await client.entered.wait()
        assert orch.cancel_pending() is True
        outcome = await task
        switched = await orch.switch_language("es")
        return outcome, switched

    outcome, switched = asyncio.run(scenario())
    assert outcome is OperationOutcome.CANCELLED
    assert switched is OperationOutcome.COMPLETED
    assert orch.busy is False
    assert len(orch.messages) == 1
    assert orch.messages[0].text == get_profile("es").text("greeting")


def test_cancelled_operation_appends_nothing():
    orch = make(FakeClient(RequestCancelledError(code="REQUEST_CANCELLED", message="cancel")))
    outcome = asyncio.run(orch.send_chat_message("hello"))
    assert outcome is OperationOutcome.CANCELLED
    assert [m.sender for m in orch.messages] == [Sender.ASSISTANT, Sender.USER]
    assert orch.last_error is None


def test_cancel_pending_when_idle():
    assert make().cancel_pending() is False
