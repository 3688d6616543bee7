"""对话编排核心模块。

ConversationOrchestrator 独占对话状态与 busy 标志，对外暴露四个功能操作：
发送聊天、请求呼吸练习、提交日记、切换语言。

约定：
- 同一时间最多一个操作在进行中，重叠调用直接拒绝（REJECTED），不排队。
- busy 在第一次 await 之前置位，因此单线程 asyncio 下无需加锁。
- 终止性失败统一转换为本地化兜底消息，对话始终处于可展示状态。
- 取消（cancel_pending）不追加任何助手消息。
"""

import logging
import time
from typing import Any, Dict, Optional, Tuple
from uuid import uuid4

from aura_core.domain.conversation import ConversationStore
from aura_core.domain.exceptions import BusinessError, RequestCancelledError
from aura_core.domain.models import FeatureKind, Message, OperationOutcome
from aura_core.infrastructure.logging.logger import log_event
from aura_core.infrastructure.storage.memory_store import InMemoryMessageStore
from aura_core.localization import LanguageProfile, get_profile
from aura_core.prompts.composer import PromptComposer
from aura_core.providers.base import CompletionClient
from aura_core.providers.resilience import CancellationToken


# 各功能失败时使用的兜底文案 key
_FALLBACK_KEYS = {
    FeatureKind.CHAT: "fallback",
    FeatureKind.EXERCISE: "exercise_fallback",
    FeatureKind.JOURNAL: "journal_fallback",
}


class ConversationOrchestrator:
    def __init__(
        self,
        client: CompletionClient,
        session_id: str,
        language: str = "en",
        store: Optional[ConversationStore] = None,
        composer: Optional[PromptComposer] = None,
    ):
        self._client = client
        self._session_id = session_id
        self._profile = get_profile(language)
        self._store = store if store is not None else InMemoryMessageStore()
        self._composer = composer or PromptComposer()
        self._busy = False
        self._pending: Optional[CancellationToken] = None
        self._last_error: Optional[str] = None
        self._journal_draft = ""
        self._store.reset(Message.assistant(self._profile.text("greeting")))

    # ---- 只读访问 ----

    @property
    def messages(self) -> Tuple[Message, ...]:
        return self._store.history()

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def profile(self) -> LanguageProfile:
        return self._profile

    @property
    def language(self) -> str:
        return self._profile.code

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def last_error(self) -> Optional[str]:
        """最近一次终止性失败的错误码，仅供诊断，不展示给用户。"""
        return self._last_error

    @property
    def journal_draft(self) -> str:
        return self._journal_draft

    # ---- 操作 ----

    def set_journal_draft(self, text: str) -> None:
        self._journal_draft = text or ""

    async def switch_language(self, code: str) -> OperationOutcome:
        """切换语言：对话重置为新语言的一条问候语。

        未知语言代码抛出 ValidationError。进行中的请求不会被自动取消，
        需要时先调用 cancel_pending()。
        """

        if self._busy:
            return OperationOutcome.REJECTED
        profile = get_profile(code)
        self._profile = profile
        self._store.reset(Message.assistant(profile.text("greeting")))
        self._last_error = None
        log_event(logging.INFO, "Switched language", {"language": profile.code})
        return OperationOutcome.COMPLETED

    async def send_chat_message(self, text: str) -> OperationOutcome:
        if self._busy or not (text or "").strip():
            return OperationOutcome.REJECTED
        # 历史取追加用户消息之前的状态，本次文本由 composer 作为最后一轮追加
        history = self._store.history()
        self._store.append(Message.user(text))
        return await self._run_feature(FeatureKind.CHAT, text, history)

    async def request_guided_exercise(self) -> OperationOutcome:
        if self._busy:
            return OperationOutcome.REJECTED
        self._store.append(Message.notice(self._profile.text("exercise_notice")))
        return await self._run_feature(FeatureKind.EXERCISE, "", ())

    async def submit_journal_entry(self, text: Optional[str] = None) -> OperationOutcome:
        """提交日记；text 为空时使用 journal_draft。结束后草稿被清空。"""

        entry = self._journal_draft if text is None else text
        if self._busy or not (entry or "").strip():
            return OperationOutcome.REJECTED
        label = self._profile.text("journal_label")
        self._store.append(Message.user(f'{label}: "{entry}"'))
        try:
            return await self._run_feature(FeatureKind.JOURNAL, entry, ())
        finally:
            self._journal_draft = ""

    def cancel_pending(self) -> bool:
        """取消进行中的请求，返回是否确实有请求被取消。"""

        if self._pending is None or self._pending.cancelled:
            return False
        self._pending.cancel()
        log_event(logging.INFO, "Cancellation requested", {"language": self._profile.code})
        return True

    # ---- 内部 ----

    async def _run_feature(self, feature: FeatureKind, text: str, history) -> OperationOutcome:
        start_time = time.time()
        log_ctx: Dict[str, Any] = {
            "trace_id": f"tr-{uuid4().hex}",
            "feature": feature.value,
            "language": self._profile.code,
        }
        profile = self._profile
        token = CancellationToken()
        self._busy = True
        self._pending = token
        self._last_error = None
        try:
            payload = self._composer.compose(feature, text, history, profile, self._session_id)
            log_event(
                logging.INFO,
                "Calling provider",
                log_ctx,
                provider=getattr(self._client, "name", None),
                turns=len(payload.contents),
            )
            reply = await self._client.send(payload, cancel_token=token)
        except RequestCancelledError:
            log_event(logging.INFO, "Operation cancelled", log_ctx)
            outcome = OperationOutcome.CANCELLED
        except BusinessError as e:
            self._store.append(Message.assistant(profile.text(_FALLBACK_KEYS[feature])))
            self._last_error = e.code
            log_event(logging.WARNING, "Operation fell back", log_ctx, code=e.code)
            outcome = OperationOutcome.FALLBACK
        else:
            self._store.append(Message.assistant(reply))
            outcome = OperationOutcome.COMPLETED
        finally:
            self._busy = False
            self._pending = None

        log_event(
            logging.INFO,
            "Completed operation",
            log_ctx,
            outcome=outcome.value,
            elapsed_seconds=round(time.time() - start_time, 2),
            message_count=len(self._store),
        )
        return outcome
