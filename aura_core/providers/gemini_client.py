"""Gemini Provider 适配器。

本模块负责：

1. 接收统一的 RequestPayload，转换为 generateContent 的 JSON 请求体。
2. 发送 HTTP 请求并把各种失败归类为可重试错误。
3. 按 RetryPolicy 做有界指数退避，支持取消令牌与总时限。
4. 从 candidates[0].content.parts[0].text 中取出回复文本。

可重试错误（网络、非 2xx、限流、响应格式不对）全部在这里吸收，
对外只会抛出 RetryExhaustedError / DeadlineExceededError / RequestCancelledError。
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional
from uuid import uuid4

import httpx

from aura_core.domain.exceptions import (
    RETRYABLE_ERRORS,
    ApiError,
    BusinessError,
    DeadlineExceededError,
    MalformedResponseError,
    NetworkError,
    RateLimitError,
    RetryExhaustedError,
    ValidationError,
)
from aura_core.domain.models import RequestPayload
from aura_core.infrastructure.logging.logger import log_event
from aura_core.providers.registry import GEMINI_CONFIG
from aura_core.providers.resilience import CancellationToken, RetryPolicy


class GeminiClient:
    """Gemini generateContent 客户端实现。

    - name: Provider 名称（供日志使用）。
    - send: 对外统一调用入口，返回回复文本。
    """

    name = "gemini"

    def __init__(
        self,
        settings,
        retry_policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        # Settings 里包含 base_url、api_key、超时等配置
        self._settings = settings
        self._policy = retry_policy or RetryPolicy()
        self._sleep = sleep

    async def send(self, payload: RequestPayload, cancel_token: Optional[CancellationToken] = None) -> str:
        """执行一次逻辑调用（含重试）。"""

        if not getattr(self._settings, "gemini_api_key", None):
            # 配置缺失走 ValidationError，不参与重试
            raise ValidationError(code="MISSING_API_KEY", message="GEMINI_API_KEY not set")
        log_ctx: Dict[str, Any] = {
            "trace_id": f"tr-{uuid4().hex}",
            "provider": self.name,
            "feature": payload.feature.value,
        }
        body = self._build_body(payload)
        if self._policy.deadline is None:
            return await self._send_with_retry(body, cancel_token, log_ctx)
        try:
            return await asyncio.wait_for(
                self._send_with_retry(body, cancel_token, log_ctx),
                timeout=self._policy.deadline,
            )
        except asyncio.TimeoutError:
            log_event(logging.WARNING, "Completion deadline exceeded", log_ctx, deadline=self._policy.deadline)
            raise DeadlineExceededError(
                code="DEADLINE_EXCEEDED",
                message=f"No completion within {self._policy.deadline}s",
            ) from None

    async def _send_with_retry(
        self,
        body: Dict[str, Any],
        cancel_token: Optional[CancellationToken],
        log_ctx: Dict[str, Any],
    ) -> str:
        attempts = self._policy.max_attempts
        delays = self._policy.delays()
        last_error: Optional[BusinessError] = None
        for attempt in range(1, attempts + 1):
            try:
                if cancel_token is not None:
                    text = await cancel_token.guard(self._attempt(body))
                else:
                    text = await self._attempt(body)
            except RETRYABLE_ERRORS as e:
                last_error = e
                log_event(
                    logging.WARNING,
                    "Completion attempt failed",
                    log_ctx,
                    attempt=attempt,
                    attempts=attempts,
                    code=e.code,
                    http_status=e.http_status,
                )
            else:
                log_event(logging.INFO, "Completion succeeded", log_ctx, attempt=attempt, reply_chars=len(text))
                return text

            if attempt < attempts:
                delay = delays[attempt - 1]
                if cancel_token is not None:
                    await cancel_token.guard(self._sleep(delay))
                else:
                    await self._sleep(delay)

        log_event(
            logging.ERROR,
            "Completion retries exhausted",
            log_ctx,
            attempts=attempts,
            last_code=last_error.code if last_error else None,
        )
        raise RetryExhaustedError(
            code="RETRY_EXHAUSTED",
            message=f"Failed to get response from AI after {attempts} attempts",
            attempts=attempts,
        )

    async def _attempt(self, body: Dict[str, Any]) -> str:
        """单次 HTTP 尝试，所有失败都转换为可重试的 BusinessError。"""

        base = getattr(self._settings, "gemini_base_url", None) or GEMINI_CONFIG.base_url
        model = getattr(self._settings, "gemini_model", None) or GEMINI_CONFIG.model
        url = base.rstrip("/") + GEMINI_CONFIG.endpoint.format(model=model)
        try:
            async with httpx.AsyncClient(timeout=self._settings.http_timeout, trust_env=False) as client:
                resp = await client.post(
                    url,
                    json=body,
                    headers={
                        "x-goog-api-key": self._settings.gemini_api_key,
                        "Content-Type": "application/json",
                    },
                )
        except httpx.RequestError as e:
            # 网络错误：DNS 失败、连接被拒、超时等
            raise NetworkError(code="NETWORK_ERROR", message=str(e) or type(e).__name__)
        if resp.status_code == 429:
            raise RateLimitError(code="RATE_LIMIT", message="Gemini rate limit", http_status=429)
        if not 200 <= resp.status_code < 300:
            raise ApiError(code="API_ERROR", message=f"HTTP {resp.status_code}", http_status=resp.status_code)
        try:
            data = resp.json()
        except ValueError:
            raise MalformedResponseError(code="MALFORMED_RESPONSE", message="Response body is not JSON")
        return self._extract_text(data)

    @staticmethod
    def _build_body(payload: RequestPayload) -> Dict[str, Any]:
        """将 RequestPayload 转成 generateContent 所需的请求 JSON。"""

        cfg = payload.generation_config
        return {
            "contents": [
                {"role": turn.role, "parts": [{"text": turn.text}]}
                for turn in payload.contents
            ],
            "systemInstruction": {
                "role": "system",
                "parts": [{"text": payload.system_instruction}],
            },
            "generationConfig": {
                "temperature": cfg.temperature,
                "topK": cfg.top_k,
                "topP": cfg.top_p,
                "maxOutputTokens": cfg.max_output_tokens,
            },
        }

    @staticmethod
    def _extract_text(data: Any) -> str:
        """取出 candidates[0].content.parts[0].text，形状不符即视为格式错误。"""

        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            raise MalformedResponseError(code="MALFORMED_RESPONSE", message="Missing candidate text") from None
        if not isinstance(text, str) or not text.strip():
            raise MalformedResponseError(code="MALFORMED_RESPONSE", message="Empty candidate text")
        return text
