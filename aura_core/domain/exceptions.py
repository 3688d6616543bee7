"""统一业务异常模型。

所有跨模块抛出的业务级错误都继承自 BusinessError，
Orchestrator 在边界处统一捕获并转换为本地化的兜底消息。

分类：
- 可重试：NetworkError / ApiError / RateLimitError / MalformedResponseError，
  只在 API Client 内部出现，由重试循环吸收。
- 终止：CompletionUnavailableError 及其子类，是唯一会穿出 Client 的失败。
- 取消：RequestCancelledError，调用方主动放弃，不产生兜底消息。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "RETRY_EXHAUSTED"）。
        message: 错误描述，仅用于日志，不直接展示给用户。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 attempts、provider 等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class NetworkError(BusinessError):
    """网络层错误，例如连接失败、DNS 错误、超时等。"""


class ApiError(BusinessError):
    """远端返回非 2xx 状态时抛出。"""


class RateLimitError(BusinessError):
    """远端限流（429），与其他失败一样参与退避重试。"""


class MalformedResponseError(BusinessError):
    """2xx 响应但缺少 candidates[0].content.parts[0].text。"""


class CompletionUnavailableError(BusinessError):
    """终止性失败的基类：本次调用不会再有结果。"""


class RetryExhaustedError(CompletionUnavailableError):
    """所有尝试均失败。不携带根因细节，根因只写入日志。"""


class DeadlineExceededError(CompletionUnavailableError):
    """整个重试序列超出总时限。"""


class RequestCancelledError(BusinessError):
    """调用方通过 CancellationToken 放弃了请求。"""


class ValidationError(BusinessError):
    """参数或配置校验失败。"""


RETRYABLE_ERRORS = (NetworkError, ApiError, RateLimitError, MalformedResponseError)
