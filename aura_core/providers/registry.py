"""Provider 端点配置。

集中维护远端端点与模型 ID，上层只通过 settings 覆盖，不在调用处拼 URL。
"""

from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class ProviderConfig:
    """某个 Provider 的端点配置。"""

    name: str
    base_url: str
    model: str
    # 相对 base_url 的路径模板
    endpoint: str


GEMINI_CONFIG = ProviderConfig(
    name="gemini",
    base_url="https://generativelanguage.googleapis.com/v1beta",
    model="gemini-2.5-flash-preview-05-20",
    endpoint="/models/{model}:generateContent",
)


PROVIDER_REGISTRY: Mapping[str, ProviderConfig] = {
    "gemini": GEMINI_CONFIG,
}


def get_provider_config(name: str) -> ProviderConfig:
    """根据名称获取 ProviderConfig，名称不区分大小写。"""

    key = name.lower()
    for k, cfg in PROVIDER_REGISTRY.items():
        if k.lower() == key:
            return cfg
    raise KeyError(f"Unknown provider: {name!r}")
