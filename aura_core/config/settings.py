"""配置管理模块。

支持从环境变量、.env 以及 config.yaml 加载配置，优先级依次降低。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_config_from_yaml() -> Dict[str, Any]:
    """从 config.yaml 加载配置（若存在）。"""
    candidates = []
    explicit = os.getenv("AURA_CONFIG_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.extend([
        Path.cwd() / "config.yaml",
        Path(__file__).resolve().parents[2] / "config.yaml",
    ])

    seen: set[Path] = set()
    for path in candidates:
        if path in seen:
            continue
        seen.add(path)
        try:
            if path.exists():
                data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
                if isinstance(data, dict):
                    return data
                warnings.warn(f"Config file {path} is not a mapping, ignored")
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(f"Failed to read config file {path}: {exc}")
    return {}


class Settings(BaseSettings):
    """配置设置（使用 Pydantic）。"""

    # ---- Gemini 相关配置 ----
    gemini_api_key: Optional[str] = Field(default=None, description="Gemini API 密钥")
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Gemini API 基础URL",
    )
    gemini_model: str = Field(
        default="gemini-2.5-flash-preview-05-20",
        description="generateContent 使用的模型 ID",
    )

    # ---- 网络与重试 ----
    http_timeout: float = Field(default=30.0, ge=1.0, description="单次 HTTP 尝试的超时时间（秒）")
    retry_attempts: int = Field(default=3, ge=1, le=10, description="单次调用的最大尝试次数")
    retry_initial_delay: float = Field(default=1.0, ge=0.0, description="首次退避等待（秒），之后每次翻倍")
    request_deadline: Optional[float] = Field(
        default=60.0,
        gt=0.0,
        description="整个重试序列的总时限（秒），为空表示不限制",
    )

    # ---- 会话 ----
    default_language: str = Field(default="en", description="启动时使用的语言代码")
    session_id: Optional[str] = Field(default=None, description="外部提供的匿名会话标识")
    chat_max_output_tokens: int = Field(default=256, ge=1, description="聊天回复的 token 上限")
    feature_max_output_tokens: int = Field(
        default=200,
        ge=1,
        description="呼吸练习 / 日记反思回复的 token 上限",
    )

    # ---- 日志 ----
    log_dir: str = Field(default="logs", description="日志目录")
    log_redact_content: bool = Field(default=False, description="是否截断日志内容")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("gemini_api_key")
    @classmethod
    def validate_api_key(cls, v: Optional[str]) -> Optional[str]:
        if v and len(v) < 10:
            raise ValueError("API key seems too short")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            _load_config_from_yaml,
            file_secret_settings,
        )


settings = Settings()
