"""配置管理模块 - 使用 Pydantic

集中管理客户端配置项，支持环境变量、.env 文件和配置验证。
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ClientConfig(BaseSettings):
    """客户端配置"""

    model_config = SettingsConfigDict(
        env_prefix="HTTP_MIDDLEWARE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # 请求超时（秒），None 表示不限制
    request_timeout: Optional[float] = Field(
        default=None, gt=0, description="请求超时时间（秒）"
    )

    # SSL 验证
    verify_ssl: bool = Field(default=True, description="是否验证 SSL 证书")

    user_agent: Optional[str] = Field(default=None, description="默认 User-Agent")

    log_level: str = Field(default="INFO", description="日志级别")

    @field_validator("log_level", mode="after")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        """确保日志级别有效"""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level
