from typing import Literal

from pydantic import BaseModel, Field


class LoggingConfig(BaseModel):
    """Configuration for the root logger."""

    level: str = Field(default="INFO", description="Root log level")
    json_output: bool = Field(
        default=True,
        description="Emit JSON lines instead of human-readable output",
    )


class TokenizerConfig(BaseModel):
    """Configuration for the default tokenizer."""

    encoding: str = Field(
        default="cl100k_base",
        description="tiktoken encoding name used to count prompt tokens",
    )


class RenderConfig(BaseModel):
    """Configuration for prompt rendering."""

    max_tokens: int = Field(
        default=4096,
        description="Default token budget when the caller does not pass one",
    )


class ModerationCategoryConfig(BaseModel):
    """A content-safety category and the severity threshold that flags it."""

    category: Literal["Hate", "SelfHarm", "Sexual", "Violence"] = Field(
        description="Content-safety harm category"
    )
    severity: int = Field(
        default=6,
        ge=0,
        le=7,
        description="Results with 0 < severity <= this value are flagged",
    )


def _default_categories() -> list[ModerationCategoryConfig]:
    return [
        ModerationCategoryConfig(category="Hate"),
        ModerationCategoryConfig(category="SelfHarm"),
        ModerationCategoryConfig(category="Sexual"),
        ModerationCategoryConfig(category="Violence"),
    ]


class ModerationConfig(BaseModel):
    """Configuration for the content-safety moderator."""

    endpoint: str = Field(
        default="https://localhost",
        description="Content-safety resource endpoint, without trailing path",
    )
    api_key: str = Field(default="", description="Subscription key")
    api_version: str = Field(
        default="2023-10-01", description="Content-safety API version"
    )
    moderate: Literal["input", "output", "both"] = Field(
        default="both", description="Which direction of traffic to review"
    )
    categories: list[ModerationCategoryConfig] = Field(
        default_factory=_default_categories,
        description="Categories to analyze and their flagging thresholds",
    )
    timeout: float = Field(default=10.0, description="HTTP timeout in seconds")
