"""Role-tagged chat message."""

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["Message"]


class Message(BaseModel):
    """A single role/content message produced by message-mode rendering."""

    model_config = ConfigDict(frozen=True)

    role: str = Field(description="Message role, e.g. 'user' or 'system'")
    content: str = Field(default="", description="Message text")
    name: str | None = Field(
        default=None, description="Optional author name for the message"
    )
