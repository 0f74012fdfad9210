"""
Inbound request and conversation models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConversationMessage(BaseModel):
    """A single turn of the caller-owned conversation history."""

    role: Literal["user", "assistant"] = Field(description="Author of the message")
    content: str = Field(description="Message text")
    timestamp: datetime = Field(default_factory=datetime.now)

    def to_chat(self) -> dict[str, str]:
        """Convert to a chat message for the model."""
        return {"role": self.role, "content": self.content}


class PageInfo(BaseModel):
    """Identity of the page the user is looking at."""

    model_config = ConfigDict(extra="allow")

    id: str | None = Field(default=None, description="Page/item identifier")


class PageContext(BaseModel):
    """Page context forwarded by the UI."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    page_info: PageInfo | None = Field(default=None, alias="pageInfo")

    @property
    def page_id(self) -> str | None:
        """The page identifier, if the UI supplied one."""
        return self.page_info.id if self.page_info else None


class AgentRequest(BaseModel):
    """
    One orchestration request.

    Accepts the wire shape ``{prompt, pageContext?, conversationHistory?}``
    as well as the snake_case field names.
    """

    model_config = ConfigDict(populate_by_name=True)

    prompt: str = Field(description="Natural-language request")
    page_context: PageContext | None = Field(default=None, alias="pageContext")
    conversation_history: list[ConversationMessage] = Field(
        default_factory=list,
        alias="conversationHistory",
    )

    @field_validator("prompt")
    @classmethod
    def _prompt_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("prompt must not be empty")
        return value

    @field_validator("conversation_history", mode="before")
    @classmethod
    def _none_history_is_empty(cls, value):
        return [] if value is None else value

    @property
    def page_id(self) -> str | None:
        """Shortcut to the page identifier."""
        return self.page_context.page_id if self.page_context else None

    def recent_history(self, limit: int) -> list[ConversationMessage]:
        """Return the most recent ``limit`` history entries, oldest first."""
        if limit <= 0:
            return []
        return self.conversation_history[-limit:]
