"""Chat transcript model.

The chat transcript is kept apart from the terminal transcript: sending a
prompt or receiving generated text never touches the terminal session.
"""

from datetime import datetime, timezone
from typing import Any, Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

ChatRole = Literal["user", "assistant"]


class ChatMessage(BaseModel):
    """A single message in the chat transcript.

    Args:
        message_id: Unique message identifier.
        role: "user" or "assistant".
        content: Message text.
        timestamp: When the message was added.
        metadata: Optional additional data (model name, fallback flag, files).
    """

    model_config = ConfigDict(frozen=True)

    message_id: str = Field(
        default_factory=lambda: str(uuid4()), description="Unique message identifier"
    )
    role: ChatRole = Field(description="Message role (user or assistant)")
    content: str = Field(description="Message text")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the message was added",
    )
    metadata: dict = Field(default_factory=dict, description="Optional additional data")

    @field_validator("content")
    @classmethod
    def validate_content(cls, value: str) -> str:
        """Reject blank message text.

        Raises:
            ValueError: If the content is empty or whitespace.
        """
        if not value.strip():
            raise ValueError("Message content cannot be empty")
        return value

    def to_dict(self) -> dict[str, Any]:
        """Convert this message to a dictionary."""
        result = {
            "message_id": self.message_id,
            "role": self.role,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.metadata:
            result["metadata"] = self.metadata
        return result


class ChatState(BaseModel):
    """Ordered chat transcript.

    Args:
        messages: Messages in the order they were added.
    """

    model_config = ConfigDict(frozen=True)

    messages: tuple[ChatMessage, ...] = Field(
        default=(), description="Messages in the order they were added"
    )

    def add_message(
        self, role: ChatRole, content: str, metadata: dict | None = None
    ) -> "ChatState":
        """Return a new state with one more message appended."""
        message = ChatMessage(role=role, content=content, metadata=metadata or {})
        return ChatState(messages=(*self.messages, message))

    @property
    def last_message(self) -> ChatMessage | None:
        """Return the most recent message, if any."""
        return self.messages[-1] if self.messages else None

    def query(self, query_params: dict[str, Any]) -> dict[str, Any]:
        """Filter messages.

        Supported query parameters:
            - role: str - Filter by role
            - search: str - Case-insensitive text search in content
            - limit: int - Maximum number of results (most recent kept)

        Returns:
            Dictionary with ``messages``, ``count`` and ``total_count``.
        """
        filtered = list(self.messages)

        role = query_params.get("role")
        if role:
            filtered = [m for m in filtered if m.role == role]

        search = query_params.get("search")
        if search:
            search_lower = search.lower()
            filtered = [m for m in filtered if search_lower in m.content.lower()]

        total_count = len(filtered)
        limit = query_params.get("limit")
        if limit:
            filtered = filtered[-limit:]

        return {
            "messages": [m.to_dict() for m in filtered],
            "count": len(filtered),
            "total_count": total_count,
        }

    def get_snapshot(self) -> dict[str, Any]:
        """Return a JSON-serializable view of the transcript."""
        return {
            "messages": [m.to_dict() for m in self.messages],
            "total_message_count": len(self.messages),
        }
