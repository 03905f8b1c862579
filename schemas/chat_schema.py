"""Schemas for the nutrition chat assistant."""

from pydantic import BaseModel, ConfigDict, Field


class ChatMessageRequest(BaseModel):
    """Payload for sending a message to the assistant."""

    message: str = Field(..., min_length=1, max_length=4000, examples=["How much protein should I eat?"])
    language: str = Field("english", examples=["english"], description="english or hebrew")


class ChatReply(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    response: str
    message_id: str = Field(..., serialization_alias="messageId")


class ChatExchange(BaseModel):
    """One stored user message / assistant response pair."""

    message_id: int
    user_message: str
    ai_response: str
    language: str
    created_at: str

    @classmethod
    def from_model(cls, row) -> "ChatExchange":
        return cls(
            message_id=row.message_id,
            user_message=row.user_message,
            ai_response=row.ai_response,
            language=row.language,
            created_at=row.created_at.isoformat(),
        )
