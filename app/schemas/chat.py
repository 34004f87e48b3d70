"""Schemas for the chat endpoint."""

from typing import Any

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Request body for POST /chat. A missing or blank message is rejected by the handler with 400."""

    message: Any = Field(None, description="User question about the platform (type-checked by the chat handler).")


class ChatResponse(BaseModel):
    """Response for POST /chat."""

    response: str = Field(..., description="Answer from the assistant.")


class ChatErrorResponse(BaseModel):
    """Error body for POST /chat. `response` carries guidance text that can be shown to the user."""

    error: str = Field(..., description="Short machine-facing error summary.")
    response: str | None = Field(None, description="User-facing explanation, when available.")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "Failed to process request",
                    "response": "I apologize, but I encountered an error. Please try again later or check the server logs for more details.",
                }
            ]
        }
    }
