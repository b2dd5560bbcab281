"""Pydantic response models (DTOs) for FastAPI endpoints."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ContentItemDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str = "text"
    text: str
    mime_type: str = Field(..., alias="mimeType")


class ErrorDTO(BaseModel):
    code: str
    message: str
    retryable: bool
    details: dict[str, Any] = Field(default_factory=dict)


class ToolResponseDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: list[ContentItemDTO]
    metadata: dict[str, Any] = Field(default_factory=dict)
    is_error: bool = Field(False, alias="isError")
    error: ErrorDTO | None = None

    @classmethod
    def from_formatted_response(cls, fr):
        """Convert FormattedResponse to DTO."""
        return cls(
            content=[ContentItemDTO(text=fr.text, mime_type=fr.mime_type)],
            metadata=fr.metadata or {},
            is_error=fr.is_error,
            error=(
                ErrorDTO(
                    code=fr.error.code,
                    message=fr.error.message,
                    retryable=fr.error.retryable,
                    details=fr.error.details,
                )
                if fr.error
                else None
            ),
        )


class ToolDescriptorDTO(BaseModel):
    name: str
    description: str
    parameters: dict[str, str]


class HealthResponseDTO(BaseModel):
    status: str
    timestamp: str
    version: str
