"""Pydantic schemas for processing responses."""

from pydantic import BaseModel, ConfigDict, Field


class ProcessResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Video processed successfully"
    original_name: str = Field(alias="originalName")
    original_size: int = Field(alias="originalSize")
    processed_size: int = Field(alias="processedSize")
    processed_video: str = Field(alias="processedVideo")
    thumbnail: str | None = None
    timestamp: str


class ThumbnailResponse(BaseModel):
    success: bool = True
    message: str = "Thumbnail generated successfully"
    thumbnail: str
    size: int
    timestamp: str


class ErrorResponse(BaseModel):
    error: str
    category: str
    details: str
    timestamp: str
