"""Pydantic schemas for Note endpoints."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NoteRead(BaseModel):
    id: uuid.UUID
    title: str
    content: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SearchResponse(BaseModel):
    notes: list[NoteRead]


class StatsResponse(BaseModel):
    total_notes: int = Field(alias="totalNotes")
    total_words: int = Field(alias="totalWords")

    model_config = ConfigDict(populate_by_name=True)


class HealthResponse(BaseModel):
    status: str
    timestamp: int


class ErrorResponse(BaseModel):
    error: str
    detail: str | None = None
