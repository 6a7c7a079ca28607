"""Pydantic models describing the public JSON bodies of ``/api/summarize``."""

from pydantic import BaseModel


class SummaryResponse(BaseModel):
    summary: str


class ErrorResponse(BaseModel):
    error: str
