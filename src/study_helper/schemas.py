"""Pydantic schemas for remote question bank payloads."""

from pydantic import BaseModel, Field, StrictStr


class RemoteSubject(BaseModel):
    """One element of the ``subjects`` array."""

    subject: StrictStr = Field(..., min_length=1, description="Subject display name")
    updatetime: int = Field(..., description="Last update, epoch milliseconds")


class RemoteQuestion(BaseModel):
    """One element of the ``questions`` array."""

    question: StrictStr = Field(..., description="Question text")
    answer: StrictStr = Field(..., description="Answer text")
