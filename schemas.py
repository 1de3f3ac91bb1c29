"""
Diary data shapes.

``DiaryEntry`` mirrors a document of the ``diaries`` collection. The request
models validate incoming bodies before anything reaches the store.
"""

from datetime import datetime
from typing import Any, Dict, List, Mapping

from pydantic import BaseModel, Field, validator

import dates
from errors import InvalidInputError


class DiaryEntry(BaseModel):
    owner: str = Field(..., description="Owner user id")
    day: datetime = Field(..., description="Calendar day, midnight")
    content: str = Field("", description="Free text")
    image: str = Field("", description="Uploaded image URL")
    emotions: List[str] = Field(default_factory=list, description="Emotion names")
    theme: str = Field("", description="Theme name")

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "DiaryEntry":
        return cls(
            owner=doc["user_id"],
            day=doc["date"],
            content=doc.get("content") or "",
            image=doc.get("image") or "",
            emotions=list(doc.get("emotions") or []),
            theme=doc.get("theme") or "",
        )

    def to_response(self) -> "DiaryOut":
        return DiaryOut(
            content=self.content,
            image=self.image,
            date=dates.format_day(self.day),
            emotions=self.emotions,
            theme=self.theme,
        )


class WriteDiary(BaseModel):
    date: str = Field(..., description="YYYY-MM-DD")
    content: str
    image: str
    emotions: List[str]
    theme: str

    @validator("date")
    def validate_date(cls, v: str) -> str:
        try:
            dates.parse_day(v)
        except InvalidInputError:
            raise ValueError("date must be YYYY-MM-DD")
        return v

    @validator("content", "image", "theme")
    def validate_not_blank(cls, v: str) -> str:
        if not v:
            raise ValueError("must not be empty")
        return v

    @validator("emotions")
    def validate_emotions(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("at least one emotion is required")
        return v

    def to_entry(self, owner: str) -> DiaryEntry:
        return DiaryEntry(
            owner=owner,
            day=dates.parse_day(self.date),
            content=self.content,
            image=self.image,
            emotions=self.emotions,
            theme=self.theme,
        )


class DiaryOut(BaseModel):
    content: str
    image: str
    date: str
    emotions: List[str]
    theme: str


class DiaryList(BaseModel):
    diaries: List[DiaryOut] = Field(default_factory=list)


class DiaryCount(BaseModel):
    diary_count: int
    day_count: int


class EmotionCount(BaseModel):
    emotions: Dict[str, int]


class Message(BaseModel):
    message: str
