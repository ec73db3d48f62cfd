import html
from datetime import datetime
from typing import List, Optional

import bleach
from pydantic import BaseModel, field_validator

TEXT_REQUIRED = "Text is required"


def clean_text(value: str) -> str:
    """Strip markup and surrounding whitespace from user-supplied text.
    Stored text is plain, so entities bleach escapes are decoded again.
    """
    return html.unescape(bleach.clean(value, tags=set(), strip=True)).strip()


class TextBody(BaseModel):
    text: str

    @field_validator("text", mode="before")
    @classmethod
    def text_must_not_be_empty(cls, value):
        if not isinstance(value, str):
            raise ValueError(TEXT_REQUIRED)
        cleaned = clean_text(value)
        if not cleaned:
            raise ValueError(TEXT_REQUIRED)
        return cleaned


class PostCreate(TextBody):
    pass


class CommentCreate(TextBody):
    pass


class Like(BaseModel):
    user: str


class Comment(BaseModel):
    id: str
    user: str
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    date: datetime


class Post(BaseModel):
    id: str
    user: str
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    likes: List[Like] = []
    comments: List[Comment] = []
    date: datetime


class Message(BaseModel):
    msg: str
