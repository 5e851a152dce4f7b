from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FileRef(BaseModel):
    """One content file in the posts directory, as returned by the listing."""

    filename: str
    sha: str
    url: Optional[str] = None


class Post(BaseModel):
    filename: str
    title: str
    tags: List[str] = Field(default_factory=list)
    body: str
    sha: str


class ParsedPost(BaseModel):
    title: str = ""
    tags: List[str] = Field(default_factory=list)
    tags_text: str = ""
    body: str = ""


class PostDraft(BaseModel):
    """Admin form contents. Frozen; use apply_change to get an updated copy."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    body: str = ""
    tags_text: str = ""


class PostUpdate(PostDraft):
    sha: str


class PreviewRequest(BaseModel):
    text: str
    mode: str = "gfm"


class PreviewResponse(BaseModel):
    html: str


# Relational backend


class TablePostIn(BaseModel):
    title: str
    slug: str
    content: str


class TablePost(TablePostIn):
    model_config = ConfigDict(from_attributes=True)

    id: int
    published_at: Optional[datetime] = None
