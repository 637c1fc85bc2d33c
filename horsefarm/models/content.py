"""Pydantic schemas for editorial content: blog posts, area guides and FAQs."""

from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class BlogAuthor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    avatar: str = ""


class BlogPost(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    slug: str
    title: str
    excerpt: str = ""
    content: str = ""
    featured_image: str = ""
    author: BlogAuthor
    category: str = "Uncategorized"
    tags: List[str] = Field(default_factory=list)
    published_at: datetime
    read_time: int = Field(1, ge=0)


class BlogCategory(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    database_id: int = 0
    name: str
    slug: str
    description: str = ""
    count: int = 0


class ServiceArea(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    name: str
    county: str
    description: str
    highlights: List[str] = Field(default_factory=list)
    nearby_attractions: List[str] = Field(default_factory=list)


class FAQ(BaseModel):
    model_config = ConfigDict(frozen=True)

    question: str
    answer: str

