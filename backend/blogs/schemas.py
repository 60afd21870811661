# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the blog endpoints."""

from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from models.blog import CATEGORIES, DEFAULT_AUTHOR, DEFAULT_READ_TIME, SOCIAL_PLATFORMS

# Literal over a tuple expands to its members.
Category = Literal[CATEGORIES]
Platform = Literal[SOCIAL_PLATFORMS]


# -- Author byline ---------------------------------------------------------
# The byline is free display data.  It never decides who may edit a post.


class SocialLink(BaseModel):
    platform: Platform
    url: str


class AuthorInfo(BaseModel):
    name: str = Field(DEFAULT_AUTHOR["name"], min_length=1)
    avatar: str = DEFAULT_AUTHOR["avatar"]
    bio: str = Field(DEFAULT_AUTHOR["bio"], max_length=500)
    social_links: List[SocialLink] = []


def author_from_input(value: Union[str, AuthorInfo, None]) -> dict:
    """
    Build the stored byline.  Accepts a bare display name (what the editor
    sends) or a full author object; anything missing takes the defaults.
    """
    if value is None:
        return AuthorInfo().model_dump()
    if isinstance(value, str):
        name = value.strip() or DEFAULT_AUTHOR["name"]
        return AuthorInfo(name=name).model_dump()
    return value.model_dump()


# -- Requests --------------------------------------------------------------


class BlogCreate(BaseModel):
    title: str = Field(min_length=1, max_length=150)
    content: str = Field(min_length=1)
    category: Category
    image: Optional[str] = None
    excerpt: str = Field("", max_length=300)
    author: Union[str, AuthorInfo, None] = None
    read_time: str = DEFAULT_READ_TIME

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v


class BlogUpdate(BaseModel):
    # Every field is optional; omitted (None) fields keep their stored value.
    title: Optional[str] = Field(None, min_length=1, max_length=150)
    content: Optional[str] = Field(None, min_length=1)
    category: Optional[Category] = None
    image: Optional[str] = None
    excerpt: Optional[str] = Field(None, max_length=300)
    author: Union[str, AuthorInfo, None] = None
    read_time: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v


# -- Responses -------------------------------------------------------------


class BlogResponse(BaseModel):
    id: int
    title: str
    slug: str
    content: str
    excerpt: str
    category: str
    featured_image: Optional[str]
    author: AuthorInfo
    user_id: Optional[int]
    read_time: str
    published_at: datetime
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BlogPage(BaseModel):
    blogs: List[BlogResponse]
    page: int
    pages: int
    total: int


class MessageResponse(BaseModel):
    msg: str
