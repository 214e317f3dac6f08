"""Request body schemas.

Field names follow the JSON the front-end sends (camelCase); attribute names
are snake_case.
"""
from typing import Literal, Optional

import pydantic
from flask import request
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from jelly.errors import ValidationError


class RequestModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)


class LoginRequest(RequestModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class SignupRequest(RequestModel):
    name: str = Field(..., min_length=2)
    email: EmailStr
    password: str = Field(..., min_length=6)
    master_code: Optional[str] = None


class ArticleCreate(RequestModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    excerpt: str = Field(..., min_length=1)
    image_url: Optional[str] = None
    category: Optional[str] = None
    status: Literal['draft', 'published'] = 'draft'


class ArticleUpdate(RequestModel):
    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = Field(None, min_length=1)
    excerpt: Optional[str] = Field(None, min_length=1)
    image_url: Optional[str] = None
    category: Optional[str] = None
    status: Optional[Literal['draft', 'published']] = None


class RoleUpdate(RequestModel):
    user_id: str = Field(..., min_length=1)
    role: Literal['owner', 'editor', 'contributor', 'reader']


class ProfileUpdate(RequestModel):
    name: Optional[str] = Field(None, min_length=2)
    bio: Optional[str] = None
    profile_picture_url: Optional[str] = None


class ContentUpdate(RequestModel):
    value: str
    type: Optional[Literal['text', 'html', 'image', 'link']] = None


class ContactMessage(RequestModel):
    name: str = Field(..., min_length=2)
    email: EmailStr
    message: str = Field(..., min_length=10)


def parse_body(schema):
    """Validate the JSON body against ``schema``.

    Any malformed body becomes a generic :class:`~jelly.errors.ValidationError`.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError()
    try:
        return schema.model_validate(data)
    except pydantic.ValidationError:
        raise ValidationError()


def changed_fields(model, required=()):
    """Fields the client actually sent, dropping nulls for ``required`` ones."""
    fields = model.model_dump(exclude_unset=True)
    return {
        name: value for name, value in fields.items()
        if not (name in required and value is None)
    }
