"""Models package - Re-exports all models for convenient importing."""
from jelly.extensions import db
from jelly.models.user import User
from jelly.models.article import Article
from jelly.models.content import EditableContent
from jelly.models.session import UserSession

__all__ = ['db', 'User', 'Article', 'EditableContent', 'UserSession']
