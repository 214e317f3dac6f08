"""Read models handed out by the storage backends.

Backends never return ORM rows or mutable records. Everything that crosses the
storage boundary is one of the frozen dataclasses below, and only
:class:`UserAccount` carries the password hash. Every ``to_dict`` renders the
camelCase shape the front-end consumes.
"""
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

ROLES = ('owner', 'editor', 'contributor', 'reader')
ARTICLE_STATUSES = ('draft', 'published')
CONTENT_TYPES = ('text', 'html', 'image', 'link')
SORT_ORDERS = ('newest', 'oldest', 'title')

# Offsets past this cannot match any row and overflow SQL integer columns.
MAX_OFFSET = 2 ** 31 - 1


def utcnow():
    """Naive UTC timestamp, the form both backends store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _iso(value):
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class PublicUser:
    id: str
    name: str
    email: str
    role: str
    bio: Optional[str]
    profile_picture_url: Optional[str]
    created_at: datetime

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
            'bio': self.bio,
            'profilePictureUrl': self.profile_picture_url,
            'createdAt': _iso(self.created_at),
        }


@dataclass(frozen=True)
class UserAccount:
    """Full user record, only used for credential checks and session lookup."""
    id: str
    name: str
    email: str
    password: str
    role: str
    bio: Optional[str]
    profile_picture_url: Optional[str]
    created_at: datetime

    def public(self):
        return PublicUser(
            id=self.id,
            name=self.name,
            email=self.email,
            role=self.role,
            bio=self.bio,
            profile_picture_url=self.profile_picture_url,
            created_at=self.created_at,
        )


@dataclass(frozen=True)
class Article:
    id: str
    title: str
    content: str
    excerpt: str
    image_url: Optional[str]
    author_id: str
    category: Optional[str]
    status: str
    publish_date: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    @property
    def is_published(self):
        return self.status == 'published'

    def merged(self, changes, now):
        """Apply ``changes`` and stamp ``updated_at``.

        ``publish_date`` is set only on the first move into ``published``
        and is never cleared afterwards.
        """
        publish_date = self.publish_date
        if changes.get('status') == 'published' and publish_date is None:
            publish_date = now
        return replace(self, **changes, updated_at=now, publish_date=publish_date)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'content': self.content,
            'excerpt': self.excerpt,
            'imageUrl': self.image_url,
            'authorId': self.author_id,
            'category': self.category,
            'status': self.status,
            'publishDate': _iso(self.publish_date),
            'createdAt': _iso(self.created_at),
            'updatedAt': _iso(self.updated_at),
        }


@dataclass(frozen=True)
class ArticleWithAuthor:
    article: Article
    author: PublicUser

    def to_dict(self):
        data = self.article.to_dict()
        data['author'] = self.author.to_dict()
        return data


@dataclass(frozen=True)
class AuthorSummary:
    author: PublicUser
    article_count: int

    def to_dict(self):
        data = self.author.to_dict()
        data['articleCount'] = self.article_count
        return data


@dataclass(frozen=True)
class DashboardStats:
    total_users: int
    total_articles: int
    published_articles: int
    draft_articles: int

    def to_dict(self):
        return {
            'totalUsers': self.total_users,
            'totalArticles': self.total_articles,
            'publishedArticles': self.published_articles,
            'draftArticles': self.draft_articles,
        }


@dataclass(frozen=True)
class ContentItem:
    section: str
    key: str
    value: str
    type: str = 'text'
    updated_at: Optional[datetime] = None
    id: Optional[str] = None

    def to_dict(self):
        return {
            'id': self.id,
            'section': self.section,
            'key': self.key,
            'value': self.value,
            'type': self.type,
            'updatedAt': _iso(self.updated_at),
        }


@dataclass
class ArticleQuery:
    """Filters for :meth:`Storage.get_articles`. ``None`` means no filter."""
    search: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None
    author_id: Optional[str] = None
    sort: str = 'newest'
    limit: Optional[int] = None
    offset: int = 0

    def __post_init__(self):
        if self.sort not in SORT_ORDERS:
            self.sort = 'newest'
        if self.offset is None or self.offset < 0:
            self.offset = 0

    @property
    def past_end(self):
        return self.offset > MAX_OFFSET


@dataclass(frozen=True)
class SessionRecord:
    """Server-side login session; the client only holds ``token``."""
    token: str
    user_id: str
    expires_at: datetime

    def expired(self, now):
        return now >= self.expires_at
