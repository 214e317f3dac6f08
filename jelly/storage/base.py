"""The repository interface shared by the in-memory and SQL backends."""
import secrets
from abc import ABC, abstractmethod

from jelly.errors import ValidationError
from jelly.storage.views import ROLES, ARTICLE_STATUSES, utcnow

USER_PROFILE_FIELDS = ('name', 'bio', 'profile_picture_url')
ARTICLE_FIELDS = ('title', 'content', 'excerpt', 'image_url', 'category', 'status')


class Storage(ABC):
    """Persistence for users, articles and site-copy overrides.

    Lookups return ``None`` for a missing entity; only writes that need an
    existing row raise :class:`~jelly.errors.NotFound`.
    """

    def __init__(self, clock=utcnow):
        self.clock = clock

    # ---- users -------------------------------------------------------------

    @abstractmethod
    def get_user(self, user_id):
        """Return the :class:`UserAccount` (with password hash) or ``None``."""

    @abstractmethod
    def get_user_by_email(self, email):
        """Return the :class:`UserAccount` (with password hash) or ``None``."""

    @abstractmethod
    def create_user(self, name, email, password, role='reader', bio=None, profile_picture_url=None):
        """Create a user and return its :class:`PublicUser`."""

    @abstractmethod
    def update_user(self, user_id, **fields):
        """Update profile fields; ``None`` if the user does not exist."""

    @abstractmethod
    def update_user_role(self, user_id, role):
        """Change a user's role; raises ``NotFound`` for an unknown id."""

    @abstractmethod
    def get_all_users(self):
        """Every user as :class:`PublicUser`, oldest first."""

    # ---- articles ----------------------------------------------------------

    @abstractmethod
    def get_article_by_id(self, article_id):
        """Article joined with its author, or ``None``."""

    @abstractmethod
    def get_articles(self, query):
        """Filtered, sorted, paginated :class:`ArticleWithAuthor` list."""

    @abstractmethod
    def get_all_articles(self):
        """Every article, newest ``created_at`` first."""

    @abstractmethod
    def create_article(self, author_id, title, content, excerpt, image_url=None, category=None, status='draft',
                       created_at=None):
        """Create and return an :class:`Article`.

        ``created_at`` defaults to the storage clock; a published article
        takes the same timestamp as its publish date.
        """

    @abstractmethod
    def update_article(self, article_id, **fields):
        """Merge ``fields`` into an article; raises ``NotFound``."""

    @abstractmethod
    def delete_article(self, article_id):
        """Remove an article. Unknown ids are ignored."""

    @abstractmethod
    def get_featured_article(self):
        """Most recently published article, or ``None``."""

    @abstractmethod
    def get_authors_with_article_count(self):
        """Non-reader users with their published article counts."""

    @abstractmethod
    def get_dashboard_stats(self):
        """Aggregate user and article counts."""

    # ---- site copy ---------------------------------------------------------

    @abstractmethod
    def find_content(self, section, key):
        """Stored override for ``(section, key)`` or ``None``."""

    @abstractmethod
    def list_content(self, section=None):
        """Stored overrides, optionally limited to one section."""

    @abstractmethod
    def save_content(self, section, key, value, type):
        """Insert or update the ``(section, key)`` row and return it."""

    @abstractmethod
    def count_content(self):
        """Number of stored override rows."""

    @abstractmethod
    def insert_content(self, items):
        """Bulk-insert :class:`ContentItem` rows."""

    # ---- sessions ----------------------------------------------------------

    @abstractmethod
    def create_session(self, user_id, expires_at):
        """Store a new session for ``user_id`` and return its token."""

    @abstractmethod
    def get_session(self, token):
        """Live :class:`SessionRecord` for ``token``; expired records are dropped."""

    @abstractmethod
    def delete_session(self, token):
        """Forget a session. Unknown tokens are ignored."""

    # ---- shared helpers ----------------------------------------------------

    @staticmethod
    def new_session_token():
        return secrets.token_urlsafe(32)

    @staticmethod
    def normalize_email(email):
        return (email or '').strip().lower()

    @staticmethod
    def check_role(role):
        if role not in ROLES:
            raise ValidationError(f"Invalid role: {role}")
        return role

    @staticmethod
    def check_status(status):
        if status not in ARTICLE_STATUSES:
            raise ValidationError(f"Invalid status: {status}")
        return status

    @staticmethod
    def pick(fields, allowed):
        """Keep only the ``allowed`` keys of ``fields``."""
        return {name: value for name, value in fields.items() if name in allowed}
