"""In-memory backend.

Used when no database is configured. A single process owns the maps, so it is
only suitable for one server instance.
"""
import uuid
from dataclasses import replace

from jelly.errors import Conflict, NotFound
from jelly.storage.base import Storage, USER_PROFILE_FIELDS, ARTICLE_FIELDS
from jelly.storage.views import (
    Article, ArticleWithAuthor, AuthorSummary, ContentItem, DashboardStats, SessionRecord, UserAccount, utcnow,
)


def _sort_date(article):
    return article.publish_date or article.created_at


class MemoryStorage(Storage):

    def __init__(self, clock=utcnow):
        super().__init__(clock)
        self._users = {}
        self._articles = {}
        self._content = {}
        self._sessions = {}

    # ---- users -------------------------------------------------------------

    def get_user(self, user_id):
        return self._users.get(user_id)

    def get_user_by_email(self, email):
        email = self.normalize_email(email)
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    def create_user(self, name, email, password, role='reader', bio=None, profile_picture_url=None):
        email = self.normalize_email(email)
        if self.get_user_by_email(email) is not None:
            raise Conflict()
        user = UserAccount(
            id=str(uuid.uuid4()),
            name=name,
            email=email,
            password=password,
            role=self.check_role(role or 'reader'),
            bio=bio or None,
            profile_picture_url=profile_picture_url or None,
            created_at=self.clock(),
        )
        self._users[user.id] = user
        return user.public()

    def update_user(self, user_id, **fields):
        user = self._users.get(user_id)
        if user is None:
            return None
        user = replace(user, **self.pick(fields, USER_PROFILE_FIELDS))
        self._users[user_id] = user
        return user.public()

    def update_user_role(self, user_id, role):
        user = self._users.get(user_id)
        if user is None:
            raise NotFound("User not found")
        user = replace(user, role=self.check_role(role))
        self._users[user_id] = user
        return user.public()

    def get_all_users(self):
        users = sorted(self._users.values(), key=lambda u: (u.created_at, u.id))
        return [user.public() for user in users]

    # ---- articles ----------------------------------------------------------

    def _with_author(self, article):
        author = self._users.get(article.author_id)
        if author is None:
            return None
        return ArticleWithAuthor(article=article, author=author.public())

    def get_article_by_id(self, article_id):
        article = self._articles.get(article_id)
        if article is None:
            return None
        return self._with_author(article)

    def get_articles(self, query):
        articles = list(self._articles.values())

        if query.status:
            articles = [a for a in articles if a.status == query.status]
        if query.category:
            articles = [a for a in articles if a.category == query.category]
        if query.author_id:
            articles = [a for a in articles if a.author_id == query.author_id]
        if query.search:
            needle = query.search.lower()
            articles = [
                a for a in articles
                if needle in a.title.lower() or needle in a.content.lower()
            ]

        articles.sort(key=lambda a: a.id)
        if query.sort == 'oldest':
            articles.sort(key=_sort_date)
        elif query.sort == 'title':
            articles.sort(key=lambda a: a.title.lower())
        else:
            articles.sort(key=_sort_date, reverse=True)

        if query.past_end:
            return []
        end = query.offset + query.limit if query.limit is not None else None
        page = articles[query.offset:end]

        results = []
        for article in page:
            item = self._with_author(article)
            if item is not None:
                results.append(item)
        return results

    def get_all_articles(self):
        articles = sorted(self._articles.values(), key=lambda a: a.id)
        articles.sort(key=lambda a: a.created_at, reverse=True)
        return articles

    def create_article(self, author_id, title, content, excerpt, image_url=None, category=None, status='draft',
                       created_at=None):
        status = self.check_status(status or 'draft')
        now = created_at or self.clock()
        article = Article(
            id=str(uuid.uuid4()),
            title=title,
            content=content,
            excerpt=excerpt,
            image_url=image_url or None,
            author_id=author_id,
            category=category or None,
            status=status,
            publish_date=now if status == 'published' else None,
            created_at=now,
            updated_at=now,
        )
        self._articles[article.id] = article
        return article

    def update_article(self, article_id, **fields):
        article = self._articles.get(article_id)
        if article is None:
            raise NotFound("Article not found")
        changes = self.pick(fields, ARTICLE_FIELDS)
        if 'status' in changes:
            self.check_status(changes['status'])
        article = article.merged(changes, self.clock())
        self._articles[article_id] = article
        return article

    def delete_article(self, article_id):
        self._articles.pop(article_id, None)

    def get_featured_article(self):
        published = [a for a in self._articles.values() if a.status == 'published']
        published.sort(key=lambda a: a.id)
        published.sort(key=lambda a: a.publish_date, reverse=True)
        for article in published:
            item = self._with_author(article)
            if item is not None:
                return item
        return None

    def get_authors_with_article_count(self):
        counts = {}
        for article in self._articles.values():
            if article.status == 'published':
                counts[article.author_id] = counts.get(article.author_id, 0) + 1

        summaries = [
            AuthorSummary(author=user.public(), article_count=counts.get(user.id, 0))
            for user in self._users.values()
            if user.role != 'reader'
        ]
        summaries.sort(key=lambda s: (-s.article_count, s.author.name, s.author.id))
        return summaries

    def get_dashboard_stats(self):
        articles = list(self._articles.values())
        return DashboardStats(
            total_users=len(self._users),
            total_articles=len(articles),
            published_articles=sum(1 for a in articles if a.status == 'published'),
            draft_articles=sum(1 for a in articles if a.status == 'draft'),
        )

    # ---- site copy ---------------------------------------------------------

    def find_content(self, section, key):
        return self._content.get((section, key))

    def list_content(self, section=None):
        items = [
            item for item in self._content.values()
            if section is None or item.section == section
        ]
        return sorted(items, key=lambda item: (item.section, item.key))

    def save_content(self, section, key, value, type):
        existing = self._content.get((section, key))
        if existing is not None:
            item = replace(existing, value=value, type=type, updated_at=self.clock())
        else:
            item = ContentItem(
                id=str(uuid.uuid4()),
                section=section,
                key=key,
                value=value,
                type=type,
                updated_at=self.clock(),
            )
        self._content[(section, key)] = item
        return item

    def count_content(self):
        return len(self._content)

    def insert_content(self, items):
        now = self.clock()
        for item in items:
            self._content[(item.section, item.key)] = replace(
                item, id=item.id or str(uuid.uuid4()), updated_at=now,
            )

    # ---- sessions ----------------------------------------------------------

    def create_session(self, user_id, expires_at):
        record = SessionRecord(token=self.new_session_token(), user_id=user_id, expires_at=expires_at)
        self._sessions[record.token] = record
        return record.token

    def get_session(self, token):
        record = self._sessions.get(token)
        if record is None:
            return None
        if record.expired(self.clock()):
            del self._sessions[token]
            return None
        return record

    def delete_session(self, token):
        self._sessions.pop(token, None)
