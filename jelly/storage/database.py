"""SQL backend on top of the Flask-SQLAlchemy models.

Every call must run inside an application context. Writes commit
immediately; no transaction spans more than one repository call.
"""
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError

from jelly.errors import Conflict, NotFound
from jelly.models import db as default_db, User, Article as ArticleRow, EditableContent, UserSession
from jelly.storage.base import Storage, USER_PROFILE_FIELDS, ARTICLE_FIELDS
from jelly.storage.views import (
    Article, ArticleWithAuthor, AuthorSummary, ContentItem, DashboardStats, SessionRecord, UserAccount, utcnow,
)


def _account(row):
    return UserAccount(
        id=row.id,
        name=row.name,
        email=row.email,
        password=row.password,
        role=row.role,
        bio=row.bio,
        profile_picture_url=row.profile_picture_url,
        created_at=row.created_at,
    )


def _public(row):
    return _account(row).public()


def _article(row):
    return Article(
        id=row.id,
        title=row.title,
        content=row.content,
        excerpt=row.excerpt,
        image_url=row.image_url,
        author_id=row.author_id,
        category=row.category,
        status=row.status,
        publish_date=row.publish_date,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _content(row):
    return ContentItem(
        id=row.id,
        section=row.section,
        key=row.key,
        value=row.value,
        type=row.type,
        updated_at=row.updated_at,
    )


class DatabaseStorage(Storage):

    def __init__(self, db=default_db, clock=utcnow):
        super().__init__(clock)
        self.db = db

    @property
    def session(self):
        return self.db.session

    # ---- users -------------------------------------------------------------

    def get_user(self, user_id):
        row = self.session.get(User, user_id)
        return _account(row) if row else None

    def get_user_by_email(self, email):
        row = User.query.filter_by(email=self.normalize_email(email)).first()
        return _account(row) if row else None

    def create_user(self, name, email, password, role='reader', bio=None, profile_picture_url=None):
        email = self.normalize_email(email)
        if User.query.filter_by(email=email).first() is not None:
            raise Conflict()
        row = User(
            name=name,
            email=email,
            password=password,
            role=self.check_role(role or 'reader'),
            bio=bio or None,
            profile_picture_url=profile_picture_url or None,
            created_at=self.clock(),
        )
        self.session.add(row)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise Conflict()
        return _public(row)

    def update_user(self, user_id, **fields):
        row = self.session.get(User, user_id)
        if row is None:
            return None
        for name, value in self.pick(fields, USER_PROFILE_FIELDS).items():
            setattr(row, name, value)
        self.session.commit()
        return _public(row)

    def update_user_role(self, user_id, role):
        role = self.check_role(role)
        row = self.session.get(User, user_id)
        if row is None:
            raise NotFound("User not found")
        row.role = role
        self.session.commit()
        return _public(row)

    def get_all_users(self):
        rows = User.query.order_by(User.created_at, User.id).all()
        return [_public(row) for row in rows]

    # ---- articles ----------------------------------------------------------

    def _joined(self):
        return self.session.query(ArticleRow, User).join(User, ArticleRow.author_id == User.id)

    def get_article_by_id(self, article_id):
        result = self._joined().filter(ArticleRow.id == article_id).first()
        if result is None:
            return None
        article, author = result
        return ArticleWithAuthor(article=_article(article), author=_public(author))

    def get_articles(self, query):
        if query.past_end:
            return []

        q = self.session.query(ArticleRow)

        if query.status:
            q = q.filter(ArticleRow.status == query.status)
        if query.category:
            q = q.filter(ArticleRow.category == query.category)
        if query.author_id:
            q = q.filter(ArticleRow.author_id == query.author_id)
        if query.search:
            needle = query.search.lower()
            q = q.filter(or_(
                func.lower(ArticleRow.title).contains(needle, autoescape=True),
                func.lower(ArticleRow.content).contains(needle, autoescape=True),
            ))

        sort_date = func.coalesce(ArticleRow.publish_date, ArticleRow.created_at)
        if query.sort == 'oldest':
            q = q.order_by(sort_date.asc(), ArticleRow.id.asc())
        elif query.sort == 'title':
            q = q.order_by(func.lower(ArticleRow.title).asc(), ArticleRow.id.asc())
        else:
            q = q.order_by(sort_date.desc(), ArticleRow.id.asc())

        if query.offset:
            q = q.offset(query.offset)
        if query.limit is not None:
            q = q.limit(query.limit)

        rows = q.all()
        authors = {}
        author_ids = {row.author_id for row in rows}
        if author_ids:
            for user in User.query.filter(User.id.in_(author_ids)).all():
                authors[user.id] = _public(user)

        return [
            ArticleWithAuthor(article=_article(row), author=authors[row.author_id])
            for row in rows
            if row.author_id in authors
        ]

    def get_all_articles(self):
        rows = ArticleRow.query.order_by(ArticleRow.created_at.desc(), ArticleRow.id.asc()).all()
        return [_article(row) for row in rows]

    def create_article(self, author_id, title, content, excerpt, image_url=None, category=None, status='draft',
                       created_at=None):
        status = self.check_status(status or 'draft')
        now = created_at or self.clock()
        row = ArticleRow(
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
        self.session.add(row)
        self.session.commit()
        return _article(row)

    def update_article(self, article_id, **fields):
        row = self.session.get(ArticleRow, article_id)
        if row is None:
            raise NotFound("Article not found")
        changes = self.pick(fields, ARTICLE_FIELDS)
        if 'status' in changes:
            self.check_status(changes['status'])

        merged = _article(row).merged(changes, self.clock())
        for name in (*changes, 'updated_at', 'publish_date'):
            setattr(row, name, getattr(merged, name))
        self.session.commit()
        return _article(row)

    def delete_article(self, article_id):
        ArticleRow.query.filter_by(id=article_id).delete()
        self.session.commit()

    def get_featured_article(self):
        result = (
            self._joined()
            .filter(ArticleRow.status == 'published')
            .order_by(ArticleRow.publish_date.desc(), ArticleRow.id.asc())
            .first()
        )
        if result is None:
            return None
        article, author = result
        return ArticleWithAuthor(article=_article(article), author=_public(author))

    def get_authors_with_article_count(self):
        article_count = func.count(ArticleRow.id)
        rows = (
            self.session.query(User, article_count)
            .outerjoin(ArticleRow, (ArticleRow.author_id == User.id) & (ArticleRow.status == 'published'))
            .filter(User.role != 'reader')
            .group_by(User.id)
            .order_by(article_count.desc(), User.name.asc(), User.id.asc())
            .all()
        )
        return [AuthorSummary(author=_public(user), article_count=count) for user, count in rows]

    def get_dashboard_stats(self):
        return DashboardStats(
            total_users=User.query.count(),
            total_articles=ArticleRow.query.count(),
            published_articles=ArticleRow.query.filter_by(status='published').count(),
            draft_articles=ArticleRow.query.filter_by(status='draft').count(),
        )

    # ---- site copy ---------------------------------------------------------

    def find_content(self, section, key):
        row = EditableContent.query.filter_by(section=section, key=key).first()
        return _content(row) if row else None

    def list_content(self, section=None):
        q = EditableContent.query
        if section is not None:
            q = q.filter_by(section=section)
        return [_content(row) for row in q.order_by(EditableContent.section, EditableContent.key).all()]

    def save_content(self, section, key, value, type):
        row = EditableContent.query.filter_by(section=section, key=key).first()
        if row is None:
            row = EditableContent(section=section, key=key)
            self.session.add(row)
        row.value = value
        row.type = type
        row.updated_at = self.clock()
        self.session.commit()
        return _content(row)

    def count_content(self):
        return EditableContent.query.count()

    def insert_content(self, items):
        now = self.clock()
        self.session.add_all([
            EditableContent(section=item.section, key=item.key, value=item.value, type=item.type, updated_at=now)
            for item in items
        ])
        self.session.commit()

    # ---- sessions ----------------------------------------------------------

    def create_session(self, user_id, expires_at):
        row = UserSession(token=self.new_session_token(), user_id=user_id, expires_at=expires_at)
        self.session.add(row)
        self.session.commit()
        return row.token

    def get_session(self, token):
        row = self.session.get(UserSession, token)
        if row is None:
            return None
        record = SessionRecord(token=row.token, user_id=row.user_id, expires_at=row.expires_at)
        if record.expired(self.clock()):
            self.session.delete(row)
            self.session.commit()
            return None
        return record

    def delete_session(self, token):
        UserSession.query.filter_by(token=token).delete()
        self.session.commit()
