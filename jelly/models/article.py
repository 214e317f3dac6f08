"""Article model."""
from jelly.extensions import db
from jelly.models.user import _new_id
from jelly.storage.views import utcnow


class Article(db.Model):
    __tablename__ = 'articles'

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    title = db.Column(db.Text, nullable=False)
    content = db.Column(db.Text, nullable=False)  # Rich HTML
    excerpt = db.Column(db.Text, nullable=False)
    image_url = db.Column(db.Text)
    author_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)
    category = db.Column(db.Text)

    status = db.Column(db.String(20), nullable=False, default='draft')  # draft, published
    publish_date = db.Column(db.DateTime, nullable=True)  # Set once, on first publish

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)
