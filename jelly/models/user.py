"""User model."""
import uuid

from jelly.extensions import db
from jelly.storage.views import utcnow


def _new_id():
    return str(uuid.uuid4())


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    name = db.Column(db.Text, nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password = db.Column(db.String(256), nullable=False)  # werkzeug hash
    role = db.Column(db.String(20), nullable=False, default='reader')  # owner, editor, contributor, reader
    bio = db.Column(db.Text)
    profile_picture_url = db.Column(db.Text)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    articles = db.relationship('Article', backref='author', lazy=True)
