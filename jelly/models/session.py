"""Server-side login sessions."""
from jelly.extensions import db


class UserSession(db.Model):
    __tablename__ = 'sessions'

    token = db.Column(db.String(64), primary_key=True)  # opaque id held in the cookie
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)
    expires_at = db.Column(db.DateTime, nullable=False)
