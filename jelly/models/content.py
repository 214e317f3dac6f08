"""Editable site copy overrides."""
from jelly.extensions import db
from jelly.models.user import _new_id
from jelly.storage.views import utcnow


class EditableContent(db.Model):
    __tablename__ = 'website_content'

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    section = db.Column(db.String(100), nullable=False)  # e.g. 'hero', 'footer'
    key = db.Column(db.String(100), nullable=False)  # e.g. 'title', 'subtitle'
    value = db.Column(db.Text, nullable=False)
    type = db.Column(db.String(10), nullable=False, default='text')  # text, html, image, link
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        db.UniqueConstraint('section', 'key', name='uq_website_content_section_key'),
    )
