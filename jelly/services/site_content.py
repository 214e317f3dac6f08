"""Owner-editable site copy with built-in defaults."""
import logging

from jelly.errors import ValidationError
from jelly.storage.views import CONTENT_TYPES, ContentItem

logger = logging.getLogger(__name__)

DEFAULT_CONTENT = (
    # Hero section
    ContentItem('hero', 'title', 'Welcome to Jelly', 'text'),
    ContentItem('hero', 'subtitle', 'A colorful magazine for creative minds', 'text'),
    ContentItem('hero', 'description', 'Discover inspiring stories, vibrant designs, and creative insights that spark imagination.', 'text'),
    ContentItem('hero', 'ctaText', 'Start Reading', 'text'),
    ContentItem('hero', 'ctaLink', '/archive', 'link'),

    # Articles section
    ContentItem('articles', 'title', 'Latest Stories', 'text'),
    ContentItem('articles', 'subtitle', 'Fresh content delivered weekly, bursting with creativity and inspiration!', 'text'),

    # About section
    ContentItem('about', 'title', 'About Jelly', 'text'),
    ContentItem('about', 'description', 'Jelly is where creativity meets inspiration. We curate colorful content that celebrates design, innovation, and the joy of creative expression.', 'html'),

    # Footer
    ContentItem('footer', 'copyright', '© Jelly Magazine. All rights reserved.', 'text'),
    ContentItem('footer', 'tagline', 'Stay colorful, stay creative', 'text'),

    # Navigation
    ContentItem('nav', 'logo', 'Jelly', 'text'),

    # Authors page
    ContentItem('authors', 'title', 'Meet Our Authors', 'text'),
    ContentItem('authors', 'subtitle', 'The creative minds behind our colorful content', 'text'),

    # Contact page
    ContentItem('contact', 'title', 'Get in Touch', 'text'),
    ContentItem('contact', 'description', "We'd love to hear from you! Send us your thoughts, ideas, or collaboration proposals.", 'html'),
)

_DEFAULTS_BY_KEY = {(item.section, item.key): item for item in DEFAULT_CONTENT}


def default_for(section, key):
    return _DEFAULTS_BY_KEY.get((section, key))


class SiteContent:
    """Reads fall back to :data:`DEFAULT_CONTENT`; writes go to storage."""

    def __init__(self, storage):
        self.storage = storage

    def get(self, section, key):
        item = self.storage.find_content(section, key)
        if item is not None:
            return item
        return default_for(section, key)

    def get_by_section(self, section):
        return self.storage.list_content(section)

    def get_all(self):
        return self.storage.list_content()

    def upsert(self, section, key, value, type=None):
        if type is not None and type not in CONTENT_TYPES:
            raise ValidationError(f"Invalid content type: {type}")
        if type is None:
            existing = self.get(section, key)
            type = existing.type if existing is not None else 'text'
        item = self.storage.save_content(section, key, value, type)
        logger.info("Updated site content %s.%s", section, key)
        return item

    def seed_defaults_if_empty(self):
        """Insert the default table once; returns the number of rows added."""
        if self.storage.count_content():
            return 0
        self.storage.insert_content(DEFAULT_CONTENT)
        logger.info("Seeded %d default content rows", len(DEFAULT_CONTENT))
        return len(DEFAULT_CONTENT)
