"""Demo accounts and sample articles for a fresh store."""
import logging
from datetime import timedelta

logger = logging.getLogger(__name__)

COLOR_ARTICLE = """<h2>Welcome to the Colorful World of Design!</h2>
<p>Color is one of the most powerful tools in a designer's arsenal. It can evoke emotions, create atmosphere, and guide user attention in ways that few other design elements can match.</p>
<h3>Understanding Color Psychology</h3>
<p>Different colors trigger different emotional responses. Warm colors like red, orange, and yellow tend to be energizing and exciting, while cool colors like blue, green, and purple are calming and professional.</p>
<h3>Creating Effective Color Palettes</h3>
<p>The key to great color design is balance. Start with a primary color that represents your brand or message, then build a palette that supports and enhances that foundation.</p>"""

MOBILE_ARTICLE = """<h2>Designing for Mobile</h2>
<p>With mobile devices accounting for over 60% of web traffic, mobile-first design is essential for success.</p>
<h3>Key Principles of Mobile Design</h3>
<ul>
  <li>Touch-friendly interface elements</li>
  <li>Optimized loading speeds</li>
  <li>Intuitive navigation patterns</li>
  <li>Readable typography at all screen sizes</li>
</ul>
<h3>Tools and Techniques</h3>
<p>Breakpoint-based utility classes make it easy to create layouts that adapt beautifully to any screen size.</p>"""

ANIMATION_ARTICLE = """<h2>The Future of Web Animation</h2>
<p>This article is still being written... Coming soon with exciting animation trends!</p>"""


def seed_sample_data(storage, password_hash):
    """Create the demo owner, editor and articles if the store has no users.

    Returns True when data was created.
    """
    if storage.get_all_users():
        return False

    now = storage.clock()
    owner = storage.create_user(
        name='Jelly Owner',
        email='owner@jelly.com',
        password=password_hash,
        role='owner',
        bio='Founder of Jelly Magazine - spreading colorful creativity!',
    )
    editor = storage.create_user(
        name='Creative Editor',
        email='editor@jelly.com',
        password=password_hash,
        role='editor',
        bio='Passionate about design trends and colorful content!',
    )

    storage.create_article(
        author_id=editor.id,
        title='The Power of Color in Modern Design',
        content=COLOR_ARTICLE,
        excerpt='Discover how color psychology can transform your design work and create more engaging user experiences.',
        category='design',
        status='published',
        created_at=now - timedelta(days=7),
    )
    storage.create_article(
        author_id=owner.id,
        title='Mobile-First Design: Creating Responsive Experiences',
        content=MOBILE_ARTICLE,
        excerpt='Learn the essential principles of mobile-first design and create experiences that work perfectly on every device.',
        category='mobile',
        status='published',
        created_at=now - timedelta(days=3),
    )
    storage.create_article(
        author_id=editor.id,
        title='Animation Trends',
        content=ANIMATION_ARTICLE,
        excerpt='Explore the latest animation trends that will define digital experiences.',
        category='animation',
        status='draft',
    )

    logger.info("Seeded sample users and articles")
    return True
