"""Article routes - public listings and authoring."""
import logging

from flask import Blueprint, current_app, g, jsonify, request
from flask_babel import gettext as _

from jelly.errors import NotFound
from jelly.routes.auth import load_current_user, login_required, permission_required
from jelly.schemas import ArticleCreate, ArticleUpdate, changed_fields, parse_body
from jelly.services.policy import Action, authorize, can_perform, permitted_status
from jelly.storage import ArticleQuery, get_storage

logger = logging.getLogger(__name__)

articles_bp = Blueprint('articles', __name__, url_prefix='/api/articles')


def _page_number():
    page = request.args.get('page', 1, type=int)
    return page if page and page > 0 else 1


def _get_article_or_404(article_id):
    article = get_storage().get_article_by_id(article_id)
    if article is None:
        raise NotFound(_('Article not found'))
    return article


# ========================================
# PUBLIC LISTINGS
# ========================================

@articles_bp.route('')
def list_articles():
    per_page = current_app.config['ARTICLES_PER_PAGE']
    query = ArticleQuery(
        search=request.args.get('search') or None,
        category=request.args.get('category') or None,
        sort=request.args.get('sort') or 'newest',
        status='published',
        limit=per_page,
        offset=(_page_number() - 1) * per_page,
    )
    articles = get_storage().get_articles(query)
    logger.debug("Listing %d articles for %s", len(articles), query)
    return jsonify([article.to_dict() for article in articles])


@articles_bp.route('/featured')
def featured_article():
    article = get_storage().get_featured_article()
    return jsonify(article.to_dict() if article else None)


@articles_bp.route('/recent')
def recent_articles():
    query = ArticleQuery(
        status='published',
        sort='newest',
        limit=current_app.config['RECENT_ARTICLES_LIMIT'],
    )
    return jsonify([article.to_dict() for article in get_storage().get_articles(query)])


@articles_bp.route('/all')
@permission_required(Action.VIEW_ALL_ARTICLES)
def all_articles():
    return jsonify([article.to_dict() for article in get_storage().get_all_articles()])


@articles_bp.route('/<article_id>')
def view_article(article_id):
    item = _get_article_or_404(article_id)
    if item.article.status != 'published':
        # Drafts are visible to their author and to anyone who may edit them.
        user = load_current_user()
        if not can_perform(user, Action.EDIT_OWN_ARTICLE, item.article.author_id):
            raise NotFound(_('Article not found'))
    return jsonify(item.to_dict())


# ========================================
# AUTHORING
# ========================================

@articles_bp.route('', methods=['POST'])
@permission_required(Action.CREATE_ARTICLE)
def create_article():
    data = parse_body(ArticleCreate)
    user = g.current_user
    article = get_storage().create_article(
        author_id=user.id,
        title=data.title,
        content=data.content,
        excerpt=data.excerpt,
        image_url=data.image_url,
        category=data.category,
        status=permitted_status(user, data.status),
    )
    logger.info("User %s created article %s (%s)", user.id, article.id, article.status)
    return jsonify(article.to_dict())


@articles_bp.route('/<article_id>', methods=['PUT'])
@login_required
def update_article(article_id):
    item = _get_article_or_404(article_id)
    user = g.current_user
    authorize(user, Action.EDIT_OWN_ARTICLE, item.article.author_id)

    changes = changed_fields(parse_body(ArticleUpdate), required=('title', 'content', 'excerpt', 'status'))
    if not can_perform(user, Action.SET_ARTICLE_STATUS):
        changes['status'] = permitted_status(user, changes.get('status'))

    article = get_storage().update_article(article_id, **changes)
    logger.info("User %s updated article %s", user.id, article_id)
    return jsonify(article.to_dict())


@articles_bp.route('/<article_id>', methods=['DELETE'])
@login_required
def delete_article(article_id):
    item = _get_article_or_404(article_id)
    user = g.current_user
    authorize(user, Action.DELETE_OWN_ARTICLE, item.article.author_id)

    get_storage().delete_article(article_id)
    logger.info("User %s deleted article %s", user.id, article_id)
    return jsonify({'message': _('Article deleted successfully')})
