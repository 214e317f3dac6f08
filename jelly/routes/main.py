"""Main routes - authors, profiles and the contact form."""
import logging

from flask import Blueprint, g, jsonify
from flask_babel import gettext as _

from jelly.errors import NotFound
from jelly.routes.auth import login_required
from jelly.schemas import ContactMessage, ProfileUpdate, changed_fields, parse_body
from jelly.services.policy import Action, authorize
from jelly.storage import get_storage

logger = logging.getLogger(__name__)

main_bp = Blueprint('main', __name__, url_prefix='/api')


@main_bp.route('/authors')
def authors():
    return jsonify([summary.to_dict() for summary in get_storage().get_authors_with_article_count()])


@main_bp.route('/users/<user_id>/profile', methods=['PUT'])
@login_required
def update_profile(user_id):
    """Users edit their own profile; the owner may edit anyone's."""
    authorize(g.current_user, Action.EDIT_OWN_PROFILE, user_id)

    changes = changed_fields(parse_body(ProfileUpdate), required=('name',))
    user = get_storage().update_user(user_id, **changes)
    if user is None:
        raise NotFound(_('User not found'))
    return jsonify(user.to_dict())


@main_bp.route('/contact', methods=['POST'])
def contact():
    data = parse_body(ContactMessage)
    # No delivery or persistence; submissions only reach the log.
    logger.info("Contact form submission from %s <%s>: %s", data.name, data.email, data.message)
    return jsonify({'message': _('Message sent successfully')})
