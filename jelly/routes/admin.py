"""Admin routes - dashboard and user management."""
import logging

from flask import Blueprint, g, jsonify
from flask_babel import gettext as _

from jelly.errors import ValidationError
from jelly.routes.auth import permission_required
from jelly.schemas import RoleUpdate, parse_body
from jelly.services.policy import Action
from jelly.storage import get_storage

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__, url_prefix='/api')


@admin_bp.route('/dashboard/stats')
@permission_required(Action.VIEW_DASHBOARD)
def dashboard_stats():
    return jsonify(get_storage().get_dashboard_stats().to_dict())


# ==================== USER MANAGEMENT ====================

@admin_bp.route('/users')
@permission_required(Action.VIEW_ALL_USERS)
def users_list():
    """List all users, without password hashes."""
    return jsonify([user.to_dict() for user in get_storage().get_all_users()])


@admin_bp.route('/users/role', methods=['PUT'])
@permission_required(Action.MANAGE_ROLES)
def update_user_role():
    """Update a user's role."""
    data = parse_body(RoleUpdate)

    # Prevent an owner from demoting themselves
    if data.user_id == g.current_user.id:
        raise ValidationError(_('You cannot change your own role.'))

    user = get_storage().update_user_role(data.user_id, data.role)
    logger.info("User %s set role of %s to %s", g.current_user.id, user.id, user.role)
    return jsonify(user.to_dict())
