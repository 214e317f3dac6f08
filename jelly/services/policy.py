"""Role-based permissions.

Permissions are granted per action, not by rank: an editor may edit anyone's
article but may only delete their own.
"""
from enum import Enum

from jelly.errors import Forbidden


class Role(str, Enum):
    OWNER = 'owner'
    EDITOR = 'editor'
    CONTRIBUTOR = 'contributor'
    READER = 'reader'


class Action(str, Enum):
    CREATE_ARTICLE = 'create_article'
    EDIT_OWN_ARTICLE = 'edit_own_article'
    EDIT_ANY_ARTICLE = 'edit_any_article'
    DELETE_OWN_ARTICLE = 'delete_own_article'
    DELETE_ANY_ARTICLE = 'delete_any_article'
    SET_ARTICLE_STATUS = 'set_article_status'
    MANAGE_ROLES = 'manage_roles'
    VIEW_DASHBOARD = 'view_dashboard'
    VIEW_ALL_ARTICLES = 'view_all_articles'
    VIEW_ALL_USERS = 'view_all_users'
    EDIT_SITE_CONTENT = 'edit_site_content'
    EDIT_OWN_PROFILE = 'edit_own_profile'
    EDIT_ANY_PROFILE = 'edit_any_profile'


_AUTHORS = frozenset({Role.OWNER, Role.EDITOR, Role.CONTRIBUTOR})
_EVERYONE = frozenset(Role)

PERMISSIONS = {
    Action.CREATE_ARTICLE: _AUTHORS,
    Action.EDIT_OWN_ARTICLE: _AUTHORS,
    Action.EDIT_ANY_ARTICLE: frozenset({Role.OWNER, Role.EDITOR}),
    Action.DELETE_OWN_ARTICLE: _AUTHORS,
    Action.DELETE_ANY_ARTICLE: frozenset({Role.OWNER}),
    Action.SET_ARTICLE_STATUS: frozenset({Role.OWNER, Role.EDITOR}),
    Action.MANAGE_ROLES: frozenset({Role.OWNER}),
    Action.VIEW_DASHBOARD: frozenset({Role.OWNER}),
    Action.VIEW_ALL_ARTICLES: frozenset({Role.OWNER, Role.EDITOR}),
    Action.VIEW_ALL_USERS: frozenset({Role.OWNER}),
    Action.EDIT_SITE_CONTENT: frozenset({Role.OWNER}),
    Action.EDIT_OWN_PROFILE: _EVERYONE,
    Action.EDIT_ANY_PROFILE: frozenset({Role.OWNER}),
}

# "Own" actions fall back to their "any" counterpart for someone else's resource.
ANY_COUNTERPART = {
    Action.EDIT_OWN_ARTICLE: Action.EDIT_ANY_ARTICLE,
    Action.DELETE_OWN_ARTICLE: Action.DELETE_ANY_ARTICLE,
    Action.EDIT_OWN_PROFILE: Action.EDIT_ANY_PROFILE,
}


def _role_of(user):
    try:
        return Role(user.role)
    except ValueError:
        return None


def can_perform(user, action, resource_owner_id=None):
    """Whether ``user`` may perform ``action``.

    ``resource_owner_id`` identifies who owns the article or profile being
    acted on. It only matters for the "own" actions.
    """
    if user is None:
        return False
    action = Action(action)
    if action in ANY_COUNTERPART and resource_owner_id is not None and resource_owner_id != user.id:
        action = ANY_COUNTERPART[action]
    return _role_of(user) in PERMISSIONS[action]


def authorize(user, action, resource_owner_id=None):
    """Raise :class:`~jelly.errors.Forbidden` unless the action is allowed."""
    if not can_perform(user, action, resource_owner_id):
        raise Forbidden()


def permitted_status(user, requested):
    """Status to store for an article write by ``user``.

    Users who cannot set the status directly always save drafts.
    """
    if can_perform(user, Action.SET_ARTICLE_STATUS):
        return requested
    return 'draft'
