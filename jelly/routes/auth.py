"""Authentication routes and decorators."""
import logging
from functools import wraps

from flask import Blueprint, current_app, g, jsonify, session
from flask_babel import gettext as _

from jelly.errors import Unauthenticated
from jelly.schemas import LoginRequest, SignupRequest, parse_body
from jelly.services import auth as auth_service
from jelly.services.policy import authorize
from jelly.storage import get_storage

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')


# ==================== Session helpers ====================

def _drop_session_record():
    token = session.get('sid')
    if token:
        get_storage().delete_session(token)


def login_user(user):
    """Start a server-side session; the cookie only carries its token."""
    storage = get_storage()
    _drop_session_record()
    session.clear()
    session.permanent = True
    expires_at = storage.clock() + current_app.permanent_session_lifetime
    session['sid'] = storage.create_session(user.id, expires_at)


def logout_user():
    _drop_session_record()
    session.clear()
    g.pop('current_user', None)


@auth_bp.before_app_request
def forget_current_user():
    # g outlives the request when an app context was already pushed.
    g.pop('current_user', None)


def load_current_user():
    """Resolve the session to a :class:`UserAccount`, or ``None``.

    Unknown or expired tokens, and sessions whose user no longer exists,
    are cleared.
    """
    if 'current_user' in g:
        return g.current_user
    user = None
    token = session.get('sid')
    if token:
        storage = get_storage()
        record = storage.get_session(token)
        if record is not None:
            user = storage.get_user(record.user_id)
            if user is None:
                storage.delete_session(token)
        if user is None:
            session.clear()
    g.current_user = user
    return user


# ==================== RBAC Decorators ====================

def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if load_current_user() is None:
            raise Unauthenticated()
        return f(*args, **kwargs)
    return decorated_function


def permission_required(action):
    """Require a signed-in user whose role allows ``action``."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user = load_current_user()
            if user is None:
                raise Unauthenticated()
            authorize(user, action)
            return f(*args, **kwargs)
        return decorated_function
    return decorator


# ==================== Routes ====================

@auth_bp.route('/login', methods=['POST'])
def login():
    data = parse_body(LoginRequest)
    user = auth_service.authenticate(get_storage(), data.email, data.password)
    login_user(user)
    logger.info("User %s logged in", user.id)
    return jsonify(user.public().to_dict())


@auth_bp.route('/signup', methods=['POST'])
def signup():
    data = parse_body(SignupRequest)
    user = auth_service.register(
        get_storage(),
        name=data.name,
        email=data.email,
        password=data.password,
        master_code=data.master_code,
        configured_code=current_app.config.get('MASTER_CODE'),
    )
    login_user(user)
    return jsonify(user.to_dict())


@auth_bp.route('/me')
@login_required
def me():
    return jsonify(g.current_user.public().to_dict())


@auth_bp.route('/logout', methods=['POST'])
def logout():
    user = load_current_user()
    logout_user()
    if user is not None:
        logger.info("User %s logged out", user.id)
    return jsonify({'message': _('Logged out successfully')})
