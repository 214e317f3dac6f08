"""Credential checks and account registration."""
import hmac
import logging

from werkzeug.security import generate_password_hash, check_password_hash

from jelly.errors import Conflict, InvalidCredentials

logger = logging.getLogger(__name__)

# Compared against when the email is unknown, so both failure paths hash once.
_DUMMY_HASH = generate_password_hash('jelly-unknown-user')


def hash_password(password):
    return generate_password_hash(password)


def check_password(password_hash, password):
    return check_password_hash(password_hash, password)


def authenticate(storage, email, password):
    """Return the :class:`UserAccount` for valid credentials.

    Unknown email and wrong password raise the same
    :class:`~jelly.errors.InvalidCredentials`.
    """
    user = storage.get_user_by_email(email)
    if user is None:
        check_password(_DUMMY_HASH, password)
        logger.info("Login failed for unknown email")
        raise InvalidCredentials()
    if not check_password(user.password, password):
        logger.info("Login failed for user %s", user.id)
        raise InvalidCredentials()
    return user


def role_for_signup(master_code, configured_code):
    """``owner`` when the supplied code matches the configured one."""
    if configured_code and master_code is not None and hmac.compare_digest(
        str(master_code).encode(), str(configured_code).encode()
    ):
        return 'owner'
    return 'reader'


def register(storage, name, email, password, master_code=None, configured_code=None):
    """Create a new account and return its :class:`PublicUser`."""
    if storage.get_user_by_email(email) is not None:
        raise Conflict()
    role = role_for_signup(master_code, configured_code)
    user = storage.create_user(
        name=name,
        email=email,
        password=hash_password(password),
        role=role,
    )
    logger.info("Registered user %s with role %s", user.id, role)
    return user
