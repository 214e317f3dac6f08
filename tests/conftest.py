"""Shared fixtures: apps for both storage backends, clients, and a fake clock."""
from datetime import datetime, timedelta

import pytest

from jelly import create_app
from jelly.services.auth import hash_password
from jelly.storage import get_storage

PASSWORD = 'secret-pass'


class FakeClock:
    """Returns strictly increasing timestamps, one minute apart."""

    def __init__(self, start=datetime(2024, 1, 1, 12, 0, 0)):
        self.now = start

    def __call__(self):
        self.now = self.now + timedelta(minutes=1)
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(params=['memory', 'database'])
def app(request, clock):
    app = create_app('testing', STORAGE_BACKEND=request.param)
    with app.app_context():
        get_storage().clock = clock
        yield app


@pytest.fixture
def memory_app(clock):
    app = create_app('testing', STORAGE_BACKEND='memory')
    with app.app_context():
        get_storage().clock = clock
        yield app


@pytest.fixture
def storage(app):
    return get_storage()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(storage):
    """Create a user directly in storage; returns the PublicUser."""
    counter = {'n': 0}

    def _make_user(role='reader', name=None, email=None):
        counter['n'] += 1
        n = counter['n']
        return storage.create_user(
            name=name or f"{role.title()} {n}",
            email=email or f"{role}{n}@jelly.com",
            password=hash_password(PASSWORD),
            role=role,
        )
    return _make_user


@pytest.fixture
def login(app):
    """Return a test client signed in as the given user."""
    def _login(user):
        client = app.test_client()
        response = client.post('/api/auth/login', json={'email': user.email, 'password': PASSWORD})
        assert response.status_code == 200, response.get_json()
        return client
    return _login
