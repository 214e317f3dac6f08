"""
Tests for the application factory, demo seeding and CLI commands.
"""
from datetime import datetime, timedelta

import pytest

from jelly import create_app
from jelly.services.auth import hash_password
from jelly.services.site_content import DEFAULT_CONTENT
from jelly.storage import MemoryStorage, get_storage
from jelly.storage.seed import seed_sample_data


def test_unknown_backend_is_rejected():
    with pytest.raises(ValueError):
        create_app('testing', STORAGE_BACKEND='redis')


def test_injected_storage_is_used():
    storage = MemoryStorage()
    app = create_app('testing', storage=storage)
    with app.app_context():
        assert get_storage() is storage
    assert storage.count_content() == len(DEFAULT_CONTENT)


def test_sample_data_seeded_when_enabled():
    app = create_app('testing', SEED_SAMPLE_DATA=True)
    client = app.test_client()

    response = client.post('/api/auth/login', json={'email': 'owner@jelly.com', 'password': 'password123'})
    assert response.status_code == 200
    assert response.get_json()['role'] == 'owner'

    articles = client.get('/api/articles').get_json()
    assert [a['category'] for a in articles] == ['mobile', 'design']
    assert client.get('/api/articles/featured').get_json()['category'] == 'mobile'


def test_seed_only_fills_an_empty_store():
    storage = MemoryStorage()
    assert seed_sample_data(storage, hash_password('pw123456')) is True
    assert seed_sample_data(storage, hash_password('pw123456')) is False
    assert len(storage.get_all_users()) == 2
    assert len(storage.get_all_articles()) == 3


def test_seed_backdates_published_articles():
    now = datetime(2024, 6, 1, 9, 0, 0)
    storage = MemoryStorage(clock=lambda: now)
    clock = storage.clock
    seed_sample_data(storage, hash_password('pw123456'))

    assert storage.clock is clock
    dates = {a.category: a.publish_date for a in storage.get_all_articles()}
    assert dates == {
        'design': now - timedelta(days=7),
        'mobile': now - timedelta(days=3),
        'animation': None,
    }


def test_unknown_route_is_json_404(client):
    response = client.get('/api/nowhere')
    assert response.status_code == 404
    assert 'message' in response.get_json()


def test_wrong_method_is_json_405(client):
    response = client.delete('/api/authors')
    assert response.status_code == 405
    assert 'message' in response.get_json()


def test_unexpected_error_is_logged_500(memory_app, monkeypatch, caplog):
    storage = get_storage()

    def explode():
        raise RuntimeError('boom')

    monkeypatch.setattr(storage, 'get_authors_with_article_count', explode)
    response = memory_app.test_client().get('/api/authors')
    assert response.status_code == 500
    assert response.get_json() == {'message': 'Internal server error'}
    assert 'boom' in caplog.text


def test_seed_command(memory_app):
    runner = memory_app.test_cli_runner()
    result = runner.invoke(args=['seed'])
    assert result.exit_code == 0
    assert 'Sample data created' in result.output
    assert len(get_storage().get_all_users()) == 2

    again = runner.invoke(args=['seed'])
    assert 'already present' in again.output


def test_init_db_requires_database_backend(memory_app):
    result = memory_app.test_cli_runner().invoke(args=['init-db'])
    assert result.exit_code != 0
    assert 'DATABASE_URL' in result.output
