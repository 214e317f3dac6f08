"""
HTTP tests for article listings and the authoring permissions.
"""
import pytest

ARTICLE = {
    'title': 'Fresh Article',
    'content': '<p>Some rich content</p>',
    'excerpt': 'Short summary',
    'category': 'design',
}


def create(storage, author, **fields):
    values = {'title': 'Stored', 'content': '<p>x</p>', 'excerpt': 'x'}
    values.update(fields)
    return storage.create_article(author_id=author.id, **values)


# ---- public listings -------------------------------------------------------

def test_listing_shows_published_only(client, storage, make_user):
    author = make_user('editor')
    create(storage, author, title='Live', status='published')
    create(storage, author, title='Hidden')

    response = client.get('/api/articles')
    assert response.status_code == 200
    data = response.get_json()
    assert [a['title'] for a in data] == ['Live']
    assert data[0]['author']['id'] == author.id
    assert 'password' not in data[0]['author']


def test_listing_is_paginated_nine_per_page(client, storage, make_user):
    author = make_user('editor')
    for n in range(11):
        create(storage, author, title=f'Article {n:02d}', status='published')

    first = client.get('/api/articles?sort=title').get_json()
    second = client.get('/api/articles?sort=title&page=2').get_json()
    assert len(first) == 9
    assert [a['title'] for a in second] == ['Article 09', 'Article 10']


@pytest.mark.parametrize('page', ['0', '-3', 'abc'])
def test_bad_page_means_first_page(client, storage, make_user, page):
    create(storage, make_user('editor'), status='published')
    assert len(client.get(f'/api/articles?page={page}').get_json()) == 1


def test_page_far_past_the_end_is_empty(client, storage, make_user):
    create(storage, make_user('editor'), status='published')
    response = client.get('/api/articles?page=99999999999999999999')
    assert response.status_code == 200
    assert response.get_json() == []


def test_listing_search_and_category(client, storage, make_user):
    author = make_user('editor')
    create(storage, author, title='Mobile first', category='mobile', status='published')
    create(storage, author, title='Colors', content='<p>on mobile</p>', category='design', status='published')
    create(storage, author, title='Type', category='design', status='published')

    found = client.get('/api/articles?search=MOBILE').get_json()
    assert {a['title'] for a in found} == {'Mobile first', 'Colors'}

    design = client.get('/api/articles?category=design&search=mobile').get_json()
    assert [a['title'] for a in design] == ['Colors']


def test_featured_and_recent(client, storage, make_user):
    assert client.get('/api/articles/featured').get_json() is None

    author = make_user('editor')
    for n in range(8):
        create(storage, author, title=f'Post {n}', status='published')
    create(storage, author, title='Unpublished')

    assert client.get('/api/articles/featured').get_json()['title'] == 'Post 7'
    recent = client.get('/api/articles/recent').get_json()
    assert [a['title'] for a in recent] == [f'Post {n}' for n in range(7, 1, -1)]


def test_view_article(client, storage, make_user):
    article = create(storage, make_user('editor'), status='published')
    response = client.get(f'/api/articles/{article.id}')
    assert response.status_code == 200
    assert response.get_json()['id'] == article.id


def test_view_missing_article(client):
    response = client.get('/api/articles/does-not-exist')
    assert response.status_code == 404
    assert response.get_json()['message'] == 'Article not found'


def test_drafts_are_visible_only_to_those_who_may_edit(client, storage, make_user, login):
    author = make_user('contributor')
    draft = create(storage, author)
    url = f'/api/articles/{draft.id}'

    assert client.get(url).status_code == 404
    assert login(make_user('reader')).get(url).status_code == 404
    assert login(make_user('contributor')).get(url).status_code == 404
    assert login(author).get(url).status_code == 200
    assert login(make_user('editor')).get(url).status_code == 200


@pytest.mark.parametrize('role, allowed', [
    ('owner', True), ('editor', True), ('contributor', False), ('reader', False),
])
def test_all_articles_admin_listing(login, make_user, storage, role, allowed):
    create(storage, make_user('editor'))
    response = login(make_user(role)).get('/api/articles/all')
    assert response.status_code == (200 if allowed else 403)
    if allowed:
        assert len(response.get_json()) == 1
        assert 'author' not in response.get_json()[0]


def test_all_articles_requires_login(client):
    assert client.get('/api/articles/all').status_code == 401


# ---- create ----------------------------------------------------------------

def test_create_requires_login(client):
    assert client.post('/api/articles', json=ARTICLE).status_code == 401


def test_reader_cannot_create(login, make_user):
    response = login(make_user('reader')).post('/api/articles', json=ARTICLE)
    assert response.status_code == 403


@pytest.mark.parametrize('role, expected_status', [
    ('owner', 'published'),
    ('editor', 'published'),
    ('contributor', 'draft'),
])
def test_create_status_by_role(login, make_user, role, expected_status):
    user = make_user(role)
    response = login(user).post('/api/articles', json=dict(ARTICLE, status='published'))
    assert response.status_code == 200
    article = response.get_json()
    assert article['status'] == expected_status
    assert article['authorId'] == user.id
    assert (article['publishDate'] is not None) == (expected_status == 'published')


def test_create_ignores_client_author_id(login, make_user):
    user = make_user('editor')
    other = make_user('owner')
    response = login(user).post('/api/articles', json=dict(ARTICLE, authorId=other.id))
    assert response.get_json()['authorId'] == user.id


@pytest.mark.parametrize('body', [
    {'title': 'No content'},
    dict(ARTICLE, status='archived'),
    dict(ARTICLE, title=''),
])
def test_create_validation(login, make_user, body):
    response = login(make_user('editor')).post('/api/articles', json=body)
    assert response.status_code == 400


# ---- update ----------------------------------------------------------------

def test_author_updates_own_article(login, make_user, storage):
    author = make_user('contributor')
    article = create(storage, author)
    response = login(author).put(f'/api/articles/{article.id}', json={'title': 'Renamed'})
    assert response.status_code == 200
    assert response.get_json()['title'] == 'Renamed'
    assert response.get_json()['content'] == article.content


@pytest.mark.parametrize('role, allowed', [
    ('owner', True), ('editor', True), ('contributor', False), ('reader', False),
])
def test_update_someone_elses_article(login, make_user, storage, role, allowed):
    article = create(storage, make_user('contributor'))
    response = login(make_user(role)).put(f'/api/articles/{article.id}', json={'title': 'Hijacked'})
    assert response.status_code == (200 if allowed else 403)


def test_editor_publishes_contributor_draft(login, make_user, storage):
    article = create(storage, make_user('contributor'))
    response = login(make_user('editor')).put(f'/api/articles/{article.id}', json={'status': 'published'})
    assert response.get_json()['status'] == 'published'
    assert response.get_json()['publishDate'] is not None


def test_contributor_edit_returns_article_to_draft(login, make_user, storage):
    author = make_user('contributor')
    article = create(storage, author, status='published')
    response = login(author).put(f'/api/articles/{article.id}', json={'title': 'Tweaked', 'status': 'published'})
    body = response.get_json()
    assert body['status'] == 'draft'
    assert body['publishDate'] is not None


def test_update_missing_article(login, make_user):
    response = login(make_user('owner')).put('/api/articles/missing', json={'title': 'x'})
    assert response.status_code == 404


def test_update_requires_login(client, storage, make_user):
    article = create(storage, make_user('editor'))
    assert client.put(f'/api/articles/{article.id}', json={'title': 'x'}).status_code == 401


# ---- delete ----------------------------------------------------------------

@pytest.mark.parametrize('role, allowed', [
    ('owner', True), ('editor', False), ('contributor', False), ('reader', False),
])
def test_delete_someone_elses_article(login, make_user, storage, role, allowed):
    article = create(storage, make_user('contributor'))
    response = login(make_user(role)).delete(f'/api/articles/{article.id}')
    assert response.status_code == (200 if allowed else 403)
    assert (storage.get_article_by_id(article.id) is None) == allowed


@pytest.mark.parametrize('role', ['editor', 'contributor'])
def test_author_deletes_own_article(login, make_user, storage, role):
    author = make_user(role)
    article = create(storage, author)
    client = login(author)
    assert client.delete(f'/api/articles/{article.id}').status_code == 200
    assert storage.get_article_by_id(article.id) is None
    # A second delete finds nothing to authorize against.
    assert client.delete(f'/api/articles/{article.id}').status_code == 404
