import pytest
from flask import session
from werkzeug.security import check_password_hash

from yelpcamp import store
from yelpcamp.auth import (
    Anonymous, Authenticated, current_identity, current_user, login_user, logout_user,
    register_user, require_authenticated,
)
from yelpcamp.errors import DuplicateUsername, InvalidCredentials, MissingCredentials, PersistenceError
from yelpcamp.models import User


def test_register_page(client):
    assert client.get('/register').status_code == 200


def test_register_stores_hash_and_logs_in(client, auth, app):
    response = auth.register()
    assert response.status_code == 302
    assert response.headers['Location'] == '/campgrounds'

    with client.session_transaction() as sess:
        user_id = sess['user_id']

    with app.app_context():
        user = User.query.filter_by(username='alice').one()
        assert user.id == user_id
        assert user.password_hash != 'secret'
        assert check_password_hash(user.password_hash, 'secret')


def test_register_duplicate_username(app):
    with app.test_request_context():
        register_user('alice', 'secret')
        with pytest.raises(DuplicateUsername):
            register_user('alice', 'other')
        assert User.query.filter_by(username='alice').count() == 1


def test_register_duplicate_rerenders_form(client, auth, app):
    auth.register()
    auth.logout()
    response = auth.register(password='other')
    assert response.status_code == 200
    assert b'already registered' in response.data
    with app.app_context():
        assert User.query.count() == 1


def test_login_wrong_password(app):
    with app.test_request_context():
        register_user('alice', 'secret')
        logout_user()
        with pytest.raises(InvalidCredentials):
            login_user('alice', 'wrong')
        assert 'user_id' not in session
        assert current_user() is None


def test_login_unknown_user(app):
    with app.test_request_context():
        with pytest.raises(InvalidCredentials):
            login_user('nobody', 'secret')


def test_login_then_logout(app):
    with app.test_request_context():
        registered = register_user('alice', 'secret')
        logout_user()
        assert current_user() is None

        login_user('alice', 'secret')
        assert current_user() == registered
        assert current_identity() == Authenticated(registered)

        logout_user()
        assert current_user() is None
        assert isinstance(current_identity(), Anonymous)


def test_logout_is_idempotent(app):
    with app.test_request_context():
        logout_user()
        logout_user()
        assert current_user() is None


def test_stale_session_user(app):
    with app.test_request_context():
        session['user_id'] = 999
        assert current_user() is None
        assert 'user_id' not in session


def test_require_authenticated(app):
    with app.test_request_context():
        user = register_user('alice', 'secret')
        assert require_authenticated(Authenticated(user))
        assert not require_authenticated(Anonymous())


@pytest.mark.parametrize(('password', 'location'), (
    ('secret', '/campgrounds'),
    ('wrong', '/login'),
))
def test_login_route(client, auth, password, location):
    auth.register()
    auth.logout()
    response = auth.login(password=password)
    assert response.headers['Location'] == location


def test_login_route_sets_session(client, auth):
    auth.register()
    auth.logout()
    auth.login()
    with client.session_transaction() as sess:
        assert 'user_id' in sess


def test_logout_route(client, auth):
    auth.register()
    response = auth.logout()
    assert response.headers['Location'] == '/campgrounds'
    with client.session_transaction() as sess:
        assert 'user_id' not in sess


def test_logout_route_without_session(client):
    response = client.get('/logout')
    assert response.status_code == 302
    assert response.headers['Location'] == '/campgrounds'


def test_current_user_shown_in_templates(client, auth):
    auth.register()
    response = client.get('/campgrounds')
    assert b'Signed in as alice' in response.data


@pytest.mark.parametrize(('username', 'password'), (
    ('', ''),
    ('alice', ''),
    ('', 'secret'),
))
def test_register_requires_credentials(app, username, password):
    with app.test_request_context():
        with pytest.raises(MissingCredentials):
            register_user(username, password)
        assert User.query.count() == 0
        assert 'user_id' not in session


def test_register_route_empty_credentials(client, app):
    response = client.post('/register', data={'username': '', 'password': ''})
    assert response.status_code == 200
    assert b'Username and password are required' in response.data
    with app.app_context():
        assert User.query.count() == 0
    with client.session_transaction() as sess:
        assert 'user_id' not in sess


def test_login_requires_credentials(app):
    with app.test_request_context():
        register_user('alice', 'secret')
        logout_user()
        with pytest.raises(MissingCredentials):
            login_user('alice', '')
        assert current_user() is None


def test_login_route_empty_credentials(client, auth):
    auth.register()
    auth.logout()
    response = auth.login(password='')
    assert response.headers['Location'] == '/login'
    with client.session_transaction() as sess:
        assert 'user_id' not in sess


def test_register_race_on_unique_username(app, monkeypatch):
    with app.test_request_context():
        register_user('alice', 'secret')
        logout_user()

        # the up-front check misses the existing row; the unique constraint catches it
        monkeypatch.setattr(store, 'find_one', lambda model, **filters: None)
        with pytest.raises(DuplicateUsername):
            register_user('alice', 'other')
        assert User.query.filter_by(username='alice').count() == 1
        assert 'user_id' not in session


def test_register_store_failure(client, app, monkeypatch):
    def boom(model, fields):
        raise PersistenceError('database is down')

    monkeypatch.setattr(store, 'create', boom)
    response = client.post('/register', data={'username': 'alice', 'password': 'secret'})
    assert response.status_code == 500
    assert b'Could not create your account' in response.data
    with client.session_transaction() as sess:
        assert 'user_id' not in sess


def test_login_store_failure(client, auth, monkeypatch):
    auth.register()
    auth.logout()

    def boom(model, **filters):
        raise PersistenceError('database is down')

    monkeypatch.setattr(store, 'find_one', boom)
    response = auth.login()
    assert response.headers['Location'] == '/login'
    with client.session_transaction() as sess:
        assert 'user_id' not in sess
