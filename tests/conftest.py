import pytest

from yelpcamp import create_app
from yelpcamp.models import Campground, db


@pytest.fixture
def app():
    app = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test',
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SEED_DB': False,
        # scrypt is deliberately slow; tests only need a valid hash
        'PASSWORD_HASH_METHOD': 'pbkdf2:sha256:1000',
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


class AuthActions:
    def __init__(self, client):
        self._client = client

    def register(self, username='alice', password='secret'):
        return self._client.post('/register', data={'username': username, 'password': password})

    def login(self, username='alice', password='secret'):
        return self._client.post('/login', data={'username': username, 'password': password})

    def logout(self):
        return self._client.get('/logout')


@pytest.fixture
def auth(client):
    return AuthActions(client)


@pytest.fixture
def campground_id(app):
    with app.app_context():
        campground = Campground(name='Ridge', image='http://x/img.png', description='nice')
        db.session.add(campground)
        db.session.commit()
        return campground.id
