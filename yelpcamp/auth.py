from dataclasses import dataclass
from functools import wraps

from flask import Blueprint, current_app, flash, g, redirect, render_template, request, session, url_for
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from . import store
from .errors import AuthError, DuplicateUsername, InvalidCredentials, MissingCredentials, PersistenceError
from .models import User

auth_bp = Blueprint('auth', __name__)


@dataclass(frozen=True)
class Authenticated:
    user: User


@dataclass(frozen=True)
class Anonymous:
    pass


# ---------------- Identity service ----------------

def _establish_session(user):
    session.clear()
    session['user_id'] = user.id
    g.identity = Authenticated(user)


def register_user(username, password):
    """Create a user with a hashed password and log them in."""
    if not username or not password:
        raise MissingCredentials()
    if store.find_one(User, username=username) is not None:
        raise DuplicateUsername(username)
    pw_hash = generate_password_hash(password, method=current_app.config['PASSWORD_HASH_METHOD'])
    try:
        user = store.create(User, {'username': username, 'password_hash': pw_hash})
    except PersistenceError as e:
        # lost a race against a concurrent registration
        if isinstance(e.__cause__, IntegrityError):
            raise DuplicateUsername(username) from e
        raise
    _establish_session(user)
    current_app.logger.info(f'registered user {user.id} ({username})')
    return user


def login_user(username, password):
    if not username or not password:
        raise MissingCredentials()
    user = store.find_one(User, username=username)
    if user is None or not check_password_hash(user.password_hash, password):
        raise InvalidCredentials()
    _establish_session(user)
    return user


def logout_user():
    session.clear()
    g.identity = Anonymous()


def current_user():
    """Resolve the session's user id; drops ids whose user no longer exists."""
    user_id = session.get('user_id')
    if user_id is None:
        return None
    user = store.find_by_id(User, user_id)
    if user is None:
        session.pop('user_id', None)
    return user


def current_identity():
    """``Authenticated(user)`` or ``Anonymous()``, computed once per request."""
    if 'identity' not in g:
        user = current_user()
        g.identity = Authenticated(user) if user is not None else Anonymous()
    return g.identity


# ---------------- Access control ----------------

def require_authenticated(identity):
    return isinstance(identity, Authenticated)


def login_required(view):
    """Decorator for route handlers that require an authenticated user."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not require_authenticated(current_identity()):
            flash('Please log in first.', 'error')
            return redirect(url_for('auth.login'))
        return view(*args, **kwargs)
    return wrapped


def init_app(app):
    @app.before_request
    def load_identity():
        try:
            current_identity()
        except PersistenceError:
            # an unreachable user table should not take down public pages
            g.identity = Anonymous()

    @app.context_processor
    def inject_current_user():
        identity = g.get('identity', Anonymous())
        return {'current_user': identity.user if isinstance(identity, Authenticated) else None}


# ---------------- Routes ----------------

@auth_bp.route('/register', methods=['GET', 'POST'])
def register():
    if request.method == 'GET':
        return render_template('register.html')
    username = request.form.get('username', '')
    password = request.form.get('password', '')
    try:
        register_user(username, password)
    except AuthError as e:
        flash(str(e), 'error')
        return render_template('register.html', username=username)
    except PersistenceError:
        flash('Could not create your account right now. Please try again.', 'error')
        return render_template('register.html', username=username), 500
    flash(f'Welcome to YelpCamp, {username}!', 'success')
    return redirect(url_for('campgrounds.index'))


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    if request.method == 'GET':
        return render_template('login.html')
    try:
        login_user(request.form.get('username', ''), request.form.get('password', ''))
    except AuthError as e:
        flash(str(e), 'error')
        return redirect(url_for('auth.login'))
    except PersistenceError:
        flash('Could not log you in right now. Please try again.', 'error')
        return redirect(url_for('auth.login'))
    return redirect(url_for('campgrounds.index'))


@auth_bp.route('/logout')
def logout():
    logout_user()
    flash('Logged out.', 'info')
    return redirect(url_for('campgrounds.index'))
