"""Error types raised by the store and the identity service."""


class YelpCampError(Exception):
    """Base class for application errors."""


class PersistenceError(YelpCampError):
    """Any failure reported by the database layer."""

    def __init__(self, msg='Unknown database error occurred.'):
        super().__init__(msg)


class NotFound(YelpCampError):
    def __init__(self, model, ident):
        super().__init__(f'{model} {ident} not found')
        self.model = model
        self.ident = ident


class AuthError(YelpCampError):
    pass


class DuplicateUsername(AuthError):
    def __init__(self, username):
        super().__init__(f'A user with the username {username!r} is already registered')
        self.username = username


class InvalidCredentials(AuthError):
    def __init__(self):
        super().__init__('Invalid username or password')


class MissingCredentials(AuthError):
    def __init__(self):
        super().__init__('Username and password are required')
