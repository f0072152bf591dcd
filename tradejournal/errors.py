class JournalError(Exception):
    """Base class for errors surfaced to the caller as a JSON error body."""

    status_code = 500

    def __init__(self, message, field=None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self):
        payload = {'success': False, 'error': self.message}
        if self.field:
            payload['field'] = self.field
        return payload


class AuthenticationError(JournalError):
    status_code = 401


class AuthorizationError(JournalError):
    """Actor lacks the role for an action or is acting on their own trade."""

    status_code = 403


class RiskLockedError(AuthorizationError):
    """The daily loss limit has been hit; no new trades until NY midnight."""


class ValidationError(JournalError):
    status_code = 400


class InvalidTransitionError(ValidationError):
    status_code = 409


class NotFoundError(JournalError):
    status_code = 404


class TransientIOError(JournalError):
    """The trade store failed to answer. Callers may retry the whole read."""

    status_code = 503
