# src/manuscript_kit/errors.py

"""Error taxonomy for manuscript-kit.

Every error raised by the library derives from ManuscriptKitError.
Backend errors are translated from provider SDK exceptions at the
adapter boundary, so callers never catch provider types.
"""


class ManuscriptKitError(Exception):
    """Base class for all manuscript-kit errors."""


class ScopeEmptyError(ManuscriptKitError):
    """No text could be resolved for the requested analysis scope."""


class ChunkingError(ManuscriptKitError, ValueError):
    """Chunking bounds cannot be satisfied."""


class MergeError(ManuscriptKitError):
    """No chunk contributed valid data to a merged result."""


class BackendError(ManuscriptKitError):
    """A call to the generative backend failed."""


class AuthError(BackendError):
    """No credential is configured, or the backend rejected it."""


class RateLimitError(BackendError):
    """The backend kept rate-limiting after all retries were exhausted."""


class MalformedResponseError(BackendError):
    """The backend response could not be parsed as JSON."""


class NetworkError(BackendError):
    """The backend could not be reached."""


class BackendTimeoutError(BackendError):
    """The backend call exceeded its wall-clock bound."""
