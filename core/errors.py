# =============================================================================
# core/errors.py  —  Exception hierarchy for the content adapter
# =============================================================================
#
# Only the dispatcher (core/content_service.py) catches these.  Everything
# below it raises; everything above it receives a plain string.
# =============================================================================


class ContentServiceError(Exception):
    """Base class for every error raised by the core package."""


class InvalidArgument(ContentServiceError, ValueError):
    """A caller argument failed its type/shape check before any query was sent."""


class RequestFailed(ContentServiceError):
    """The remote call did not produce a usable result.

    Network errors, timeouts, non-2xx responses, unparsable bodies, GraphQL
    errors on the requested path and deserialization errors all collapse
    into this one signal.
    """


class ConfigurationError(ContentServiceError):
    """An environment setting could not be parsed."""
