"""Exceptions raised by the user record store.

``InvalidArgument`` is raised before any store call is made, so nothing has
been written when it surfaces. ``StoreUnavailable`` wraps the redis client's
connection and timeout errors; the original exception is kept as
``__cause__``.
"""


class UserboardError(Exception):
    """Base class for userboard errors"""


class InvalidArgument(UserboardError, ValueError):
    """A required argument is missing or cannot be used"""


class StoreUnavailable(UserboardError, ConnectionError):
    """The backing Redis connection cannot serve the request"""
