"""Exceptions raised inside the breach lookup layer."""


class PasswatchError(Exception):
    """Base exception for passwatch."""


class NetworkFailure(PasswatchError):
    """The range endpoint answered with a non-200 status or could not be reached."""


class MalformedResponse(PasswatchError):
    """The range response could not be decoded or its matching line is unusable."""
