"""Custom exceptions for the YouTrack board client."""


class YouTrackError(Exception):
    """Base exception for YouTrack board client errors."""


class InvalidBoardReferenceError(YouTrackError):
    """Board URL is malformed, not sprint scoped, or names an unknown sprint."""


class MissingCredentialError(YouTrackError):
    """No YouTrack token was supplied."""


class AuthenticationFailedError(YouTrackError):
    """YouTrack rejected the token (invalid, expired, or lacking access)."""


class RemoteUnavailableError(YouTrackError):
    """YouTrack could not be reached or returned an unusable response."""
