"""Errors raised while resolving and decoding configuration values.

None of these derive from ``ValueError``: pydantic only folds ``ValueError`` and
``AssertionError`` into its ``ValidationError``, so a duration error raised while a
document is validated reaches the caller as itself.
"""

from pathlib import Path


class ConfigError(Exception):
    """Base class for configuration value errors."""


class FileReadError(ConfigError):
    """The file backing an indirected value could not be read."""

    def __init__(self, path: str | Path, cause: BaseException):
        self.path = str(path)
        self.cause = cause
        super().__init__(f"Failed to read '{self.path}': {cause}")


class MissingValueError(ConfigError):
    """A required indirected value resolved to nothing."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing value for '{field}': set it inline or point to a file")


class DurationError(ConfigError):
    """Base class for duration decoding errors."""


class DurationTypeError(DurationError):
    """A duration was encoded as something other than a string."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(
            f"cannot interpret a non-string value as a duration: {value!r} "
            f"({type(value).__name__})"
        )


class DurationParseError(DurationError):
    """A duration string does not follow the unit grammar."""

    def __init__(self, fragment: str, value: str, reason: str = "invalid duration"):
        self.fragment = fragment
        self.value = value
        self.reason = reason
        if fragment == value:
            message = f'{reason} "{value}"'
        else:
            message = f'{reason} "{fragment}" in duration "{value}"'
        super().__init__(message)


class ChallengePolicyError(ConfigError):
    """Base class for challenge policy errors."""


class EmptyPolicyError(ChallengePolicyError):
    """A challenge policy enables no challenges at all."""

    def __init__(self) -> None:
        super().__init__("empty challenges map in the policy authority config is not allowed")


class UnknownChallengeError(ChallengePolicyError):
    """A challenge policy names a challenge type that does not exist."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid challenge in policy authority config: {name}")
