"""Indirected configuration values.

Secrets such as passwords, database connect strings and server URLs can be written
straight into a config document or kept in a separate file that the document
points to. The file is read when the value is resolved, not when the document is
parsed, and it is read again on every resolution.

Example:
    ```yaml
    dbConnectFile: /etc/boulder/secrets/sa_dburl
    ```

    >>> resolve_indirect("", "/etc/boulder/secrets/sa_dburl", trim=TrimPolicy.SURROUNDING_WHITESPACE)
    'mysql+tcp://sa@localhost:3306/boulder_sa'
"""

import logging
from abc import abstractmethod
from enum import Enum
from pathlib import Path

from caconf.models import ConfigBaseModel

from .errors import FileReadError, MissingValueError

logger = logging.getLogger(__name__)


class TrimPolicy(Enum):
    """How file content is cleaned up before it is used as a value."""

    # Only newline characters at the end of the file are dropped
    TRAILING_NEWLINES = "trailing_newlines"
    # Whitespace on both ends is dropped
    SURROUNDING_WHITESPACE = "surrounding_whitespace"

    def apply(self, content: str) -> str:
        if self is TrimPolicy.TRAILING_NEWLINES:
            return content.rstrip("\n")
        return content.strip()


def read_indirect_file(path: str | Path, trim: TrimPolicy) -> str:
    """Read a value from a file.

    Args:
        path: Path to the file holding the value, relative paths resolve against
              the current working directory
        trim: Trim policy applied to the file content

    Returns:
        The trimmed file content

    Raises:
        FileReadError: If the file is missing, unreadable or not valid UTF-8
    """
    file_path = Path(path)
    logger.debug(f"Reading indirect value from {file_path}")
    try:
        content = file_path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(file_path, e) from e
    return trim.apply(content)


def resolve_indirect(
    literal: str,
    file_path: str,
    *,
    trim: TrimPolicy,
    required_field: str | None = None,
) -> str:
    """Resolve a value that is either inline or stored in a file.

    A non-empty ``file_path`` always wins over ``literal``. Inline literals are
    returned as written.

    Args:
        literal: The inline value
        file_path: Path to a file holding the value
        trim: Trim policy for file content
        required_field: Name reported when the value is required but neither the
                        literal nor the file path is set

    Returns:
        The resolved value, possibly empty when ``required_field`` is None

    Raises:
        FileReadError: If the file cannot be read
        MissingValueError: If the value is required and nothing is set
    """
    if file_path:
        return read_indirect_file(file_path, trim)
    if required_field is not None and not literal:
        raise MissingValueError(required_field)
    return literal


class IndirectConfigModel(ConfigBaseModel):
    """Base for config shapes that carry an indirected value.

    Subclasses decide which fields hold the literal and the file path, which trim
    policy applies and whether an empty value is acceptable.
    """

    @abstractmethod
    def resolve(self) -> str:
        """Resolve the value, reading its file if one is configured."""
        pass

    def uses_file(self) -> bool:
        """Whether resolution reads from a file rather than the inline literal."""
        return False
