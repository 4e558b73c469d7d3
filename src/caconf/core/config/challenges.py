"""Challenge types and policy validation.

A policy authority config lists the challenge types it offers:

```json
"challenges": {"http-01": true, "dns-01": true}
```

Every key must be a known challenge type and the map must not be empty, since a
policy without challenges makes issuance impossible.
"""

from collections.abc import Callable, Mapping
from enum import Enum

from .errors import EmptyPolicyError, UnknownChallengeError


class ChallengeType(str, Enum):
    """Ways of proving control over a domain."""

    HTTP_01 = "http-01"
    TLS_SNI_01 = "tls-sni-01"
    DNS_01 = "dns-01"


_VALID_CHALLENGES = frozenset(challenge.value for challenge in ChallengeType)


def is_valid_challenge(name: str) -> bool:
    """Check whether a name is a known challenge type."""
    return name in _VALID_CHALLENGES


def validate_challenges(
    challenges: Mapping[str, bool],
    is_valid: Callable[[str], bool] = is_valid_challenge,
) -> None:
    """Validate the challenge names of a policy.

    Only the names are checked; a challenge listed as disabled still has to be a
    known type.

    Args:
        challenges: Mapping of challenge name to enabled flag
        is_valid: Membership test for known challenge types

    Raises:
        EmptyPolicyError: If the mapping is empty
        UnknownChallengeError: For the first name that is not a known challenge type
    """
    if not challenges:
        raise EmptyPolicyError()
    for name in challenges:
        if not is_valid(name):
            raise UnknownChallengeError(name)
