"""Tests for challenge policy validation."""

import pytest

from caconf.core.config import (
    ChallengePolicyError,
    ChallengeType,
    EmptyPolicyError,
    PAConfig,
    UnknownChallengeError,
    is_valid_challenge,
    validate_challenges,
)


class TestChallengeRegistry:
    def test_known_challenges(self):
        for challenge in ChallengeType:
            assert is_valid_challenge(challenge.value)

    def test_unknown_challenges(self):
        assert not is_valid_challenge("not-a-real-challenge")
        assert not is_valid_challenge("HTTP-01")
        assert not is_valid_challenge("")


class TestValidateChallenges:
    """Test validation of a challenge policy mapping."""

    def test_valid_policy(self):
        """Test a policy with one known challenge."""
        validate_challenges({"http-01": True})

    def test_disabled_challenges_still_count(self):
        """Test that the enabled flag does not affect validation."""
        validate_challenges({"dns-01": False})

    def test_empty_policy(self):
        """Test that an empty policy is refused."""
        with pytest.raises(EmptyPolicyError):
            validate_challenges({})

    def test_unknown_challenge(self):
        """Test that an unknown challenge is named in the error."""
        with pytest.raises(UnknownChallengeError) as exc_info:
            validate_challenges({"http-01": True, "not-a-real-challenge": True})
        assert exc_info.value.name == "not-a-real-challenge"
        assert "not-a-real-challenge" in str(exc_info.value)

    def test_errors_share_a_base(self):
        """Test that both policy errors can be caught together."""
        with pytest.raises(ChallengePolicyError):
            validate_challenges({})
        with pytest.raises(ChallengePolicyError):
            validate_challenges({"bogus": True})

    def test_custom_registry(self):
        """Test validation against a caller-supplied registry."""
        validate_challenges({"tls-alpn-01": True}, is_valid=lambda name: name == "tls-alpn-01")
        with pytest.raises(UnknownChallengeError):
            validate_challenges({"http-01": True}, is_valid=lambda name: name == "tls-alpn-01")


class TestPAConfigChallenges:
    """Test challenge checks on policy authority configs."""

    def test_check_challenges(self):
        """Test a valid policy authority config."""
        config = PAConfig.model_validate({"challenges": {"http-01": True, "dns-01": True}})
        config.check_challenges()

    def test_check_challenges_empty(self):
        """Test that a policy authority config without challenges fails the check."""
        config = PAConfig.model_validate({"dbConnect": "mysql+tcp://pa@localhost/boulder"})
        with pytest.raises(EmptyPolicyError):
            config.check_challenges()

    def test_check_challenges_unknown(self):
        """Test that loading accepts unknown names and the check refuses them."""
        config = PAConfig.model_validate({"challenges": {"http-01": True, "smoke-signal": True}})
        with pytest.raises(UnknownChallengeError, match="smoke-signal"):
            config.check_challenges()
