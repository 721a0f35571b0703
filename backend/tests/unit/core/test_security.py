"""
Unit Tests for Security Module
Tests for: API key generation, matching, masking
"""
from app.core.security import API_KEY_PREFIX, api_key_matches, generate_api_key, mask_api_key


class TestAPIKeyGeneration:
    """Test API key generation"""

    def test_generate_api_key_prefix(self):
        assert generate_api_key().startswith(API_KEY_PREFIX)

    def test_generate_api_key_unique(self):
        keys = [generate_api_key() for _ in range(100)]

        assert len(set(keys)) == 100

    def test_generate_api_key_length(self):
        assert len(generate_api_key()) >= 32


class TestAPIKeyMatching:
    """Test constant-time key matching"""

    def test_match(self):
        assert api_key_matches("k2", ["k1", "k2"]) is True

    def test_no_match(self):
        assert api_key_matches("k3", ["k1", "k2"]) is False

    def test_missing_candidate(self):
        assert api_key_matches(None, ["k1"]) is False
        assert api_key_matches("", ["k1"]) is False

    def test_empty_allowed_keys_never_match(self):
        assert api_key_matches("", [""]) is False
        assert api_key_matches("k1", []) is False

    def test_prefix_is_not_enough(self):
        assert api_key_matches("k", ["k1"]) is False


class TestMaskApiKey:

    def test_long_key(self):
        assert mask_api_key("mk_abcdefghijkl") == "mk_abcd..."

    def test_short_key(self):
        assert mask_api_key("short") == "***"

    def test_empty_key(self):
        assert mask_api_key("") == ""
