"""Tests for custom exceptions."""

import pytest

from vault2content.exceptions import ConfigurationError, FrontmatterParseError, Vault2ContentError


class TestConfigurationError:
    """Test ConfigurationError exception."""

    def test_message_with_key(self):
        """Test that the offending key is named in the message."""
        error = ConfigurationError("must be a list of strings", key="excluded_tags")

        assert error.key == "excluded_tags"
        assert str(error) == "Invalid configuration for 'excluded_tags': must be a list of strings"

    def test_message_without_key(self):
        """Test the message when no key is involved."""
        error = ConfigurationError("top level must be a mapping")

        assert error.key is None
        assert str(error) == "Invalid configuration: top level must be a mapping"

    def test_is_package_error(self):
        """Test that ConfigurationError can be caught as the package base error."""
        with pytest.raises(Vault2ContentError):
            raise ConfigurationError("boom")


class TestFrontmatterParseError:
    """Test FrontmatterParseError exception."""

    def test_reason_attribute(self):
        """Test that the reason is kept and rendered."""
        error = FrontmatterParseError("expected a mapping, got list")

        assert error.reason == "expected a mapping, got list"
        assert str(error) == "Malformed frontmatter: expected a mapping, got list"
        assert isinstance(error, Vault2ContentError)
