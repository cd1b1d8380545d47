from typing import Optional


class Vault2ContentError(Exception):
    """
    Base class for all errors raised by vault2content.

    Example:
        >>> issubclass(ConfigurationError, Vault2ContentError)
        True
    """

    pass


class ConfigurationError(Vault2ContentError):
    """
    Exception raised when a rule set configuration is malformed.

    This covers invalid regular expressions or glob patterns, values of the wrong
    type, unknown configuration keys and unreadable configuration files. It is always
    raised before any traversal begins.

    Attributes:
        key (Optional[str]): The configuration key the problem was found under, if any.

    Example:
        >>> error = ConfigurationError("must be a list of strings", key="excluded_tags")
        >>> str(error)
        "Invalid configuration for 'excluded_tags': must be a list of strings"
        >>> str(ConfigurationError("config file is empty"))
        'Invalid configuration: config file is empty'
    """

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        """
        Initialize the exception.

        Args:
            message (str): Description of the problem.
            key (str, optional): Configuration key the problem relates to.
        """
        self.key = key
        if key is None:
            super().__init__(f"Invalid configuration: {message}")
        else:
            super().__init__(f"Invalid configuration for '{key}': {message}")


class FrontmatterParseError(Vault2ContentError):
    """
    Exception raised when a note's frontmatter header cannot be parsed.

    The tree copier never lets this exception escape: the note is treated as having no
    metadata and the message is attached to its copy record as a warning.

    Example:
        >>> error = FrontmatterParseError("expected a mapping, got list")
        >>> str(error)
        'Malformed frontmatter: expected a mapping, got list'
    """

    def __init__(self, reason: str) -> None:
        """
        Initialize the exception with the reason the header was rejected.

        Args:
            reason (str): Why the header could not be parsed.
        """
        self.reason = reason
        super().__init__(f"Malformed frontmatter: {reason}")
