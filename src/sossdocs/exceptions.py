"""Custom exceptions for sossdocs."""


class SossDocsError(Exception):
    """Base exception for all sossdocs errors."""

    pass


class ParseError(SossDocsError):
    """Raised when a crate cannot be read or parsed."""

    pass


class ProfileError(SossDocsError):
    """Raised when a profile contains a rule that cannot be interpreted."""

    pass


class RulesNotParsedError(ProfileError):
    """Raised when rules are read before parse_rules() has run."""

    pass


class ConfigError(SossDocsError):
    """Raised when the configuration file is invalid."""

    pass


class FragmentError(SossDocsError):
    """Raised when a write-once fragment is written twice."""

    pass
