class GradingError(Exception):
    """The grading API could not produce a verdict."""

    kind = "upstream"


class ConfigurationError(GradingError):
    """The grading API is unreachable by configuration or has no credential."""

    kind = "configuration"


class UpstreamError(GradingError):
    """Network failure, non-2xx response, or an unparseable reply."""

    kind = "upstream"


class ValidationError(ValueError):
    """A submitted answer is empty or whitespace-only."""
