class GradingError(Exception):
    """Base class for failures talking to the grading classifier."""

    kind = "upstream"


class ConfigurationError(GradingError):
    """The credential needed to reach the classifier is missing or invalid."""

    kind = "configuration"


class UpstreamError(GradingError):
    """The classifier call failed, timed out, or returned something unusable."""

    kind = "upstream"


class QuestionPoolError(Exception):
    """The question pool could not be loaded or failed validation."""