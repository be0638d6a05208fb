"""Error taxonomy for the conversation engine.

Only ``ApplicationError`` ever reaches the orchestrator's turn boundary; the
other three are raised inside the model-backed classifier and reply generator,
where they are converted into fallbacks and banner state.
"""


class WellnessError(Exception):
    """Base exception for peacepulse errors."""


class ConfigurationError(WellnessError):
    """No model service credential is configured."""


class TransientServiceError(WellnessError):
    """Network/service failure or timeout talking to the model service."""


class ValidationError(WellnessError):
    """Model output was not valid JSON or did not match the expected schema."""


class ApplicationError(WellnessError):
    """Unexpected failure while applying store mutations for a turn."""
