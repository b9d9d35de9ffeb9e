"""
Matching Exceptions - Error taxonomy for the matching engine.

Only InvalidCoordinate and ProviderNotFound ever reach callers. The AI
errors are raised by LLMCallPolicy and the response parsers, and recovered
by the scoring adapter and the project advisor, which fall back to their
deterministic answers.
"""


class MatchingError(Exception):
    """Base exception for matching engine errors."""
    pass


class InvalidCoordinate(MatchingError, ValueError):
    """Raised when a latitude/longitude is missing, non-finite or out of range."""
    pass


class AIUnavailable(MatchingError):
    """Raised when no LLM credentials are configured."""
    pass


class AITransportError(MatchingError):
    """Raised when the LLM call times out or fails at the transport level."""
    pass


class AIParseError(MatchingError):
    """Raised when the LLM response carries no usable JSON object."""
    pass


class ProviderNotFound(MatchingError):
    """Raised when a provider id cannot be resolved for single scoring."""
    pass
