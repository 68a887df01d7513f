"""Failure taxonomy of the AI content pipeline.

Only the completion invoker raises ContentModerationError and
ServiceUnavailableError. Parse failures are never exceptions, they come back
as Degraded results (see services/parsing.py).
"""


class AIServiceError(Exception):
    """Base class for every error the AI service surfaces to routes."""
    code = 'AI_ERROR'
    default_message = 'An error occurred while processing your request'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ContentModerationError(AIServiceError):
    """The model declined to answer on safety or policy grounds. Never retried."""
    code = 'CONTENT_MODERATED'
    default_message = ('The AI could not process this content due to safety guidelines. '
                       'Please ensure your content is appropriate and try again.')


class ServiceUnavailableError(AIServiceError):
    """Primary and fallback attempts both failed for transport reasons."""
    code = 'SERVICE_UNAVAILABLE'
    default_message = 'AI service is temporarily unavailable. Please try again later.'


class AINotConfiguredError(AIServiceError):
    code = 'AI_NOT_CONFIGURED'
    default_message = 'AI service is not configured. Please add GEMINI_API_KEY to environment variables.'


# Raised by provider adapters, translated by the invoker. Never reaches routes.
class ProviderError(Exception):
    pass


class ProviderBlockedError(ProviderError):
    """The provider itself refused the prompt or the candidate (safety block)."""
