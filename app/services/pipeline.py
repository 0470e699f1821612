"""
Recommendation request pipeline.

Preferences are normalized, rendered into a language-specific prompt, sent
to the completion backend with retries, and the reply is decoded into an
AIAgentResponse. Any failure aborts the remaining steps with a single
PipelineError; partial results are never returned.
"""

import logging
from typing import Awaitable, Callable, Optional

from google.genai import errors as genai_errors

from app.config import Settings, get_settings
from app.errors import EmptyResponse, PipelineError, UpstreamRejected, UpstreamUnavailable
from app.models.property import AIAgentResponse, PropertyPreferences
from app.services.extraction import parse_agent_response
from app.services.gemini_service import TRANSIENT_ERRORS, GeminiService
from app.services.prompts import normalize_preferences, render_prompt
from app.services.retry import RetryExhausted, RetryPolicy

logger = logging.getLogger(__name__)

Completer = Callable[[str], Awaitable[Optional[str]]]


class RecommendationPipeline:
    """Runs one recommendation request against a configured completer."""

    def __init__(
        self,
        completer: Completer,
        retry_policy: Optional[RetryPolicy] = None,
        excerpt_length: int = 200,
    ) -> None:
        self.completer = completer
        self.retry_policy = retry_policy or RetryPolicy()
        self.excerpt_length = excerpt_length

    @classmethod
    def from_settings(cls, settings: Settings) -> "RecommendationPipeline":
        """
        Build a pipeline backed by Gemini.

        Raises:
            NotInitialized: If no API key is configured.
            InvalidCredential: If the API key is blank or a placeholder.
        """
        service = GeminiService(settings)
        policy = RetryPolicy(
            max_attempts=settings.retry_max_attempts,
            base_delay=settings.retry_base_delay,
            multiplier=settings.retry_backoff_multiplier,
            retry_on=TRANSIENT_ERRORS,
        )
        return cls(service.complete, policy, settings.error_excerpt_length)

    async def generate(self, preferences: PropertyPreferences) -> AIAgentResponse:
        """
        Generate recommendations for the preferences.

        Raises:
            UpstreamUnavailable: If every attempt to call the backend failed.
            UpstreamRejected: If the backend refused the request outright.
            EmptyResponse: If the backend returned nothing.
            NoJsonFound, MalformedJson, InvalidShape: If the reply is unusable.
        """
        prompt = render_prompt(normalize_preferences(preferences))
        logger.info(
            "Generating recommendations (language=%s, prompt=%d chars)",
            preferences.language,
            len(prompt),
        )

        try:
            text = await self.retry_policy.run(lambda: self.completer(prompt))
        except RetryExhausted as e:
            logger.error("Completion failed after %d attempts: %s", e.attempts, e.last_error)
            raise UpstreamUnavailable(e.attempts, e.last_error) from e.last_error
        except genai_errors.ClientError as e:
            logger.error("Completion rejected (%s): %s", e.code, e.message)
            raise UpstreamRejected(e.code, e.message or str(e)) from e

        if text is None or not text.strip():
            logger.error("Completion returned an empty response")
            raise EmptyResponse()

        try:
            response = parse_agent_response(text, self.excerpt_length)
        except PipelineError as e:
            logger.error("Could not decode agent response: %s", e)
            raise

        logger.info("Received %d recommendations", len(response.recommendations))
        return response


async def generate_recommendations(
    preferences: PropertyPreferences,
    api_key: Optional[str],
    settings: Optional[Settings] = None,
) -> AIAgentResponse:
    """One-shot helper: build a Gemini pipeline for ``api_key`` and run it."""
    settings = (settings or get_settings()).model_copy(update={"gemini_api_key": api_key})
    pipeline = RecommendationPipeline.from_settings(settings)
    return await pipeline.generate(preferences)


# Dependency injection helper for FastAPI
_pipeline: Optional[RecommendationPipeline] = None


def get_recommendation_pipeline(settings: Settings) -> RecommendationPipeline:
    """
    Get or create the pipeline singleton.

    The pipeline is only cached once it was built with a valid credential,
    so a configuration error is reported on every request until fixed.
    """
    global _pipeline
    if _pipeline is None:
        _pipeline = RecommendationPipeline.from_settings(settings)
    return _pipeline
