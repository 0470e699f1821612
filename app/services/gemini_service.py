"""
Gemini API service used as the recommendation agent's text-completion backend.

Uses the Google Gen AI SDK to send a rendered prompt and return the reply
text. The service treats the model as an opaque completion endpoint; parsing
the reply is left to the pipeline.
"""

import logging
from typing import List, Optional, Tuple, Type

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from app.config import Settings
from app.errors import InvalidCredential, NotInitialized

logger = logging.getLogger(__name__)

# Values shipped in example .env files that are never real keys
PLACEHOLDER_API_KEYS = frozenset(
    {
        "your_api_key_here",
        "your-api-key-here",
        "your_gemini_api_key",
        "your-gemini-api-key",
        "your_gemini_api_key_here",
        "gemini_api_key",
        "api_key",
        "changeme",
        "xxx",
    }
)

SAFETY_SETTINGS: List[types.SafetySetting] = [
    types.SafetySetting(
        category=types.HarmCategory.HARM_CATEGORY_HARASSMENT,
        threshold=types.HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    ),
    types.SafetySetting(
        category=types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
        threshold=types.HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    ),
]

# Failures worth another attempt. A 4xx ClientError is final.
TRANSIENT_ERRORS: Tuple[Type[BaseException], ...] = (
    genai_errors.ServerError,
    httpx.TransportError,
    ConnectionError,
    TimeoutError,
)


def validate_api_key(api_key: Optional[str]) -> str:
    """
    Check that a usable credential was configured.

    Raises:
        NotInitialized: If no key was configured at all.
        InvalidCredential: If the key is blank or a known placeholder.
    """
    if api_key is None:
        raise NotInitialized()
    stripped = api_key.strip()
    if not stripped or stripped.lower() in PLACEHOLDER_API_KEYS:
        raise InvalidCredential()
    return stripped


class GeminiService:
    """Service for sending prompts to the Gemini API."""

    def __init__(self, settings: Settings) -> None:
        """
        Initialize the Gemini service.

        Args:
            settings: Application settings containing API configuration.

        Raises:
            NotInitialized: If no API key is available.
            InvalidCredential: If the API key is blank or a placeholder.
        """
        key = validate_api_key(settings.gemini_api_key)
        self.client = genai.Client(api_key=key)
        self.model = settings.gemini_model
        self.config = types.GenerateContentConfig(safety_settings=SAFETY_SETTINGS)

    async def complete(self, prompt: str) -> Optional[str]:
        """
        Send the prompt and return the reply text.

        Returns:
            The reply text, or None if the API returned no usable candidate.

        Raises:
            google.genai.errors.APIError: If the API request fails.
        """
        logger.info("Requesting completion from %s (%d chars)", self.model, len(prompt))

        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=self.config,
        )
        if response is None:
            return None

        text = response.text
        logger.debug("Gemini response: %s", text)
        return text
