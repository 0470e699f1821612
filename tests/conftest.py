import json
from typing import List, Optional

import pytest
from google.genai import errors as genai_errors

from app.config import Settings
from app.models.property import PropertyPreferences
from app.services.retry import RetryPolicy


class FakeCompleter:
    """Completion stub that replays scripted replies or errors."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.prompts: List[str] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    async def __call__(self, prompt: str) -> Optional[str]:
        self.prompts.append(prompt)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class FakeClock:
    """Records requested sleeps instead of waiting."""

    def __init__(self):
        self.sleeps: List[float] = []

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)


@pytest.fixture
def austin_preferences() -> PropertyPreferences:
    return PropertyPreferences.model_validate(
        {
            "location": "Austin",
            "budget": {"min": 200000, "max": 400000},
            "bedrooms": 3,
            "bathrooms": 2,
            "propertyType": "House",
            "mustHaveFeatures": ["Garage"],
            "preferredFeatures": [],
            "timeframe": "Within 3 months",
            "additionalInfo": "",
            "language": "en",
        }
    )


@pytest.fixture
def agent_payload() -> dict:
    return {
        "recommendations": [
            {
                "id": "prop-1",
                "title": "Craftsman Bungalow in Mueller",
                "address": "1902 Aldrich St, Austin, TX 78723",
                "price": 389000,
                "bedrooms": 3,
                "bathrooms": 2,
                "squareFeet": 1640,
                "propertyType": "House",
                "yearBuilt": 2012,
                "features": ["Garage", "Garden"],
                "matchScore": 92,
                "reasonsForMatch": ["Within budget", "Two-car garage", "3 bedrooms"],
                "imageUrl": "https://example.com/prop-1.jpg",
            }
        ],
        "searchSummary": "Focused on central Austin single-family homes.",
        "nextSteps": ["Schedule a viewing", "Get pre-approved"],
        "additionalQuestions": ["Do you need a home office?"],
    }


@pytest.fixture
def agent_reply(agent_payload) -> str:
    return "Here are my picks:\n```json\n" + json.dumps(agent_payload) + "\n```\nGood luck!"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def retry_policy(clock) -> RetryPolicy:
    return RetryPolicy(max_attempts=3, base_delay=1.0, multiplier=2.0, sleep=clock.sleep)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, gemini_api_key="test-gemini-key")


@pytest.fixture
def completer_factory():
    return FakeCompleter


@pytest.fixture
def gemini_error():
    """Build the error google-genai raises for an HTTP status from the API."""

    def build(code: int, message: str = "Request failed"):
        body = {"error": {"code": code, "message": message, "status": "ERROR"}}
        error_class = genai_errors.ClientError if code < 500 else genai_errors.ServerError
        return error_class(code, body)

    return build
