"""
API routes for the preference form and AI property recommendations.
"""

import logging
import uuid
from typing import Annotated, NamedTuple, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from app.config import Settings, get_settings
from app.errors import (
    ConfigurationError,
    MissingRequiredField,
    PipelineError,
    UpstreamContractError,
    UpstreamRejected,
    UpstreamUnavailable,
)
from app.models.property import (
    FEATURE_CATALOG,
    LANGUAGE_LABELS,
    AIAgentResponse,
    LanguageOption,
    OptionsResponse,
    PropertyPreferences,
    PropertyType,
    SubmissionResponse,
    Timeframe,
)
from app.services.collector import PreferenceCollector
from app.services.pipeline import get_recommendation_pipeline
from app.services.transfer import PreferenceTransfer, get_preference_transfer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["recommendations"])


class Services(NamedTuple):
    """Container for injected services."""

    settings: Settings
    transfer: PreferenceTransfer
    collector: PreferenceCollector


def get_services(
    settings: Annotated[Settings, Depends(get_settings)],
    transfer: Annotated[PreferenceTransfer, Depends(get_preference_transfer)],
) -> Services:
    """Dependency that provides all required services."""
    return Services(
        settings=settings,
        transfer=transfer,
        collector=PreferenceCollector(transfer),
    )


@router.get(
    "/options",
    response_model=OptionsResponse,
    summary="Form options",
    description="Catalogs of property types, timeframes, features and languages for the preference form.",
)
async def get_options() -> OptionsResponse:
    return OptionsResponse(
        property_types=[t.value for t in PropertyType],
        timeframes=[t.value for t in Timeframe],
        features=list(FEATURE_CATALOG),
        languages=[LanguageOption(value=code, label=label) for code, label in LANGUAGE_LABELS.items()],
    )


@router.post(
    "/preferences",
    response_model=SubmissionResponse,
    summary="Submit preferences",
    description="Validate the completed preference form and keep it for the results step.",
)
async def submit_preferences(
    preferences: PropertyPreferences,
    services: Annotated[Services, Depends(get_services)],
    session_id: Optional[str] = None,
) -> SubmissionResponse:
    """
    Submit the preference form.

    Args:
        preferences: Preferences entered by the user.
        services: Injected services.
        session_id: Existing session to store under; a new one is created if omitted.

    Returns:
        SubmissionResponse with the session id to fetch recommendations with.

    Raises:
        HTTPException: 422 if a required field is missing.
    """
    session_id = session_id or uuid.uuid4().hex
    try:
        services.collector.submit(preferences, session_id)
    except MissingRequiredField as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"field": e.field, "message": str(e)},
        ) from e

    return SubmissionResponse(session_id=session_id, preferences=preferences)


@router.post(
    "/recommendations/{session_id}",
    response_model=AIAgentResponse,
    summary="Recommendations for submitted preferences",
    description="Consume the preferences stored for a session and generate recommendations.",
)
async def recommend_for_session(
    session_id: str,
    services: Annotated[Services, Depends(get_services)],
) -> AIAgentResponse:
    preferences = services.transfer.take(session_id)
    if preferences is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No preferences found. Please go back and fill out the form.",
        )
    return await _run_pipeline(preferences, services.settings)


@router.post(
    "/recommendations",
    response_model=AIAgentResponse,
    summary="Recommendations for preferences",
    description="Generate recommendations directly from a preferences body.",
)
async def recommend(
    preferences: PropertyPreferences,
    services: Annotated[Services, Depends(get_services)],
) -> AIAgentResponse:
    return await _run_pipeline(preferences, services.settings)


async def _run_pipeline(preferences: PropertyPreferences, settings: Settings) -> AIAgentResponse:
    """
    Run the recommendation pipeline and map its errors to HTTP responses.

    Raises:
        HTTPException: 503 for configuration or connectivity problems,
            502 when the request is refused or the reply cannot be used,
            500 otherwise.
    """
    try:
        pipeline = get_recommendation_pipeline(settings)
        return await pipeline.generate(preferences)

    except ConfigurationError as e:
        logger.error("Recommendation service is not configured: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Failed to initialize AI service: {e}",
        ) from e

    except UpstreamUnavailable as e:
        logger.error("Gemini API unavailable after %d attempts", e.attempts)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=(
                f"Failed to connect to Gemini API after {e.attempts} attempts. "
                "Please try again later."
            ),
        ) from e

    except UpstreamRejected as e:
        logger.error("Gemini API rejected the request: %s", e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Gemini API error: {e}",
        ) from e

    except UpstreamContractError as e:
        logger.error("Unusable Gemini response: %s", e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"An error occurred while generating recommendations: {type(e).__name__}: {e}",
        ) from e

    except PipelineError as e:
        logger.error("Recommendation pipeline failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"{type(e).__name__}: {e}",
        ) from e

    except Exception as e:
        logger.exception("Unexpected error while generating recommendations")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An unexpected error occurred: {type(e).__name__}: {e}",
        ) from e
