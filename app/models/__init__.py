from .property import (
    FEATURE_CATALOG,
    LANGUAGE_LABELS,
    AIAgentResponse,
    Budget,
    Language,
    LanguageOption,
    OptionsResponse,
    PropertyPreferences,
    PropertyRecommendation,
    PropertyType,
    SubmissionResponse,
    Timeframe,
)

__all__ = [
    "FEATURE_CATALOG",
    "LANGUAGE_LABELS",
    "AIAgentResponse",
    "Budget",
    "Language",
    "LanguageOption",
    "OptionsResponse",
    "PropertyPreferences",
    "PropertyRecommendation",
    "PropertyType",
    "SubmissionResponse",
    "Timeframe",
]
