"""
Pydantic models for the property recommendation flow.

These models define the data structures used throughout the application
for user preferences, AI-generated recommendations and API envelopes.
Field names are snake_case in Python and camelCase on the wire.
"""

import math
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class PropertyType(str, Enum):
    HOUSE = "House"
    APARTMENT = "Apartment"
    CONDO = "Condo"
    TOWNHOUSE = "Townhouse"
    MOBILE_HOME = "Mobile Home"
    LAND = "Land"


class Timeframe(str, Enum):
    IMMEDIATELY = "Immediately"
    WITHIN_1_MONTH = "Within 1 month"
    WITHIN_3_MONTHS = "Within 3 months"
    WITHIN_6_MONTHS = "Within 6 months"
    NEXT_YEAR = "Next year"
    JUST_BROWSING = "Just browsing"


class Language(str, Enum):
    EN = "en"
    AR = "ar"
    FR = "fr"


LANGUAGE_LABELS = {
    Language.EN.value: "English",
    Language.AR.value: "العربية (Arabic)",
    Language.FR.value: "Français (French)",
}

FEATURE_CATALOG: List[str] = [
    "Garage",
    "Garden",
    "Pool",
    "Basement",
    "Balcony",
    "Fireplace",
    "Air Conditioning",
    "Furnished",
    "Elevator",
    "Gym",
    "Security System",
    "Waterfront",
    "Mountain View",
    "Pets Allowed",
    "Wheelchair Access",
]


def _number_or_zero(value: Any, kind: type) -> Any:
    """Coerce form input to a number, falling back to 0 when unparsable."""
    if isinstance(value, bool):
        return 0
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number):
        return 0
    return kind(number)


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Budget(CamelModel):
    """
    Budget range in dollars.

    Negative amounts become 0. No ordering between min and max is enforced.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    min: int = Field(default=100000, description="Minimum budget")
    max: int = Field(default=500000, description="Maximum budget")

    @field_validator("min", "max", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> int:
        amount = _number_or_zero(value, int)
        return amount if amount > 0 else 0


class PropertyPreferences(CamelModel):
    """
    Structured preferences collected by the multi-step form.

    Instances are immutable once submitted; the pipeline derives copies
    instead of changing them.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        use_enum_values=True,
        validate_default=True,
    )

    location: str = Field(
        default="",
        description="City, neighborhood, or zip code",
        examples=["Austin", "Paris 11e", "Dubai Marina"],
    )
    budget: Budget = Field(default_factory=Budget)
    bedrooms: int = Field(default=2, description="Number of bedrooms")
    bathrooms: float = Field(default=2, description="Number of bathrooms, may be fractional")
    property_type: PropertyType = Field(default=PropertyType.HOUSE)
    must_have_features: List[str] = Field(
        default_factory=list,
        description="Features that are absolutely necessary",
    )
    preferred_features: List[str] = Field(
        default_factory=list,
        description="Features that are nice to have",
    )
    timeframe: Timeframe = Field(default=Timeframe.WITHIN_3_MONTHS)
    additional_info: str = Field(default="", description="Free-form notes for the agent")
    language: Language = Field(default=Language.EN)

    @field_validator("bedrooms", mode="before")
    @classmethod
    def _coerce_bedrooms(cls, value: Any) -> int:
        return _number_or_zero(value, int)

    @field_validator("bathrooms", mode="before")
    @classmethod
    def _coerce_bathrooms(cls, value: Any) -> float:
        return _number_or_zero(value, float)


class PropertyRecommendation(CamelModel):
    """
    A single property suggested by the model.

    Numbers may be fractional or null and missing fields take empty
    defaults; only a record that is not an object fails to decode.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    id: str = ""
    title: str = ""
    address: str = ""
    price: Optional[float] = Field(default=None, description="Asking price in USD")
    bedrooms: Optional[float] = None
    bathrooms: Optional[float] = None
    square_feet: Optional[float] = None
    property_type: Optional[str] = None
    year_built: Optional[float] = None
    features: List[str] = Field(default_factory=list)
    match_score: Optional[float] = Field(default=None, description="Nominally 1-100, not range checked")
    reasons_for_match: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None


class AIAgentResponse(CamelModel):
    """Decoded reply of the recommendation agent."""

    recommendations: List[PropertyRecommendation]
    search_summary: str = ""
    next_steps: List[str] = Field(default_factory=list)
    additional_questions: List[str] = Field(default_factory=list)


class SubmissionResponse(CamelModel):
    """Returned after preferences are accepted by the collector."""

    session_id: str
    preferences: PropertyPreferences


class LanguageOption(CamelModel):
    value: str
    label: str


class OptionsResponse(CamelModel):
    """Catalogs used to build the preference form."""

    property_types: List[str]
    timeframes: List[str]
    features: List[str]
    languages: List[LanguageOption]
