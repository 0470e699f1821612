"""
Language-specific prompt templates for the recommendation agent.

Each template is a set of instructions with named slots plus the JSON guide
that describes the exact reply shape. Slots are checked when a template is
defined, so rendering can never leave a placeholder behind or miss one.
"""

import textwrap
from dataclasses import dataclass
from string import Formatter
from typing import Dict, FrozenSet, Mapping

from app.models.property import PropertyPreferences

DEFAULT_LOCATION = "Any location"

SLOTS: FrozenSet[str] = frozenset(
    {
        "location",
        "min_budget",
        "max_budget",
        "bedrooms",
        "bathrooms",
        "property_type",
        "must_have_features",
        "preferred_features",
        "timeframe",
        "additional_info",
        "json_structure",
    }
)

JSON_GUIDE = """{
  "recommendations": [
    {
      "id": "string",
      "title": "string",
      "address": "string",
      "price": number,
      "bedrooms": number,
      "bathrooms": number,
      "squareFeet": number,
      "propertyType": "string",
      "yearBuilt": number,
      "features": ["string"],
      "matchScore": number (1-100),
      "reasonsForMatch": ["string"],
      "imageUrl": "string"
    }
  ],
  "searchSummary": "string",
  "nextSteps": ["string"],
  "additionalQuestions": ["string"]
}"""


@dataclass(frozen=True)
class PromptTemplate:
    instructions: str
    json_guide: str = JSON_GUIDE

    def __post_init__(self) -> None:
        found = {name for _, name, _, _ in Formatter().parse(self.instructions) if name is not None}
        if found != SLOTS:
            missing = sorted(SLOTS - found)
            unknown = sorted(found - SLOTS)
            raise ValueError(f"Template slots mismatch (missing={missing}, unknown={unknown})")

    def render(self, values: Mapping[str, str]) -> str:
        return self.instructions.format_map({**values, "json_structure": self.json_guide})


def _instructions(text: str) -> str:
    return textwrap.dedent(text).strip()


TEMPLATES: Dict[str, PromptTemplate] = {
    "en": PromptTemplate(
        _instructions(
            """
            As a real estate AI assistant, provide property recommendations based on the following preferences:

            Location: {location}
            Budget: ${min_budget} - ${max_budget}
            Bedrooms: {bedrooms}
            Bathrooms: {bathrooms}
            Property Type: {property_type}
            Must-Have Features: {must_have_features}
            Preferred Features: {preferred_features}
            Timeframe: {timeframe}
            Additional Information: {additional_info}

            Please provide output in the following JSON structure with only the JSON output and nothing else:
            {json_structure}

            Provide 3-5 property recommendations with realistic details. Each property should have 3-5 reasons why it's a good match.
            Include a search summary explaining your approach, 2-3 next steps the user could take, and 2-3 additional questions to refine the search.
            """
        )
    ),
    "ar": PromptTemplate(
        _instructions(
            """
            كمساعد ذكاء اصطناعي متخصص في العقارات، قدم توصيات العقارات بناءً على التفضيلات التالية:

            الموقع: {location}
            الميزانية: ${min_budget} - ${max_budget}
            غرف النوم: {bedrooms}
            الحمامات: {bathrooms}
            نوع العقار: {property_type}
            الميزات الضرورية: {must_have_features}
            الميزات المفضلة: {preferred_features}
            الإطار الزمني: {timeframe}
            معلومات إضافية: {additional_info}

            يرجى تقديم المخرجات في هيكل JSON التالي مع إخراج JSON فقط وليس أي شيء آخر:
            {json_structure}

            قدم 3-5 توصيات عقارية بتفاصيل واقعية. يجب أن يكون لكل عقار 3-5 أسباب توضح سبب كونه مناسبًا.
            قم بتضمين ملخص للبحث يشرح نهجك، و2-3 خطوات تالية يمكن للمستخدم اتخاذها، و2-3 أسئلة إضافية لتحسين البحث.
            """
        )
    ),
    "fr": PromptTemplate(
        _instructions(
            """
            En tant qu'assistant immobilier IA, fournissez des recommandations de propriétés basées sur les préférences suivantes:

            Emplacement: {location}
            Budget: ${min_budget} - ${max_budget}
            Chambres: {bedrooms}
            Salles de bain: {bathrooms}
            Type de propriété: {property_type}
            Caractéristiques essentielles: {must_have_features}
            Caractéristiques préférées: {preferred_features}
            Délai: {timeframe}
            Informations supplémentaires: {additional_info}

            Veuillez fournir la sortie dans la structure JSON suivante avec uniquement la sortie JSON et rien d'autre:
            {json_structure}

            Fournissez 3 à 5 recommandations de propriétés avec des détails réalistes. Chaque propriété doit avoir 3 à 5 raisons pour lesquelles elle correspond bien.
            Incluez un résumé de recherche expliquant votre approche, 2-3 prochaines étapes que l'utilisateur pourrait prendre, et 2-3 questions supplémentaires pour affiner la recherche.
            """
        )
    ),
}


def select_template(language: str) -> PromptTemplate:
    """Template for the language code, English for anything unrecognized."""
    return TEMPLATES.get(language, TEMPLATES["en"])


def format_amount(value: float) -> str:
    """Thousands-separated amount, e.g. 200000 -> '200,000'."""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,}"


def format_count(value: float) -> str:
    """Room count without a trailing '.0' for whole numbers."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def normalize_preferences(preferences: PropertyPreferences) -> PropertyPreferences:
    """
    Copy of the preferences ready for prompt construction.

    An empty location becomes DEFAULT_LOCATION; the input is returned
    unchanged (not copied) when nothing needs filling in.
    """
    if preferences.location and preferences.location.strip():
        return preferences
    return preferences.model_copy(update={"location": DEFAULT_LOCATION})


def prompt_values(preferences: PropertyPreferences) -> Dict[str, str]:
    return {
        "location": preferences.location,
        "min_budget": format_amount(preferences.budget.min),
        "max_budget": format_amount(preferences.budget.max),
        "bedrooms": format_count(preferences.bedrooms),
        "bathrooms": format_count(preferences.bathrooms),
        "property_type": str(preferences.property_type),
        "must_have_features": ", ".join(preferences.must_have_features),
        "preferred_features": ", ".join(preferences.preferred_features),
        "timeframe": str(preferences.timeframe),
        "additional_info": preferences.additional_info,
    }


def render_prompt(preferences: PropertyPreferences) -> str:
    """Render the prompt for the preferences in their own language."""
    template = select_template(str(preferences.language))
    return template.render(prompt_values(preferences))
