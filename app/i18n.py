"""
UI strings for the preference form and results view (English, Arabic, French).
"""

from typing import Dict, List

DEFAULT_LANGUAGE = "en"
RTL_LANGUAGES = frozenset({"ar"})

UI_TEXT: Dict[str, Dict[str, str]] = {
    "en": {
        "title": "AI Home Finder",
        "intro": (
            "Tell us about your dream home and our AI will find the perfect match for you. "
            "The more details you provide, the better our recommendations will be."
        ),
        "step": "Step {step} of {total}",
        "basicInformation": "Basic Information",
        "propertyDetails": "Property Details",
        "featuresAndLanguage": "Features & Preferences",
        "location": "Location",
        "locationHelp": "City, neighborhood, or zip code (required)",
        "locationRequired": "Please enter a location. This is required for property recommendations.",
        "minBudget": "Minimum Budget",
        "maxBudget": "Maximum Budget",
        "bedrooms": "Bedrooms",
        "bathrooms": "Bathrooms",
        "propertyType": "Property Type",
        "timeframe": "Timeframe",
        "mustHaveFeatures": "Must-Have Features",
        "preferredFeatures": "Preferred Features",
        "additionalInfo": "Additional Information",
        "language": "Language",
        "next": "Next",
        "previous": "Previous",
        "submit": "Find My Home",
        "loading": "Finding Your Dream Home",
        "loadingSubtext": "Our AI is analyzing your preferences and searching for the perfect match...",
        "error": "Error",
        "noPreferences": "No preferences found. Please go back and fill out the form.",
        "goBack": "Go Back",
        "noResults": "No Results",
        "tryAgain": "No property recommendations were found. Please try with different preferences.",
        "dreamHomeMatches": "Your Dream Home Matches",
        "matchesFound": "Based on your preferences, our AI has found {count} properties that match your criteria.",
        "searchSummary": "Search Summary",
        "recommendedProperties": "Recommended Properties",
        "features": "Features",
        "whyMatchesPreferences": "Why This Matches Your Preferences",
        "match": "{score}% Match",
        "built": "Built {year}",
        "contactAgent": "Contact Agent",
        "nextSteps": "Next Steps",
        "refineSearch": "Refine Your Search",
        "refineSearchSubtext": "To help us find even better matches, consider answering these additional questions:",
        "editPreferences": "Edit Preferences",
        "alternativeOptions": "Alternative Options",
        "alternativeOptionsIntro": "While we're fixing this issue, you can try:",
        "fallbackRetry": "Refreshing the page and trying again",
        "fallbackPreferences": "Using different preferences",
        "fallbackLater": "Checking back in a few minutes",
        "fallbackBrowse": "Browsing our regular property listings instead",
        "configurationNote": (
            "Note: This feature requires the Gemini API to be properly configured. "
            "If you're the administrator, please verify your API key is correctly set up."
        ),
    },
    "ar": {
        "title": "الباحث الذكي عن المنازل",
        "intro": "أخبرنا عن منزل أحلامك وسيجد الذكاء الاصطناعي لدينا التطابق المثالي لك.",
        "step": "الخطوة {step} من {total}",
        "basicInformation": "المعلومات الأساسية",
        "propertyDetails": "تفاصيل العقار",
        "featuresAndLanguage": "الميزات والتفضيلات",
        "location": "الموقع",
        "locationHelp": "المدينة أو الحي أو الرمز البريدي (مطلوب)",
        "locationRequired": "يرجى إدخال موقع. هذا الحقل مطلوب لتوصيات العقارات.",
        "minBudget": "الحد الأدنى للميزانية",
        "maxBudget": "الحد الأقصى للميزانية",
        "bedrooms": "غرف النوم",
        "bathrooms": "الحمامات",
        "propertyType": "نوع العقار",
        "timeframe": "الإطار الزمني",
        "mustHaveFeatures": "الميزات الضرورية",
        "preferredFeatures": "الميزات المفضلة",
        "additionalInfo": "معلومات إضافية",
        "language": "اللغة",
        "next": "التالي",
        "previous": "السابق",
        "submit": "ابحث عن منزلي",
        "loading": "البحث عن منزل أحلامك",
        "loadingSubtext": "الذكاء الاصطناعي لدينا يحلل تفضيلاتك ويبحث عن التطابق المثالي...",
        "error": "خطأ",
        "noPreferences": "لم يتم العثور على تفضيلات. يرجى العودة وملء النموذج.",
        "goBack": "عودة",
        "noResults": "لا توجد نتائج",
        "tryAgain": "لم يتم العثور على توصيات العقارات. يرجى المحاولة بتفضيلات مختلفة.",
        "dreamHomeMatches": "تطابقات منزل أحلامك",
        "matchesFound": "بناءً على تفضيلاتك، وجد الذكاء الاصطناعي لدينا {count} عقارات تطابق معاييرك.",
        "searchSummary": "ملخص البحث",
        "recommendedProperties": "العقارات الموصى بها",
        "features": "الميزات",
        "whyMatchesPreferences": "لماذا يتطابق هذا مع تفضيلاتك",
        "match": "تطابق {score}%",
        "built": "بني عام {year}",
        "contactAgent": "اتصل بالوكيل",
        "nextSteps": "الخطوات التالية",
        "refineSearch": "تحسين البحث",
        "refineSearchSubtext": "لمساعدتنا في العثور على تطابقات أفضل، يرجى الإجابة على هذه الأسئلة الإضافية:",
        "editPreferences": "تعديل التفضيلات",
    },
    "fr": {
        "title": "Assistant IA Immobilier",
        "intro": (
            "Parlez-nous de la maison de vos rêves et notre IA trouvera la correspondance parfaite pour vous."
        ),
        "step": "Étape {step} sur {total}",
        "basicInformation": "Informations de Base",
        "propertyDetails": "Détails de la Propriété",
        "featuresAndLanguage": "Caractéristiques et Préférences",
        "location": "Emplacement",
        "locationHelp": "Ville, quartier ou code postal (obligatoire)",
        "locationRequired": "Veuillez saisir un emplacement. Ce champ est obligatoire pour les recommandations.",
        "minBudget": "Budget Minimum",
        "maxBudget": "Budget Maximum",
        "bedrooms": "Chambres",
        "bathrooms": "Salles de bain",
        "propertyType": "Type de Propriété",
        "timeframe": "Délai",
        "mustHaveFeatures": "Caractéristiques Essentielles",
        "preferredFeatures": "Caractéristiques Préférées",
        "additionalInfo": "Informations Supplémentaires",
        "language": "Langue",
        "next": "Suivant",
        "previous": "Précédent",
        "submit": "Trouver Ma Maison",
        "loading": "Recherche de Votre Maison de Rêve",
        "loadingSubtext": "Notre IA analyse vos préférences et recherche la correspondance parfaite...",
        "error": "Erreur",
        "noPreferences": "Aucune préférence trouvée. Veuillez revenir en arrière et remplir le formulaire.",
        "goBack": "Retour",
        "noResults": "Aucun Résultat",
        "tryAgain": (
            "Aucune recommandation de propriété n'a été trouvée. "
            "Veuillez essayer avec des préférences différentes."
        ),
        "dreamHomeMatches": "Correspondances de Votre Maison de Rêve",
        "matchesFound": (
            "Sur la base de vos préférences, notre IA a trouvé {count} propriétés "
            "qui correspondent à vos critères."
        ),
        "searchSummary": "Résumé de la Recherche",
        "recommendedProperties": "Propriétés Recommandées",
        "features": "Caractéristiques",
        "whyMatchesPreferences": "Pourquoi Cela Correspond à Vos Préférences",
        "match": "Correspondance {score}%",
        "built": "Construit en {year}",
        "contactAgent": "Contacter l'Agent",
        "nextSteps": "Prochaines Étapes",
        "refineSearch": "Affiner Votre Recherche",
        "refineSearchSubtext": (
            "Pour nous aider à trouver de meilleures correspondances, "
            "veuillez répondre à ces questions supplémentaires :"
        ),
        "editPreferences": "Modifier les Préférences",
    },
}

FALLBACK_SUGGESTION_KEYS: List[str] = [
    "fallbackRetry",
    "fallbackPreferences",
    "fallbackLater",
    "fallbackBrowse",
]


def get_text(language: str, key: str, **values: object) -> str:
    """
    Look up a UI string.

    Unknown languages and keys missing from a translation fall back to
    English; an unknown key returns the key itself. Keyword arguments fill
    ``{name}`` placeholders.
    """
    texts = UI_TEXT.get(language, UI_TEXT[DEFAULT_LANGUAGE])
    text = texts.get(key) or UI_TEXT[DEFAULT_LANGUAGE].get(key, key)
    for name, value in values.items():
        text = text.replace("{" + name + "}", str(value))
    return text


def is_rtl(language: str) -> bool:
    return language in RTL_LANGUAGES
