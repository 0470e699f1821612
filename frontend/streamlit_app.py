"""
AI Home Finder Frontend - Streamlit multi-step form and results view.

Collects property preferences over three steps, submits them to the
backend and renders the returned recommendations as property cards.
"""

import copy
import os
import uuid
from typing import Any, Dict, List, Optional

import httpx
import streamlit as st

from app.i18n import FALLBACK_SUGGESTION_KEYS, get_text, is_rtl
from app.models.property import (
    FEATURE_CATALOG,
    LANGUAGE_LABELS,
    PropertyType,
    Timeframe,
)
from app.services.prompts import format_count

# Configuration
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")

TOTAL_STEPS = 3

DEFAULT_PREFERENCES: Dict[str, Any] = {
    "location": "",
    "budget": {"min": 100000, "max": 500000},
    "bedrooms": 2,
    "bathrooms": 2,
    "propertyType": PropertyType.HOUSE.value,
    "mustHaveFeatures": [],
    "preferredFeatures": [],
    "timeframe": Timeframe.WITHIN_3_MONTHS.value,
    "additionalInfo": "",
    "language": "en",
}


def init_session_state():
    """Initialize session state variables."""
    if "session_id" not in st.session_state:
        st.session_state.session_id = uuid.uuid4().hex
    if "step" not in st.session_state:
        st.session_state.step = 1
    if "preferences" not in st.session_state:
        st.session_state.preferences = copy.deepcopy(DEFAULT_PREFERENCES)
    if "view" not in st.session_state:
        st.session_state.view = "form"


def t(key: str, **values) -> str:
    return get_text(st.session_state.preferences.get("language", "en"), key, **values)


def _error_detail(e: httpx.HTTPStatusError) -> str:
    try:
        detail = e.response.json().get("detail", str(e))
    except ValueError:
        detail = str(e)
    if isinstance(detail, dict):
        detail = detail.get("message", str(detail))
    return str(detail)


def submit_preferences(preferences: dict) -> dict:
    """
    Send the completed form to the backend.

    Returns:
        API response with the session id, or a dict with an "error" key.
    """
    try:
        with httpx.Client(timeout=30.0) as client:
            response = client.post(
                f"{API_BASE_URL}/api/preferences",
                params={"session_id": st.session_state.session_id},
                json=preferences,
            )
            response.raise_for_status()
            return response.json()
    except httpx.ConnectError:
        return {
            "error": "Cannot connect to the API server. Make sure the backend is running with: `uvicorn app.main:app --reload`"
        }
    except httpx.HTTPStatusError as e:
        return {"error": _error_detail(e)}


def fetch_recommendations(session_id: str) -> dict:
    """Ask the backend for recommendations for the submitted preferences."""
    try:
        # Generation plus retries can take a while
        with httpx.Client(timeout=120.0) as client:
            response = client.post(f"{API_BASE_URL}/api/recommendations/{session_id}")
            response.raise_for_status()
            return response.json()
    except httpx.ConnectError:
        return {"error": "Cannot connect to the API server. Please try again later."}
    except httpx.TimeoutException:
        return {"error": "The AI service took too long to respond. Please try again."}
    except httpx.HTTPStatusError as e:
        return {"error": _error_detail(e)}


def format_price(price: float) -> str:
    """Format a price as whole US dollars."""
    return f"${price:,.0f}"


def format_recommendation(prop: dict) -> str:
    """Format a single recommendation card as markdown."""
    lines = [f"### {prop.get('title', '')}", f"_{prop.get('address', '')}_", ""]

    header = [f"**{format_price(prop['price'])}**"] if prop.get("price") is not None else []
    if prop.get("matchScore") is not None:
        header.append(t("match", score=format_count(prop["matchScore"])))
    lines.append(" · ".join(header))

    details = []
    if prop.get("bedrooms") is not None:
        details.append(f"{format_count(prop['bedrooms'])} bed")
    if prop.get("bathrooms") is not None:
        details.append(f"{format_count(prop['bathrooms'])} bath")
    if prop.get("squareFeet") is not None:
        details.append(f"{prop['squareFeet']:,.0f} sq ft")
    if prop.get("yearBuilt") is not None:
        details.append(t("built", year=format_count(prop["yearBuilt"])))
    lines.append(" | ".join(details))

    if prop.get("features"):
        lines.append(f"\n**{t('features')}:** {', '.join(prop['features'])}")

    if prop.get("reasonsForMatch"):
        lines.append(f"\n**{t('whyMatchesPreferences')}**")
        lines.extend(f"- {reason}" for reason in prop["reasonsForMatch"])

    return "\n".join(lines)


def _bullets(items: List[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


def render_step_one(prefs: dict):
    st.subheader(t("basicInformation"))
    prefs["location"] = st.text_input(
        f"{t('location')} *",
        value=prefs["location"],
        placeholder=t("locationHelp"),
    )
    col1, col2 = st.columns(2)
    with col1:
        prefs["budget"]["min"] = st.number_input(
            t("minBudget"), min_value=0, step=10000, value=int(prefs["budget"]["min"])
        )
    with col2:
        prefs["budget"]["max"] = st.number_input(
            t("maxBudget"), min_value=0, step=10000, value=int(prefs["budget"]["max"])
        )


def render_step_two(prefs: dict):
    st.subheader(t("propertyDetails"))
    col1, col2 = st.columns(2)
    with col1:
        prefs["bedrooms"] = st.number_input(t("bedrooms"), min_value=0, step=1, value=int(prefs["bedrooms"]))
    with col2:
        prefs["bathrooms"] = st.number_input(
            t("bathrooms"), min_value=0.0, step=0.5, value=float(prefs["bathrooms"])
        )

    types_ = [p.value for p in PropertyType]
    prefs["propertyType"] = st.selectbox(
        t("propertyType"), types_, index=types_.index(prefs["propertyType"])
    )
    timeframes = [tf.value for tf in Timeframe]
    prefs["timeframe"] = st.selectbox(
        t("timeframe"), timeframes, index=timeframes.index(prefs["timeframe"])
    )


def render_step_three(prefs: dict):
    st.subheader(t("featuresAndLanguage"))
    prefs["mustHaveFeatures"] = st.multiselect(
        t("mustHaveFeatures"), FEATURE_CATALOG, default=prefs["mustHaveFeatures"]
    )
    prefs["preferredFeatures"] = st.multiselect(
        t("preferredFeatures"), FEATURE_CATALOG, default=prefs["preferredFeatures"]
    )
    prefs["additionalInfo"] = st.text_area(t("additionalInfo"), value=prefs["additionalInfo"])

    codes = list(LANGUAGE_LABELS)
    prefs["language"] = st.selectbox(
        t("language"),
        codes,
        index=codes.index(prefs["language"]),
        format_func=LANGUAGE_LABELS.get,
    )


def render_form():
    """Render the multi-step preference form."""
    prefs = st.session_state.preferences
    step = st.session_state.step

    st.title(t("title"))
    st.write(t("intro"))
    st.caption(t("step", step=step, total=TOTAL_STEPS))
    st.progress(step / TOTAL_STEPS)

    if step == 1:
        render_step_one(prefs)
    elif step == 2:
        render_step_two(prefs)
    else:
        render_step_three(prefs)

    col1, _, col3 = st.columns([1, 1, 1])
    with col1:
        if step > 1 and st.button(t("previous"), use_container_width=True):
            st.session_state.step -= 1
            st.rerun()
    with col3:
        if step < TOTAL_STEPS:
            if st.button(t("next"), type="primary", use_container_width=True):
                st.session_state.step += 1
                st.rerun()
        elif st.button(t("submit"), type="primary", use_container_width=True):
            handle_submit(prefs)


def handle_submit(prefs: dict):
    if not prefs["location"].strip():
        st.error(t("locationRequired"))
        return

    result = submit_preferences(prefs)
    if "error" in result:
        st.error(result["error"])
        return

    st.session_state.submitted_session = result["sessionId"]
    st.session_state.results = None
    st.session_state.view = "results"
    st.rerun()


def render_failure(message: str):
    """Localized failure view with fallback suggestions."""
    st.header(t("error"))
    st.error(message)
    st.subheader(t("alternativeOptions"))
    st.write(t("alternativeOptionsIntro"))
    st.markdown(_bullets([t(key) for key in FALLBACK_SUGGESTION_KEYS]))
    st.caption(t("configurationNote"))


def render_results():
    """Render recommendations for the submitted preferences."""
    results: Optional[dict] = st.session_state.get("results")
    if results is None:
        session_id = st.session_state.get("submitted_session")
        if not session_id:
            results = {"error": t("noPreferences")}
        else:
            with st.spinner(f"{t('loading')} - {t('loadingSubtext')}"):
                results = fetch_recommendations(session_id)
        st.session_state.results = results

    if "error" in results:
        render_failure(results["error"])
    elif not results.get("recommendations"):
        st.header(t("noResults"))
        st.warning(t("tryAgain"))
    else:
        recommendations = results["recommendations"]
        st.title(t("dreamHomeMatches"))
        st.write(t("matchesFound", count=len(recommendations)))

        st.subheader(t("searchSummary"))
        st.info(results.get("searchSummary", ""))

        st.subheader(t("recommendedProperties"))
        for prop in recommendations:
            with st.container(border=True):
                if prop.get("imageUrl"):
                    st.image(prop["imageUrl"])
                st.markdown(format_recommendation(prop))
                st.button(t("contactAgent"), key=f"contact-{prop.get('id')}")

        if results.get("nextSteps"):
            st.subheader(t("nextSteps"))
            st.markdown(_bullets(results["nextSteps"]))

        if results.get("additionalQuestions"):
            st.subheader(t("refineSearch"))
            st.write(t("refineSearchSubtext"))
            st.markdown(_bullets(results["additionalQuestions"]))

    label = t("editPreferences") if results and "error" not in results else t("goBack")
    if st.button(label):
        st.session_state.view = "form"
        st.session_state.step = 1
        st.rerun()


def main():
    """Main application entry point."""
    # Page configuration
    st.set_page_config(
        page_title="AI Home Finder",
        page_icon="🏠",
        layout="centered",
        initial_sidebar_state="collapsed",
    )

    # Initialize session state
    init_session_state()

    if is_rtl(st.session_state.preferences.get("language", "en")):
        st.markdown(
            "<style>.main .block-container { direction: rtl; text-align: right; }</style>",
            unsafe_allow_html=True,
        )

    if st.session_state.view == "results":
        render_results()
    else:
        render_form()


if __name__ == "__main__":
    main()
