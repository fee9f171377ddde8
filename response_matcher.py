"""
Best-effort linking of the model's free-text answer to local curated data.

The model is asked to answer under a "**Condition:**" heading; whatever follows
it on that line is matched loosely against known condition names. Nothing here
raises on unparseable text: no match just means no recommendations.
"""

import re
from typing import Iterable, List, Optional

from data_store import LocalDataStore
from pydantic_models import Condition, Recommendation, Resource, StructuredData

CONDITION_RE = re.compile(r"\*\*Condition:\*\* (.+?)\n", re.IGNORECASE)

FALLBACK_RESOURCE_TYPES = ("general_clinic", "telehealth")


def extract_condition_name(ai_text: str) -> Optional[str]:
    m = CONDITION_RE.search(ai_text or "")
    if not m:
        return None
    name = m.group(1).strip()
    return name or None


def match_condition(suggested: str, conditions: Iterable[Condition]) -> Optional[Condition]:
    """First condition whose name contains, or is contained in, the suggestion (case-insensitive)."""
    s = suggested.lower()
    for cond in conditions:
        c = cond.name.lower()
        if c in s or s in c:
            return cond
    return None


def recommendations_for(condition: Condition, recommendations: Iterable[Recommendation]) -> List[Recommendation]:
    return [rec for rec in recommendations if rec.condition_id == condition.id]


def fallback_resources(resources: Iterable[Resource]) -> List[Resource]:
    return [r for r in resources if r.type in FALLBACK_RESOURCE_TYPES]


def build_structured_data(ai_text: str, store: LocalDataStore) -> StructuredData:
    recommendations: List[Recommendation] = []
    suggested = extract_condition_name(ai_text)
    if suggested:
        cond = match_condition(suggested, store.conditions)
        if cond is not None:
            recommendations = recommendations_for(cond, store.recommendations)
    return StructuredData(
        recommendations=recommendations,
        resources=fallback_resources(store.resources),
    )
