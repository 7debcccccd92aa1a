"""Line-oriented parser turning a model completion into an `AnalysisResult`."""

from __future__ import annotations

import enum
import logging
import re

from fixwise.analysis.interface import AnalysisResult, Urgency

logger = logging.getLogger(__name__)

DIAGNOSIS_FALLBACK_LENGTH = 200
DIAGNOSIS_FALLBACK = "Unable to determine diagnosis"
ESTIMATED_COST_FALLBACK = "Contact contractor for estimate"
CONTRACTOR_TYPE_FALLBACK = "General contractor"
NEXT_STEPS_FALLBACK = "Contact a professional for assessment"


class Section(enum.Enum):
    NONE = ""
    DIAGNOSIS = "DIAGNOSIS:"
    URGENCY = "URGENCY:"
    ESTIMATED_COST = "ESTIMATED COST:"
    CONTRACTOR_TYPE = "CONTRACTOR TYPE:"
    NEXT_STEPS = "NEXT STEPS:"


# Checked in this order, first match wins.
_MARKERS: tuple[Section, ...] = (
    Section.DIAGNOSIS,
    Section.URGENCY,
    Section.ESTIMATED_COST,
    Section.CONTRACTOR_TYPE,
    Section.NEXT_STEPS,
)

_PREFIX_PATTERNS: dict[Section, re.Pattern[str]] = {
    section: re.compile(r".*?" + re.escape(section.value) + r"\s*", re.IGNORECASE)
    for section in _MARKERS
}

# Sections whose value accumulates continuation lines.
_TEXT_SECTIONS = frozenset(
    {
        Section.DIAGNOSIS,
        Section.ESTIMATED_COST,
        Section.CONTRACTOR_TYPE,
        Section.NEXT_STEPS,
    }
)


def _match_marker(line: str) -> Section:
    upper = line.upper()
    for section in _MARKERS:
        if section.value in upper:
            return section
    return Section.NONE


def _strip_marker(line: str, section: Section) -> str:
    return _PREFIX_PATTERNS[section].sub("", line, count=1).strip()


def classify_urgency(text: str) -> Urgency:
    """`high` beats `low`; anything else, including "medium", is medium."""
    lowered = text.lower()
    if "high" in lowered:
        return Urgency.HIGH
    if "low" in lowered:
        return Urgency.LOW
    return Urgency.MEDIUM


def extract(raw_text: str) -> AnalysisResult:
    """
    Parse a completion with `DIAGNOSIS:` / `URGENCY:` / `ESTIMATED COST:` /
    `CONTRACTOR TYPE:` / `NEXT STEPS:` labels into an `AnalysisResult`.

    Never raises. Lines after a marker are appended to that marker's field,
    lines before the first marker are ignored, and every field missing from
    the completion is filled with a fixed fallback value.
    """
    values: dict[Section, str] = {section: "" for section in _TEXT_SECTIONS}
    urgency = Urgency.MEDIUM
    current = Section.NONE

    lines = [line for line in raw_text.split("\n") if line.strip()]

    for line in lines:
        marker = _match_marker(line)

        if marker is Section.URGENCY:
            current = marker
            urgency = classify_urgency(_strip_marker(line, marker))
        elif marker is not Section.NONE:
            current = marker
            values[marker] = _strip_marker(line, marker)
        elif current in _TEXT_SECTIONS:
            values[current] += " " + line.strip()

    diagnosis = values[Section.DIAGNOSIS].strip()
    if not diagnosis:
        logger.debug("No diagnosis section found, using raw text")
        diagnosis = raw_text[:DIAGNOSIS_FALLBACK_LENGTH].strip() or DIAGNOSIS_FALLBACK

    return AnalysisResult(
        diagnosis=diagnosis,
        urgency=urgency,
        estimated_cost=values[Section.ESTIMATED_COST].strip()
        or ESTIMATED_COST_FALLBACK,
        contractor_type=values[Section.CONTRACTOR_TYPE].strip()
        or CONTRACTOR_TYPE_FALLBACK,
        next_steps=values[Section.NEXT_STEPS].strip() or NEXT_STEPS_FALLBACK,
    )
