"""
Emotion taxonomy for tracks.

A track's emotion is derived from two audio features, energy (arousal) and
valence (positivity). Each axis is split into three bands and the 3x3 grid
of band pairs maps to nine labels; a track with either feature missing is
``Other``. Labels are never stored, so moving a band boundary here changes
every filter and distribution at once without touching data.
"""

from enum import Enum
from typing import Optional

from sqlalchemy import and_, case, or_
from sqlalchemy.sql.elements import ColumnElement


class EmotionLabel(str, Enum):
    FRANTIC = "Frantic"
    TENSE = "Tense"
    EUPHOTIC = "Euphotic"
    UPSET = "Upset"
    CALM = "Calm"
    CHEERFUL = "Cheerful"
    BLEAK = "Bleak"
    APATHETIC = "Apathetic"
    SERENE = "Serene"
    OTHER = "Other"


# Band boundaries: low [0, 1/3), mid [1/3, 2/3), high [2/3, 1]
LOW_UPPER = 1 / 3
MID_UPPER = 2 / 3

LOW, MID, HIGH = "low", "mid", "high"

# (energy band, valence band) -> label
EMOTION_GRID: dict[tuple[str, str], EmotionLabel] = {
    (HIGH, LOW): EmotionLabel.FRANTIC,
    (HIGH, MID): EmotionLabel.TENSE,
    (HIGH, HIGH): EmotionLabel.EUPHOTIC,
    (MID, LOW): EmotionLabel.UPSET,
    (MID, MID): EmotionLabel.CALM,
    (MID, HIGH): EmotionLabel.CHEERFUL,
    (LOW, LOW): EmotionLabel.BLEAK,
    (LOW, MID): EmotionLabel.APATHETIC,
    (LOW, HIGH): EmotionLabel.SERENE,
}


def band(value: float) -> str:
    """Return the band a normalized feature value falls into."""
    if value < LOW_UPPER:
        return LOW
    if value < MID_UPPER:
        return MID
    return HIGH


def classify(energy: Optional[float], valence: Optional[float]) -> EmotionLabel:
    """Map an (energy, valence) pair to its emotion label."""
    if energy is None or valence is None:
        return EmotionLabel.OTHER
    return EMOTION_GRID[(band(energy), band(valence))]


def parse_emotion(value: Optional[str]) -> Optional[EmotionLabel]:
    """Case-insensitive lookup; unknown values and "All" mean no label."""
    if not value:
        return None
    normalized = value.strip().lower()
    for label in EmotionLabel:
        if label.value.lower() == normalized:
            return label
    return None


def _band_condition(column, band_name: str) -> ColumnElement[bool]:
    if band_name == LOW:
        return column < LOW_UPPER
    if band_name == MID:
        return and_(column >= LOW_UPPER, column < MID_UPPER)
    return column >= MID_UPPER


def emotion_expression(energy, valence) -> ColumnElement[str]:
    """
    SQL CASE equivalent of :func:`classify` for filtering and grouping in
    the store. Built from the same grid and boundaries as the pure function.

    When grouping by this expression, select it inside a subquery first:
    the boundaries are bound parameters and some drivers number them
    differently in SELECT and GROUP BY.
    """
    whens = [(or_(energy.is_(None), valence.is_(None)), EmotionLabel.OTHER.value)]
    for (energy_band, valence_band), label in EMOTION_GRID.items():
        whens.append((
            and_(_band_condition(energy, energy_band), _band_condition(valence, valence_band)),
            label.value,
        ))
    return case(*whens, else_=EmotionLabel.OTHER.value)
