"""Display formatting for athlete measurements.

Profile measurements are stored the way the athlete typed them ("6'2\"",
"185 cm", "42 in") or as plain numbers. The formatters here turn a stored
value into the string shown on profile and feed cards:

- absent or blank values become the placeholder dash
- values already labelled in metric are shown untouched
- imperial or unlabelled numbers get the metric equivalent in parentheses
- text without any number is shown as typed

None of the formatters raise, whatever they are given.
"""

import math
import re

from lockerlink.config import (
    CM_PER_FOOT,
    CM_PER_INCH,
    KG_PER_POUND,
    PLACEHOLDER,
    WHOLE_KG_THRESHOLD,
)

NUMBER_PATTERN = re.compile(r"\d+\.?\d*")

METRIC = "metric"
IMPERIAL = "imperial"
UNMARKED = "unmarked"

# Substring markers per measurement domain, checked against lower-cased text
UNIT_MARKERS = {
    "height": {
        METRIC: ("cm",),
        IMPERIAL: ("ft", "in", "feet", "inch", "'", '"'),
    },
    "vertical": {
        METRIC: ("cm",),
        IMPERIAL: ('"', "in", "inch"),
    },
    "weight": {
        METRIC: ("kg",),
        IMPERIAL: ("lb", "lbs", "pound", "pounds"),
    },
}
FEET_MARKERS = ("'", "ft", "feet")


# --- Unit parser ---

def parse_numbers(text: str) -> list:
    """Return every unsigned number in text, in order of appearance."""
    return [float(token) for token in NUMBER_PATTERN.findall(text)]


def number_at(numbers: list, index: int) -> float:
    """Indexed access into parsed numbers; NaN when there is no such number."""
    if index < len(numbers):
        return numbers[index]
    return math.nan


def _usable(value: float) -> bool:
    return math.isfinite(value)


# --- Unit classifier ---

def has_marker(text: str, markers) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in markers)


def classify_unit(text: str, domain: str) -> str:
    """Tell whether text is already metric, explicitly imperial, or unmarked."""
    markers = UNIT_MARKERS[domain]
    if has_marker(text, markers[METRIC]):
        return METRIC
    if has_marker(text, markers[IMPERIAL]):
        return IMPERIAL
    return UNMARKED


# --- Unit converter ---

def round_half_up(value: float, places: int = 0) -> float:
    factor = 10 ** places
    scaled = value * factor + 0.5
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled) / factor


def feet_inches_to_cm(feet: float, inches: float = 0.0) -> float:
    return round_half_up(feet * CM_PER_FOOT + inches * CM_PER_INCH)


def inches_to_cm(inches: float) -> float:
    return round_half_up(inches * CM_PER_INCH)


def pounds_to_kg(pounds: float) -> float:
    """Whole kilograms from 100 kg up, one decimal place below that."""
    kg = pounds * KG_PER_POUND
    if kg >= WHOLE_KG_THRESHOLD:
        return round_half_up(kg)
    return round_half_up(kg, 1)


def format_number(value: float) -> str:
    """Render a number without a trailing '.0'."""
    if not math.isfinite(value):
        return str(value)
    if value == int(value):
        return str(int(value))
    return str(value)


# --- Formatters ---

def _display_text(raw):
    """Stored value as trimmed text, or None when there is nothing to show."""
    if raw is None:
        return None
    if isinstance(raw, float) and math.isfinite(raw) and raw == int(raw):
        raw = int(raw)
    text = str(raw).strip()
    return text or None


def _format_length(raw, domain: str) -> str:
    text = _display_text(raw)
    if text is None:
        return PLACEHOLDER

    hint = classify_unit(text, domain)
    if hint == METRIC:
        return text

    numbers = parse_numbers(text)
    first, second = number_at(numbers, 0), number_at(numbers, 1)
    if not _usable(first):
        return text

    if _usable(second):
        cm = feet_inches_to_cm(first, second)
    elif hint == IMPERIAL and has_marker(text, FEET_MARKERS):
        cm = feet_inches_to_cm(first)
    else:
        cm = inches_to_cm(first)
    # Conversion can overflow for huge but finite input
    if not _usable(cm):
        return text

    if _usable(second) or hint == IMPERIAL:
        return f"{text} ({format_number(cm)} cm)"
    # A lone unlabelled number is read as inches
    return f'{format_number(first)}" ({format_number(cm)} cm)'


def format_height(raw) -> str:
    """Format a stored height.

    "6'2\"" -> "6'2\" (188 cm)", "185 cm" -> "185 cm", 74 -> "74\" (188 cm)".
    """
    return _format_length(raw, "height")


def format_touch(raw) -> str:
    """Format a block, standing or spike touch reach; same rules as height."""
    return _format_length(raw, "height")


def format_vertical(raw) -> str:
    """Format a stored vertical jump.

    "30 in" -> "30 in (76 cm)", 30 -> "30\" (76 cm)".
    """
    text = _display_text(raw)
    if text is None:
        return PLACEHOLDER

    hint = classify_unit(text, "vertical")
    if hint == METRIC:
        return text

    inches = number_at(parse_numbers(text), 0)
    if not _usable(inches):
        return text

    cm = inches_to_cm(inches)
    if not _usable(cm):
        return text
    if hint == IMPERIAL:
        return f"{text} ({format_number(cm)} cm)"
    return f'{format_number(inches)}" ({format_number(cm)} cm)'


def format_weight(raw) -> str:
    """Format a stored weight.

    "250 lbs" -> "250 lbs (113 kg)", "180" -> "180 lbs (81.6 kg)".
    """
    text = _display_text(raw)
    if text is None:
        return PLACEHOLDER

    hint = classify_unit(text, "weight")
    if hint == METRIC:
        return text

    pounds = number_at(parse_numbers(text), 0)
    if not _usable(pounds):
        return text

    kg = pounds_to_kg(pounds)
    if not _usable(kg):
        return text
    kg = format_number(kg)
    if hint == IMPERIAL:
        return f"{text} ({kg} kg)"
    return f"{format_number(pounds)} lbs ({kg} kg)"
