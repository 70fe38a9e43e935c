"""Deterministic regex extraction used when no model answer is available."""

import re

from classify_api.core.models import ClassificationResult

ZIP_PATTERN = re.compile(r"\b\d{5}\b", re.ASCII)


def _label_pattern(label: str) -> "re.Pattern[str]":
    return re.compile(rf"{label}:\s*(\w+)", re.IGNORECASE | re.ASCII)


LABEL_PATTERNS = {
    "brand": _label_pattern("brand"),
    "category": _label_pattern("category"),
    "time_pref": _label_pattern("time_pref"),
}


def fallback_extract(text: str) -> ClassificationResult:
    """
    Scans the text for a 5-digit zip and 'label: value' pairs.

    Each field takes the first match of its own pattern, so fields are
    independent of each other and of the order they appear in.
    """
    zip_match = ZIP_PATTERN.search(text)
    fields = {"zip": zip_match.group(0) if zip_match else ""}

    for name, pattern in LABEL_PATTERNS.items():
        match = pattern.search(text)
        fields[name] = match.group(1) if match else ""

    return ClassificationResult(**fields)
