"""Food description validation and normalization."""

import re

from nutrition_analysis.domain.errors import ValidationError

MAX_DESCRIPTION_LENGTH = 200

_HTML_TAG_PATTERN = re.compile(r"<[^>]*>")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def validate_food_description(description: str | None) -> None:
    """Reject empty, overly long, or HTML-like food descriptions."""
    if not isinstance(description, str) or not description.strip():
        raise ValidationError("Food description is required", "description")

    trimmed = description.strip()
    if len(trimmed) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Food description is too long: must be {MAX_DESCRIPTION_LENGTH} "
            "characters or less",
            "description",
        )

    if _HTML_TAG_PATTERN.search(trimmed):
        raise ValidationError(
            "Food description contains invalid characters", "description"
        )


def normalize_description(description: str) -> str:
    """Build the cache key for a description."""
    return _WHITESPACE_PATTERN.sub(" ", description.lower().strip())
