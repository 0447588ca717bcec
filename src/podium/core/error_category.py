"""Error categorization for user-facing error messages.

Categories are matched by case-insensitive substring on the error message,
checked in a fixed order (first match wins):

- scene_load: "spline", "3d", "scene"
- calculation: "calculate", "persona"
- data: "data", "invalid"
- generic: everything else

A message mentioning both "data" and "spline" is therefore a scene_load
error, since the 3D check runs first.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class ErrorCategory(str, Enum):
    """Category of a presentation-level error."""

    SCENE_LOAD = "scene_load"
    CALCULATION = "calculation"
    DATA = "data"
    GENERIC = "generic"


# Ordered: earlier entries take precedence
CATEGORY_KEYWORDS: list[tuple[ErrorCategory, tuple[str, ...]]] = [
    (ErrorCategory.SCENE_LOAD, ("spline", "3d", "scene")),
    (ErrorCategory.CALCULATION, ("calculate", "persona")),
    (ErrorCategory.DATA, ("data", "invalid")),
]

_TITLES: dict[ErrorCategory, tuple[str, str]] = {
    ErrorCategory.SCENE_LOAD: (
        "3D Scene Loading Error",
        "Unable to load the 3D visualization. The persona data is still available below.",
    ),
    ErrorCategory.CALCULATION: (
        "Persona Calculation Error",
        "Unable to calculate your persona from session data. "
        "Please try again or check your session history.",
    ),
    ErrorCategory.DATA: (
        "Data Error",
        "There was a problem with your session data. "
        "Please try refreshing or contact support.",
    ),
}

NO_ERROR_TITLE = "Something went wrong"
NO_ERROR_DESCRIPTION = "An unexpected error occurred while loading your persona."
GENERIC_TITLE = "Unexpected Error"
GENERIC_FALLBACK_DESCRIPTION = "An unexpected error occurred. Please try again."


class ErrorDescription(BaseModel):
    """User-facing description of an error."""

    category: ErrorCategory
    title: str
    description: str


def categorize_error(message: str) -> ErrorCategory:
    """Categorize an error message.

    Args:
        message: Error message text.

    Returns:
        The first matching ErrorCategory, or GENERIC.
    """
    lowered = message.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return ErrorCategory.GENERIC


def describe_error(message: str | None) -> ErrorDescription:
    """Build the title/description pair shown for an error.

    Args:
        message: Error message text, or None when no error object is available.

    Returns:
        ErrorDescription with category, title and description.
    """
    if message is None:
        return ErrorDescription(
            category=ErrorCategory.GENERIC,
            title=NO_ERROR_TITLE,
            description=NO_ERROR_DESCRIPTION,
        )

    category = categorize_error(message)
    if category is ErrorCategory.GENERIC:
        return ErrorDescription(
            category=category,
            title=GENERIC_TITLE,
            description=message or GENERIC_FALLBACK_DESCRIPTION,
        )

    title, description = _TITLES[category]
    return ErrorDescription(category=category, title=title, description=description)
