from typing import Optional

DEFAULT_CATEGORY = "General"
FALLBACK_CATEGORY = "Others"

# Checked in order, first match wins.
# "password" -> "Passport" is kept as the product has always behaved.
CATEGORY_RULES = (
    ("password", "Passport"),
    ("invoice", "Invoice"),
    ("licence", "Licence"),
    ("insurance", "Insurance"),
)


def categorize(text: str) -> str:
    """Infer a category label from extracted text."""
    lower = (text or "").lower()
    for keyword, label in CATEGORY_RULES:
        if keyword in lower:
            return label
    return FALLBACK_CATEGORY


def normalize_optional(value: Optional[str]) -> Optional[str]:
    """Blank or whitespace-only form values count as not supplied."""
    if value is None or not value.strip():
        return None
    return value.strip()


def resolve_category(requested: Optional[str], extracted_text: str = "") -> str:
    """
    Category used for a new upload.

    A category supplied by the caller always wins. Without one, non-blank
    extracted text is categorized; anything else falls back to "General".
    """
    if requested is not None:
        return requested
    if extracted_text and extracted_text.strip():
        return categorize(extracted_text)
    return DEFAULT_CATEGORY
