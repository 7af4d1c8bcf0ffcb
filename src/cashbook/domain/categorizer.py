"""Category vocabulary and note-based category suggestions."""

from typing import Optional, Sequence

from cashbook.domain.entities import CategorySuggestion

FALLBACK_CATEGORY = "other"

DEFAULT_CATEGORIES = (
    "salary",
    "reimbursement",
    "hardware",
    "commission",
    "brokerage",
    "installation",
    "office-expense",
    "tax",
    "holiday-expense",
    "finance",
    "loan-interest",
    "social-insurance",
    "exhibition",
    "loan-agency-fee",
    "furnishing-fee",
    "bookkeeping",
    "network",
    FALLBACK_CATEGORY,
)

MIN_NOTE_LENGTH = 2


def suggest_categories(
    note: Optional[str], categories: Sequence[str] = DEFAULT_CATEGORIES
) -> CategorySuggestion:
    """Suggest categories whose label appears in a note.

    Matching is a case-insensitive substring test of each label against the
    note. Notes shorter than two characters are not matched at all.

    Args:
        note: Free-text note
        categories: Vocabulary to match against, in display order

    Returns:
        CategorySuggestion with every matching label in vocabulary order;
        ``selected`` is set when exactly one label matched
    """
    if note is None or len(note.strip()) < MIN_NOTE_LENGTH:
        return CategorySuggestion()

    lowered = note.lower()
    return CategorySuggestion(
        matches=tuple(category for category in categories if category.lower() in lowered)
    )
