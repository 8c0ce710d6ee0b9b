"""Detect progress tables sharing a table-id on one page.

Runs against the page source before it is saved, so it matches the tag
text directly instead of parsing anything.
"""

import re
from collections import Counter

from table_progress_tracking.tables.tags import TAG_CHAR, TAG_NAME

# <table-progress-tracking ... table-id="x" ...>, attribute in any position
TABLE_ID_PATTERN = re.compile(
    rf"""<{TAG_NAME}\b{TAG_CHAR}*?(?<![\w-])table-id\s*=\s*"""
    rf"""(?:"([^"]*)"|'([^']*)'|([^\s"'>]+)){TAG_CHAR}*>""",
    re.IGNORECASE,
)


def find_table_ids(page_text: str) -> list[str]:
    """All non-empty table-id values of progress table tags, in source order."""
    table_ids = []
    for match in TABLE_ID_PATTERN.finditer(page_text):
        table_id = next((value for value in match.groups() if value), None)
        if table_id:
            table_ids.append(table_id)
    return table_ids


def duplicate_table_ids(page_text: str | None) -> list[str]:
    """Table ids that occur more than once, in order of first occurrence."""
    if not page_text:
        return []
    counts = Counter(find_table_ids(page_text))
    return [table_id for table_id, count in counts.items() if count > 1]


def has_duplicate_tables(page_text: str | None) -> bool:
    """True if the page should be rejected for reusing a table-id."""
    return bool(duplicate_table_ids(page_text))
