"""Cheap fingerprint of a results page for spotting repeated pages.

The remote directory keeps serving its last page once the index runs past
the end, so adjacent pages with the same first name, last name and count
are treated as the same page. Shuffled duplicates are not detected.
"""

from typing import Optional, Sequence


def page_signature(names: Sequence[str]) -> Optional[str]:
    """Return ``first|last|count`` for a page's names, or None if empty."""
    if not names:
        return None
    return f"{names[0]}|{names[-1]}|{len(names)}"
