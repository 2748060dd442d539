"""Detect whether freshly fetched source text differs from the loaded data."""
import hashlib
import logging
from typing import NamedTuple, Optional

logger = logging.getLogger(__name__)


class ChangeResult(NamedTuple):
    changed: bool
    fingerprint: str


def fingerprint(text: str) -> str:
    """Calculate SHA256 hash of the text contents."""
    return hashlib.sha256(text.encode('utf-8')).hexdigest()


def detect_change(previous: Optional[str], text: str) -> ChangeResult:
    """Check if text has changed since the fingerprint was stored.

    Any byte-level difference counts as a change, including whitespace edits
    and reordered rows.

    Args:
        previous: Fingerprint of the currently loaded text, None if nothing is loaded
        text: Newly fetched text

    Returns:
        ChangeResult with the new fingerprint
    """
    current = fingerprint(text)
    changed = current != previous
    logger.debug(f"Fingerprint {current[:12]} vs {(previous or 'none')[:12]}: changed={changed}")
    return ChangeResult(changed=changed, fingerprint=current)
