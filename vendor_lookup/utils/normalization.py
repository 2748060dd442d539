"""Customer name normalization utilities.

This module provides the two key functions used to index and look up customer
names. Both map a raw name onto a comparison key so that variations of the same
name resolve to the same vendor.
"""

import logging
import re
import unicodedata
from typing import Optional

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r'\s+')

# Anything outside ASCII digits, ASCII lowercase and the common CJK block
_NON_CANONICAL_RE = re.compile(r'[^0-9a-z\u4e00-\u9fff]')


def _nfkc(name: Optional[str]) -> str:
    """Fold compatibility characters (full-width letters, ligatures, ...)."""
    return unicodedata.normalize('NFKC', str(name or ''))


def normalize_strict(name: Optional[str]) -> str:
    """Normalize a customer name into a strict lookup key.

    Applies the following transformations in order:
    1. Unicode NFKC normalization
    2. Remove every whitespace character
    3. Convert to lowercase

    Punctuation and symbols are preserved, so "Acme-Corp" and "Acme Corp"
    produce different strict keys.

    Args:
        name: The customer name to normalize (None is treated as empty)

    Returns:
        The strict key, possibly empty

    Examples:
        >>> normalize_strict(" ACME   Corp ")
        'acmecorp'
        >>> normalize_strict("Ａｃｍｅ-Corp")
        'acme-corp'
        >>> normalize_strict(None)
        ''
    """
    key = _WHITESPACE_RE.sub('', _nfkc(name)).lower()
    logger.debug(f"Strict key for {name!r}: {key!r}")
    return key


def normalize_canonical(name: Optional[str]) -> str:
    """Normalize a customer name into a canonical lookup key.

    Applies the following transformations in order:
    1. Unicode NFKC normalization
    2. Convert to lowercase
    3. Remove every whitespace character
    4. Strip everything that is not an ASCII digit, an ASCII lowercase letter
       or a CJK ideograph (U+4E00 to U+9FFF)

    The canonical key is coarser than the strict key: names that differ only
    by hyphens, dots, brackets or other symbols share one canonical key.

    Args:
        name: The customer name to normalize (None is treated as empty)

    Returns:
        The canonical key, possibly empty

    Examples:
        >>> normalize_canonical("Acme-Corp.")
        'acmecorp'
        >>> normalize_canonical("台灣 (股)公司")
        '台灣股公司'
        >>> normalize_canonical("---")
        ''
    """
    key = _NON_CANONICAL_RE.sub('', _WHITESPACE_RE.sub('', _nfkc(name).lower()))
    logger.debug(f"Canonical key for {name!r}: {key!r}")
    return key
