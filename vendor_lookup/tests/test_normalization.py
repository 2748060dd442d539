"""Tests for customer name normalization utilities."""
import pytest
from ..utils.normalization import normalize_canonical, normalize_strict

SAMPLES = [
    '',
    'Acme Corp',
    ' ACME   Corp ',
    'acme-corp',
    'Ａｃｍｅ　Ｃｏｒｐ',  # full-width letters and ideographic space
    'Globex Inc.',
    '台灣 (股)公司',
    'ﬁne ﬂowers',  # ligatures
    'Café № 5',
    '---',
    'Tab\tand\nnewline',
]


def test_normalize_strict():
    """Test strict keys ignore case, whitespace and compatibility forms."""
    assert normalize_strict('Acme Corp') == 'acmecorp'
    assert normalize_strict(' ACME   Corp ') == 'acmecorp'
    assert normalize_strict('Ａｃｍｅ　Ｃｏｒｐ') == 'acmecorp'
    assert normalize_strict('Tab\tand\nnewline') == 'tabandnewline'

    # Punctuation is kept
    assert normalize_strict('acme-corp') == 'acme-corp'
    assert normalize_strict('Globex Inc.') == 'globexinc.'


def test_normalize_canonical():
    """Test canonical keys also drop punctuation and symbols."""
    assert normalize_canonical('acme-corp') == 'acmecorp'
    assert normalize_canonical('Globex Inc.') == 'globexinc'
    assert normalize_canonical('台灣 (股)公司') == '台灣股公司'
    assert normalize_canonical('ﬁne ﬂowers') == 'fineflowers'
    assert normalize_canonical('Café № 5') == 'cafno5'
    assert normalize_canonical('---') == ''


def test_none_is_empty():
    assert normalize_strict(None) == ''
    assert normalize_canonical(None) == ''


@pytest.mark.parametrize('name', SAMPLES)
def test_idempotent(name):
    strict = normalize_strict(name)
    canonical = normalize_canonical(name)
    assert normalize_strict(strict) == strict
    assert normalize_canonical(canonical) == canonical


def test_canonical_is_coarser_than_strict():
    """Names equal under strict normalization are equal under canonical."""
    for left in SAMPLES:
        for right in SAMPLES:
            if normalize_strict(left) == normalize_strict(right):
                assert normalize_canonical(left) == normalize_canonical(right)

    assert normalize_strict('Acme Corp') != normalize_strict('acme-corp')
    assert normalize_canonical('Acme Corp') == normalize_canonical('acme-corp')
