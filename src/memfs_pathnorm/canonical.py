"""Canonical-form step: Unicode Normalization Forms C and D."""

import unicodedata

from .profile import CanonicalForm


def apply_canonical_form(text: str, form: CanonicalForm) -> str:
    """
    Bring text into the given canonical form.

    Composition and decomposition are delegated to :mod:`unicodedata`.
    Lone surrogates and other code points that take no part in
    composition or decomposition are passed through unchanged.

    Args:
        text: Text to transform
        form: Canonical form to apply

    Returns:
        Text in NFC for ``COMPOSE``, NFD for ``DECOMPOSE``, unchanged for ``NONE``

    Examples:
        >>> apply_canonical_form("Ame\\u0301lie", CanonicalForm.COMPOSE)
        'Amélie'
        >>> apply_canonical_form("\\u212b", CanonicalForm.DECOMPOSE) == "A\\u030a"
        True
    """
    if form is CanonicalForm.NONE:
        return text

    # Most names are already in the requested form
    if unicodedata.is_normalized(form.value, text):
        return text

    return unicodedata.normalize(form.value, text)
