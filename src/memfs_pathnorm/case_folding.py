"""Case-fold step: full Unicode and ASCII-only folding tables.

Both foldings are table driven. The full Unicode fold is ``str.casefold``,
which applies the common and full mappings of the Unicode ``CaseFolding.txt``
data compiled into the interpreter's character database, so multi-character
folds such as ``ß -> ss`` or ``ﬃ -> ffi`` are included. The ASCII fold is a
26-entry translation table; every code point outside ``A``-``Z`` keeps its
case.
"""

import string
from typing import Callable, Dict

from .profile import CaseFold

ASCII_FOLD_TABLE: Dict[int, int] = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def fold_ascii(text: str) -> str:
    """Fold the ASCII letters ``A``-``Z``, leaving everything else as-is."""
    return text.translate(ASCII_FOLD_TABLE)


def fold_unicode(text: str) -> str:
    """Apply full default Unicode case folding."""
    return text.casefold()


def _no_fold(text: str) -> str:
    return text


_FOLDERS: Dict[CaseFold, Callable[[str], str]] = {
    CaseFold.NONE: _no_fold,
    CaseFold.UNICODE: fold_unicode,
    CaseFold.ASCII: fold_ascii,
}


def get_folder(case_fold: CaseFold) -> Callable[[str], str]:
    """Return the folding function for a case-fold selection."""
    return _FOLDERS[case_fold]


def apply_case_fold(text: str, case_fold: CaseFold) -> str:
    """
    Fold text according to the case-fold selection.

    Args:
        text: Text to fold, already in the profile's canonical form
        case_fold: Folding to apply

    Returns:
        Folded text

    Examples:
        >>> apply_case_fold("WEIẞ", CaseFold.UNICODE)
        'weiss'
        >>> apply_case_fold("WEIẞ", CaseFold.ASCII)
        'weiẞ'
    """
    return _FOLDERS[case_fold](text)
