"""Path-name normalization and matching for a single file system profile."""

from typing import Callable, Iterable, Optional

from .canonical import apply_canonical_form
from .case_folding import get_folder
from .logging import get_logger
from .profile import CanonicalForm, CaseFold, NormalizationProfile, OptionLike

logger = get_logger(__name__)


def _check_text(text: str) -> None:
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")


class PathNormalizer:
    """Decides whether two file or directory names refer to the same entry.

    One normalizer is built per file system from its configured
    :class:`NormalizationProfile`. It is immutable and holds no other state,
    so a single instance can be shared by any number of threads.

    Two entry points are provided:

    - :meth:`normalize` returns the comparison key used for directory-entry
      maps. Stored names and looked-up names must be normalized by the same
      normalizer.
    - :meth:`compile_pattern` returns a :class:`CompiledPattern` that matches
      un-normalized candidates directly.

    For any ``a`` and ``b``, ``normalize(a) == normalize(b)`` exactly when
    ``compile_pattern(a).matches(b)``, which in turn equals
    ``compile_pattern(b).matches(a)``.
    """

    def __init__(self, profile: Optional[NormalizationProfile] = None) -> None:
        self._profile = profile if profile is not None else NormalizationProfile.none()
        self._fold: Callable[[str], str] = get_folder(self._profile.case_fold)
        logger.debug(f"Path normalizer created: {{'profile': {str(self._profile)!r}}}")

    @classmethod
    def create(cls, options: Iterable[OptionLike] = ()) -> "PathNormalizer":
        """Create a normalizer from a set of normalization options.

        Raises:
            ConfigurationError: If the options are contradictory or unknown
        """
        return cls(NormalizationProfile.create(options))

    @classmethod
    def none(cls) -> "PathNormalizer":
        """Normalizer for exact, case-sensitive names."""
        return cls(NormalizationProfile.none())

    @property
    def profile(self) -> NormalizationProfile:
        return self._profile

    def normalize(self, text: str) -> str:
        """
        Compute the comparison key for a name.

        The canonical form is applied first and the case fold second. The
        order matters: ASCII folding only reaches letters that are ASCII
        after the canonical-form step, so ``"AMÉLIE"`` folds to
        ``"ame\\u0301lie"`` under NFD but keeps its ``É`` under NFC.

        Args:
            text: Name to normalize

        Returns:
            Comparison key

        Raises:
            TypeError: If text is not a string
        """
        _check_text(text)
        return self._fold(apply_canonical_form(text, self._profile.canonical_form))

    def compile_pattern(self, text: str) -> "CompiledPattern":
        """
        Compile a matcher for the literal name ``text``.

        The text is data, never a pattern expression: no character in it has
        special meaning.

        Args:
            text: Name to match against

        Returns:
            Matcher accepting exactly the names equivalent to ``text``

        Raises:
            TypeError: If text is not a string
        """
        _check_text(text)
        return CompiledPattern(text, self._profile, self._fold)

    def equivalent(self, first: str, second: str) -> bool:
        """Return True if both names normalize to the same key."""
        return self.normalize(first) == self.normalize(second)

    def __repr__(self) -> str:
        return f"PathNormalizer(profile={str(self._profile)!r})"


class CompiledPattern:
    """Matcher bound to one literal name and one profile.

    Matching is layered over plain string comparison:

    1. Literal stage: an identical candidate always matches.
    2. Canonical-equivalence stage, enabled when the profile selects a
       canonical form: both sides are brought into that form, so composed
       and decomposed spellings become interchangeable. When disabled, they
       stay distinct regardless of case folding.
    3. Case-folding stage: full Unicode, ASCII-only or none, as selected by
       the profile.

    The pattern side is transformed once, on the first candidate that is not
    an exact literal match.
    """

    __slots__ = ("_pattern", "_profile", "_fold", "_key")

    def __init__(
        self,
        pattern: str,
        profile: NormalizationProfile,
        fold: Callable[[str], str],
    ) -> None:
        self._pattern = pattern
        self._profile = profile
        self._fold = fold
        self._key: Optional[str] = None

    @property
    def pattern(self) -> str:
        """The literal, un-normalized text this matcher was compiled from."""
        return self._pattern

    @property
    def profile(self) -> NormalizationProfile:
        return self._profile

    @property
    def canonical_equivalence(self) -> bool:
        return self._profile.canonical_form is not CanonicalForm.NONE

    @property
    def case_insensitive(self) -> bool:
        return self._profile.case_fold is not CaseFold.NONE

    def _transform(self, text: str) -> str:
        if self.canonical_equivalence:
            text = apply_canonical_form(text, self._profile.canonical_form)
        if self.case_insensitive:
            text = self._fold(text)
        return text

    def matches(self, candidate: str) -> bool:
        """Return True if candidate is equivalent to the pattern text.

        Raises:
            TypeError: If candidate is not a string
        """
        if candidate == self._pattern:
            return True
        _check_text(candidate)
        if not (self.canonical_equivalence or self.case_insensitive):
            return False

        key = self._key
        if key is None:
            # Pure derivation; a concurrent first use computes the same value
            key = self._transform(self._pattern)
            self._key = key
        return self._transform(candidate) == key

    def __repr__(self) -> str:
        return f"CompiledPattern({self._pattern!r}, profile={str(self._profile)!r})"
