"""Normalization options and the immutable profile built from them."""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, Union

from .errors import ConfigurationError


class CanonicalForm(Enum):
    """Unicode canonical form applied before comparison."""

    NONE = "none"
    COMPOSE = "NFC"
    DECOMPOSE = "NFD"


class CaseFold(Enum):
    """Case folding applied after the canonical form."""

    NONE = "none"
    UNICODE = "unicode"
    ASCII = "ascii"


class Normalization(Enum):
    """Symbolic normalization options a file system can be configured with.

    Options fall in two groups: canonical-form options (``NFC``, ``NFD``) and
    case-fold options (``CASE_FOLD_UNICODE``, ``CASE_FOLD_ASCII``). A valid
    option set holds at most one option from each group.
    """

    NFC = "nfc"
    NFD = "nfd"
    CASE_FOLD_UNICODE = "case_fold_unicode"
    CASE_FOLD_ASCII = "case_fold_ascii"

    @property
    def is_canonical_form(self) -> bool:
        return self in (Normalization.NFC, Normalization.NFD)

    @property
    def is_case_fold(self) -> bool:
        return not self.is_canonical_form

    @classmethod
    def parse(cls, name: str) -> "Normalization":
        """Parse an option name such as ``"nfd"`` or ``"Case-Fold-ASCII"``.

        Raises:
            ConfigurationError: If the name is not a known option
        """
        key = name.strip().lower().replace("-", "_")
        for option in cls:
            if option.value == key:
                return option
        raise ConfigurationError(
            f"Unknown normalization option: {name!r}",
            option=name,
            available=[option.value for option in cls],
        )


OptionLike = Union[Normalization, str]

_CANONICAL_FORMS = {
    Normalization.NFC: CanonicalForm.COMPOSE,
    Normalization.NFD: CanonicalForm.DECOMPOSE,
}

_CASE_FOLDS = {
    Normalization.CASE_FOLD_UNICODE: CaseFold.UNICODE,
    Normalization.CASE_FOLD_ASCII: CaseFold.ASCII,
}


@dataclass(frozen=True)
class NormalizationProfile:
    """Validated, immutable selection of one canonical form and one case fold.

    Profiles are shared by reference for the lifetime of the owning file
    system. Use :meth:`create` to build one from a set of
    :class:`Normalization` options; contradictory sets are rejected there.
    """

    canonical_form: CanonicalForm = CanonicalForm.NONE
    case_fold: CaseFold = CaseFold.NONE

    def __post_init__(self) -> None:
        if not isinstance(self.canonical_form, CanonicalForm):
            raise ConfigurationError(
                f"Invalid canonical form: {self.canonical_form!r}",
                canonical_form=self.canonical_form,
                available=[form.name for form in CanonicalForm],
            )
        if not isinstance(self.case_fold, CaseFold):
            raise ConfigurationError(
                f"Invalid case folding: {self.case_fold!r}",
                case_fold=self.case_fold,
                available=[fold.name for fold in CaseFold],
            )

    @classmethod
    def create(cls, options: Iterable[OptionLike] = ()) -> "NormalizationProfile":
        """Create a profile from a set of normalization options.

        Args:
            options: :class:`Normalization` members or their names

        Returns:
            Immutable profile

        Raises:
            ConfigurationError: If two canonical-form options or two case-fold
                options are requested, or an option name is unknown
        """
        if isinstance(options, str):
            options = [options]

        selected = {
            option if isinstance(option, Normalization) else Normalization.parse(option)
            for option in options
        }

        forms = sorted(
            (option for option in selected if option.is_canonical_form),
            key=lambda option: option.value,
        )
        if len(forms) > 1:
            raise ConfigurationError(
                "Only one canonical form may be selected",
                options=[option.value for option in forms],
            )

        folds = sorted(
            (option for option in selected if option.is_case_fold),
            key=lambda option: option.value,
        )
        if len(folds) > 1:
            raise ConfigurationError(
                "Only one case folding may be selected",
                options=[option.value for option in folds],
            )

        return cls(
            canonical_form=_CANONICAL_FORMS[forms[0]] if forms else CanonicalForm.NONE,
            case_fold=_CASE_FOLDS[folds[0]] if folds else CaseFold.NONE,
        )

    @classmethod
    def none(cls) -> "NormalizationProfile":
        """Exact, case-sensitive equivalence."""
        return cls()

    @property
    def options(self) -> FrozenSet[Normalization]:
        """The option set that :meth:`create` turns back into this profile."""
        selected = set()
        for option, form in _CANONICAL_FORMS.items():
            if form is self.canonical_form:
                selected.add(option)
        for option, fold in _CASE_FOLDS.items():
            if fold is self.case_fold:
                selected.add(option)
        return frozenset(selected)

    def __str__(self) -> str:
        names = sorted(option.value for option in self.options)
        return "+".join(names) if names else "none"
