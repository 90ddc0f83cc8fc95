"""Tests for PathNormalizer.normalize."""

import itertools

import pytest
from memfs_pathnorm import (
    CanonicalForm,
    CaseFold,
    ConfigurationError,
    NormalizationProfile,
    PathNormalizer,
)
from memfs_pathnorm.profile import Normalization as N


CASE_FOLD_ROWS = [
    ("foo", "fOo", "foO", "Foo", "FOO"),
    ("eﬃcient", "efficient", "eﬃcient", "Eﬃcient", "EFFICIENT"),
    ("ﬂour", "flour", "ﬂour", "Flour", "FLOUR"),
    ("poſt", "post", "poſt", "Poſt", "POST"),
    ("poﬅ", "post", "poﬅ", "Poﬅ", "POST"),
    ("ﬅop", "stop", "ﬅop", "Stop", "STOP"),
    ("tschüß", "tschüss", "tschüß", "Tschüß", "TSCHÜSS"),
    ("weiß", "weiss", "weiß", "Weiß", "WEISS"),
    ("WEIẞ", "weiss", "weiß", "Weiß", "WEIẞ"),
    ("στιγμας", "στιγμασ", "στιγμας", "Στιγμας", "ΣΤΙΓΜΑΣ"),
    ("ᾲ στο διάολο", "ὰι στο διάολο", "ᾲ στο διάολο", "Ὰͅ Στο Διάολο", "ᾺΙ ΣΤΟ ΔΙΆΟΛΟ"),
    ("Henry Ⅷ", "henry ⅷ", "henry ⅷ", "Henry Ⅷ", "HENRY Ⅷ"),
    ("I Work At Ⓚ", "i work at ⓚ", "i work at ⓚ", "I Work At Ⓚ", "I WORK AT Ⓚ"),
    ("ʀᴀʀᴇ", "ʀᴀʀᴇ", "ʀᴀʀᴇ", "Ʀᴀʀᴇ", "ƦᴀƦᴇ"),
    ("Ὰͅ", "ὰι", "ᾲ", "Ὰͅ", "ᾺΙ"),
]

# Two single-code-point forms of \u00c5, and a composed and a decomposed Am\u00e9lie
CANONICAL_ROWS = [
    ("\u00c5", "\u212b"),
    ("Am\u00e9lie", "Ame\u0301lie"),
]

CANONICAL_CASE_FOLD_ROWS = [
    ("\u00c5", "\u00e5", "\u212b"),
    ("Am\u00e9lie", "Am\u00c9lie", "Ame\u0301lie", "AME\u0301LIE"),
]

# Equal under NFD + ASCII folding, unequal under NFC + ASCII folding
ASCII_AFTER_CANONICAL_ROWS = [
    ("\u00e5", "\u212b"),
    ("Am\u00e9lie", "AME\u0301LIE"),
]


def assert_all_equal(normalizer, rows):
    for row in rows:
        for first, second in itertools.combinations_with_replacement(row, 2):
            assert normalizer.normalize(first) == normalizer.normalize(second), (first, second)


def assert_all_unequal(normalizer, rows):
    for row in rows:
        for first, second in itertools.combinations(row, 2):
            assert normalizer.normalize(first) != normalizer.normalize(second), (first, second)


class TestNoneProfile:
    """Tests for exact, case-sensitive normalization."""

    def test_identical_names_are_equal(self):
        """Test that a name is equivalent to itself."""
        normalizer = PathNormalizer.none()
        assert normalizer.normalize("foo") == normalizer.normalize("foo")

    def test_case_is_significant(self):
        """Test that names differing in case are distinct."""
        normalizer = PathNormalizer.none()
        assert normalizer.normalize("Foo") != normalizer.normalize("foo")

    def test_canonical_forms_are_distinct(self):
        """Test that canonically equivalent spellings are distinct."""
        normalizer = PathNormalizer.none()
        assert_all_unequal(normalizer, CANONICAL_ROWS)

    def test_key_is_input(self):
        """Test that the key is the name itself."""
        normalizer = PathNormalizer.none()
        assert normalizer.normalize("Am\u00e9lie") == "Am\u00e9lie"

    def test_default_constructor_uses_none_profile(self):
        """Test that a normalizer without a profile is exact."""
        assert PathNormalizer().profile == NormalizationProfile.none()


class TestUnicodeCaseFold:
    """Tests for full Unicode case folding."""

    def test_case_variant_rows_are_equal(self):
        """Test that every spelling in a row normalizes to the same key."""
        normalizer = PathNormalizer.create([N.CASE_FOLD_UNICODE])
        assert_all_equal(normalizer, CASE_FOLD_ROWS)

    def test_sharp_s_expands(self):
        """Test that ß and ẞ fold to ss."""
        normalizer = PathNormalizer.create([N.CASE_FOLD_UNICODE])
        assert normalizer.normalize("Weiß") == "weiss"
        assert normalizer.normalize("WEIẞ") == "weiss"

    def test_final_sigma_folds_like_sigma(self):
        """Test that the final-position sigma folds with the other sigmas."""
        normalizer = PathNormalizer.create([N.CASE_FOLD_UNICODE])
        assert normalizer.normalize("ς") == normalizer.normalize("Σ") == "σ"

    def test_distinct_words_stay_distinct(self):
        """Test that folding does not merge different words."""
        normalizer = PathNormalizer.create([N.CASE_FOLD_UNICODE])
        assert normalizer.normalize("foo") != normalizer.normalize("bar")

    def test_composed_and_decomposed_stay_distinct(self):
        """Test that folding alone does not apply canonical equivalence."""
        normalizer = PathNormalizer.create([N.CASE_FOLD_UNICODE])
        assert normalizer.normalize("Am\u00e9lie") != normalizer.normalize("Ame\u0301lie")


class TestAsciiCaseFold:
    """Tests for ASCII-only case folding."""

    def test_ascii_variants_are_equal(self):
        """Test that ASCII case variants normalize to the same key."""
        normalizer = PathNormalizer.create([N.CASE_FOLD_ASCII])
        assert_all_equal(normalizer, [("foo", "FOO", "fOo", "Foo")])

    def test_non_ascii_folds_are_not_applied(self):
        """Test that ß is not expanded under ASCII folding."""
        normalizer = PathNormalizer.create([N.CASE_FOLD_ASCII])
        assert normalizer.normalize("weiß") != normalizer.normalize("weiss")

    def test_non_ascii_letters_keep_case(self):
        """Test that only A-Z are folded."""
        normalizer = PathNormalizer.create([N.CASE_FOLD_ASCII])
        assert normalizer.normalize("\u00c9COLE") == "\u00c9cole"
        assert normalizer.normalize("ΣΟΣ") == "ΣΟΣ"


class TestCanonicalForms:
    """Tests for NFC and NFD normalization."""

    @pytest.mark.parametrize("option", [N.NFC, N.NFD])
    def test_canonical_rows_are_equal(self, option):
        """Test that canonically equivalent spellings normalize equal."""
        normalizer = PathNormalizer.create([option])
        assert_all_equal(normalizer, CANONICAL_ROWS)

    @pytest.mark.parametrize("option", [N.NFC, N.NFD])
    def test_case_is_still_significant(self, option):
        """Test that canonical forms do not fold case."""
        normalizer = PathNormalizer.create([option])
        assert normalizer.normalize("Am\u00e9lie") != normalizer.normalize("AM\u00c9LIE")

    def test_nfc_key_is_composed(self):
        """Test that NFC produces the composed form."""
        normalizer = PathNormalizer.create([N.NFC])
        assert normalizer.normalize("Ame\u0301lie") == "Am\u00e9lie"
        assert normalizer.normalize("\u212b") == "\u00c5"

    def test_nfd_key_is_decomposed(self):
        """Test that NFD produces the decomposed form."""
        normalizer = PathNormalizer.create([N.NFD])
        assert normalizer.normalize("Am\u00e9lie") == "Ame\u0301lie"
        assert normalizer.normalize("\u212b") == "A\u030a"


class TestCanonicalFormWithCaseFold:
    """Tests for canonical forms combined with case folding."""

    @pytest.mark.parametrize("option", [N.NFC, N.NFD])
    def test_unicode_fold_rows_are_equal(self, option):
        """Test that all spellings normalize equal with Unicode folding."""
        normalizer = PathNormalizer.create([option, N.CASE_FOLD_UNICODE])
        assert_all_equal(normalizer, CANONICAL_CASE_FOLD_ROWS)

    def test_nfc_with_ascii_fold_keeps_accented_case(self):
        """Test that composed accented letters are exempt from ASCII folding."""
        normalizer = PathNormalizer.create([N.NFC, N.CASE_FOLD_ASCII])
        assert_all_unequal(normalizer, ASCII_AFTER_CANONICAL_ROWS)

    def test_nfd_with_ascii_fold_folds_base_letters(self):
        """Test that decomposition exposes the ASCII base letter to folding."""
        normalizer = PathNormalizer.create([N.NFD, N.CASE_FOLD_ASCII])
        assert_all_equal(normalizer, ASCII_AFTER_CANONICAL_ROWS)

    def test_nfd_with_ascii_fold_equates_composed_case_variants(self):
        """Test that composed Am\u00e9lie and composed AM\u00c9LIE are equal under NFD."""
        nfd = PathNormalizer.create([N.NFD, N.CASE_FOLD_ASCII])
        nfc = PathNormalizer.create([N.NFC, N.CASE_FOLD_ASCII])
        assert nfd.normalize("Am\u00e9lie") == nfd.normalize("AM\u00c9LIE")
        assert nfc.normalize("Am\u00e9lie") != nfc.normalize("AM\u00c9LIE")

    def test_nfd_with_ascii_fold_key(self):
        """Test the key produced by decomposing then folding."""
        normalizer = PathNormalizer.create([N.NFD, N.CASE_FOLD_ASCII])
        assert normalizer.normalize("AM\u00c9LIE") == "ame\u0301lie"


class TestTotality:
    """Tests that normalize accepts any string."""

    @pytest.mark.parametrize("options", [
        [],
        [N.NFC],
        [N.NFD],
        [N.CASE_FOLD_UNICODE],
        [N.CASE_FOLD_ASCII],
        [N.NFC, N.CASE_FOLD_UNICODE],
        [N.NFD, N.CASE_FOLD_ASCII],
    ])
    def test_lone_surrogates_pass_through(self, options):
        """Test that lone surrogates are left unchanged."""
        normalizer = PathNormalizer.create(options)
        assert normalizer.normalize("a\ud800b") == "a\ud800b"
        assert normalizer.normalize("X\udfff").endswith("\udfff")

    def test_empty_name(self):
        """Test that the empty string normalizes to itself."""
        normalizer = PathNormalizer.create([N.NFD, N.CASE_FOLD_UNICODE])
        assert normalizer.normalize("") == ""

    def test_non_string_rejected(self):
        """Test that non-string input is a type error."""
        with pytest.raises(TypeError):
            PathNormalizer.none().normalize(b"foo")


class TestPathNormalizerConstruction:
    """Tests for normalizer construction."""

    def test_create_from_option_names(self):
        """Test that option names are accepted."""
        normalizer = PathNormalizer.create(["nfd", "case-fold-unicode"])
        assert normalizer.profile.canonical_form is CanonicalForm.DECOMPOSE
        assert normalizer.profile.case_fold is CaseFold.UNICODE

    def test_create_rejects_conflicts(self):
        """Test that contradictory options construct no normalizer."""
        with pytest.raises(ConfigurationError):
            PathNormalizer.create([N.NFC, N.NFD])

    def test_equivalent(self):
        """Test the key-equality helper."""
        normalizer = PathNormalizer.create([N.CASE_FOLD_ASCII])
        assert normalizer.equivalent("README", "readme")
        assert not normalizer.equivalent("README", "readme.txt")

    def test_repr_names_profile(self):
        """Test that repr shows the profile."""
        normalizer = PathNormalizer.create([N.NFC, N.CASE_FOLD_ASCII])
        assert repr(normalizer) == "PathNormalizer(profile='case_fold_ascii+nfc')"
