"""Tests for passwatch.strength."""

import pytest

from passwatch.strength import MAX_SUGGESTIONS, ScoreResult, score


class TestScore:
    def test_empty_password(self):
        r = score("")
        assert r.score == 0
        assert r.suggestions == ()

    def test_long_with_all_classes_is_maxed(self):
        r = score("Abc12345!@#xyz")
        assert r.score == 100
        assert r.suggestions == ()

    def test_eleven_chars_all_classes(self):
        # 8-11 chars earns 15 for length, not 30
        r = score("Abc12345!@#")
        assert r.score == 85
        assert r.suggestions == ()

    def test_short_lowercase_only(self):
        r = score("abc")
        assert r.score == 15
        assert r.suggestions == (
            "Make it longer (≥12 chars)",
            "Add uppercase letters",
            "Include numbers",
            "Add special characters",
        )

    def test_single_character_gets_length_hint(self):
        r = score("a")
        assert r.suggestions[0] == "Make it longer (≥12 chars)"

    def test_medium_length_has_no_length_hint(self):
        r = score("abcdefgh")
        assert r.score == 30
        assert "Make it longer (≥12 chars)" not in r.suggestions

    @pytest.mark.parametrize("password, expected", [
        ("ABCDEFGHIJKL", 45),
        ("123456789012", 45),
        ("!!!!!!!!!!!!", 55),
        ("aB3$", 70),
    ])
    def test_points_are_cumulative(self, password, expected):
        assert score(password).score == expected

    def test_non_ascii_counts_as_special(self):
        r = score("pässwörd")
        assert "Add special characters" not in r.suggestions

    def test_non_ascii_digit_is_not_a_number(self):
        r = score("abc٣def")  # ARABIC-INDIC DIGIT THREE
        assert "Include numbers" in r.suggestions

    @pytest.mark.parametrize("password", [
        "", "a", "A", "1", "!", "aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa",
        "Aa1!" * 20, "\U0001f512" * 3, " ",
    ])
    def test_score_is_bounded(self, password):
        assert 0 <= score(password).score <= 100

    @pytest.mark.parametrize("base, improved", [
        ("abcdefgh", "Abcdefgh"),
        ("abcdefgh", "abcdefg1"),
        ("abcdefgh", "abcdefg!"),
        ("ABCDEFGH", "aBCDEFGH"),
        ("abc", "ab!"),
        ("Abcdefghijk1", "Abcdefghij!1"),
    ])
    def test_adding_a_class_never_lowers_score(self, base, improved):
        assert len(base) == len(improved)
        assert score(improved).score >= score(base).score

    def test_deterministic(self):
        assert score("Tr0ub4dor&3") == score("Tr0ub4dor&3")

    def test_result_is_hashable(self):
        assert hash(score("a")) == hash(score("a"))
        assert len({score("abc"), score("abc"), score("")}) == 2


class TestScoreResult:
    def test_surfaced_caps_suggestions(self):
        r = ScoreResult(0, tuple(f"hint {i}" for i in range(8)))
        assert len(r.surfaced) == MAX_SUGGESTIONS
        assert r.surfaced == r.suggestions[:MAX_SUGGESTIONS]

    @pytest.mark.parametrize("value, band", [
        (0, "weak"), (39, "weak"), (40, "fair"), (79, "fair"), (80, "strong"), (100, "strong"),
    ])
    def test_band(self, value, band):
        assert ScoreResult(value).band == band
