"""Tests for WCAG contrast validation."""

import itertools

import pytest

from resume_designer.domain.contrast import (
    contrast_ratio,
    extract_hex_colors,
    hex_to_rgb,
    meets_aa,
    meets_aaa,
    normalize_hex,
    relative_luminance,
    safe_alternative_color,
    validate_resume_contrast,
)

COLORS = ["#000000", "#ffffff", "#1a1a1a", "#333333", "#cccccc", "#1d4ed8", "#fbbf24", "#7c3aed", "#abc"]


class TestHexParsing:
    def test_parses_six_digit_hex(self):
        assert hex_to_rgb("#1d4ed8") == (29, 78, 216)

    def test_expands_shorthand(self):
        assert normalize_hex("#ABC") == "#aabbcc"
        assert hex_to_rgb("#fff") == (255, 255, 255)

    @pytest.mark.parametrize("bad", ["", "#12", "#12345", "#gggggg", "red", None, "#1234567"])
    def test_malformed_returns_none(self, bad):
        assert hex_to_rgb(bad) is None


class TestContrastRatio:
    def test_black_on_white_is_21(self):
        assert contrast_ratio("#000000", "#ffffff") == pytest.approx(21.0)

    @pytest.mark.parametrize("a,b", list(itertools.combinations(COLORS, 2)))
    def test_symmetric(self, a, b):
        assert contrast_ratio(a, b) == contrast_ratio(b, a)

    @pytest.mark.parametrize("color", COLORS)
    def test_same_color_is_one(self, color):
        assert contrast_ratio(color, color) == 1.0

    def test_invalid_color_raises(self):
        with pytest.raises(ValueError):
            contrast_ratio("not-a-color", "#ffffff")

    def test_luminance_bounds(self):
        assert relative_luminance(0, 0, 0) == 0.0
        assert relative_luminance(255, 255, 255) == pytest.approx(1.0)


class TestThresholds:
    def test_near_black_meets_aa(self):
        assert meets_aa("#1a1a1a", "#ffffff") is True

    def test_light_gray_fails_aa(self):
        assert meets_aa("#cccccc", "#ffffff") is False

    def test_large_text_threshold_is_lower(self):
        assert meets_aa("#949494", "#ffffff", is_large_text=True) is True
        assert meets_aa("#949494", "#ffffff") is False

    def test_aaa(self):
        assert meets_aaa("#333333", "#ffffff") is True
        assert meets_aaa("#666666", "#ffffff") is False


class TestExtractHexColors:
    def test_distinct_in_first_seen_order(self):
        html = "<p style='color:#333333'>a</p><h2 style='color:#1D4ED8'>b</h2><p style='color:#333333'>c</p>"
        assert extract_hex_colors(html) == ["#333333", "#1D4ED8"]

    def test_ignores_numeric_entities(self):
        assert extract_hex_colors("&#169; 2024 <b style='color:#fff'>x</b>") == ["#fff"]

    def test_ignores_longer_hex_runs(self):
        assert extract_hex_colors("color: #11223344;") == []


class TestValidateResumeContrast:
    def test_dark_colors_pass(self):
        report = validate_resume_contrast("<style>body{color:#1a1a1a} h2{color:#1d4ed8}</style>")
        assert report.passed is True
        assert report.summary["total_checks"] == 4
        assert report.summary["passed_aa"] == 4
        assert report.summary["failed_aa"] == 0

    def test_white_is_skipped(self):
        report = validate_resume_contrast("<style>body{background:#ffffff;color:#fff}</style>")
        assert report.summary["total_checks"] == 0
        assert report.passed is True

    def test_light_color_fails(self):
        report = validate_resume_contrast("<style>.muted{color:#cccccc}</style>")
        assert report.passed is False
        assert report.summary["failed_aa"] == 2

    def test_empty_document(self):
        report = validate_resume_contrast("")
        assert report.passed is True
        assert report.checks == []


class TestSafeAlternative:
    def test_returns_aa_color(self):
        alternative = safe_alternative_color("#fbbf24")
        assert meets_aa(alternative, "#ffffff")

    def test_skips_the_failed_color_itself(self):
        assert safe_alternative_color("#1e40af") != "#1e40af"
