import pytest

from athletic_balance.visuals.accessibility import (
    check_brand_contrast,
    check_readability,
    contrast_ratio,
    generate_accessibility_report,
    generate_alt_text,
    validate_font_size,
)
from athletic_balance.visuals.brand import BRAND


def test_black_on_white_is_max_contrast():
    result = contrast_ratio("#000000", "#FFFFFF")
    assert result.ratio == 21.0
    assert result.level == "AAA"
    assert result.passes


@pytest.mark.parametrize(
    "a, b",
    [("#0FA958", "#F7F7F7"), ("#1A1D1E", "#B5FF3D"), ("123456", "#abcdef")],
)
def test_contrast_is_symmetric(a, b):
    assert contrast_ratio(a, b) == contrast_ratio(b, a)


def test_invalid_colors_fail_without_raising():
    result = contrast_ratio("not-a-color", "#FFFFFF")
    assert result.ratio == 0
    assert not result.passes
    assert result.level == "FAIL"


def test_brand_text_plate_passes():
    results = check_brand_contrast()
    assert results["text_on_graphite"].passes
    assert results["text_on_graphite"].level == "AAA"
    assert set(results) >= {"text_on_primary", "graphite_on_accent"}


def test_font_size_minimums():
    assert validate_font_size(BRAND.type.h1_min, is_bold=True).valid
    assert not validate_font_size(20, is_bold=True).valid
    assert validate_font_size(16).valid
    assert "Minimum recommended: 16px" in validate_font_size(12).recommendation


def test_readability_flags_long_text():
    result = check_readability("one two three four five six seven eight nine ten eleven twelve thirteen")
    assert not result.valid
    assert result.word_count == 13
    assert any("12-word" in issue for issue in result.issues)


def test_readability_handles_empty_text():
    result = check_readability("")
    assert result.word_count == 0
    assert result.valid


def test_alt_text_mentions_parts():
    alt = generate_alt_text("affirmation_card", "Trust It", "You earned this.", has_accent_bar=True)
    assert alt.startswith("Affirmation card; reading 'Trust It'")
    assert "Electric Lime accent bar" in alt
    assert alt.endswith("high-contrast text on dark message plate.")


def test_report_passes_for_brand_plate():
    report = generate_accessibility_report("process_cue", "Form First", "Speed comes later.")
    assert report.overall == "PASS"
    assert report.recommendations == []


def test_report_fails_on_low_contrast():
    report = generate_accessibility_report(
        "process_cue", "Form First", "Speed later.", background_color="#FFFFFF", text_color="#F7F7F7"
    )
    assert report.overall == "FAIL"
    assert "Increase color contrast for better readability" in report.recommendations
