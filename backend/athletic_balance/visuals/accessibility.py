"""WCAG contrast, font size and readability checks for generated cards."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Literal

from athletic_balance.visuals.brand import BRAND

HEX_PATTERN = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)
SENTENCE_SPLIT = re.compile(r"[.!?]+")

MAX_WORDS = 12
MAX_WORDS_PER_SENTENCE = 8
COMPLEX_WORD_LENGTH = 8
COMPLEX_WORD_SHARE = 0.3

TYPE_DESCRIPTIONS = {
    "affirmation_card": "Affirmation card",
    "confidence_boost": "Confidence boost card",
    "process_cue": "Process reminder card",
    "belonging_tile": "Community support tile",
    "autonomy_choice": "Choice empowerment card",
    "mindset_micro": "Mindset growth card",
}

ContrastLevel = Literal["AA", "AAA", "FAIL"]
OverallStatus = Literal["PASS", "WARNING", "FAIL"]


@dataclass
class ContrastResult:
    ratio: float
    passes: bool
    level: ContrastLevel


@dataclass
class FontSizeResult:
    valid: bool
    recommendation: str


@dataclass
class ReadabilityResult:
    word_count: int
    valid: bool
    issues: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)


@dataclass
class AccessibilityReport:
    overall: OverallStatus
    contrast: ContrastResult
    font_size: FontSizeResult
    readability: ReadabilityResult
    alt_text: str
    recommendations: list[str] = field(default_factory=list)


def hex_to_rgb(value: str) -> tuple[int, int, int] | None:
    match = HEX_PATTERN.match(value or "")
    if not match:
        return None
    return tuple(int(part, 16) for part in match.groups())  # type: ignore[return-value]


def relative_luminance(r: int, g: int, b: int) -> float:
    def channel(c: int) -> float:
        c = c / 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    return 0.2126 * channel(r) + 0.7152 * channel(g) + 0.0722 * channel(b)


def contrast_ratio(color1: str, color2: str) -> ContrastResult:
    rgb1 = hex_to_rgb(color1)
    rgb2 = hex_to_rgb(color2)
    if rgb1 is None or rgb2 is None:
        return ContrastResult(ratio=0, passes=False, level="FAIL")

    lum1 = relative_luminance(*rgb1)
    lum2 = relative_luminance(*rgb2)
    brightest, darkest = max(lum1, lum2), min(lum1, lum2)
    ratio = (brightest + 0.05) / (darkest + 0.05)

    if ratio >= 7:
        level: ContrastLevel = "AAA"
    elif ratio >= 4.5:
        level = "AA"
    else:
        level = "FAIL"
    return ContrastResult(
        ratio=round(ratio, 2),
        passes=ratio >= BRAND.min_contrast,
        level=level,
    )


def check_brand_contrast() -> dict[str, ContrastResult]:
    color = BRAND.color
    return {
        "text_on_graphite": contrast_ratio(color.offwhite, color.graphite),
        "text_on_primary": contrast_ratio(color.offwhite, color.primary),
        "graphite_on_offwhite": contrast_ratio(color.graphite, color.offwhite),
        "primary_on_offwhite": contrast_ratio(color.primary, color.offwhite),
        "accent_on_graphite": contrast_ratio(color.accent, color.graphite),
        "graphite_on_accent": contrast_ratio(color.graphite, color.accent),
    }


def validate_font_size(font_size: int, is_bold: bool = False) -> FontSizeResult:
    min_size = BRAND.type.h1_min if is_bold else BRAND.type.body_min
    if font_size >= min_size:
        return FontSizeResult(True, f"Font size {font_size}px meets accessibility standards.")
    return FontSizeResult(
        False,
        f"Font size {font_size}px is too small. Minimum recommended: {min_size}px.",
    )


def generate_alt_text(
    visual_type: str,
    h1: str,
    support: str,
    has_accent_bar: bool = False,
    has_badge: bool = False,
) -> str:
    elements = [
        TYPE_DESCRIPTIONS.get(visual_type, "Motivational card"),
        f"reading '{h1}'",
    ]
    if support and support != h1:
        elements.append(f"with supporting text '{support}'")
    if has_accent_bar:
        elements.append("featuring Electric Lime accent bar")
    if has_badge:
        elements.append("with achievement badge")
    elements.append("high-contrast text on dark message plate")
    return "; ".join(elements) + "."


def check_readability(text: str) -> ReadabilityResult:
    words = text.split()
    word_count = len(words)
    issues: list[str] = []
    suggestions: list[str] = []

    if word_count > MAX_WORDS:
        issues.append(f"Text exceeds {MAX_WORDS}-word limit ({word_count} words)")
        suggestions.append("Shorten message for mobile readability")

    sentences = [s for s in SENTENCE_SPLIT.split(text) if s.strip()]
    if sentences and word_count / len(sentences) > MAX_WORDS_PER_SENTENCE:
        issues.append("Sentences may be too complex")
        suggestions.append("Break into shorter, clearer statements")

    complex_words = [word for word in words if len(word) > COMPLEX_WORD_LENGTH]
    if len(complex_words) > word_count * COMPLEX_WORD_SHARE:
        issues.append("May contain too many complex words")
        suggestions.append("Use simpler, more accessible language")

    return ReadabilityResult(
        word_count=word_count,
        valid=not issues,
        issues=issues,
        suggestions=suggestions,
    )


def generate_accessibility_report(
    visual_type: str,
    h1: str,
    support: str,
    background_color: str = BRAND.color.graphite,
    text_color: str = BRAND.color.offwhite,
    font_size: int = BRAND.type.h1_min,
    is_bold: bool = True,
) -> AccessibilityReport:
    contrast = contrast_ratio(text_color, background_color)
    font = validate_font_size(font_size, is_bold)
    readability = check_readability(f"{h1} {support}")
    alt_text = generate_alt_text(visual_type, h1, support)

    recommendations: list[str] = []
    if not contrast.passes:
        recommendations.append("Increase color contrast for better readability")
    if not font.valid:
        recommendations.append(font.recommendation)
    if not readability.valid:
        recommendations.extend(readability.suggestions)

    if not contrast.passes or not font.valid:
        overall: OverallStatus = "FAIL"
    elif not readability.valid or contrast.level == "AA":
        overall = "WARNING"
    else:
        overall = "PASS"

    return AccessibilityReport(
        overall=overall,
        contrast=contrast,
        font_size=font,
        readability=readability,
        alt_text=alt_text,
        recommendations=recommendations,
    )
