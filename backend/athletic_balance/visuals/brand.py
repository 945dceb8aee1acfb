"""Brand palette, card templates and copy banks for positive-messaging visuals."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PositiveVisual(str, Enum):
    affirmation_card = "affirmation_card"
    confidence_boost = "confidence_boost"
    process_cue = "process_cue"
    belonging_tile = "belonging_tile"
    autonomy_choice = "autonomy_choice"
    mindset_micro = "mindset_micro"


@dataclass(frozen=True)
class BrandColors:
    primary: str = "#0FA958"  # Kelly Green
    graphite: str = "#1A1D1E"  # Dark Graphite
    offwhite: str = "#F7F7F7"
    accent: str = "#B5FF3D"  # Electric Lime


@dataclass(frozen=True)
class BrandType:
    h1_min: int = 24
    body_min: int = 16


@dataclass(frozen=True)
class Brand:
    color: BrandColors = BrandColors()
    type: BrandType = BrandType()
    min_contrast: float = 4.5


BRAND = Brand()


@dataclass(frozen=True)
class Template:
    aspect: str
    max_words: int = 12


TEMPLATES: dict[PositiveVisual, Template] = {
    PositiveVisual.affirmation_card: Template("square"),
    PositiveVisual.confidence_boost: Template("square"),
    PositiveVisual.process_cue: Template("square"),
    PositiveVisual.belonging_tile: Template("portrait"),
    PositiveVisual.autonomy_choice: Template("square"),
    PositiveVisual.mindset_micro: Template("portrait"),
}

ASPECT_TO_SIZE = {
    "square": "1024x1024",
    "portrait": "1024x1792",
}

COPY_BANKS: dict[str, tuple[str, ...]] = {
    "autonomy": (
        "Pick your next 1%.",
        "Choose effort you control.",
        "Your choices, your power.",
        "Own your process.",
        "Control what matters.",
    ),
    "competence": (
        "Skills grow under reps.",
        "Evidence beats doubt.",
        "Progress over perfection.",
        "You're getting stronger.",
        "Small wins add up.",
    ),
    "relatedness": (
        "Your team, your scaffold.",
        "We train together.",
        "Ask. Learn. Level up.",
        "Community over competition.",
        "We got us.",
    ),
    "self_affirmation": (
        "You are bigger than one result.",
        "Values travel with you.",
        "Character shows in challenges.",
        "Your worth isn't your score.",
        "Identity beyond outcomes.",
    ),
    "mindset": (
        "Mistakes = data.",
        "Effort + strategy + help.",
        "Not yet ≠ no.",
        "Try new strategy.",
        "Growth through struggle.",
    ),
}


@dataclass(frozen=True)
class VisualSpec:
    h1_words: int
    support_words: int
    description: str
    examples: tuple[tuple[str, str], ...]


VISUAL_SPECS: dict[PositiveVisual, VisualSpec] = {
    PositiveVisual.affirmation_card: VisualSpec(
        4,
        8,
        "H1 (2-4 words), Support (<=8 words), subtle accent underline",
        (("Own Your Next Rep", "Tiny gains = big seasons."), ("Values Travel", "Character shows in challenges.")),
    ),
    PositiveVisual.confidence_boost: VisualSpec(
        3,
        6,
        "Post-game confidence builder",
        (("Found a Way", "We adjust, we improve."), ("Evidence Beats Doubt", "You showed up today.")),
    ),
    PositiveVisual.process_cue: VisualSpec(
        3,
        6,
        "Practice-focused process reminder",
        (("Form, Then Force", "Footwork first, speed later."), ("Progress Over Perfect", "Small wins add up.")),
    ),
    PositiveVisual.belonging_tile: VisualSpec(
        3,
        6,
        "Relatedness and team connection",
        (("We Got Us", "Ask. Learn. Level up."), ("Your Team Scaffold", "Community over competition.")),
    ),
    PositiveVisual.autonomy_choice: VisualSpec(
        3,
        9,
        "Choice-focused empowerment with pill chips",
        (("Choose Your Win", "Film / Form / Fuel"), ("Pick Your 1%", "Effort / Strategy / Recovery")),
    ),
    PositiveVisual.mindset_micro: VisualSpec(
        4,
        4,
        "Growth mindset micro-lesson",
        (("Not Yet ≠ No", "Try new strategy."), ("Mistakes = Data", "Growth through struggle.")),
    ),
}

BRAND_STYLE = " ".join(
    [
        "Athletic Balance Positive Messaging style:",
        "Kelly Green (#0FA958) and Dark Graphite (#1A1D1E) palette;",
        "high-contrast text on solid message plate (90-95% opacity);",
        "clean geometric sans-serif typography (Inter/Manrope style);",
        "flat or subtle grain backgrounds; no busy photos;",
        "6-8% safe margins; plenty of negative space;",
        "accessibility-first: 4.5:1 contrast minimum;",
        "mobile-optimized: 24px+ headlines, 16px+ body text;",
        "evidence-based motivation; youth-appropriate; inclusive.",
    ]
)

LAYOUT_SPECS: dict[PositiveVisual, str] = {
    PositiveVisual.affirmation_card: (
        "Square card: H1 top-left with Electric Lime accent bar underneath, "
        "support line below, optional badge top-right."
    ),
    PositiveVisual.confidence_boost: (
        "Square card: centered H1 with support below, subtle Kelly Green accent elements."
    ),
    PositiveVisual.process_cue: (
        "Square card: H1 with process-focused layout, support text emphasizing technique progression."
    ),
    PositiveVisual.belonging_tile: (
        "Portrait format: H1 center-aligned, support below, community-focused visual elements."
    ),
    PositiveVisual.autonomy_choice: (
        "Square card: H1 with three pill-shaped CTA chips below showing choices."
    ),
    PositiveVisual.mindset_micro: (
        "Portrait format: H1 center-aligned, concise support line, growth-focused accent."
    ),
}


def size_for(visual_type: PositiveVisual) -> str:
    return ASPECT_TO_SIZE[TEMPLATES[visual_type].aspect]
