from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from athletic_balance.core.config import get_settings
from athletic_balance.visuals.accessibility import (
    generate_accessibility_report,
    generate_alt_text,
)
from athletic_balance.visuals.brand import (
    BRAND,
    BRAND_STYLE,
    LAYOUT_SPECS,
    PositiveVisual,
    size_for,
)
from athletic_balance.visuals.copy_bank import CopyBankManager
from athletic_balance.visuals.intent import (
    PositiveContext,
    choose_visual_type,
    decide_visual,
    extract_positive_context,
    last_user_text,
)

logger = logging.getLogger(__name__)

ACCENT_BAR_TYPES = (PositiveVisual.affirmation_card, PositiveVisual.confidence_boost)

PROMPT_DIRECTIVES = (
    "Layout requirements: one focal H1 phrase, one support line, optional CTA chip;",
    "maximum 12 words total; 6-8% safe margins; plenty of negative space;",
    "Text overlay: solid message plate (Dark Graphite #1A1D1E, 90-95% opacity) behind all text;",
    "Typography: clean geometric sans-serif; H1 24-40px bold; support 16-20px medium;",
    "Accent elements: Electric Lime (#B5FF3D) accent bar under H1 when specified;",
    "Background: flat Kelly Green (#0FA958) or subtle grain; no busy photos; no logos;",
    "Accessibility: ensure 4.5:1 contrast ratio minimum; mobile-optimized sizing; clear text hierarchy;",
    "Text readability: high contrast, clear fonts, adequate spacing, no decorative elements that interfere with text;",
    "Screen reader friendly: clear visual hierarchy, meaningful color use beyond decoration;",
    "Style: evidence-based motivation; youth-appropriate; inclusive; brand-consistent.",
)


@dataclass(frozen=True)
class ImagePrompt:
    prompt: str
    alt: str
    size: str
    h1: str
    support: str


@dataclass(frozen=True)
class VisualPlan:
    type: PositiveVisual
    prompt: str
    alt: str
    size: str
    h1: str
    support: str


def build_positive_image_prompt(
    visual_type: PositiveVisual,
    context: PositiveContext,
    copy_bank: CopyBankManager | None = None,
) -> ImagePrompt:
    visual_type = PositiveVisual(visual_type)
    copy_bank = copy_bank or CopyBankManager()
    selection = copy_bank.select_copy(
        visual_type,
        emotion=context.emotion,
        situation=context.situation,
        needs=context.needs,
    )

    report = generate_accessibility_report(
        visual_type.value,
        selection.h1,
        selection.support,
        background_color=BRAND.color.graphite,
        text_color=BRAND.color.offwhite,
        font_size=BRAND.type.h1_min,
        is_bold=True,
    )
    if report.overall != "PASS" and get_settings().environment == "development":
        logger.warning(
            "[Accessibility] Generated visual may have issues: %s", report.recommendations
        )

    prompt = " ".join(
        [
            f"[{visual_type.value}]",
            BRAND_STYLE,
            LAYOUT_SPECS[visual_type],
            f'Message content: H1 "{selection.h1}" with support text "{selection.support}".',
            *PROMPT_DIRECTIVES,
        ]
    )
    alt = generate_alt_text(
        visual_type.value,
        selection.h1,
        selection.support,
        has_accent_bar=visual_type in ACCENT_BAR_TYPES,
        has_badge=False,
    )
    return ImagePrompt(
        prompt=prompt,
        alt=alt,
        size=size_for(visual_type),
        h1=selection.h1,
        support=selection.support,
    )


def plan_visual(
    coach_slug: str | None,
    messages: Sequence[Mapping[str, Any] | Any],
    reply: str,
    copy_bank: CopyBankManager | None = None,
) -> VisualPlan | None:
    """Return the image to attach to a coach reply, or None when no image is wanted."""
    user_text = last_user_text(messages)
    decision = decide_visual(user_text, reply)
    if not decision.should_generate:
        return None

    visual_type = choose_visual_type(coach_slug, extract_positive_context(messages))
    turn_context = extract_positive_context(
        [{"role": "user", "content": user_text}, {"role": "assistant", "content": reply}]
    )
    built = build_positive_image_prompt(visual_type, turn_context, copy_bank)
    logger.info("Planned %s visual for coach %s", visual_type.value, coach_slug or "-")
    return VisualPlan(
        type=visual_type,
        prompt=built.prompt,
        alt=built.alt,
        size=built.size,
        h1=built.h1,
        support=built.support,
    )
