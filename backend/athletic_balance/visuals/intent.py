"""Decide whether a coach turn should carry a positive-messaging visual.

The classifier is keyword based and pure: the same user text and reply
always produce the same decision, and no input can make it fail.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from athletic_balance.core.logging import preview
from athletic_balance.visuals.brand import PositiveVisual

logger = logging.getLogger(__name__)

VISUAL_KEYWORDS = (
    "play",
    "set",
    "formation",
    "scheme",
    "diagram",
    "draw",
    "sketch",
    "visualize",
    "chart",
    "graph",
    "menu",
    "plate",
    "drill",
    "steps",
    "how to",
    "layout",
    "template",
    "poster",
    "infographic",
    "illustration",
    "picture of",
    "image of",
    "show me",
    "can you show",
    "what does it look like",
    "generate an image",
    "make a graphic",
    "mockup",
    "design",
    # positive messaging
    "motivate",
    "inspire",
    "encourage",
    "boost",
    "confidence",
    "affirmation",
    "positive",
    "mindset",
    "card",
    "message",
)

COACH_OFFER_PHRASES = (
    "i'll create a diagram",
    "i'll draw",
    "i'll make a diagram",
    "i'll generate",
    "let me create a visual",
    "let me draw",
    "let me make a diagram",
    "let me generate that visual",
    "here's a diagram",
    "here's a visual",
    "creating a diagram",
    "generating a visual",
    "i'll create a motivational",
    "let me make an affirmation",
    "here's an encouraging",
    "i'll design a confidence",
)

# (subject, any-of verbs) pairs that also count as an offer.
COACH_OFFER_PAIRS = (
    ("visual", ("create", "generate", "make")),
    ("diagram", ("create", "generate", "make")),
    ("card", ("motivational", "positive", "affirmation")),
)

POSITIVE_KEYWORDS = (
    "motivate",
    "inspire",
    "encourage",
    "boost",
    "confidence",
    "affirmation",
    "positive",
    "mindset",
    "growth",
    "believe",
    "support",
    "strength",
    "power",
    "capable",
    "worthy",
    "progress",
    "improve",
    "better",
    "stronger",
    "resilient",
)

VISUAL_INTENT_KEYWORDS = (
    "card",
    "post",
    "image",
    "visual",
    "graphic",
    "design",
    "create",
    "make",
    "generate",
    "show",
    "picture",
)

COACH_VISUAL_HINTS: dict[str, tuple[PositiveVisual, ...]] = {
    "coach-skills": (PositiveVisual.process_cue, PositiveVisual.confidence_boost),
    "coach-strong": (PositiveVisual.confidence_boost, PositiveVisual.affirmation_card),
    "coach-focus": (PositiveVisual.mindset_micro, PositiveVisual.process_cue),
    "coach-a-plus": (PositiveVisual.affirmation_card, PositiveVisual.mindset_micro),
    "coach-calm": (PositiveVisual.belonging_tile, PositiveVisual.mindset_micro),
    "coach-flow": (PositiveVisual.process_cue, PositiveVisual.mindset_micro),
    "coach-fuel": (PositiveVisual.confidence_boost, PositiveVisual.process_cue),
    "coach-clutch": (PositiveVisual.confidence_boost, PositiveVisual.affirmation_card),
    "the-reset": (PositiveVisual.mindset_micro, PositiveVisual.process_cue),
    "the-lock-in": (PositiveVisual.affirmation_card, PositiveVisual.confidence_boost),
    "coach-watkins": (PositiveVisual.confidence_boost, PositiveVisual.process_cue),
    "coach-neuro": (PositiveVisual.process_cue, PositiveVisual.mindset_micro),
    "coach-recover": (PositiveVisual.belonging_tile, PositiveVisual.mindset_micro),
    "coach-vision": (PositiveVisual.confidence_boost, PositiveVisual.affirmation_card),
    "coach-scholarflow": (PositiveVisual.mindset_micro, PositiveVisual.affirmation_card),
    "coach-brandhuddle": (PositiveVisual.affirmation_card, PositiveVisual.confidence_boost),
}

STRUGGLING = re.compile(r"struggling|difficult|hard|frustrated|stuck|failing|can't|unable")
CONFIDENT = re.compile(r"good|great|awesome|nailed|crushed|killed it|confident|strong")
UNMOTIVATED = re.compile(r"tired|exhausted|unmotivated|don't want|can't do|giving up")
POST_GAME = re.compile(r"game|match|competition|played|lost|won|scored|performance")
PRACTICE = re.compile(r"practice|training|drill|workout|session|exercise")
STUDYING = re.compile(r"study|exam|test|homework|class|assignment|grade")
NEEDS_AUTONOMY = re.compile(r"choice|control|decide|pick|choose|freedom|independence|own")
NEEDS_COMPETENCE = re.compile(r"improve|better|skill|progress|growth|learn|master|achieve")
NEEDS_RELATEDNESS = re.compile(r"team|together|support|help|alone|friends|community|belong")


@dataclass(frozen=True)
class PositiveContext:
    emotion: str = "neutral"
    situation: str = "general"
    needs: dict[str, bool] = field(
        default_factory=lambda: {"autonomy": False, "competence": False, "relatedness": False}
    )


@dataclass(frozen=True)
class VisualDecision:
    user_wants_image: bool
    coach_offers_visual: bool
    wants_positive: bool

    @property
    def should_generate(self) -> bool:
        return self.user_wants_image or self.coach_offers_visual or self.wants_positive


def user_explicitly_asked_for_image(text: str) -> bool:
    lowered = (text or "").lower()
    return any(keyword in lowered for keyword in VISUAL_KEYWORDS)


def coach_clearly_offered_visual(text: str) -> bool:
    lowered = (text or "").lower()
    if any(phrase in lowered for phrase in COACH_OFFER_PHRASES):
        return True
    return any(
        subject in lowered and any(verb in lowered for verb in verbs)
        for subject, verbs in COACH_OFFER_PAIRS
    )


def wants_positive_visual(text: str) -> bool:
    lowered = (text or "").lower()
    return any(k in lowered for k in POSITIVE_KEYWORDS) and any(
        k in lowered for k in VISUAL_INTENT_KEYWORDS
    )


def decide_visual(user_text: str, reply_text: str) -> VisualDecision:
    decision = VisualDecision(
        user_wants_image=user_explicitly_asked_for_image(user_text),
        coach_offers_visual=coach_clearly_offered_visual(reply_text),
        wants_positive=wants_positive_visual(user_text) or wants_positive_visual(reply_text),
    )
    logger.debug(
        "Visual decision for %r: user=%s coach=%s positive=%s",
        preview(user_text),
        decision.user_wants_image,
        decision.coach_offers_visual,
        decision.wants_positive,
    )
    return decision


def _message_text(message: Mapping[str, Any] | Any) -> str:
    content = message.get("content") if isinstance(message, Mapping) else getattr(message, "content", "")
    return str(content or "")


def extract_positive_context(messages: Iterable[Mapping[str, Any] | Any]) -> PositiveContext:
    joined = "\n".join(_message_text(message) for message in messages).lower()

    if STRUGGLING.search(joined):
        emotion = "struggling"
    elif CONFIDENT.search(joined):
        emotion = "confident"
    elif UNMOTIVATED.search(joined):
        emotion = "unmotivated"
    else:
        emotion = "neutral"

    if POST_GAME.search(joined):
        situation = "post_game"
    elif PRACTICE.search(joined):
        situation = "practice"
    elif STUDYING.search(joined):
        situation = "studying"
    else:
        situation = "general"

    return PositiveContext(
        emotion=emotion,
        situation=situation,
        needs={
            "autonomy": bool(NEEDS_AUTONOMY.search(joined)),
            "competence": bool(NEEDS_COMPETENCE.search(joined)),
            "relatedness": bool(NEEDS_RELATEDNESS.search(joined)),
        },
    )


def choose_positive_visual_type(ctx: PositiveContext) -> PositiveVisual:
    if ctx.situation == "post_game":
        if ctx.emotion == "struggling":
            return PositiveVisual.confidence_boost
        return PositiveVisual.affirmation_card
    if ctx.situation == "practice":
        return PositiveVisual.process_cue
    if ctx.situation == "studying":
        return PositiveVisual.mindset_micro

    if ctx.needs.get("autonomy"):
        return PositiveVisual.autonomy_choice
    if ctx.needs.get("relatedness"):
        return PositiveVisual.belonging_tile
    if ctx.needs.get("competence"):
        return PositiveVisual.confidence_boost
    return PositiveVisual.affirmation_card


def choose_visual_type(coach_slug: str | None, ctx: PositiveContext) -> PositiveVisual:
    """Pick the card for this turn.

    Coach hints are kept for reference by the UI; the computed type always wins.
    """
    visual_type = choose_positive_visual_type(ctx)
    hints = COACH_VISUAL_HINTS.get(coach_slug or "", ())
    if visual_type not in hints:
        logger.debug("Visual %s is outside %s's usual cards", visual_type.value, coach_slug)
    return visual_type


def last_user_text(messages: Iterable[Mapping[str, Any] | Any]) -> str:
    last = ""
    for message in messages:
        role = message.get("role") if isinstance(message, Mapping) else getattr(message, "role", None)
        if role == "user":
            last = _message_text(message)
    return last
