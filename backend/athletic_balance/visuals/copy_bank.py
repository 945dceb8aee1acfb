from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable

from athletic_balance.visuals.brand import COPY_BANKS, TEMPLATES, PositiveVisual

MAX_TOTAL_WORDS = 12
MAX_H1_WORDS = 4
MAX_SUPPORT_WORDS = 8


@dataclass(frozen=True)
class CopySelection:
    h1: str
    support: str
    category: str
    visual_type: PositiveVisual


def _words(text: str) -> list[str]:
    return text.split()


def fit_word_budget(h1: str, support: str, max_words: int) -> tuple[str, str]:
    """Trim support first, then the H1, until both fit in ``max_words``."""
    h1_words = _words(h1)[:max_words]
    remaining = max_words - len(h1_words)
    support_words = _words(support)[: max(remaining, 0)]
    return " ".join(h1_words), " ".join(support_words)


class CopyBankManager:
    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()
        self.banks: dict[str, list[str]] = {
            category: list(lines) for category, lines in COPY_BANKS.items()
        }

    def select_copy(
        self,
        visual_type: PositiveVisual,
        emotion: str | None = None,
        situation: str | None = None,
        needs: dict[str, bool] | None = None,
    ) -> CopySelection:
        visual_type = PositiveVisual(visual_type)
        category = self.primary_category(emotion, needs)
        base_copy = self.rng.choice(self.banks[category])
        h1, support = self._format(base_copy, visual_type, situation)
        h1, support = fit_word_budget(h1, support, TEMPLATES[visual_type].max_words)
        if visual_type is PositiveVisual.affirmation_card and support:
            support = support.rstrip(".,;:") + "."
        return CopySelection(h1=h1, support=support, category=category, visual_type=visual_type)

    @staticmethod
    def primary_category(emotion: str | None, needs: dict[str, bool] | None) -> str:
        needs = needs or {}
        if needs.get("autonomy"):
            return "autonomy"
        if needs.get("competence"):
            return "competence"
        if needs.get("relatedness"):
            return "relatedness"
        if emotion in ("struggling", "unmotivated"):
            return "mindset"
        return "self_affirmation"

    def _format(
        self, base_copy: str, visual_type: PositiveVisual, situation: str | None
    ) -> tuple[str, str]:
        words = _words(base_copy)
        if visual_type is PositiveVisual.affirmation_card:
            if len(words) <= 4:
                return base_copy, "You've got this."
            return " ".join(words[:3]), " ".join(words[3:]).rstrip(".") + "."
        if visual_type is PositiveVisual.confidence_boost:
            if situation == "post_game":
                return "Found a Way", "We adjust, we improve."
            return " ".join(words[:2]), "Evidence beats doubt."
        if visual_type is PositiveVisual.process_cue:
            if situation == "practice":
                return "Form, Then Force", "Footwork first, speed later."
            return "Progress Over Perfect", base_copy
        if visual_type is PositiveVisual.belonging_tile:
            return "We Got Us", base_copy
        if visual_type is PositiveVisual.autonomy_choice:
            # Three choice chips
            return "Choose Your Win", "Film / Form / Fuel"
        if "=" in base_copy:
            left, right = base_copy.split("=", 1)
            return left.strip() + " =", right.strip()
        return "Not Yet ≠ No", base_copy

    def get_copy_by_category(self, category: str) -> list[str]:
        return list(self.banks[category])

    def add_copy(self, category: str, text: str) -> None:
        bank = self.banks.setdefault(category, [])
        if text not in bank:
            bank.append(text)

    def suggest_copy(self, keywords: Iterable[str]) -> list[dict[str, object]]:
        lowered = [keyword.lower() for keyword in keywords if keyword]
        suggestions = []
        for category, copies in self.banks.items():
            matching = [copy for copy in copies if any(k in copy.lower() for k in lowered)]
            if matching:
                suggestions.append({"category": category, "copies": matching})
        return suggestions


def validate_copy(h1: str, support: str) -> tuple[bool, list[str]]:
    issues: list[str] = []
    total_words = len(_words(h1)) + len(_words(support))
    if total_words > MAX_TOTAL_WORDS:
        issues.append(f"Total word count ({total_words}) exceeds {MAX_TOTAL_WORDS}-word limit")
    if len(_words(h1)) > MAX_H1_WORDS:
        issues.append(f"H1 should be {MAX_H1_WORDS} words or fewer")
    if len(_words(support)) > MAX_SUPPORT_WORDS:
        issues.append(f"Support text should be {MAX_SUPPORT_WORDS} words or fewer")
    return not issues, issues
