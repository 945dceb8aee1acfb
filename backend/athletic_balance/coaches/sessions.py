from __future__ import annotations

import json
from dataclasses import dataclass, field
from functools import lru_cache

from athletic_balance.coaches.registry import DATA_DIR


@dataclass(frozen=True)
class SessionBlock:
    label: str
    minutes: int
    description: str
    prompts: list[str] = field(default_factory=list)
    metric: str | None = None


@dataclass(frozen=True)
class SessionType:
    id: str
    title: str
    description: str
    blocks: list[SessionBlock]
    outputs: list[str] = field(default_factory=list)
    recommended_metrics: list[str] = field(default_factory=list)

    @property
    def total_minutes(self) -> int:
        return sum(block.minutes for block in self.blocks)


def _session_from_record(record: dict) -> SessionType:
    return SessionType(
        id=record["id"],
        title=record["title"],
        description=record["description"],
        blocks=[SessionBlock(**block) for block in record["blocks"]],
        outputs=list(record.get("outputs") or []),
        recommended_metrics=list(record.get("recommended_metrics") or []),
    )


@lru_cache
def load_session_catalog() -> dict[str, tuple[SessionType, ...]]:
    raw = json.loads((DATA_DIR / "session_types.json").read_text(encoding="utf-8"))
    return {
        slug: tuple(_session_from_record(record) for record in records)
        for slug, records in raw.items()
    }


def get_sessions_for_coach(slug: str) -> list[SessionType]:
    return list(load_session_catalog().get(slug, ()))
