from fastapi import APIRouter, status

from athletic_balance.coaches.registry import get_coach_by_slug, list_coaches
from athletic_balance.coaches.sessions import get_sessions_for_coach
from athletic_balance.core.errors import AppError
from athletic_balance.schemas.coach import CoachDetail, CoachSummary, SessionTypePublic

router = APIRouter()


def _require_coach(slug: str):
    coach = get_coach_by_slug(slug)
    if coach is None:
        raise AppError("Coach not found", status.HTTP_404_NOT_FOUND)
    return coach


@router.get("", response_model=list[CoachSummary])
def read_coaches() -> list[CoachSummary]:
    return [CoachSummary.model_validate(coach) for coach in list_coaches()]


@router.get("/{slug}", response_model=CoachDetail)
def read_coach(slug: str) -> CoachDetail:
    return CoachDetail.model_validate(_require_coach(slug))


@router.get("/{slug}/sessions", response_model=list[SessionTypePublic])
def read_coach_sessions(slug: str) -> list[SessionTypePublic]:
    _require_coach(slug)
    return [SessionTypePublic.model_validate(session) for session in get_sessions_for_coach(slug)]
