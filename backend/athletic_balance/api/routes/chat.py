from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from athletic_balance.api import deps
from athletic_balance.coach.adapter import ChatProvider
from athletic_balance.core.config import Settings, get_settings
from athletic_balance.db.session import get_db
from athletic_balance.models.user import User
from athletic_balance.schemas.chat import ChatRequest, ChatResponse
from athletic_balance.services.chat import run_chat_turn
from athletic_balance.visuals.copy_bank import CopyBankManager

router = APIRouter()


@router.post("/chat", response_model=ChatResponse, response_model_by_alias=True)
def chat(
    payload: ChatRequest,
    db: Session = Depends(get_db),  # noqa: B008
    user: User | None = Depends(deps.get_optional_user),
    provider: ChatProvider = Depends(deps.get_chat_client),
    copy_bank: CopyBankManager = Depends(deps.get_copy_bank),
    settings: Settings = Depends(get_settings),
) -> ChatResponse:
    return run_chat_turn(
        payload,
        db=db,
        provider=provider,
        settings=settings,
        user=user,
        copy_bank=copy_bank,
    )
