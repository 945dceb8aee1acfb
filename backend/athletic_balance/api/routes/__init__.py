from fastapi import APIRouter

from athletic_balance.api.routes import (
    auth,
    chat,
    coach_chat,
    coaches,
    data,
    dual_assistant,
    reasoning_pipeline,
    sessions,
    system,
)


api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(chat.router, tags=["chat"])
api_router.include_router(coach_chat.router, tags=["chat"])
api_router.include_router(reasoning_pipeline.router, tags=["assistants"])
api_router.include_router(dual_assistant.router, tags=["assistants"])
api_router.include_router(coaches.router, prefix="/coaches", tags=["coaches"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
api_router.include_router(data.router, tags=["data"])
api_router.include_router(system.router, tags=["system"])
