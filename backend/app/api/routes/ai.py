"""AI Routes — chat proxy for users; prompt improvement and settings for admins.

Invariants:
    - Chat requires authentication; generate-prompt and settings require admin
    - Secret setting values are masked in responses
"""

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_ai_providers, get_current_user, require_admin
from app.core.ai_messages import is_sensitive_setting, masked_setting_value
from app.infrastructure.ai_providers import AIProviders
from app.infrastructure.database import get_db
from app.models import AISetting, User
from app.schemas.ai import (
    AISettingResponse, AISettingUpsert, ChatRequest, ChatResponse,
    PromptRequest, PromptResponse,
)
from app.services import ai_assistant

router = APIRouter(prefix="/api/v1/ai", tags=["ai"])


def _setting_response(setting: AISetting) -> AISettingResponse:
    return AISettingResponse(
        setting_key=setting.setting_key,
        setting_value=masked_setting_value(setting.setting_key, setting.setting_value),
        description=setting.description,
        is_sensitive=is_sensitive_setting(setting.setting_key),
        updated_at=setting.updated_at,
    )


@router.post("/chat", response_model=ChatResponse)
async def chat(
    body: ChatRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    providers: AIProviders = Depends(get_ai_providers),
):
    history = [m.model_dump(mode="json") for m in body.conversation_history]
    reply, provider = await ai_assistant.chat(db, providers, body.message, history)
    return ChatResponse(message=reply, provider=provider)


@router.post("/generate-prompt", response_model=PromptResponse)
async def generate_prompt(
    body: PromptRequest,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    providers: AIProviders = Depends(get_ai_providers),
):
    """Rewrite a system prompt with OpenAI (admin only)."""
    improved = await ai_assistant.improve_prompt(db, providers, body.prompt)
    return PromptResponse(prompt=improved)


@router.get("/settings", response_model=list[AISettingResponse])
async def list_settings(
    admin: User = Depends(require_admin), db: AsyncSession = Depends(get_db),
):
    return [_setting_response(s) for s in await ai_assistant.list_settings(db)]


@router.put("/settings/{setting_key}", response_model=AISettingResponse)
async def upsert_setting(
    body: AISettingUpsert,
    setting_key: str = Path(pattern=r"^[a-z][a-z0-9_]{0,99}$"),
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    setting = await ai_assistant.upsert_setting(
        db, setting_key, body.setting_value, body.description,
    )
    await db.commit()
    await db.refresh(setting)
    return _setting_response(setting)
