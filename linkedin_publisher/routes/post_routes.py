from fastapi import APIRouter, Depends, HTTPException, Request
from typing import List, Optional
from pydantic import BaseModel, Field
from ..core.plugin import LinkedInPlugin
from ..models.post_models import PublishResult
from ..utils.logger import LogLevel, get_logger

logger = get_logger(__name__)
router = APIRouter()

# Request models
class PostBody(BaseModel):
    text: str

class SettingsUpdate(BaseModel):
    access_token: Optional[str] = None
    dev_mode: Optional[bool] = None
    log_level: Optional[LogLevel] = None

# Response models
class CommandResponse(BaseModel):
    success: bool
    result: Optional[PublishResult] = None
    notices: List[str] = Field(default_factory=list)

class SettingsResponse(BaseModel):
    has_access_token: bool
    person_urn: str
    dev_mode: bool
    log_level: LogLevel
    notices: List[str] = Field(default_factory=list)

def get_plugin(request: Request) -> LinkedInPlugin:
    """Plugin instance created by the application lifespan."""
    plugin = getattr(request.app.state, "plugin", None)
    if plugin is None or not plugin.loaded:
        raise HTTPException(status_code=503, detail="Plugin is not loaded")
    return plugin

def _drain_notices(plugin: LinkedInPlugin) -> List[str]:
    drain = getattr(plugin.notify, "drain", None)
    return drain() if drain else []

def _settings_response(plugin: LinkedInPlugin) -> SettingsResponse:
    settings = plugin.settings
    return SettingsResponse(
        has_access_token=bool(settings.access_token),
        person_urn=settings.person_urn,
        dev_mode=settings.dev_mode,
        log_level=settings.log_level,
        notices=_drain_notices(plugin)
    )

@router.post("/posts", response_model=CommandResponse)
async def create_post(body: PostBody, plugin: LinkedInPlugin = Depends(get_plugin)) -> CommandResponse:
    """Resolve the member and publish ``text`` to their feed."""
    try:
        result = await plugin.publish_text(body.text)
    except Exception as e:
        logger.error(f"Unexpected error while publishing: {str(e)}")
        _drain_notices(plugin)
        raise HTTPException(status_code=500, detail=f"Unexpected error while publishing: {str(e)}")
    return CommandResponse(success=result.success, result=result, notices=_drain_notices(plugin))

@router.post("/token/validate", response_model=CommandResponse)
async def validate_token(plugin: LinkedInPlugin = Depends(get_plugin)) -> CommandResponse:
    try:
        is_valid = await plugin.validate_token()
    except Exception as e:
        logger.error(f"Unexpected error while validating token: {str(e)}")
        _drain_notices(plugin)
        raise HTTPException(status_code=500, detail=f"Unexpected error while validating token: {str(e)}")
    return CommandResponse(success=is_valid, notices=_drain_notices(plugin))

@router.get("/settings", response_model=SettingsResponse)
async def read_settings(plugin: LinkedInPlugin = Depends(get_plugin)) -> SettingsResponse:
    return _settings_response(plugin)

@router.put("/settings", response_model=SettingsResponse)
async def update_settings(update: SettingsUpdate, plugin: LinkedInPlugin = Depends(get_plugin)) -> SettingsResponse:
    try:
        plugin.update_settings(
            access_token=update.access_token,
            dev_mode=update.dev_mode,
            log_level=update.log_level
        )
    except ValueError as e:
        _drain_notices(plugin)
        raise HTTPException(status_code=422, detail=str(e))
    return _settings_response(plugin)

@router.get("/oauth-url")
async def oauth_url(plugin: LinkedInPlugin = Depends(get_plugin)) -> dict:
    """Where to obtain an access token before pasting it into the settings."""
    return {
        "oauth_url": plugin.settings.oauth_url,
        "message": "Complete the OAuth flow and paste your access token in the settings"
    }
