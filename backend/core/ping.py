"""Health-check payload."""

from backend.config import Settings
from backend.schemas.ping import PingResponse


def build_ping(settings: Settings) -> PingResponse:
    """Liveness reply, flagging whether AI content will come from Gemini or fallbacks."""
    return PingResponse(message="pong", aiEnabled=bool(settings.gemini_api_key))
