"""
Health and root endpoints router
"""
from fastapi import APIRouter, Request
from app.config import settings
from app.schemas.health import RootResponse, HealthResponse

router = APIRouter(prefix="", tags=["health"])


@router.get("/", response_model=RootResponse)
async def root():
    """Root endpoint"""
    return RootResponse(
        message=f"Welcome to {settings.APP_NAME}",
        version=settings.APP_VERSION,
        status="running"
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """Health check endpoint"""
    chat_graph = getattr(request.app.state, "chat_graph", None)

    return HealthResponse(
        status="healthy",
        llm="configured" if settings.OPENAI_API_KEY else "fallback_only",
        chat_workflow="available" if chat_graph is not None else "unavailable"
    )
