"""
FastAPI application main file
"""
import uvicorn

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.logger import initialize_logger
from app.services.knowledge_base_service import KnowledgeBaseService
from app.services.service_manager import (
    set_connection_store,
    set_document_store,
    set_knowledge_base_service,
)
from app.services.stores import DemoDocumentStore, InMemoryConnectionStore
from app.routers import chat, dashboard, health, integrations, knowledge_base, upload, widget
from app.langgraph import build_chat_graph

# Initialize logger
logger = initialize_logger()


# Initialize FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="AI work assistant: chat, integrations, knowledge base and uploads",
    debug=settings.DEBUG
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # the widget is embedded on third-party pages
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(chat.router)
app.include_router(integrations.router)
app.include_router(knowledge_base.router)
app.include_router(upload.router)
app.include_router(dashboard.router)
app.include_router(widget.router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    logger.warning(f"Validation error on {request.url.path}: {errors}")
    return JSONResponse(status_code=400, content={"error": errors or "Invalid request"})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.on_event("startup")
async def startup_event():
    """Initialize services on startup"""
    set_connection_store(InMemoryConnectionStore())
    set_document_store(DemoDocumentStore())
    set_knowledge_base_service(KnowledgeBaseService())
    logger.info("Demo connection and document stores initialized")

    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY is not set, chat will answer from templates only")

    # Compile LangGraph chat workflow
    try:
        app.state.chat_graph = build_chat_graph()
        logger.info("Chat workflow graph compiled successfully")
    except Exception as e:
        logger.error(f"Failed to compile chat workflow graph: {e}")
        app.state.chat_graph = None

    logger.info("Application started successfully")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Application shutting down")


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
        log_config=None  # Use loguru instead
    )
