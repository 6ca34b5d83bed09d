from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import traceback

from app.core.config import get_settings
from app.core.errors import RAGError
from app.core.services import Services
from app.routers import embeddings, rag, stats


def create_app(services: Services | None = None) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        services: Pre-built services (tests pass fakes here). When omitted
            they are built from settings at startup.
    """
    settings = services.settings if services else get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: open store connections
        running = services or Services.build(settings)
        await running.open()
        app.state.services = running
        print(f"[API] {settings.service_name} started")
        yield
        # Shutdown: release store and provider connections
        await running.close()
        print(f"[API] {settings.service_name} stopped")

    app = FastAPI(
        title="Playlist RAG API",
        description="Learning playlist recommendations with retrieval-augmented generation",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.router.redirect_slashes = False

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RAGError)
    async def rag_error_handler(request: Request, exc: RAGError):
        print(f"[API] {request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        # Details stay in the server log, not in the response
        print(f"[API] Unhandled error in {request.method} {request.url.path}: {exc!r}")
        traceback.print_exc()
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    # Include routers
    app.include_router(rag.router, prefix="/api/rag", tags=["RAG"])
    app.include_router(embeddings.router, prefix="/api/embeddings", tags=["Embeddings"])
    app.include_router(stats.router, prefix="/api/stats", tags=["Stats"])

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "service": settings.service_name}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.server_host, port=settings.server_port)
