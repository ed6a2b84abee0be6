"""
FastAPI Application Entry Point

Integrates:
  - WeChat webhook handler
  - Health checks
  - Middleware for logging & error handling

Run: uvicorn main:app --host 0.0.0.0 --port 80
"""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from webhook.wechat import router as wechat_router
from infra import InfraBootstrap
from config import Config

# Setup logging
logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Seconds to wait for in-flight completions on shutdown
SHUTDOWN_DRAIN_TIMEOUT_S = 10.0


async def sweep_expired(store, interval_s: float) -> None:
    """Periodically drop pending answers past their TTL."""
    while True:
        await asyncio.sleep(interval_s)
        removed = store.purge_expired()
        if removed:
            logger.info(f"Evicted {removed} expired pending answer(s)")


def create_app(bridge: Optional[InfraBootstrap] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        bridge: Pre-built bridge components; built from the environment if omitted

    Returns:
        FastAPI app with app.state.bridge set
    """
    bridge = bridge if bridge is not None else InfraBootstrap()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan: startup and shutdown handlers.
        """
        # Startup
        logger.info("=" * 60)
        logger.info("WeChat bridge starting up...")
        logger.info(f"Environment: {Config.ENVIRONMENT}")
        logger.info(f"Bridge: {app.state.bridge!r}")
        logger.info("=" * 60)
        app.state.bridge.config.validate()

        sweeper = None
        ttl = app.state.bridge.config.pending_ttl_s
        store = app.state.bridge.get_store()
        if ttl > 0 and hasattr(store, "purge_expired"):
            sweeper = asyncio.create_task(sweep_expired(store, ttl))

        yield

        # Shutdown
        logger.info("WeChat bridge shutting down...")
        if sweeper is not None:
            sweeper.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await sweeper
        await app.state.bridge.get_dispatcher().drain(timeout=SHUTDOWN_DRAIN_TIMEOUT_S)

    app = FastAPI(
        title="WeChat Bridge API",
        description="WeChat Official Account webhook bridge to a chat-completion API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.bridge = bridge

    # Middleware for logging
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all requests."""
        logger.debug(f"{request.method} {request.url.path}")
        try:
            response = await call_next(request)
            return response
        except Exception as e:
            logger.error(f"Request error: {str(e)}", exc_info=True)
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal server error"},
            )

    # Include routers
    app.include_router(wechat_router)

    # Health check endpoints
    @app.get("/health/live")
    async def health_live():
        """Live health check (Kubernetes liveness probe)."""
        return {"status": "alive"}

    @app.get("/health/ready")
    async def health_ready():
        """Readiness health check (Kubernetes readiness probe)."""
        missing = app.state.bridge.config.missing()
        if missing:
            return {"status": "not_ready", "reason": f"missing: {', '.join(missing)}"}
        return {"status": "ready"}

    @app.get("/")
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "WeChat Bridge API",
            "version": "1.0.0",
            "status": "running",
            "endpoints": {
                "wechat_handshake": "GET /wx",
                "wechat_message": "POST /wx",
                "health_live": "GET /health/live",
                "health_ready": "GET /health/ready",
            },
        }

    @app.get("/config/info")
    async def config_info():
        """Get non-sensitive configuration info."""
        bridge_config = app.state.bridge.config
        return {
            "environment": Config.ENVIRONMENT,
            "completion_backend": bridge_config.completion_backend,
            "completion_model": bridge_config.completion_model,
            "reply_wait_s": bridge_config.reply_wait_s,
            "pending_ttl_s": bridge_config.pending_ttl_s,
            "pending_answers": len(app.state.bridge.get_store()),
            "in_flight": app.state.bridge.get_dispatcher().in_flight,
            "agent_port": Config.AGENT_PORT,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=Config.AGENT_PORT,
        reload=Config.ENVIRONMENT == "development",
    )
