import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fourfront.api.ai import router as ai_router
from fourfront.core.config import configure_logging, settings
from fourfront.core.opponent_registry import registry

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    logger.info(
        "FourFront AI ready: default depth %d, mistake rate %.2f, %d opponent presets",
        settings.default_depth, settings.default_mistake_rate, len(registry.list_all())
    )
    yield

app = FastAPI(title="FourFront Connect Four AI", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(ai_router, prefix="/api/ai", tags=["AI"])

@app.get("/health")
async def health():
    return {"status": "ok"}
