from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from marinavision.config import config
from marinavision.features.health.router import router as health_router
from marinavision.features.process.router import router as process_router
from marinavision.features.studio.router import STATIC_DIR, router as studio_router
from marinavision.logger import get_logger

log = get_logger(__name__)

app = FastAPI(title="MarinaVision Studio")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins,
    allow_credentials="*" not in config.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(process_router)
app.include_router(health_router)
app.include_router(studio_router)
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

log.info(
    f"MarinaVision ready (fal={'on' if config.fal_key else 'off'}, "
    f"validator={'on' if config.openai_api_key and config.validation_enabled else 'off'})"
)
