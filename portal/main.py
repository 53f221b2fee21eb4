import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from portal.controllers import (
    empreendimento_controller,
    health_controller,
    landing_controller,
    search_controller,
    sitemap_controller,
)
from portal.core.config import settings
from portal.core.dependencies import lifespan
from portal.core.rate_limit import limiter

logging.basicConfig(
    format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
)

# Cria a aplicação FastAPI com lifespan
app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_methods=["GET"],
    allow_headers=["*"],
)


# --- Endpoints ---
app.include_router(empreendimento_controller.router)
app.include_router(search_controller.router)
app.include_router(landing_controller.router)
app.include_router(sitemap_controller.router)
app.include_router(health_controller.router)
