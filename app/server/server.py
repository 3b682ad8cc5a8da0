from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.dependencies.rate_limits import setup_rate_limiter
from api.router import api_router
from infrastructure.configuration.settings import settings
from infrastructure.logging import get_module_logger
from infrastructure.notifications import split_targets
from server.lifespan import lifespan

logger = get_module_logger()


handler = FastAPI(title="Subscription Reminders", lifespan=lifespan)
setup_rate_limiter(handler)


allow_origins = split_targets(settings.server.ALLOWED_ORIGINS) or (
    ["*"]
    if settings.is_production
    else [
        "http://localhost:8000",
        "http://127.0.0.1:8000",
    ]
)
handler.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


handler.include_router(api_router)
