from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from canvasgen.api.routes import router
from canvasgen.config import CORS_ORIGINS, LOG_LEVEL
from canvasgen.logging_config import configure_logging

configure_logging(LOG_LEVEL)

app = FastAPI(
    title="Canvas Content Generator",
    version="0.1.0",
)

# Middleware first
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes after middleware
app.include_router(router)
