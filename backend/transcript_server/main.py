import logging
from dotenv import load_dotenv

# Load environment variables before importing other modules
load_dotenv()

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from . import config
from .errors import TranscriptServerError
from .routes import transcript_routes
from .services.caption_extractor import get_subtitles
from .services.transcript_service import TranscriptService

logger = logging.getLogger("transcript_server.main")

VERSION = "1.0.0"

app = FastAPI(
    title="Transcript Server API",
    description="Relay that fetches YouTube captions with automatic language fallback and returns a normalized transcript",
    version=VERSION,
)

# Configure CORS to allow the browser extension to connect
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
)

app.state.transcript_service = TranscriptService(get_subtitles, config.LANGUAGES_TO_TRY)

app.include_router(transcript_routes.router, prefix="/api", tags=["transcript"])


@app.exception_handler(TranscriptServerError)
async def transcript_server_error_handler(request: Request, exc: TranscriptServerError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.get("/")
async def root():
    return {
        "message": "Welcome to Transcript Server API",
        "version": VERSION,
        "docs": "/docs",
    }


def run():
    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(f"Transcript Server listening at http://{config.HOST}:{config.PORT}")
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())
