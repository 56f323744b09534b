"""FastAPI application for Orfo spell checking and transliteration."""

import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .. import config
from ..llm.base import ProviderError
from ..spellcheck.models import ParsedLLMResponse, WordSuggestion
from ..utils.script import ScriptType, count_script_letters, detect_script
from ..utils.transliterate import TransliterationResult, transliterate
from .spellcheck import (
    BatchSpellCheckRequest,
    SpellCheckRequest,
    SpellCheckService,
    SuggestionRequest,
)

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Orfo API",
    description="Karakalpak spell checking and Cyrillic/Latin transliteration",
    version="1.0.0",
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

spellcheck_service = SpellCheckService()


class DetectRequest(BaseModel):
    text: str


class DetectResponse(BaseModel):
    script: ScriptType
    cyrillic_count: int
    latin_count: int


class TransliterateRequest(BaseModel):
    text: str
    target: Optional[str] = None  # "latin", "cyrillic" or None/"auto"


@app.get("/api/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/api/detect", response_model=DetectResponse)
def detect(request: DetectRequest):
    """Detect whether text is Cyrillic, Latin, mixed or unknown."""
    cyrillic_count, latin_count = count_script_letters(request.text)
    return DetectResponse(
        script=detect_script(request.text),
        cyrillic_count=cyrillic_count,
        latin_count=latin_count,
    )


@app.post("/api/transliterate", response_model=TransliterationResult)
def transliterate_text(request: TransliterateRequest):
    """Convert text between Cyrillic and Latin Karakalpak."""
    try:
        return transliterate(request.text, request.target)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/api/spellcheck", response_model=ParsedLLMResponse)
def spellcheck(request: SpellCheckRequest):
    """Spell-check text with the configured LLM provider."""
    try:
        return spellcheck_service.check(request.text)
    except ProviderError as e:
        logger.error(f"Spell check failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))


@app.post("/api/spellcheck/batch", response_model=List[ParsedLLMResponse])
def spellcheck_batch(request: BatchSpellCheckRequest):
    """Spell-check several texts in one request."""
    return spellcheck_service.check_many(request.texts)


@app.post("/api/suggestions", response_model=List[WordSuggestion])
def suggestions(request: SuggestionRequest):
    """Get spelling suggestions for a single word."""
    try:
        return spellcheck_service.suggest(request.word, request.limit)
    except ProviderError as e:
        logger.error(f"Suggestions failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))
