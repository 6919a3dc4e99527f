"""Draw-sheet upload: read player names from a photo for group assignment."""

import asyncio
import logging
import shutil
import tempfile
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from pydantic import BaseModel

from llm.name_extractor import MIME_TYPES, NameExtractionResult, extract_player_names

logger = logging.getLogger(__name__)

router = APIRouter()


class NamesResponse(BaseModel):
    names: List[str]
    raw_lines: List[str]


@router.post("/names", response_model=NamesResponse)
async def extract_names(
    file: UploadFile = File(...),
    user_context: Optional[str] = Form(None),
):
    """Upload a draw-sheet image and get back the candidate player names."""
    suffix = Path(file.filename or "upload.jpg").suffix.lower()
    if suffix not in MIME_TYPES:
        raise HTTPException(
            400, f"Unsupported file type: {suffix}. Allowed: {', '.join(sorted(MIME_TYPES))}"
        )

    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as tmp:
        shutil.copyfileobj(file.file, tmp)
        tmp_path = tmp.name

    try:
        # The Gemini client is synchronous; keep it off the event loop.
        loop = asyncio.get_running_loop()
        result: NameExtractionResult = await loop.run_in_executor(
            None, lambda: extract_player_names(tmp_path, user_context=user_context)
        )
    except EnvironmentError as e:
        raise HTTPException(503, str(e))
    except Exception as e:
        logger.exception("Name extraction failed for %s", file.filename)
        raise HTTPException(500, f"Name extraction failed: {e}")
    finally:
        Path(tmp_path).unlink(missing_ok=True)

    return NamesResponse(names=result.names, raw_lines=result.raw_lines)
