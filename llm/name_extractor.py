"""Pull player names off a photographed draw sheet for group assignment."""

import logging
import os
import re
from pathlib import Path
from typing import Iterable, List, Optional

from pydantic import BaseModel, Field

from dotenv import load_dotenv
load_dotenv()

from google import genai
from google.genai import types

from llm.prompts import RawNameExtraction, build_name_extraction_prompt

logger = logging.getLogger(__name__)


# --- Configuration ---

GEMINI_MODEL = "gemini-2.5-flash"
MIN_NAME_CONFIDENCE = 0.5
MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".heic": "image/heic",
}

_DATE = re.compile(r"^\d{2}/\d{2}/\d{4}")
_PHONE = re.compile(r"^\+?\d{7,}")
_TIME = re.compile(r"\d{2}:\d{2}")
_VOTES = re.compile(r"votes", re.IGNORECASE)
_NOT_NAME_CHARS = re.compile(r"[^a-zA-Z\s'-]")
_HAS_LETTER = re.compile(r"[a-zA-Z]")


class NameExtractionResult(BaseModel):
    names: List[str] = Field(default_factory=list)
    raw_lines: List[str] = Field(default_factory=list)


# --- Line filtering ---

def is_candidate_name(line: str) -> bool:
    """Heuristic: does a transcribed line look like a player's name?"""
    line = line.strip()
    if len(line) < 2:
        return False
    if _DATE.search(line) or _PHONE.search(line) or _TIME.search(line):
        return False
    if _VOTES.search(line):
        return False
    if _NOT_NAME_CHARS.search(line):
        return False
    letter_words = [w for w in line.split() if _HAS_LETTER.search(w)]
    if len(letter_words) >= 2:
        return True
    return len(letter_words) == 1 and len(letter_words[0]) >= 3


def filter_candidate_names(lines: Iterable[str]) -> List[str]:
    """Keep name-like lines, stripped, in order, without repeats."""
    seen = set()
    names: List[str] = []
    for line in lines:
        text = line.strip()
        if is_candidate_name(text) and text.lower() not in seen:
            seen.add(text.lower())
            names.append(text)
    return names


# --- File loading ---

def _get_mime_type(file_path: Path) -> str:
    suffix = file_path.suffix.lower()
    if suffix not in MIME_TYPES:
        raise ValueError(
            f"Unsupported file type: {suffix}. "
            f"Supported: {', '.join(sorted(MIME_TYPES.keys()))}"
        )
    return MIME_TYPES[suffix]


def _load_file_as_part(file_path: Path) -> types.Part:
    mime_type = _get_mime_type(file_path)
    return types.Part.from_bytes(data=file_path.read_bytes(), mime_type=mime_type)


# --- API interaction ---

def _create_client() -> genai.Client:
    api_key = os.environ.get("GOOGLE_API_KEY")
    if not api_key:
        raise EnvironmentError(
            "GOOGLE_API_KEY environment variable is not set. "
            "Get an API key at https://aistudio.google.com/apikey"
        )
    return genai.Client(api_key=api_key)


def _call_gemini(client: genai.Client, file_part: types.Part, prompt: str) -> RawNameExtraction:
    response = client.models.generate_content(
        model=GEMINI_MODEL,
        contents=[file_part, prompt],
        config=types.GenerateContentConfig(
            response_mime_type="application/json",
            response_json_schema=RawNameExtraction.model_json_schema(),
        ),
    )
    return RawNameExtraction.model_validate_json(response.text)


# --- Public entry point ---

def extract_player_names(
    image_path: str,
    user_context: Optional[str] = None,
    client: Optional[genai.Client] = None,
) -> NameExtractionResult:
    """
    Read a draw-sheet image and return the likely player names.

    Names the model reports with low confidence are dropped, and every name
    must also pass the line heuristics in ``is_candidate_name``. When the model
    returns no names the transcribed lines are filtered instead.
    """
    path = Path(image_path)
    file_part = _load_file_as_part(path)
    client = client or _create_client()

    raw = _call_gemini(client, file_part, build_name_extraction_prompt(user_context))
    confident = [
        n.value for n in raw.names
        if n.value and n.confidence >= MIN_NAME_CONFIDENCE
    ]
    names = filter_candidate_names(confident or raw.lines)
    logger.info("Extracted %d names from %s", len(names), path.name)
    return NameExtractionResult(names=names, raw_lines=raw.lines)
