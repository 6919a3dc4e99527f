from pydantic import BaseModel, Field
from typing import List, Optional


# ================================================================
# Prompt fragments
# ================================================================

_PREAMBLE = "You are reading a photo or screenshot of a golf competition draw sheet."

_TASK_INSTRUCTIONS = """
The image usually comes from a club noticeboard or a group chat. It lists the
players entered for the day, often arranged in fourballs with tee times.
Transcribe every line of text you can see, top to bottom, exactly as written."""

_NAME_INSTRUCTIONS = """
Then list the player names separately:
- Keep nicknames and quotes as written (e.g. Brian 'Grizzly' Smith).
- Do NOT include dates, tee times, phone numbers, vote counts, headings or
  course names.
- Keep the order the names appear in; consecutive names on the sheet are
  usually the same fourball."""

_JSON_INSTRUCTIONS = """
Return a JSON object with this exact structure:
{
  "lines": ["every transcribed line, in order"],
  "names": [{"value": "player name", "confidence": 0.0}]
}
Confidence is 0.0 to 1.0 for how sure you are the text was read correctly."""


def _append_user_context(prompt: str, user_context: Optional[str]) -> str:
    if not user_context:
        return prompt
    return prompt + "\nADDITIONAL CONTEXT FROM THE ORGANISER:\n" + user_context + "\n"


def build_name_extraction_prompt(user_context: Optional[str] = None) -> str:
    """Prompt asking for the raw lines and the player names on a draw sheet."""
    prompt = (
        _PREAMBLE
        + _TASK_INSTRUCTIONS
        + _NAME_INSTRUCTIONS
        + _JSON_INSTRUCTIONS
    )
    return _append_user_context(prompt, user_context)


# ================================================================
# Response models
# ================================================================

class AnnotatedName(BaseModel):
    value: Optional[str] = None
    confidence: float = Field(0.0, ge=0.0, le=1.0)


class RawNameExtraction(BaseModel):
    lines: List[str] = Field(default_factory=list)
    names: List[AnnotatedName] = Field(default_factory=list)
