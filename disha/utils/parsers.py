import re
import json
import logging
import io
from pypdf import PdfReader

logger = logging.getLogger(__name__)

class ParseError(ValueError):
    """The model answered, but not with JSON we can use."""

def extract_text_from_pdf(file_content: bytes) -> str:
    """Reads bytes (from upload or file) and returns clean text."""
    try:
        reader = PdfReader(io.BytesIO(file_content))
        text = ""
        for page in reader.pages:
            text += page.extract_text() or ""
        return text.strip()
    except Exception as e:
        logger.error(f"PDF Parse Error: {e}")
        return ""

def parse_json_response(text: str, expect=list):
    """
    Strips '```json' fences and any chatter around the payload, then parses it.

    `expect` is the top-level type the caller asked for (list or dict).
    Raises ParseError when the text is empty, not JSON, or the wrong shape.
    """
    if not text or not text.strip():
        raise ParseError("Empty response from model.")

    # 1. Remove Markdown code blocks
    cleaned = re.sub(r"```json|```", "", text, flags=re.IGNORECASE).strip()

    # 2. Cut from the first opening bracket to the last closing one
    opener, closer = ("[", "]") if expect is list else ("{", "}")
    start_idx = cleaned.find(opener)
    end_idx = cleaned.rfind(closer)

    if start_idx == -1 or end_idx < start_idx:
        logger.error("Could not find any JSON-like structure in AI response.")
        raise ParseError(f"No JSON {expect.__name__} found in response.")

    json_str = cleaned[start_idx : end_idx + 1]

    # 3. Parse. strict=False lets raw newlines through inside strings.
    try:
        data = json.loads(json_str, strict=False)
    except json.JSONDecodeError as e:
        logger.error(f"JSON Parsing Failed: {e}")
        logger.debug(f"Bad JSON String: {json_str[:500]}...")
        raise ParseError(str(e)) from e

    if not isinstance(data, expect):
        raise ParseError(f"Expected a JSON {expect.__name__}, got {type(data).__name__}.")

    return data
