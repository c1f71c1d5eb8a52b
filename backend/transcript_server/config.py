import os
from typing import Tuple

HOST = os.getenv("HOST", "localhost")
PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Languages to try, in priority order (English first)
DEFAULT_LANGUAGES = "en,fr,es,de"

CAPTION_FETCH_TIMEOUT_S = float(os.getenv("CAPTION_FETCH_TIMEOUT_S", "30"))


def parse_languages(raw: str) -> Tuple[str, ...]:
    """Split a comma separated language list, dropping blanks and duplicates."""
    languages = []
    for code in raw.split(","):
        code = code.strip()
        if code and code not in languages:
            languages.append(code)
    return tuple(languages)


LANGUAGES_TO_TRY = parse_languages(os.getenv("TRANSCRIPT_LANGUAGES", DEFAULT_LANGUAGES)) \
    or parse_languages(DEFAULT_LANGUAGES)
