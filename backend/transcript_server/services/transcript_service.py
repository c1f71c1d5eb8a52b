import logging
from typing import Any, Awaitable, Callable, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..errors import BadRequestError, NotFoundError
from ..models import TranscriptSegment

logger = logging.getLogger("transcript_server.services.transcript_service")

CaptionFetcher = Callable[[str, str], Awaitable[Sequence[Mapping[str, Any]]]]


def format_transcript(transcript: Iterable[Mapping[str, Any]]) -> List[TranscriptSegment]:
    """
    Clean and format raw caption data.
    The extractor gives 'start' and 'dur' in seconds (as strings).
    """
    return [
        TranscriptSegment(
            text=item["text"],
            start=float(item["start"]),
            duration=float(item["dur"]),
        )
        for item in transcript
    ]


class TranscriptService:
    """
    Fetches a transcript by walking the language priority list.
    The first language that yields a non-empty track wins.
    """

    def __init__(self, fetch_captions: CaptionFetcher, languages: Tuple[str, ...]):
        self.fetch_captions = fetch_captions
        self.languages = tuple(languages)

    async def get_transcript(self, video_id: Optional[str]) -> List[TranscriptSegment]:
        if not video_id:
            raise BadRequestError()

        # Loop through priority languages
        for lang in self.languages:
            logger.info(f"[Server] Attempting language: {lang} for {video_id}")
            try:
                fetched = await self.fetch_captions(video_id, lang)
                if not fetched:
                    logger.info(f"[Server] No captions for {lang}. Will try next language.")
                    continue
                # A track that does not normalize counts as a failed attempt
                cleaned = format_transcript(fetched)
            except Exception as e:
                logger.info(f"[Server] Failed for {lang} ({type(e).__name__}: {e}). Will try next language.")
                continue

            logger.info(f"[Server] Successfully fetched {len(cleaned)} segments in language: {lang}")
            return cleaned

        logger.error(f"[Server] All transcript attempts failed for {video_id}.")
        raise NotFoundError()
