import io
import json
import logging
import re
from typing import Any, Dict, List, Optional

import httpx
import webvtt
import yt_dlp
from fastapi.concurrency import run_in_threadpool

from .. import config
from ..errors import CaptionFetchError

logger = logging.getLogger("transcript_server.services.caption_extractor")

# Preferred subtitle formats, best first. JSON is easier to parse.
PREFERRED_FORMATS = ("json3", "vtt")

YDL_OPTS = {
    'skip_download': True,
    'quiet': True,
    'no_warnings': True,
}


async def get_subtitles(video_id: str, lang: str) -> List[Dict[str, str]]:
    """
    Fetches the caption track of a video in one language.
    Returns raw segments ({text, start, dur} with times as strings, in seconds),
    or an empty list when the video has no track in that language.
    """
    info = await run_in_threadpool(_extract_info, video_id, lang)

    track = _select_track(info, lang)
    if track is None:
        logger.info(f"No '{lang}' caption track listed for {video_id}")
        return []

    body = await _download_track(track['url'], video_id, lang)

    try:
        if track['ext'] == 'json3':
            return _parse_json3(body)
        return _parse_vtt(body)
    except Exception as e:
        raise CaptionFetchError(video_id, lang, f"failed to parse {track['ext']} track: {e}") from e


def _extract_info(video_id: str, lang: str) -> Dict[str, Any]:
    video_url = f"https://www.youtube.com/watch?v={video_id}"
    with yt_dlp.YoutubeDL(dict(YDL_OPTS)) as ydl:
        try:
            return ydl.extract_info(video_url, download=False)
        except yt_dlp.utils.DownloadError as e:
            raise CaptionFetchError(video_id, lang, str(e)) from e


def _select_track(info: Dict[str, Any], lang: str) -> Optional[Dict[str, Any]]:
    """
    Picks the best caption format for a language.
    Manually created subtitles win over automatic captions, and an exact
    language code wins over a regional one (en before en-US).
    """
    for source in ('subtitles', 'automatic_captions'):
        tracks = info.get(source) or {}
        for code in _matching_codes(tracks, lang):
            for ext in PREFERRED_FORMATS:
                for fmt in tracks[code] or []:
                    if fmt.get('ext') == ext and fmt.get('url'):
                        return fmt
    return None


def _matching_codes(tracks: Dict[str, Any], lang: str) -> List[str]:
    codes = [lang] if lang in tracks else []
    codes.extend(code for code in tracks if code.startswith(f"{lang}-"))
    return codes


async def _download_track(url: str, video_id: str, lang: str) -> str:
    try:
        async with httpx.AsyncClient(timeout=config.CAPTION_FETCH_TIMEOUT_S, follow_redirects=True) as client:
            response = await client.get(url)
            response.raise_for_status()
    except httpx.HTTPError as e:
        raise CaptionFetchError(video_id, lang, f"track download failed: {e}") from e
    return response.text


def _clean_text(text: str) -> str:
    # Clean up newlines and extra spaces
    return re.sub(r'\s+', ' ', text).strip()


def _parse_json3(body: str) -> List[Dict[str, str]]:
    data = json.loads(body)
    segments = []

    for event in data.get('events', []):
        if not event.get('segs'):
            continue
        if 'tStartMs' not in event or 'dDurationMs' not in event:
            continue

        # Combine the pieces within an event
        text = _clean_text(''.join(seg.get('utf8', '') for seg in event['segs']))
        if not text:
            continue

        segments.append({
            "text": text,
            "start": str(event['tStartMs'] / 1000.0),
            "dur": str(event['dDurationMs'] / 1000.0),
        })

    return segments


def _parse_vtt(body: str) -> List[Dict[str, str]]:
    segments = []

    for caption in webvtt.read_buffer(io.StringIO(body)):
        text = _clean_text(re.sub(r'<[^>]+>', '', caption.text))
        if not text:
            continue

        start = _cue_seconds(caption.start)
        end = _cue_seconds(caption.end)

        segments.append({
            "text": text,
            "start": str(start),
            "dur": str(round(end - start, 3)),
        })

    return segments


def _cue_seconds(timestamp: str) -> float:
    # [HH:]MM:SS.mmm
    seconds = 0.0
    for part in timestamp.split(':'):
        seconds = seconds * 60 + float(part)
    return seconds
