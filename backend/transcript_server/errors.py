MISSING_VIDEO_ID = "Missing videoId parameter"
NO_SUBTITLES = "No subtitles available for this video. Subtitles may be disabled or unavailable."


class TranscriptServerError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(TranscriptServerError):
    status_code = 400

    def __init__(self, message: str = MISSING_VIDEO_ID):
        super().__init__(message)


class NotFoundError(TranscriptServerError):
    status_code = 404

    def __init__(self, message: str = NO_SUBTITLES):
        super().__init__(message)


class CaptionFetchError(Exception):
    """A single (video, language) fetch failed. Only ever advances the fallback loop."""

    def __init__(self, video_id: str, lang: str, reason: str):
        super().__init__(f"Could not fetch '{lang}' captions for {video_id}: {reason}")
        self.video_id = video_id
        self.lang = lang
        self.reason = reason
