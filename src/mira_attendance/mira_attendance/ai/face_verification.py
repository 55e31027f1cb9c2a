from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from ..core.enums import FaceQuality
from ..core.exceptions import AIServiceError, ValidationError
from .client import AIClient
from .media import InlineMedia, load_image
from .prompts import FACE_VERIFICATION_PROMPT, FACE_VERIFICATION_SCHEMA

logger = logging.getLogger(__name__)

MOCK_NOT_INITIALIZED_REASON = "OK (Mocked Verification - AI Not Initialized)"
MOCK_ERROR_REASON = "OK (Mocked Verification - AI Error)"


@dataclass(frozen=True)
class VerificationResult:
    is_match: bool
    quality: FaceQuality
    reason: str

    @property
    def passed(self) -> bool:
        return self.is_match and self.quality == FaceQuality.GOOD

    def to_dict(self) -> dict:
        return {"isMatch": self.is_match, "quality": self.quality.value, "reason": self.reason}


def _mocked(reason: str) -> VerificationResult:
    return VerificationResult(is_match=True, quality=FaceQuality.GOOD, reason=reason)


class FaceVerifier:
    """Compare a reference photo with a live photo through the AI model.

    The provider is called once; when it is unavailable or fails the result
    falls back to a mocked success so check-ins are never blocked by an outage.
    """

    def __init__(self, client: AIClient, *, image_loader: Callable[[str], InlineMedia] = load_image):
        self._client = client
        self._load_image = image_loader

    def verify(self, reference_image: str, live_image: str) -> VerificationResult:
        if not self._client.is_initialized:
            logger.warning("MOCK: skipping AI face verification (client not initialized)")
            return _mocked(MOCK_NOT_INITIALIZED_REASON)

        try:
            reference = self._load_image(reference_image)
            live = self._load_image(live_image)
            data = self._client.generate_json(
                [FACE_VERIFICATION_PROMPT, reference.as_part(), live.as_part()],
                schema=FACE_VERIFICATION_SCHEMA,
            )
            return VerificationResult(
                is_match=bool(data["isMatch"]),
                quality=FaceQuality(str(data["quality"]).upper()),
                reason=str(data.get("reason") or ""),
            )
        except (AIServiceError, ValidationError, KeyError, TypeError, ValueError) as e:
            logger.error("AI face verification failed: %s", e)
            return _mocked(MOCK_ERROR_REASON)
