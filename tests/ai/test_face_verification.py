import base64
import io

from PIL import Image

from src.mira_attendance.mira_attendance.ai.face_verification import (
    MOCK_ERROR_REASON,
    MOCK_NOT_INITIALIZED_REASON,
    FaceVerifier,
)
from src.mira_attendance.mira_attendance.ai.media import InlineMedia
from src.mira_attendance.mira_attendance.core.enums import FaceQuality
from src.mira_attendance.mira_attendance.core.exceptions import AIServiceError, ValidationError
from tests.fakes import FakeAIClient


def _loader(source):
    return InlineMedia(mime_type="image/jpeg", data=source.encode())


def test_uninitialized_client_returns_mocked_success():
    verifier = FaceVerifier(FakeAIClient(initialized=False), image_loader=_loader)

    result = verifier.verify("ref", "live")

    assert result.passed
    assert result.reason == MOCK_NOT_INITIALIZED_REASON


def test_match_is_parsed_from_model_json():
    client = FakeAIClient(json_data={"quality": "GOOD", "isMatch": True, "reason": "OK"})
    verifier = FaceVerifier(client, image_loader=_loader)

    result = verifier.verify("ref", "live")

    assert result.passed
    assert result.to_dict() == {"isMatch": True, "quality": "GOOD", "reason": "OK"}
    contents = client.calls[0]["contents"]
    assert contents[1] == {"mime_type": "image/jpeg", "data": b"ref"}
    assert contents[2] == {"mime_type": "image/jpeg", "data": b"live"}


def test_poor_quality_does_not_pass():
    client = FakeAIClient(json_data={"quality": "POOR", "isMatch": True, "reason": "Blurry photo"})

    result = FaceVerifier(client, image_loader=_loader).verify("ref", "live")

    assert result.quality == FaceQuality.POOR
    assert not result.passed


def test_provider_error_falls_back_to_mocked_success():
    client = FakeAIClient(error=AIServiceError("down"))

    result = FaceVerifier(client, image_loader=_loader).verify("ref", "live")

    assert result.passed
    assert result.reason == MOCK_ERROR_REASON


def test_unloadable_image_falls_back_to_mocked_success():
    def broken_loader(source):
        raise ValidationError("Unsupported image source")

    result = FaceVerifier(FakeAIClient(), image_loader=broken_loader).verify("ref", "live")

    assert result.reason == MOCK_ERROR_REASON


def test_incomplete_model_json_falls_back():
    client = FakeAIClient(json_data={"quality": "GOOD"})

    assert FaceVerifier(client, image_loader=_loader).verify("ref", "live").reason == MOCK_ERROR_REASON


def test_non_string_live_image_falls_back_with_default_loader():
    out = io.BytesIO()
    Image.new("RGB", (4, 4), (0, 128, 255)).save(out, format="PNG")
    reference = "data:image/png;base64," + base64.b64encode(out.getvalue()).decode()
    client = FakeAIClient(json_data={"quality": "GOOD", "isMatch": False, "reason": "No"})

    result = FaceVerifier(client).verify(reference, {"not": "a string"})

    assert result.reason == MOCK_ERROR_REASON
    assert client.calls == []
