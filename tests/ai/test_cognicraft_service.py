import pytest

from src.mira_attendance.mira_attendance.ai import prompts
from src.mira_attendance.mira_attendance.ai.service import CogniCraftService
from src.mira_attendance.mira_attendance.core.exceptions import NotFoundError, ValidationError
from tests.fakes import FakeAIClient


def test_text_tools_fill_the_prompt_template():
    client = FakeAIClient(text="- point")
    svc = CogniCraftService(client)

    assert svc.run_tool("summarize_notes", {"text": "Ohm's law"}) == "- point"
    assert client.calls[0]["contents"] == prompts.SUMMARIZE_NOTES.format(text="Ohm's law")
    assert client.calls[0]["model"] is None


def test_quick_and_complex_answers_use_dedicated_models():
    client = FakeAIClient()
    svc = CogniCraftService(client)

    svc.quick_answer("2+2?")
    svc.complex_query("Prove it")

    assert [c["model"] for c in client.calls] == ["fast-model", "pro-model"]
    assert client.calls[0]["contents"] == "2+2?"


def test_structured_tools_send_their_schema():
    plan = {"title": "Intro", "topic": "Loops", "duration": "60 minutes", "objectives": [], "activities": [],
            "assessment": "Quiz"}
    client = FakeAIClient(json_data=plan)
    svc = CogniCraftService(client)

    assert svc.run_tool("generate_lesson_plan", {"text": "Loops"}) == plan
    assert client.calls[0]["schema"] is prompts.LESSON_PLAN_SCHEMA

    svc.generate_ppt("notes")
    svc.generate_quiz("loops")
    assert client.calls[1]["schema"] is prompts.PPT_SCHEMA
    assert client.calls[2]["schema"] is prompts.QUIZ_SCHEMA


def test_analyze_image_sends_media_then_prompt():
    client = FakeAIClient(text="A circuit diagram")
    svc = CogniCraftService(client)

    result = svc.run_tool("analyze_image", {"media": {"data": "AAEC", "mimeType": "image/png"}})

    assert result == "A circuit diagram"
    image_part, text = client.calls[0]["contents"]
    assert image_part == {"mime_type": "image/png", "data": b"\x00\x01\x02"}
    assert text == "Describe this image."


def test_transcribe_audio():
    client = FakeAIClient(text="hello class")
    svc = CogniCraftService(client)

    assert svc.run_tool("transcribe_audio", {"media": {"dataUrl": "data:audio/mp3;base64,AAEC"}}) == "hello class"
    assert client.calls[0]["contents"][1] == prompts.TRANSCRIBE_AUDIO


def test_empty_text_is_rejected_before_calling_the_model():
    client = FakeAIClient()

    with pytest.raises(ValidationError):
        CogniCraftService(client).run_tool("explain_concept", {"text": "  "})
    assert client.calls == []


def test_unknown_tool():
    svc = CogniCraftService(FakeAIClient())

    with pytest.raises(NotFoundError):
        svc.run_tool("generate_video", {"text": "x"})
    assert "generate_video" not in svc.tool_names
    assert len(svc.tool_names) == 12
