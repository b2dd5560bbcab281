import pytest

from models.formatted_response import FormattedResponse, ResponseFormat, ToolError
from server.schemas.responses import ToolResponseDTO
from tools.web.errors import HttpStatusError, RateLimitedError, ValidationError

pytestmark = pytest.mark.unit


def test_mime_types():
    assert ResponseFormat.TEXT.mime_type == "text/plain"
    assert ResponseFormat.JSON.mime_type == "application/json"
    assert ResponseFormat.HTML.mime_type == "text/html"
    assert ResponseFormat.MARKDOWN.mime_type == "text/markdown"


def test_success_envelope_has_one_text_item():
    fr = FormattedResponse.success("# Hi", ResponseFormat.MARKDOWN, {"url": "https://x.test"})
    assert fr.to_envelope() == {
        "content": [{"type": "text", "text": "# Hi", "mimeType": "text/markdown"}],
        "metadata": {"url": "https://x.test"},
        "isError": False,
    }


def test_failure_envelope_text_is_the_error_message():
    fr = FormattedResponse.failure(HttpStatusError(500, "Internal Server Error").to_tool_error())
    envelope = fr.to_envelope()

    assert envelope["isError"] is True
    assert envelope["content"][0]["text"] == "HTTP 500: Internal Server Error"
    assert envelope["content"][0]["mimeType"] == "text/plain"
    assert envelope["error"] == {
        "code": "http_error",
        "message": "HTTP 500: Internal Server Error",
        "retryable": False,
        "details": {"status": 500},
    }


def test_error_kinds_map_to_codes():
    assert ValidationError("bad").to_tool_error().code == "validation_error"
    rate = RateLimitedError("slow down").to_tool_error()
    assert rate.code == "rate_limit" and rate.retryable is True


def test_unknown_error_code_is_normalized():
    assert ToolError(code="weird", message="x").code == "unknown"


def test_dto_matches_envelope_shape():
    fr = FormattedResponse.failure(ToolError(code="timeout", message="Request timed out after 10ms"))
    dumped = ToolResponseDTO.from_formatted_response(fr).model_dump(by_alias=True)

    envelope = fr.to_envelope()
    assert dumped["content"] == envelope["content"]
    assert dumped["isError"] == envelope["isError"]
    assert dumped["error"] == envelope["error"]
