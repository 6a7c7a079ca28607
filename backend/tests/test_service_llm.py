import pytest
import httpx # Import for httpx.RequestError, httpx.TimeoutException
from unittest.mock import patch, AsyncMock, MagicMock

from meeting_notes.errors import ErrorKind, MalformedResponse, UpstreamUnavailable
from meeting_notes.models.transcript import SummaryResult
from meeting_notes.services.llm import GeminiSummarizationClient, extract_completion_text

from .helpers import completion, gemini_error_response, gemini_response

# --- Response parsing ---


def test_extract_completion_text():
    assert extract_completion_text(completion("## Summary\nok")) == "## Summary\nok"


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"candidates": []},
        {"candidates": [{"content": {"parts": []}}]},
        {"candidates": [{"finishReason": "SAFETY"}]},
        {"candidates": [{"content": {"parts": [{"inlineData": {}}]}}]},
        ["not", "an", "object"],
    ],
)
def test_extract_completion_text_missing_field(payload):
    with pytest.raises(MalformedResponse):
        extract_completion_text(payload)


def test_extract_completion_text_rejects_non_string():
    with pytest.raises(MalformedResponse):
        extract_completion_text({"candidates": [{"content": {"parts": [{"text": 42}]}}]})


# --- Client ---

@pytest.mark.asyncio
@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
async def test_summarize_success(mock_post, settings):
    mock_post.return_value = gemini_response(completion("## Summary\nShip Friday."))

    result = await GeminiSummarizationClient(settings).summarize("the prompt")

    assert result == SummaryResult(markdown="## Summary\nShip Friday.")

    # Verify httpx.AsyncClient.post was called correctly
    mock_post.assert_called_once()
    args, kwargs = mock_post.call_args
    assert args[0] == "https://gemini.test/v1/models/gemini-test:generateContent"
    assert kwargs["json"] == {"contents": [{"role": "user", "parts": [{"text": "the prompt"}]}]}
    assert kwargs["headers"]["x-goog-api-key"] == "test-key"
    # The key must not end up in the URL, where it would be logged.
    assert "test-key" not in args[0]


@pytest.mark.asyncio
@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
async def test_summarize_returns_text_verbatim(mock_post, settings):
    raw = "  ## Summary\n\n- **Budget** approved  \n"
    mock_post.return_value = gemini_response(completion(raw))

    result = await GeminiSummarizationClient(settings).summarize("p")

    assert result.markdown == raw


@pytest.mark.asyncio
@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
async def test_summarize_missing_text_is_malformed(mock_post, settings):
    mock_post.return_value = gemini_response({"candidates": [{"finishReason": "SAFETY"}]})

    with pytest.raises(MalformedResponse) as excinfo:
        await GeminiSummarizationClient(settings).summarize("p")

    assert excinfo.value.kind is ErrorKind.MALFORMED_RESPONSE
    mock_post.assert_called_once()


@pytest.mark.asyncio
@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
async def test_summarize_non_json_body_is_malformed(mock_post, settings):
    response = gemini_response({})
    response.json.side_effect = ValueError("Expecting value")
    mock_post.return_value = response

    with pytest.raises(MalformedResponse):
        await GeminiSummarizationClient(settings).summarize("p")


@pytest.mark.asyncio
@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
async def test_client_error_status_is_not_retried(mock_post, settings):
    mock_post.return_value = gemini_error_response(400, "API key not valid")

    with pytest.raises(UpstreamUnavailable) as excinfo:
        await GeminiSummarizationClient(settings).summarize("p")

    assert excinfo.value.status_code == 400
    assert "API key not valid" in excinfo.value.detail
    mock_post.assert_called_once()


@pytest.mark.asyncio
@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
async def test_internal_server_error_is_not_retried(mock_post, settings):
    mock_post.return_value = gemini_error_response(500, "boom")

    with pytest.raises(UpstreamUnavailable):
        await GeminiSummarizationClient(settings).summarize("p")

    mock_post.assert_called_once()


@pytest.mark.asyncio
@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
async def test_service_unavailable_is_retried(mock_post, settings):
    mock_post.side_effect = [
        gemini_error_response(503, "overloaded"),
        gemini_response(completion("## Summary\nsecond try")),
    ]

    result = await GeminiSummarizationClient(settings).summarize("p")

    assert result.markdown == "## Summary\nsecond try"
    assert mock_post.call_count == 2


@pytest.mark.asyncio
@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
async def test_connection_errors_exhaust_retries(mock_post, settings):
    mock_post.side_effect = httpx.ConnectError("Connection failed", request=MagicMock())

    with pytest.raises(UpstreamUnavailable) as excinfo:
        await GeminiSummarizationClient(settings).summarize("p")

    assert excinfo.value.status_code is None
    assert mock_post.call_count == settings.gemini_max_retries + 1


@pytest.mark.asyncio
@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
async def test_timeout_is_upstream_unavailable(mock_post, settings):
    mock_post.side_effect = httpx.ReadTimeout("timed out", request=MagicMock())

    with pytest.raises(UpstreamUnavailable, match="Timed out"):
        await GeminiSummarizationClient(settings).summarize("p")


@pytest.mark.asyncio
@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
async def test_retries_disabled(mock_post, settings):
    no_retry = settings.model_copy(update={"gemini_max_retries": 0})
    mock_post.side_effect = httpx.ConnectError("Connection failed", request=MagicMock())

    with pytest.raises(UpstreamUnavailable):
        await GeminiSummarizationClient(no_retry).summarize("p")

    mock_post.assert_called_once()
