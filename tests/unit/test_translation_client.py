"""
Unit tests for the MyMemory translation client.
"""
import httpx
import pytest

from translateme.config.settings import TranslationProviderSettings
from translateme.core.exceptions import DecodeError, NetworkError, UnsupportedLanguageError
from translateme.models.language import Language
from translateme.services.translation_client import TranslationClient


def _client(handler, **settings):
    return TranslationClient(
        TranslationProviderSettings(**settings),
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_translate_returns_nested_translated_text():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"responseData": {"translatedText": "hola"}, "responseStatus": 200})

    client = _client(handler)
    result = await client.translate("hello", Language.ENGLISH, Language.SPANISH)

    assert result == "hola"
    assert len(requests) == 1
    request = requests[0]
    assert request.method == "GET"
    assert request.url.host == "api.mymemory.translated.net"
    assert request.url.path == "/get"
    assert request.url.params["q"] == "hello"
    assert request.url.params["langpair"] == "en|es"


@pytest.mark.asyncio
async def test_query_text_is_escaped():
    """Reserved characters in the text must not leak into other parameters."""
    text = "fish & chips? 100% = café #1"
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = request.url.params
        return httpx.Response(200, json={"responseData": {"translatedText": "ok"}})

    await _client(handler).translate(text, "fr", "de")

    assert seen["params"]["q"] == text
    assert seen["params"]["langpair"] == "fr|de"
    assert set(seen["params"].keys()) == {"q", "langpair"}


@pytest.mark.asyncio
async def test_contact_email_sent_when_configured():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = request.url.params
        return httpx.Response(200, json={"responseData": {"translatedText": "ciao"}})

    await _client(handler, contact_email="me@example.com").translate("hi", "en", "it")
    assert seen["params"]["de"] == "me@example.com"


@pytest.mark.asyncio
async def test_translated_text_returned_verbatim():
    def handler(request):
        return httpx.Response(200, json={"responseData": {"translatedText": "  Hola,  mundo!\n"}})

    assert await _client(handler).translate("Hello, world!", "en", "es") == "  Hola,  mundo!\n"


@pytest.mark.asyncio
async def test_top_level_translated_text_accepted():
    def handler(request):
        return httpx.Response(200, json={"translatedText": "bonjour"})

    assert await _client(handler).translate("hello", "en", "fr") == "bonjour"


@pytest.mark.asyncio
async def test_transport_failure_raises_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError) as exc_info:
        await _client(handler).translate("hello", "en", "es")
    assert exc_info.value.error_code.value == "NETWORK_ERROR"


@pytest.mark.asyncio
async def test_timeout_raises_network_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(NetworkError):
        await _client(handler, timeout_seconds=1).translate("hello", "en", "es")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        b"",
        b"   ",
        b"<html>Service Unavailable</html>",
        b"[]",
        b'{"responseData": null}',
        b'{"responseData": {"translatedText": 42}}',
        b'{"responseData": {}}',
    ],
)
async def test_unexpected_body_raises_decode_error(body):
    def handler(request):
        return httpx.Response(200, content=body)

    with pytest.raises(DecodeError):
        await _client(handler).translate("hello", "en", "es")


@pytest.mark.asyncio
async def test_error_status_with_valid_body_still_decodes():
    def handler(request):
        return httpx.Response(429, json={"responseData": {"translatedText": "MYMEMORY WARNING"}})

    assert await _client(handler).translate("hello", "en", "es") == "MYMEMORY WARNING"


@pytest.mark.asyncio
async def test_unsupported_language_rejected_before_request():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"responseData": {"translatedText": "x"}})

    with pytest.raises(UnsupportedLanguageError):
        await _client(handler).translate("hello", "en", "ja")
    assert calls == []


def test_no_timeout_by_default():
    client = TranslationClient(TranslationProviderSettings())
    assert client.timeout is None
