import json

import pytest

from config.config import FetchConfig
from models.formatted_response import ResponseFormat
from tests.html_samples import GOOGLE_ORGANIC_HTML
from tools.web.errors import ContentTypeMismatchError, SizeLimitExceededError
from tools.web.normalizer import ResponseNormalizer, content_type_satisfies, is_search_results_url

pytestmark = pytest.mark.unit

PAGE_URL = "https://example.com/page"
SEARCH_URL = "https://www.google.com/search?q=python&num=10&udm=14"


@pytest.fixture
def normalizer():
    return ResponseNormalizer(FetchConfig())


@pytest.mark.parametrize(
    "content_type,fmt,expected",
    [
        ("application/json; charset=utf-8", ResponseFormat.JSON, True),
        ("text/html", ResponseFormat.JSON, False),
        ("text/html; charset=utf-8", ResponseFormat.HTML, True),
        ("application/json", ResponseFormat.HTML, False),
        ("TEXT/HTML", ResponseFormat.HTML, True),
        ("text/markdown", ResponseFormat.MARKDOWN, True),
        ("", ResponseFormat.TEXT, True),
        (None, ResponseFormat.JSON, False),
    ],
)
def test_content_type_satisfies(content_type, fmt, expected):
    assert content_type_satisfies(content_type, fmt) is expected


def test_search_endpoint_matched_by_origin_and_path():
    endpoint = "https://www.google.com/search"
    assert is_search_results_url(SEARCH_URL, endpoint)
    assert is_search_results_url("https://www.google.com/search", endpoint)
    assert not is_search_results_url("https://www.google.com/maps?q=x", endpoint)
    assert not is_search_results_url("http://www.google.com/search?q=x", endpoint)
    assert not is_search_results_url("https://google.com.evil.test/search", endpoint)


def test_json_is_pretty_printed_and_round_trips(normalizer):
    body = '{"b": [1, 2, {"c": null}],   "a": "\\u00e9"}'
    out = normalizer.normalize(
        {"content-type": "application/json"}, body, ResponseFormat.JSON, PAGE_URL
    )
    assert json.loads(out) == json.loads(body)
    assert out == json.dumps(json.loads(body), indent=2, ensure_ascii=False)


def test_json_against_non_json_content_type_fails(normalizer):
    with pytest.raises(ContentTypeMismatchError, match="not JSON"):
        normalizer.normalize({"content-type": "text/html"}, "{}", ResponseFormat.JSON, PAGE_URL)


def test_unparsable_json_body_fails(normalizer):
    with pytest.raises(ContentTypeMismatchError):
        normalizer.normalize(
            {"content-type": "application/json"}, "{not json", ResponseFormat.JSON, PAGE_URL
        )


def test_html_requires_html_content_type(normalizer):
    body = "<p>hello</p>"
    assert normalizer.normalize({"Content-Type": "text/html"}, body, ResponseFormat.HTML, PAGE_URL) == body
    with pytest.raises(ContentTypeMismatchError, match="not HTML"):
        normalizer.normalize({"content-type": "text/plain"}, body, ResponseFormat.HTML, PAGE_URL)


def test_markdown_dispatch(normalizer):
    html_out = normalizer.normalize(
        {"content-type": "text/html"}, "<h2>Title</h2>", ResponseFormat.MARKDOWN, PAGE_URL
    )
    assert html_out == "# Title"

    md = "# Already markdown"
    assert normalizer.normalize({"content-type": "text/markdown"}, md, ResponseFormat.MARKDOWN, PAGE_URL) == md

    fenced = normalizer.normalize({"content-type": "text/plain"}, "raw", ResponseFormat.MARKDOWN, PAGE_URL)
    assert fenced == "```\nraw\n```"


def test_text_is_verbatim_without_validation(normalizer):
    body = "<b>not converted</b>"
    assert normalizer.normalize({"content-type": "image/png"}, body, ResponseFormat.TEXT, PAGE_URL) == body


def test_search_page_routes_to_extractor_regardless_of_content_type(normalizer):
    out = normalizer.normalize(
        {"content-type": "text/html"}, GOOGLE_ORGANIC_HTML, ResponseFormat.JSON, SEARCH_URL
    )
    payload = json.loads(out)
    assert [r["url"] for r in payload] == [
        "https://example.com/one",
        "https://example.org/two",
        "https://example.net/three",
    ]


def test_search_page_uses_configured_cap_by_default():
    normalizer = ResponseNormalizer(FetchConfig(max_search_results=1))
    out = normalizer.normalize({}, GOOGLE_ORGANIC_HTML, ResponseFormat.JSON, SEARCH_URL)
    assert len(json.loads(out)) == 1

    out = normalizer.normalize({}, GOOGLE_ORGANIC_HTML, ResponseFormat.JSON, SEARCH_URL, max_results=2)
    assert len(json.loads(out)) == 2


def test_declared_size_over_limit_fails():
    normalizer = ResponseNormalizer(FetchConfig(max_response_bytes=100))
    with pytest.raises(SizeLimitExceededError):
        normalizer.enforce_size_limit({"Content-Length": "101"})
    normalizer.enforce_size_limit({"content-length": "100"})
    normalizer.enforce_size_limit({"content-length": "not-a-number"})
    normalizer.enforce_size_limit({})


def test_search_endpoint_default_port_is_same_origin():
    endpoint = "https://www.google.com/search"
    assert is_search_results_url("https://www.google.com:443/search?q=x", endpoint)
    assert is_search_results_url("HTTPS://WWW.GOOGLE.COM/search?q=x", endpoint)
    assert not is_search_results_url("https://www.google.com:8443/search?q=x", endpoint)
    assert not is_search_results_url("https://www.google.com:notaport/search", endpoint)
