import pytest

from tests.html_samples import GOOGLE_ALTERNATE_HTML, GOOGLE_NEWS_HTML, GOOGLE_ORGANIC_HTML
from tools.web.contracts import SearchResult
from tools.web.errors import ExtractionError
from tools.web.extractor import ResultExtractor, unwrap_redirect

pytestmark = pytest.mark.unit


def test_primary_strategy_extracts_in_document_order():
    results = ResultExtractor().extract(GOOGLE_ORGANIC_HTML, max_results=10)

    assert [r.title for r in results] == ["First result", "Second result", "Third result"]
    assert results[0].url == "https://example.com/one"
    assert results[0].description == "Snippet for the first result."
    assert results[2].description is None


def test_redirect_links_are_unwrapped():
    results = ResultExtractor().extract(GOOGLE_ORGANIC_HTML, max_results=10)
    assert results[1].url == "https://example.org/two"


def test_script_content_is_never_parsed_as_results():
    results = ResultExtractor().extract(GOOGLE_ORGANIC_HTML, max_results=10)
    assert all("evil.test" not in r.url for r in results)


def test_results_are_capped():
    results = ResultExtractor().extract(GOOGLE_ORGANIC_HTML, max_results=2)
    assert len(results) == 2


def test_alternate_strategy_used_when_primary_is_empty():
    results = ResultExtractor().extract(GOOGLE_ALTERNATE_HTML, max_results=10)
    assert [r.url for r in results] == ["https://alt.example/a", "https://alt.example/b"]
    assert results[0].description == "Alternate snippet A"


def test_news_cluster_strategy_takes_priority():
    results = ResultExtractor().extract(GOOGLE_NEWS_HTML, max_results=10)

    assert [r.title for r in results] == ["Big story one", "Big story two"]
    assert results[0].description == "Summary of story one"
    assert results[1].description is None


def test_no_matching_elements_returns_empty_list():
    assert ResultExtractor().extract("<html><body><p>nothing here</p></body></html>", 10) == []
    assert ResultExtractor().extract("", 10) == []


def test_never_returns_blank_title_or_url():
    markup = """
    <div class="g"><a href="   "><h3>Blank url</h3></a></div>
    <div class="g"><a href="https://x.test"><h3>   </h3></a></div>
    <div class="g"><h3>No anchor</h3></div>
    <div class="g"><a href="https://ok.test"><h3>Fine</h3></a></div>
    """
    results = ResultExtractor().extract(markup, 10)
    assert [(r.title, r.url) for r in results] == [("Fine", "https://ok.test")]


def test_duplicate_urls_within_a_strategy_are_dropped():
    markup = """
    <div class="g"><div class="g"><a href="https://dup.test"><h3>Nested</h3></a></div></div>
    """
    results = ResultExtractor().extract(markup, 10)
    assert len(results) == 1


def test_parser_failure_is_wrapped(monkeypatch):
    import tools.web.extractor as extractor_module

    def _boom(*args, **kwargs):
        raise RuntimeError("parser exploded")

    monkeypatch.setattr(extractor_module, "BeautifulSoup", _boom)
    with pytest.raises(ExtractionError, match="parser exploded"):
        ResultExtractor().extract("<div class='g'></div>", 5)


def test_unwrap_redirect_leaves_plain_links_alone():
    assert unwrap_redirect("https://example.com/url?q=x") == "https://example.com/url?q=x"
    assert unwrap_redirect("/search?q=python") == "/search?q=python"
    assert unwrap_redirect("/url?q=https://target.test/page") == "https://target.test/page"


def test_search_result_rejects_empty_title_or_url():
    with pytest.raises(ValueError):
        SearchResult(title=" ", url="https://x.test")
    with pytest.raises(ValueError):
        SearchResult(title="x", url="")


def test_generic_cards_do_not_hide_organic_results():
    markup = """
    <g-card><a href="https://card.test/promo"><div role="heading">Carousel card</div></a></g-card>
    <div class="g"><a href="https://example.com/one"><h3>Organic one</h3></a></div>
    <div class="g"><a href="https://example.com/two"><h3>Organic two</h3></a></div>
    """
    results = ResultExtractor().extract(markup, 10)
    assert [r.title for r in results] == ["Organic one", "Organic two"]
