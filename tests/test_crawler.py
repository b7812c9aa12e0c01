import pytest

import textsearch.crawler as crawler_module
from textsearch.concurrent_index import ConcurrentInvertedIndex
from textsearch.crawler import WebCrawler, crawl
from textsearch.work_queue import WorkQueue

SEED = "https://example.com/"
PAGE_A = "https://example.com/a.html"
PAGE_B = "https://example.com/b.html"

PAGES = {
    SEED: """
        <html><head><title>Home page</title></head>
        <body><p>cat sat</p>
        <a href="/a.html"></a> <a href="b.html#top"></a>
        <a href="mailto:someone@example.com"></a>
        </body></html>
    """,
    PAGE_A: '<html><body>cat dog <a href="/">home</a></body></html>',
    PAGE_B: '<html><body>dog <a href="/missing.html">gone</a></body></html>',
}


@pytest.fixture
def fetched(monkeypatch):
    calls = []

    def fake_fetch(uri, redirects):
        calls.append(uri)
        return PAGES.get(uri)

    monkeypatch.setattr(crawler_module, "fetch_html", fake_fetch)
    return calls


def test_default_crawl_indexes_only_the_seed(fetched):
    index = crawl(SEED, threads=2)
    assert fetched == [SEED]
    assert index.counts() == {SEED: 2}
    assert index.locations("cat") == (SEED,)
    assert not index.has_term("home")


def test_crawl_follows_links_up_to_max_pages(fetched):
    index = crawl(SEED, threads=3, max_pages=10)
    assert sorted(fetched) == sorted([SEED, PAGE_A, PAGE_B, "https://example.com/missing.html"])
    assert index.locations("dog") == (PAGE_A, PAGE_B)
    assert index.counts() == {SEED: 2, PAGE_A: 3, PAGE_B: 2}
    assert index.positions("home", PAGE_A) == frozenset({3})


def test_crawl_stops_at_max_pages(fetched):
    index = ConcurrentInvertedIndex()
    with WorkQueue(2) as queue:
        crawler = WebCrawler(index, queue, SEED, max_pages=2)
        crawler.crawl()
        assert crawler.visited == {SEED, PAGE_A}
    assert sorted(index.counts()) == [SEED, PAGE_A]


def test_visited_pages_are_not_crawled_again(fetched):
    index = ConcurrentInvertedIndex()
    with WorkQueue(2) as queue:
        crawler = WebCrawler(index, queue, SEED)
        crawler.crawl()
        crawler.crawl(SEED + "#fragment")
        crawler.crawl(PAGE_B)
    assert fetched == [SEED, PAGE_B]
    assert index.counts() == {SEED: 2, PAGE_B: 2}


def test_failed_fetch_indexes_nothing(fetched):
    index = crawl("https://example.com/missing.html", threads=1, max_pages=5)
    assert index.is_empty()
    assert index.counts() == {}


def test_max_pages_must_be_positive():
    with pytest.raises(ValueError):
        WebCrawler(ConcurrentInvertedIndex(), None, SEED, max_pages=0)
