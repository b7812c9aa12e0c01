"""
Web crawler that indexes pages into a shared index.

Starting from a seed URL, each page is fetched, stripped to text, stemmed into
a local index keyed by the page URL and merged into the shared index. Links
found on a page are followed breadth-first until max_pages URLs have been
seen; with the default of 1 only the seed is indexed.
"""

import logging
import threading

from .concurrent_index import ConcurrentInvertedIndex
from .config import DEFAULT_MAX_PAGES, MAX_REDIRECTS
from .fetcher import fetch_html
from .posting import InvertedIndex
from .tokenizer import find_links, html_stems, make_stemmer, normalize_url
from .work_queue import WorkQueue

logger = logging.getLogger(__name__)


class WebCrawler:
    def __init__(
        self,
        index: ConcurrentInvertedIndex,
        queue: WorkQueue,
        seed: str,
        max_pages: int = DEFAULT_MAX_PAGES,
        redirects: int = MAX_REDIRECTS,
    ) -> None:
        if max_pages < 1:
            raise ValueError("max_pages must be a positive integer.")
        self.index = index
        self.queue = queue
        self.seed = normalize_url(seed)
        self.max_pages = max_pages
        self.redirects = redirects
        self._visited: set[str] = set()
        self._visited_lock = threading.Lock()
        logger.info("Crawling from %s (max %d pages)", self.seed, max_pages)

    @property
    def visited(self) -> frozenset[str]:
        with self._visited_lock:
            return frozenset(self._visited)

    def _mark_visited(self, uri: str) -> bool:
        """Atomically check and mark uri. False if it was already visited."""
        with self._visited_lock:
            return self._claim(uri)

    def _claim(self, uri: str) -> bool:
        # Caller holds _visited_lock.
        if uri in self._visited:
            return False
        self._visited.add(uri)
        return True

    def crawl(self, uri: str | None = None) -> None:
        """Crawl from uri (the seed by default) and wait until it is indexed."""
        uri = normalize_url(uri) if uri is not None else self.seed
        if not self._mark_visited(uri):
            return
        self.queue.execute(lambda: self.process_page(uri))
        self.queue.finish()

    def process_page(self, uri: str) -> None:
        html = fetch_html(uri, self.redirects)
        if html is None:
            logger.info("%s was not a 200 HTML page", uri)
            return

        if self.max_pages > 1:
            links = find_links(uri, html)
            with self._visited_lock:
                for link in links:
                    if len(self._visited) >= self.max_pages:
                        break
                    if self._claim(link):
                        self.queue.execute(lambda link=link: self.process_page(link))

        stems = html_stems(html, make_stemmer())
        if not stems:
            return
        local = InvertedIndex()
        local.add_all(uri, stems)
        self.index.add_index(local)
        logger.info("%s was added to the index (%d terms)", uri, len(stems))


def crawl(
    seed: str,
    threads: int,
    max_pages: int = DEFAULT_MAX_PAGES,
) -> ConcurrentInvertedIndex:
    """Crawl from seed on a fresh work queue and return the populated index."""
    index = ConcurrentInvertedIndex()
    with WorkQueue(threads) as queue:
        WebCrawler(index, queue, seed, max_pages).crawl()
    return index
