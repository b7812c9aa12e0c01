"""Full-text search engine package."""

from .posting import Score, SearchMode, InvertedIndex
from .concurrent_index import ConcurrentInvertedIndex
from .work_queue import WorkQueue
from .index_builder import IndexBuilder, ConcurrentIndexBuilder, build_index
from .crawler import WebCrawler, crawl
from .query import QueryProcessor, ConcurrentQueryProcessor, process_queries
