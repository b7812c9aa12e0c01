"""
Text cleaning, stemming and HTML helpers shared by the indexer and the query processor.
Documents and queries go through the same clean -> split -> stem pipeline so
that query tokens line up with index terms.
"""

import re
import unicodedata
import warnings
from pathlib import Path
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning, MarkupResemblesLocatorWarning
warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

from nltk.stem.snowball import SnowballStemmer

from .config import STEMMER_LANGUAGE

SPLIT_REGEX = re.compile(r"\s+")

# Elements whose text never belongs to the page body.
BLOCK_ELEMENTS = ["head", "script", "style", "noscript", "svg"]


def make_stemmer() -> SnowballStemmer:
    """Return a new stemmer. Stemmers are never shared between worker tasks."""
    return SnowballStemmer(STEMMER_LANGUAGE)


def clean(text: str) -> str:
    """Strip diacritics and non-alphabetic characters, then lowercase."""
    cleaned = unicodedata.normalize("NFD", text)
    # Keeps letters and whitespace only. Digits, numeric symbols, punctuation
    # and the combining marks split off by NFD are all dropped.
    cleaned = "".join(ch for ch in cleaned if ch.isalpha() or ch.isspace())
    return cleaned.lower()


def split(text: str) -> list[str]:
    """Split text on runs of whitespace."""
    text = text.strip()
    if not text:
        return []
    return SPLIT_REGEX.split(text)


def parse(text: str) -> list[str]:
    """Clean and split text into raw words."""
    return split(clean(text))


def stem_tokens(tokens: list[str], stemmer: SnowballStemmer | None = None) -> list[str]:
    """Stem a list of tokens."""
    stemmer = stemmer or make_stemmer()
    return [stemmer.stem(t) for t in tokens]


def list_stems(line: str, stemmer: SnowballStemmer | None = None) -> list[str]:
    """Return the stems of a line in document order (duplicates kept)."""
    return stem_tokens(parse(line), stemmer)


def unique_stems(line: str, stemmer: SnowballStemmer | None = None) -> list[str]:
    """Return the distinct stems of a line, sorted."""
    return sorted(set(list_stems(line, stemmer)))


def read_text_file(filepath: Path) -> str:
    """
    Read a text file, handling common encodings.
    """
    for encoding in ("utf-8", "cp1252", "latin-1"):
        try:
            return Path(filepath).read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    raise ValueError(f"Could not decode file: {filepath}")


def file_stems(filepath: Path, stemmer: SnowballStemmer | None = None) -> list[str]:
    """
    Read a document and return its stems in document order.
    The whole file is read before anything is returned, so a read failure
    never yields a partial document.
    """
    stemmer = stemmer or make_stemmer()
    stems: list[str] = []
    for line in read_text_file(filepath).splitlines():
        stems.extend(list_stems(line, stemmer))
    return stems


def normalize_url(url: str) -> str:
    """Remove the URL fragment (#...) so one page maps to one location."""
    parsed = urlparse(url)
    if parsed.fragment:
        parsed = parsed._replace(fragment="")
    return parsed.geturl()


def extract_text_from_html(html_content: str) -> str:
    """
    Extract visible text from HTML content, stripping tags, head, scripts and styles.
    """
    soup = BeautifulSoup(html_content, "lxml")
    for element in soup(BLOCK_ELEMENTS):
        element.decompose()
    return soup.get_text(separator=" ", strip=True)


def find_links(base: str, html_content: str) -> list[str]:
    """
    Return the absolute http(s) URLs of every anchor in the page, resolved
    against base, fragments removed, de-duplicated in document order.
    """
    soup = BeautifulSoup(html_content, "lxml")
    links: list[str] = []
    seen: set[str] = set()
    for anchor in soup.find_all("a", href=True):
        url = normalize_url(urljoin(base, anchor["href"].strip()))
        if urlparse(url).scheme not in ("http", "https"):
            continue
        if url not in seen:
            seen.add(url)
            links.append(url)
    return links


def html_stems(html_content: str, stemmer: SnowballStemmer | None = None) -> list[str]:
    """
    Extract text from HTML and return stemmed tokens in document order.
    """
    return list_stems(extract_text_from_html(html_content), stemmer)
