from textsearch.tokenizer import (
    clean,
    extract_text_from_html,
    file_stems,
    find_links,
    html_stems,
    list_stems,
    normalize_url,
    parse,
    read_text_file,
    split,
    unique_stems,
)


def test_clean_strips_accents_digits_and_punctuation():
    assert clean("Héllo, Wörld!") == "hello world"
    assert clean("sea_shells 76") == "seashells "


def test_clean_drops_numeric_symbols():
    assert clean("\u00bd cup\u00b2 \u2163") == " cup "
    assert parse("Chapter \u2163: E=mc\u00b2") == ["chapter", "emc"]


def test_split_ignores_surrounding_whitespace():
    assert split("  a\tb \n c  ") == ["a", "b", "c"]
    assert split("   ") == []


def test_parse_cleans_then_splits():
    assert parse("Sally Sue...\t sells 76 sea-shells") == ["sally", "sue", "sells", "seashells"]
    assert parse("123 !!!") == []


def test_list_stems_keeps_document_order_and_duplicates():
    assert list_stems("the cat sat on the mat") == ["the", "cat", "sat", "on", "the", "mat"]
    assert list_stems("Running runs run") == ["run", "run", "run"]


def test_unique_stems_are_sorted_and_distinct():
    assert unique_stems("dogs cat Dog cats") == ["cat", "dog"]
    assert unique_stems("") == []


def test_read_text_file_falls_back_to_other_encodings(tmp_path):
    path = tmp_path / "latin.txt"
    path.write_bytes("caf\xe9 au lait".encode("cp1252"))
    assert read_text_file(path) == "café au lait"


def test_file_stems_reads_every_line(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("the cat\n\nsat on\nthe mat\n", encoding="utf-8")
    assert file_stems(path) == ["the", "cat", "sat", "on", "the", "mat"]


def test_extract_text_drops_head_and_scripts():
    html = """
    <html><head><title>Title words</title><style>p { color: red; }</style></head>
    <body><p>Hello <b>there</b></p><script>var hidden = 1;</script></body></html>
    """
    text = extract_text_from_html(html)
    assert "Hello" in text and "there" in text
    assert "Title" not in text
    assert "hidden" not in text
    assert "color" not in text


def test_html_stems():
    assert html_stems("<p>Cats <i>running</i></p>") == ["cat", "run"]


def test_find_links_resolves_and_deduplicates():
    html = """
    <a href="/a.html">a</a>
    <a href="b.html#section">b</a>
    <a href="https://example.com/a.html#again">a again</a>
    <a href="mailto:someone@example.com">mail</a>
    <a href="https://other.org/">other</a>
    <a>no href</a>
    """
    assert find_links("https://example.com/dir/index.html", html) == [
        "https://example.com/a.html",
        "https://example.com/dir/b.html",
        "https://other.org/",
    ]


def test_normalize_url_removes_fragment():
    assert normalize_url("https://example.com/page#top") == "https://example.com/page"
    assert normalize_url("https://example.com/page") == "https://example.com/page"
