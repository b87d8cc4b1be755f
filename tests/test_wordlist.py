"""Tests for word-list sources."""

import gzip

import pytest
import requests

from metaph.ingest import wordlist
from metaph.ingest.wordlist import (
    WordListError,
    fetch_word_list,
    index_from_file,
    load_word_list,
    read_word_list,
    split_words,
)


class FakeResponse:
    def __init__(self, content, status_error=None):
        self.content = content
        self._status_error = status_error

    def raise_for_status(self):
        if self._status_error:
            raise self._status_error


@pytest.fixture
def plain_list(tmp_path, sample_words):
    path = tmp_path / "words.txt"
    path.write_text("\n".join(sample_words) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def gzip_list(tmp_path, sample_words):
    path = tmp_path / "words.txt.gz"
    with gzip.open(path, "wt", encoding="utf-8") as f:
        f.write("\n".join(sample_words) + "\n")
    return path


class TestSplitWords:
    def test_drops_blank_lines(self):
        assert split_words("a\n\nb\n") == ["a", "b"]

    def test_lines_not_cleaned(self):
        assert split_words("O'Brien\nSmith-Jones\r\n") == ["O'Brien", "Smith-Jones"]


class TestReadWordList:
    def test_plain(self, plain_list, sample_words):
        assert read_word_list(plain_list) == sample_words

    def test_gzip(self, gzip_list, sample_words):
        assert read_word_list(gzip_list) == sample_words

    def test_accepts_str_path(self, plain_list, sample_words):
        assert read_word_list(str(plain_list)) == sample_words

    def test_missing_file(self, tmp_path):
        with pytest.raises(WordListError) as exc:
            read_word_list(tmp_path / "nope.txt")
        assert exc.value.stage == "open"
        assert "nope.txt" in str(exc.value)
        assert str(exc.value).startswith("trying to open word list")

    def test_bad_gzip(self, tmp_path):
        path = tmp_path / "bad.txt.gz"
        path.write_bytes(b"not gzip data at all")
        with pytest.raises(WordListError) as exc:
            read_word_list(path)
        assert exc.value.stage == "decompress"
        assert exc.value.name == str(path)

    def test_truncated_gzip(self, tmp_path):
        path = tmp_path / "cut.txt.gz"
        path.write_bytes(gzip.compress(b"smith\n" * 100)[:20])
        with pytest.raises(WordListError) as exc:
            read_word_list(path)
        assert exc.value.stage == "decompress"

    def test_undecodable_bytes(self, tmp_path):
        path = tmp_path / "latin1.txt"
        path.write_bytes(b"ni\xf1o\n")
        with pytest.raises(WordListError) as exc:
            read_word_list(path)
        assert exc.value.stage == "read"

    def test_cause_chained(self, tmp_path):
        with pytest.raises(WordListError) as exc:
            read_word_list(tmp_path / "missing.txt")
        assert isinstance(exc.value.__cause__, OSError)


class TestFetchWordList:
    def test_plain(self, monkeypatch, sample_words):
        body = "\n".join(sample_words).encode("utf-8")
        monkeypatch.setattr(wordlist.requests, "get",
                            lambda url, timeout: FakeResponse(body))
        assert fetch_word_list("https://example.org/words.txt") == sample_words

    def test_gzip(self, monkeypatch, sample_words):
        body = gzip.compress("\n".join(sample_words).encode("utf-8"))
        monkeypatch.setattr(wordlist.requests, "get",
                            lambda url, timeout: FakeResponse(body))
        assert fetch_word_list("https://example.org/words.txt.gz") == sample_words

    def test_connection_error(self, monkeypatch):
        def fail(url, timeout):
            raise requests.ConnectionError("refused")
        monkeypatch.setattr(wordlist.requests, "get", fail)
        with pytest.raises(WordListError) as exc:
            fetch_word_list("https://example.org/words.txt")
        assert exc.value.stage == "open"
        assert exc.value.name == "https://example.org/words.txt"

    def test_http_error(self, monkeypatch):
        response = FakeResponse(b"", requests.HTTPError("404 Not Found"))
        monkeypatch.setattr(wordlist.requests, "get",
                            lambda url, timeout: response)
        with pytest.raises(WordListError) as exc:
            fetch_word_list("https://example.org/missing.txt")
        assert exc.value.stage == "open"

    def test_bad_gzip_body(self, monkeypatch):
        monkeypatch.setattr(wordlist.requests, "get",
                            lambda url, timeout: FakeResponse(b"plain"))
        with pytest.raises(WordListError) as exc:
            fetch_word_list("https://example.org/words.txt.gz")
        assert exc.value.stage == "decompress"


class TestLoadAndIndex:
    def test_load_path(self, plain_list, sample_words):
        assert load_word_list(str(plain_list)) == sample_words

    def test_load_url(self, monkeypatch):
        monkeypatch.setattr(wordlist.requests, "get",
                            lambda url, timeout: FakeResponse(b"Smith\n"))
        assert load_word_list("http://example.org/w.txt") == ["Smith"]

    def test_index_from_file(self, gzip_list):
        index = index_from_file(gzip_list, 6)
        assert index.match("knewmoania") == {"knewmoania", "pneumonia"}
        assert index.max_length == 6
