"""
Tests for tatoeba.py - the sentence search client.
"""

import json
from unittest.mock import MagicMock, patch
from urllib.error import HTTPError
from urllib.parse import parse_qs, urlparse

import pytest

from kotoba.tatoeba import (
    TatoebaError,
    TatoebaOrigin,
    TatoebaSearch,
    TatoebaSort,
    default_searches,
)


def entry(sentence_id, text):
    return {"id": sentence_id, "text": text, "lang": "jpn"}


def page(data, has_next=False, cursor_end=None):
    body = {"paging": {"total": len(data), "has_next": has_next, "cursor_end": cursor_end}, "data": data}
    resp = MagicMock()
    resp.read.return_value = json.dumps(body, ensure_ascii=False).encode("utf-8")
    resp.__enter__.return_value = resp
    return resp


def query_of(url):
    return {key: values[0] for key, values in parse_qs(urlparse(url).query).items()}


class TestQuery:
    """Tests for query construction."""

    def test_unset_filters_omitted(self):
        assert TatoebaSearch().params() == {}

    def test_params(self):
        search = TatoebaSearch.between(
            "jpn", "eng",
            word_count=(3, None),
            owner=frozenset({"b", "a"}),
            is_native=True,
            is_orphan=False,
            origin=TatoebaOrigin.ORIGINAL,
            trans_count=True,
            sort=TatoebaSort.SHORTEST,
            limit=10,
        )
        assert search.params() == {
            "lang": "jpn",
            "word_count": "3-",
            "owner": "a,b",
            "is_orphan": "no",
            "is_native": "yes",
            "origin": "original",
            "trans:lang": "eng",
            "trans:count": "!0",
            "sort": "words",
            "limit": "10",
            "showtrans": "eng",
        }

    def test_lists_param_name(self):
        assert TatoebaSearch(lists=frozenset({"907"})).params() == {"list": "907"}

    def test_to_url(self):
        search = TatoebaSearch.between("jpn", "eng")
        url = search.to_url("食べる", after="abc")
        assert url.startswith(search.url + "?")
        assert "trans:lang=eng" in url
        assert query_of(url) == {
            "q": "食べる",
            "lang": "jpn",
            "trans:lang": "eng",
            "showtrans": "eng",
            "after": "abc",
        }

    def test_with_options(self):
        strict = TatoebaSearch.between("jpn", "eng", is_native=True)
        loose = strict.with_options(is_native=None)
        assert strict.is_native is True
        assert loose.is_native is None
        assert loose.lang == strict.lang


class TestSearch:
    """Tests for requests and pagination."""

    def test_search(self):
        with patch("kotoba.tatoeba.urlopen", return_value=page([entry(1, "猫だ。")])):
            response = TatoebaSearch().search("猫")
        assert [e.text for e in response.data] == ["猫だ。"]

    def test_http_error(self):
        error = HTTPError("url", 500, "Server Error", {}, None)
        with patch("kotoba.tatoeba.urlopen", side_effect=error):
            with pytest.raises(TatoebaError, match="500"):
                TatoebaSearch().search("猫")

    def test_bad_response(self):
        resp = page([])
        resp.read.return_value = b"<html></html>"
        with patch("kotoba.tatoeba.urlopen", return_value=resp):
            with pytest.raises(TatoebaError):
                TatoebaSearch().search("猫")

    def test_iter_follows_cursor(self):
        pages = [
            page([entry(1, "一"), entry(2, "二")], has_next=True, cursor_end="c1"),
            page([entry(3, "三")], has_next=False, cursor_end="c2"),
        ]
        with patch("kotoba.tatoeba.urlopen", side_effect=pages) as mock_urlopen, \
                patch("kotoba.tatoeba.time.sleep") as mock_sleep:
            texts = [e.text for e in TatoebaSearch().search_iter("猫", delay=0.5)]

        assert texts == ["一", "二", "三"]
        assert mock_sleep.call_count == 2
        second_url = mock_urlopen.call_args_list[1][0][0].full_url
        assert query_of(second_url)["after"] == "c1"

    def test_iter_stops_on_empty_page(self):
        pages = [page([], has_next=True, cursor_end="c1")]
        with patch("kotoba.tatoeba.urlopen", side_effect=pages) as mock_urlopen:
            assert list(TatoebaSearch().search_iter("猫", delay=None)) == []
        assert mock_urlopen.call_count == 1

    def test_iter_is_lazy(self):
        pages = [page([entry(1, "一")], has_next=True, cursor_end="c1")]
        with patch("kotoba.tatoeba.urlopen", side_effect=pages) as mock_urlopen:
            results = TatoebaSearch().search_iter("猫", delay=None)
            assert next(results).text == "一"
        assert mock_urlopen.call_count == 1


class TestDefaultSearches:
    """Tests for the fallback search chain."""

    def test_strict_to_loose(self):
        searches = default_searches()
        assert len(searches) == 5

        strict, any_origin, unreviewed, unreviewed_any_origin, any_speaker = searches
        assert strict.origin == TatoebaOrigin.ORIGINAL
        assert any_origin.origin is None
        assert unreviewed.is_unapproved is None
        assert unreviewed.origin == TatoebaOrigin.ORIGINAL
        assert unreviewed_any_origin.origin is None
        assert any_speaker.is_native is None

    def test_all_searches_are_japanese_to_english(self):
        for search in default_searches():
            assert search.lang == frozenset({"jpn"})
            assert search.trans_lang == frozenset({"eng"})
