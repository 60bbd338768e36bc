"""
Tatoeba sentence search client.

Wraps the ``/unstable/sentences`` endpoint of the Tatoeba API. A
``TatoebaSearch`` holds the filter settings; ``search`` fetches one page and
``search_iter`` walks all pages using keyset pagination (``after=<cursor_end>``).

Usage:
    search = TatoebaSearch.between("jpn", "eng", sort=TatoebaSort.SHORTEST)
    for entry in search.search_iter("食べる"):
        print(entry.text)
"""

import json
import logging
import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, FrozenSet, Iterator, Optional, Tuple
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from pydantic import ValidationError

from kotoba import settings
from kotoba.models import TatoebaEntry, TatoebaResponse

logger = logging.getLogger(__name__)


class TatoebaError(RuntimeError):
    """A sentence search request failed."""


class TatoebaOrigin(str, Enum):
    ORIGINAL = "original"
    TRANSLATION = "translation"
    KNOWN = "known"
    UNKNOWN = "unknown"


class TatoebaSort(str, Enum):
    RELEVANCE = "relevance"
    SHORTEST = "words"
    LONGEST = "-words"
    NEWEST = "created"
    OLDEST = "-created"
    MODIFIED = "modified"
    RANDOM = "random"


def _flag(value: bool) -> str:
    return "yes" if value else "no"


def _joined(values: FrozenSet[str]) -> str:
    return ",".join(sorted(values))


@dataclass(frozen=True)
class TatoebaSearch:
    """
    Filter settings of a sentence search.

    Unset filters (None or empty) are left out of the query. Set-valued
    filters are sent as comma separated lists. ``trans_lang`` also limits
    the translations shown in the result.
    """
    lang: FrozenSet[str] = frozenset()
    word_count: Tuple[Optional[int], Optional[int]] = (None, None)
    owner: FrozenSet[str] = frozenset()
    is_orphan: Optional[bool] = None
    is_unapproved: Optional[bool] = None
    has_audio: Optional[bool] = None
    tag: FrozenSet[str] = frozenset()
    lists: FrozenSet[str] = frozenset()
    is_native: Optional[bool] = None
    origin: Optional[TatoebaOrigin] = None
    trans_lang: FrozenSet[str] = frozenset()
    trans_is_direct: Optional[bool] = None
    trans_owner: FrozenSet[str] = frozenset()
    trans_is_unapproved: Optional[bool] = None
    trans_is_orphan: Optional[bool] = None
    trans_has_audio: Optional[bool] = None
    trans_count: Optional[bool] = None
    sort: Optional[TatoebaSort] = None
    limit: Optional[int] = None
    url: str = field(default=settings.TATOEBA_URL, compare=False)
    timeout: float = field(default=30.0, compare=False)

    @classmethod
    def between(cls, source: str, target: str, **kwargs) -> "TatoebaSearch":
        """Search sentences in ``source`` with translations in ``target``."""
        return cls(lang=frozenset({source}), trans_lang=frozenset({target}), **kwargs)

    def with_options(self, **changes) -> "TatoebaSearch":
        """Copy of this search with some filters changed."""
        return replace(self, **changes)

    # =========================================================================
    # Query construction
    # =========================================================================

    def params(self) -> Dict[str, str]:
        """Query parameters for the filter settings, in a stable order."""
        out: Dict[str, str] = {}

        def add_set(key: str, value: FrozenSet[str]) -> None:
            if value:
                out[key] = _joined(value)

        def add_flag(key: str, value: Optional[bool]) -> None:
            if value is not None:
                out[key] = _flag(value)

        add_set("lang", self.lang)

        low, high = self.word_count
        if low is not None or high is not None:
            out["word_count"] = f"{'' if low is None else low}-{'' if high is None else high}"

        add_set("owner", self.owner)
        add_flag("is_orphan", self.is_orphan)
        add_flag("is_unapproved", self.is_unapproved)
        add_flag("has_audio", self.has_audio)
        add_set("tag", self.tag)
        add_set("list", self.lists)
        add_flag("is_native", self.is_native)
        if self.origin is not None:
            out["origin"] = self.origin.value

        add_set("trans:lang", self.trans_lang)
        add_flag("trans:is_direct", self.trans_is_direct)
        add_set("trans:owner", self.trans_owner)
        add_flag("trans:is_unapproved", self.trans_is_unapproved)
        add_flag("trans:is_orphan", self.trans_is_orphan)
        add_flag("trans:has_audio", self.trans_has_audio)
        if self.trans_count is not None:
            out["trans:count"] = "!0" if self.trans_count else "0"

        if self.sort is not None:
            out["sort"] = self.sort.value
        if self.limit is not None:
            out["limit"] = str(self.limit)

        add_set("showtrans", self.trans_lang)
        return out

    def to_url(self, query: str, after: Optional[str] = None) -> str:
        """Full request URL for one page of results."""
        params = {"q": query, **self.params()}
        if after is not None:
            params["after"] = after
        return f"{self.url}?{urlencode(params, safe=',:!')}"

    # =========================================================================
    # Requests
    # =========================================================================

    def search(self, query: str, after: Optional[str] = None) -> TatoebaResponse:
        """
        Fetch one page of results.

        Raises:
            TatoebaError: If the request fails or the response does not parse.
        """
        url = self.to_url(query, after)
        logger.debug(f"Tatoeba url: {url}")

        req = Request(url, headers={"Accept": "application/json"}, method="GET")
        try:
            with urlopen(req, timeout=self.timeout) as resp:
                raw = resp.read().decode("utf-8")
        except HTTPError as e:
            raise TatoebaError(f"Tatoeba HTTP error {e.code} for {query!r}") from e
        except URLError as e:
            raise TatoebaError(f"Tatoeba connection error: {e}") from e

        try:
            return TatoebaResponse.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as e:
            raise TatoebaError(f"Unexpected Tatoeba response for {query!r}") from e

    def search_iter(
        self,
        query: str,
        delay: Optional[float] = settings.TATOEBA_DELAY,
    ) -> Iterator[TatoebaEntry]:
        """
        Iterate over the results of every page.

        Sleeps ``delay`` seconds before each request. Stops at the first
        empty page or when the response carries no further cursor.
        """
        after: Optional[str] = None
        while True:
            if delay:
                time.sleep(delay)

            page = self.search(query, after)
            if not page.data:
                return

            yield from page.data

            after = page.paging.cursor_end
            if not page.paging.has_next or after is None:
                return


def default_searches() -> Tuple[TatoebaSearch, ...]:
    """
    Japanese to English searches, from the strictest to the loosest filter.

    Sentence collection tries them in order until enough examples are found.
    """
    strict = TatoebaSearch.between(
        "jpn",
        "eng",
        word_count=(3, 30),
        is_orphan=False,
        is_unapproved=False,
        is_native=True,
        origin=TatoebaOrigin.ORIGINAL,
        trans_is_direct=True,
        trans_is_orphan=False,
        trans_is_unapproved=False,
        trans_count=True,
        sort=TatoebaSort.SHORTEST,
        limit=25,
    )
    any_origin = strict.with_options(origin=None)
    unreviewed = strict.with_options(
        is_orphan=None,
        is_unapproved=None,
        trans_is_orphan=None,
        trans_is_unapproved=None,
    )
    unreviewed_any_origin = unreviewed.with_options(origin=None)
    any_speaker = unreviewed_any_origin.with_options(is_native=None)

    return (strict, any_origin, unreviewed, unreviewed_any_origin, any_speaker)
