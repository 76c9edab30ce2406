import json
import logging
import math
from typing import Any, Optional, Union
from urllib.parse import quote

import httpx

from saavn_relay.models.lookup_model import FailureKind, LookupResult, SearchResult, SongDetail

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves untouched
_QUERY_SAFE_CHARS = "-_.!~*'()"


class UpstreamShapeError(Exception):
    pass


def _is_missing(value: Any) -> bool:
    return value is None or value is False or value == ""


def _reject_constant(name: str) -> float:
    raise ValueError(f"Non-standard JSON constant {name}")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"JSON number {text} is out of range")
    return value


class SaavnService:
    def __init__(self, client: httpx.AsyncClient, search_url: str, detail_url: str):
        self.client = client
        self.search_url = search_url
        self.detail_url = detail_url.rstrip("/")

    def build_search_url(self, query: str) -> str:
        return (
            f"{self.search_url}?p=1&_format=json&__call=search.getResults"
            f"&q={quote(query, safe=_QUERY_SAFE_CHARS)}"
        )

    def build_detail_url(self, song_id: Union[str, int]) -> str:
        return f"{self.detail_url}/{quote(str(song_id), safe='')}"

    async def lookup(self, query: Optional[str]) -> LookupResult:
        if not query:
            return LookupResult.failed(FailureKind.MISSING_QUERY)

        try:
            song_id = await self._search(query)
            if song_id is None:
                logger.info(f"No search results for query {query!r}")
                return LookupResult.failed(FailureKind.NO_SEARCH_RESULTS)

            logger.info(f"Query {query!r} resolved to song {song_id}")
            download_urls = await self._fetch_download_urls(song_id)
            if download_urls is None:
                logger.info(f"No download URL for song {song_id}")
                return LookupResult.failed(FailureKind.NO_DOWNLOAD_URL)

            return LookupResult.success(download_urls)

        except Exception as e:
            logger.error(f"Error fetching JioSaavn data for {query!r}: {str(e)}", exc_info=True)
            return LookupResult.failed(FailureKind.UPSTREAM_FAILURE)

    async def _get_json(self, url: str) -> Any:
        response = await self.client.get(url)
        payload = json.loads(response.content, parse_constant=_reject_constant, parse_float=_parse_finite_float)
        if payload is None:
            raise UpstreamShapeError(f"Got a null JSON body from {url}")
        return payload

    async def _search(self, query: str) -> Optional[Union[str, int]]:
        """Return the id of the top search match, or None when nothing matched."""
        payload = await self._get_json(self.build_search_url(query))

        results = payload.get("results") if isinstance(payload, dict) else None
        if _is_missing(results) or results == []:
            return None
        if not isinstance(results, list):
            raise UpstreamShapeError(f"Search results is a {type(results).__name__}, not a list")

        return SearchResult.model_validate(results[0]).id

    async def _fetch_download_urls(self, song_id: Union[str, int]) -> Optional[Any]:
        """Return the downloadUrl value of the song's first data entry, or None."""
        payload = await self._get_json(self.build_detail_url(song_id))

        data = payload.get("data") if isinstance(payload, dict) else None
        if _is_missing(data) or data == []:
            return None
        if not isinstance(data, list):
            raise UpstreamShapeError(f"Song data is a {type(data).__name__}, not a list")

        detail = SongDetail.model_validate(data[0])
        if _is_missing(detail.downloadUrl):
            return None
        return detail.downloadUrl
