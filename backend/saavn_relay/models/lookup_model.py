from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Terminal failure outcomes of a lookup, each with a fixed public message."""

    MISSING_QUERY = "missing_query"
    NO_SEARCH_RESULTS = "no_search_results"
    NO_DOWNLOAD_URL = "no_download_url"
    UPSTREAM_FAILURE = "upstream_failure"

    @property
    def status_code(self) -> int:
        return _FAILURE_STATUS[self]

    @property
    def message(self) -> str:
        return _FAILURE_MESSAGES[self]


_FAILURE_STATUS = {
    FailureKind.MISSING_QUERY: 400,
    FailureKind.NO_SEARCH_RESULTS: 404,
    FailureKind.NO_DOWNLOAD_URL: 404,
    FailureKind.UPSTREAM_FAILURE: 500,
}

_FAILURE_MESSAGES = {
    FailureKind.MISSING_QUERY: "Missing query parameter",
    FailureKind.NO_SEARCH_RESULTS: "No results found on JioSaavn",
    FailureKind.NO_DOWNLOAD_URL: "Download URL not found for this song",
    FailureKind.UPSTREAM_FAILURE: "Failed to fetch download URLs",
}

NOT_FOUND_MESSAGE = "Not Found. Use /?query=your_song_name"


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Fixed, human-readable error message")


class SearchResult(BaseModel):
    id: Union[str, int] = Field(..., description="Opaque JioSaavn song identifier")

    class Config:
        extra = "allow"


class SongDetail(BaseModel):
    downloadUrl: Optional[Any] = Field(None, description="Quality label to audio URL mapping")

    class Config:
        extra = "allow"


class LookupResult(BaseModel):
    """Outcome of one lookup: either the download URLs or a failure kind."""

    download_urls: Optional[Any] = None
    failure: Optional[FailureKind] = None

    @classmethod
    def success(cls, download_urls: Any) -> "LookupResult":
        return cls(download_urls=download_urls)

    @classmethod
    def failed(cls, kind: FailureKind) -> "LookupResult":
        return cls(failure=kind)

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def status_code(self) -> int:
        return 200 if self.ok else self.failure.status_code

    def body(self) -> Any:
        if self.ok:
            return self.download_urls
        return ErrorResponse(error=self.failure.message).model_dump()
