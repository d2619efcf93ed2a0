from __future__ import annotations

from typing import Dict, List, Union

import pytest

from gmaps_redirect.config import Settings
from gmaps_redirect.models import FetchResult


class ScriptedFetcher:
    """Fetcher returning canned results per URL and recording each request."""

    def __init__(self, responses: Dict[str, Union[FetchResult, Exception]]) -> None:
        self.responses = responses
        self.requested: List[str] = []
        self.closed = False

    def fetch(self, url: str) -> FetchResult:
        self.requested.append(url)
        response = self.responses[url]
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        request_timeout=1.0,
        max_redirects=5,
        log_to_file=False,
        log_file=tmp_path / "logs" / "gmaps-redirect.log",
    )


@pytest.fixture
def scripted_fetcher():
    def _factory(responses: Dict[str, Union[FetchResult, Exception]]) -> ScriptedFetcher:
        return ScriptedFetcher(responses)

    return _factory
