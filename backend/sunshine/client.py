import logging

import httpx

from sunshine.config import settings
from sunshine.schemas.department import Department
from sunshine.schemas.search import SearchResult
from sunshine.utils.debounce import Debouncer

logger = logging.getLogger("sunshine.client")


class SearchClient:
    """Thin httpx wrapper around the directory's JSON routes."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        http: httpx.Client | None = None,
        api_prefix: str | None = None,
        timeout: float = 5.0,
    ):
        self._owns_http = http is None
        self._http = http or httpx.Client(base_url=base_url or settings.server_url, timeout=timeout)
        self._prefix = settings.api_prefix if api_prefix is None else api_prefix

    def search(self, query: str) -> list[SearchResult]:
        r = self._http.post(f"{self._prefix}/search", json={"query": query})
        r.raise_for_status()
        return [SearchResult(**item) for item in r.json()]

    def department(self, slug: str) -> Department | None:
        r = self._http.get(f"{self._prefix}/departments/{slug}")
        if r.status_code == 404:
            return None
        r.raise_for_status()
        return Department(**r.json())

    def close(self):
        if self._owns_http:
            self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class LiveSearch:
    """Search-as-you-type: feed it every keystroke, get results once typing settles.

    ``on_results`` receives the result list of the latest settled input. Blank
    input clears the results without a request. Failed requests are logged and
    leave the previous results in place.
    """

    def __init__(self, client: SearchClient, on_results, wait: float | None = None, immediate: bool = False, scheduler=None):
        self._client = client
        self._on_results = on_results
        self._debouncer = Debouncer(
            self._run,
            wait=settings.search_wait_seconds if wait is None else wait,
            immediate=immediate,
            scheduler=scheduler,
        )

    def on_input(self, text: str):
        self._debouncer(text)

    def cancel(self):
        self._debouncer.cancel()

    def _run(self, text: str):
        if not text.strip():
            self._on_results([])
            return
        try:
            results = self._client.search(text)
        except httpx.HTTPError as exc:
            logger.warning("Search for %r failed: %s", text, exc)
            return
        self._on_results(results)
