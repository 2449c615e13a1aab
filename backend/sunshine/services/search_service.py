import logging

from sunshine.errors import BadQuery, InternalIndexError, InvalidArgument, NotFound, SearchUnavailable
from sunshine.schemas.department import Department
from sunshine.schemas.search import SearchResult
from sunshine.services.index_service import SearchIndex

logger = logging.getLogger("sunshine.search")


class SearchService:
    def __init__(self, index: SearchIndex):
        self._index = index

    @property
    def index(self) -> SearchIndex:
        return self._index

    def search(self, query: str) -> list[SearchResult]:
        query = (query or "").strip()
        if not query:
            raise InvalidArgument("Missing query")
        try:
            return self._index.query(query)
        except (BadQuery, InternalIndexError) as exc:
            logger.exception("Search for %r failed", query)
            raise SearchUnavailable("Error querying department data") from exc

    def get_department(self, slug: str) -> Department:
        department = self._index.lookup_by_slug(slug)
        if department is None:
            raise NotFound(f"Department not found: {slug}")
        return department

    def list_departments(self) -> list[Department]:
        return self._index.departments()
