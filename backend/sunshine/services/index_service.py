import logging
import unicodedata
import weakref
from types import MappingProxyType
from typing import Iterable

from sqlalchemy import text
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from sunshine.database import INSERT_SQL, SCHEMA_SQL, SEARCH_SQL, get_memory_engine
from sunshine.errors import BadQuery, IndexBuildError, InternalIndexError
from sunshine.schemas.department import Department
from sunshine.schemas.search import SearchResult

logger = logging.getLogger("sunshine.index")


def match_expression(query: str) -> str | None:
    """Turn free text into an FTS5 expression of AND-ed prefix terms.

    ``"Fire dep"`` becomes ``'"fire"* "dep"*'``. Returns None when the text
    holds no letters or numbers. Token characters are the letter and number
    categories, as for the unicode61 tokenizer.
    """
    cleaned = "".join(ch if unicodedata.category(ch)[0] in "LN" else " " for ch in query.lower())
    tokens = cleaned.split()
    if not tokens:
        return None
    return " ".join(f'"{tok}"*' for tok in tokens)


def _release(engine, keeper):
    keeper.close()
    engine.dispose()


class SearchIndex:
    """Full-text index over department name, slug and email.

    Built once by :meth:`build`, read-only afterwards. Queries run on pooled
    connections to a private in-memory SQLite FTS5 database, slug lookups on
    an immutable mapping.
    """

    def __init__(self, engine, keeper, departments: Iterable[Department]):
        self._engine = engine
        self._keeper = keeper
        # Released on close() or once the last holder drops the index.
        self._finalizer = weakref.finalize(self, _release, engine, keeper)
        ordered = sorted(departments, key=lambda d: d.name)
        self._by_slug = MappingProxyType({d.name_slug: d for d in ordered})
        self._ordered = tuple(ordered)

    @classmethod
    def build(cls, departments: Iterable[Department], pool_size: int = 5) -> "SearchIndex":
        departments = list(departments)
        slugs = [d.name_slug for d in departments]
        if len(set(slugs)) != len(slugs):
            dupes = sorted({s for s in slugs if slugs.count(s) > 1})
            raise IndexBuildError(f"duplicate department slugs: {', '.join(dupes)}")

        engine = get_memory_engine(pool_size=pool_size)
        keeper = None
        try:
            # The keeper connection keeps the in-memory database alive.
            keeper = engine.connect()
            keeper.execute(text(SCHEMA_SQL))
            if departments:
                keeper.execute(
                    text(INSERT_SQL),
                    [
                        {"rowid": i, "name": d.name, "name_slug": d.name_slug, "email": d.email}
                        for i, d in enumerate(departments, start=1)
                    ],
                )
            keeper.commit()
        except SQLAlchemyError as exc:
            if keeper is not None:
                keeper.close()
            engine.dispose()
            raise IndexBuildError(f"unable to build department index: {exc}") from exc

        logger.info("Indexed %d departments", len(departments))
        return cls(engine, keeper, departments)

    def __len__(self) -> int:
        return len(self._ordered)

    def lookup_by_slug(self, slug: str) -> Department | None:
        return self._by_slug.get(slug)

    def departments(self) -> list[Department]:
        return list(self._ordered)

    def query(self, query: str) -> list[SearchResult]:
        """Ranked matches for ``query``, best first, ties by name."""
        expr = match_expression(query)
        if expr is None:
            return []
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(text(SEARCH_SQL), {"expr": expr}).fetchall()
        except OperationalError as exc:
            if "syntax error" in str(exc.orig):
                raise BadQuery(f"invalid search expression: {expr}") from exc
            raise InternalIndexError("department index query failed") from exc
        except SQLAlchemyError as exc:
            raise InternalIndexError("department index query failed") from exc
        return [SearchResult(name=r.name, name_slug=r.name_slug, email=r.email) for r in rows]

    @property
    def closed(self) -> bool:
        return not self._finalizer.alive

    def close(self):
        self._finalizer()
