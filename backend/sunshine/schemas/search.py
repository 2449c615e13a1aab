from pydantic import BaseModel


class SearchRequest(BaseModel):
    # Missing query is rejected by the search service, not by validation.
    query: str = ""


class SearchResult(BaseModel):
    name: str
    name_slug: str
    email: str = ""

    model_config = {"frozen": True}
