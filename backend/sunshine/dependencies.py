from fastapi import HTTPException, Request

from sunshine.services.search_service import SearchService


def get_search_service(request: Request) -> SearchService:
    # Read once per request so a reload swapping the service never splits a request.
    service = getattr(request.app.state, "search_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Department index not loaded")
    return service
