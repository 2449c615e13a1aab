from fastapi import APIRouter, Depends, HTTPException

from sunshine.dependencies import get_search_service
from sunshine.errors import InvalidArgument, SearchUnavailable
from sunshine.schemas.search import SearchRequest, SearchResult
from sunshine.services.search_service import SearchService

router = APIRouter(
    prefix="/search",
    tags=["search"],
)


@router.post("", response_model=list[SearchResult])
def search(req: SearchRequest, service: SearchService = Depends(get_search_service)):
    try:
        return service.search(req.query)
    except InvalidArgument as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except SearchUnavailable as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
