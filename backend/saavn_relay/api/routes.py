from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from saavn_relay.services.saavn import SaavnService

router = APIRouter()


def get_saavn_service(request: Request) -> SaavnService:
    service = getattr(request.app.state, "saavn_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Saavn service not initialized")
    return service


@router.get("/")
async def lookup_download_urls(
    request: Request,
    saavn_svc: SaavnService = Depends(get_saavn_service)
):
    # First occurrence wins when the parameter is repeated
    values = request.query_params.getlist("query")
    query = values[0] if values else ""

    result = await saavn_svc.lookup(query)
    return JSONResponse(status_code=result.status_code, content=result.body())
