from fastapi import APIRouter, Depends, Response

from ..deps import pokedex_dep

router = APIRouter(tags=["health"])

@router.get("/api/v1/ping")
def ping():
    return {"pong": True}

@router.get("/health")
def health():
    return {"status": "ok"}

@router.head("/")
def head_root():
    return Response(status_code=200)

@router.get("/api/cache/stats", summary="Cache sizes and in-flight fetch count")
def cache_stats(svc = Depends(pokedex_dep)):
    return svc.stats()
