from fastapi import APIRouter, Request

from voting_api.core.metrics import HealthMetrics


def _get_metrics(request: Request) -> HealthMetrics:
    metrics = getattr(getattr(request.app, "state", None), "metrics", None)
    if not metrics:
        raise RuntimeError("HealthMetrics not configured")
    return metrics


def health_router(prefix: str) -> APIRouter:
    """``GET <prefix>/health``; include it before routes matching ``<prefix>/{id}``."""
    router = APIRouter(prefix=prefix, tags=["health"])

    @router.get("/health")
    def health(request: Request):
        return _get_metrics(request).report()

    return router


crash_router = APIRouter(tags=["health"])


@crash_router.get("/crash")
def crash():
    raise RuntimeError("Simulating an unexpected crash")
