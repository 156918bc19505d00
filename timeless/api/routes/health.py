from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    """Service health: store reachability, runtime and ticker state"""
    state = request.app.state
    store = getattr(state, "store", None)
    runtime = getattr(state, "runtime", None)
    ticker = getattr(state, "ticker", None)

    store_status = "not_initialized"
    if store is not None:
        store_status = "connected" if await store.ping() else "error"

    ticker_status = "disabled"
    if ticker is not None:
        ticker_status = "running" if ticker.scheduler.running else "stopped"

    return {
        "status": "healthy" if store_status == "connected" else "degraded",
        "services": {
            "store": store_status,
            "store_backend": store.backend if store is not None else None,
            "runtime": "running" if runtime is not None and runtime.started else "stopped",
            "ticker": ticker_status,
            "runner_listeners": runtime.listener_count() if runtime is not None else 0,
        },
    }


@router.get("/ready")
async def ready(request: Request):
    store = getattr(request.app.state, "store", None)
    store_connected = store is not None and await store.ping()
    return {
        "status": "ready" if store_connected else "not_ready",
        "store_connected": store_connected,
    }
