from fastapi import APIRouter, Request

router = APIRouter(tags=["internal"])

ENDPOINTS = [
    "GET /api/health",
    "GET /api/test-db",
    "POST /api/users",
    "GET /api/users",
    "GET /api/download",
]


@router.get("/")
async def index(request: Request):
    return {
        "message": f"{request.app.title} is running",
        "endpoints": ENDPOINTS,
    }
