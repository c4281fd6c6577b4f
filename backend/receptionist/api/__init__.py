from fastapi import APIRouter
from receptionist.api import voice
from receptionist.api import stream

router = APIRouter()


@router.get("/health")
async def health():
    return {"status": "ok"}


# Include voice and stream routers
router.include_router(voice.router)
router.include_router(stream.router)
