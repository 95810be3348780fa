from fastapi import APIRouter

from trip_planner.core.config import APP_VERSION
from trip_planner.models.common import APIResponse

router = APIRouter(tags=["System"])


@router.get("/", response_model=APIResponse)
def root():
    return APIResponse(code=0, msg="ok", data={"msg": "Backend API is running"})


@router.get("/health", response_model=APIResponse)
def health_check():
    return APIResponse(
        code=0,
        msg="ok",
        data={"status": "healthy", "service": "trip_planner-server", "version": APP_VERSION},
    )
