import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from hrfleet.core.security import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["system"],
    dependencies=[Depends(get_current_user)],
)


@router.post("/test-mail")
async def test_mail(request: Request):
    """Send a sample inspection reminder to check the SMTP settings."""
    logger.info("Test mail requested")
    result = await request.app.state.mailer.send_test_mail()
    if result["success"]:
        return {"success": True, "message": result["message"]}

    logger.error("Test mail failed: %s", result["message"])
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "message": result["message"],
            "code": result.get("code") or "UNKNOWN",
        },
    )


@router.get("/logs")
async def read_logs(request: Request):
    return request.app.state.log_buffer.entries()


@router.delete("/logs", status_code=status.HTTP_204_NO_CONTENT)
async def clear_logs(request: Request):
    request.app.state.log_buffer.clear()
