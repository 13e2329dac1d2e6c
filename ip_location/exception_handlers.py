from fastapi import Request, status
from fastapi.responses import HTMLResponse

from ip_location.logger import logger

ERROR_PAGE = """<!DOCTYPE html>
<html lang="zh">
<head><meta charset="UTF-8"><title>服务器错误</title></head>
<body><h1>服务器错误</h1></body>
</html>
"""


async def unhandled_exception_handler(request: Request, exc: Exception) -> HTMLResponse:
    """Catch-all handler for unexpected errors; internal details are not exposed."""
    client_ip = request.client.host if request.client else None
    logger.exception(
        "Unhandled exception while processing request: "
        f"{repr(exc)} path={request.url.path} method={request.method} client_ip={client_ip}"
    )
    return HTMLResponse(content=ERROR_PAGE, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
