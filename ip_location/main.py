from typing import Annotated, Any

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import HTMLResponse
from fastapi.routing import APIRoute

from ip_location.clients.ip_api_com_client import IpApiCom
from ip_location.config import get_settings
from ip_location.exception_handlers import unhandled_exception_handler
from ip_location.logger import logger
from ip_location.models.common import UNKNOWN
from ip_location.renderer import render_location_page
from ip_location.services.geolocation import GeoLocator

# Docs and schema routes are disabled: every path serves the location page.
app = FastAPI(
    title="IP Location Service",
    version="0.1.0",
    description="Shows the caller's IP geolocation as an HTML page.",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)
logger.info("Started IP Location Service")

app.add_exception_handler(Exception, unhandled_exception_handler)


def get_geo_locator() -> GeoLocator:
    """Dependency to provide a GeoLocator backed by ip-api.com."""
    settings = get_settings()
    client = IpApiCom(base_url=settings.ip_api_base_url, timeout_seconds=settings.lookup_timeout_seconds)
    return GeoLocator(client)


def get_client_ip(request: Request) -> str:
    """Caller address as seen on the transport connection.

    Forwarded-for style headers are ignored and loopback is passed through.
    """
    if request.client is None or not request.client.host:
        return UNKNOWN
    return request.client.host


async def location_page(
    request: Request,
    locator: Annotated[GeoLocator, Depends(get_geo_locator)],
) -> HTMLResponse:
    """Serve the location page for the caller, regardless of path or method."""
    client_ip = get_client_ip(request)
    logger.info(f"Serving location page path={request.url.path} method={request.method} client_ip={client_ip}")

    result = await locator.resolve(client_ip)
    body = render_location_page(result)
    return HTMLResponse(content=body, status_code=status.HTTP_200_OK)


class AnyMethodRoute(APIRoute):
    """APIRoute that matches every HTTP method, including non-standard ones.

    Starlette treats an empty method set as "no restriction" both when matching
    and when handling, so nothing is ever answered with 405.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.methods = None


app.router.add_api_route(
    "/{path:path}",
    location_page,
    response_class=HTMLResponse,
    status_code=status.HTTP_200_OK,
    include_in_schema=False,
    route_class_override=AnyMethodRoute,
)
