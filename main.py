from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from linkproxy_app.config import settings
from linkproxy_app.api.v1 import links, system
from linkproxy_app.dependencies import get_settings
from linkproxy_app.exceptions import ConfigurationError, LinkProxyError, UpstreamUnavailableError
from linkproxy_app.logging_config import setup_logging
from linkproxy_app.middleware import LoggingMiddleware

logger = setup_logging(settings.log_level, json_format=settings.log_json)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Proxy for managing Short.io links from a browser UI",
    debug=settings.debug
)

app.add_middleware(LoggingMiddleware)


######## Error handlers: every error body is {message, details?}

@app.exception_handler(LinkProxyError)
async def link_proxy_error_handler(request: Request, exc: LinkProxyError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Unmatched paths and methods: 500 under /api when unconfigured, else 404"""
    if exc.status_code in (404, 405):
        if request.url.path.startswith("/api/"):
            resolve_settings = request.app.dependency_overrides.get(get_settings, get_settings)
            if not resolve_settings().is_configured:
                error = ConfigurationError()
                return JSONResponse(status_code=error.status_code, content=error.to_dict())
        return JSONResponse(status_code=404, content={"message": "Endpoint not found"})
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={
            "message": "Invalid request parameters",
            "details": {"errors": jsonable_encoder(exc.errors())},
        },
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=502, content=UpstreamUnavailableError().to_dict())


######## Include routers
app.include_router(links.router, prefix="/api")
app.include_router(system.router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=settings.debug)
