import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pantry_app.api.routers.favorites import router as favorites_router
from pantry_app.api.routers.matching import router as matching_router
from pantry_app.api.routers.pantry import router as pantry_router
from pantry_app.api.routers.recipes import router as recipes_router
from pantry_app.api.routers.recommendations import router as recommendations_router
from pantry_app.errors import InvalidArgument, NotFound


logger = logging.getLogger("pantry_api")


def create_app() -> FastAPI:
    app = FastAPI(title="Pantry Recipes API")

    app.include_router(pantry_router)
    app.include_router(recipes_router)
    app.include_router(matching_router)
    app.include_router(favorites_router)
    app.include_router(recommendations_router)

    @app.exception_handler(InvalidArgument)
    async def invalid_argument(request: Request, exc: InvalidArgument):
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(NotFound)
    async def not_found(request: Request, exc: NotFound):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.get("/health")
    def health():
        return {"ok": True}

    return app
