from pantry_app.logging_utils import configure_logging
from pantry_app.main import create_app
from pantry_app.settings import settings

configure_logging()
app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "run_local:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=False,
    )
