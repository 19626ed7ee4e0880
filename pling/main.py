from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from pling.db import Base, engine
import pling.models  # noqa: F401 ensure models are imported so tables are known
from pling.api.routes import router as api_router, site_router
from pling.storage import URL_PREFIX, upload_root
from pling.utils import logger

# create FastAPI instance
app = FastAPI(title="Pling Bicycle Marketplace API")

app.include_router(api_router, prefix="/api")
app.include_router(site_router)
app.mount(URL_PREFIX, StaticFiles(directory=str(upload_root())), name="uploads")


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Database error"})


@app.on_event("startup")
def on_startup_create_tables():
    # Ensure database tables are created on startup; use migrations in prod
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.warning("Table creation skipped/failed: %s", e)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
