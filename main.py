# main.py
import os
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

import config
from database import Database
from errors import StoreError
from routes import exams, reports, subjects
from routes.deps import failure

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(title="Exam App API")
app.state.database = Database()

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(exams.router)
app.include_router(subjects.router)
app.include_router(reports.router)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error(f"Store error on {request.url.path}: {str(exc)}")
    return failure(500, "Database error")


@app.on_event("startup")
async def startup_event():
    await app.state.database.connect()


@app.on_event("shutdown")
async def shutdown_event():
    app.state.database.close()


# Anything that is not an API route is the front end: a static file if one
# exists at that path, otherwise the single-page app shell.
@app.get("/{full_path:path}", include_in_schema=False)
async def serve_frontend(full_path: str):
    if full_path == "api" or full_path.startswith("api/"):
        return failure(404, "Not found")
    static_root = os.path.realpath(config.STATIC_DIR)
    candidate = os.path.realpath(os.path.join(static_root, full_path))
    if candidate != static_root and not candidate.startswith(static_root + os.sep):
        return failure(404, "Not found")
    if full_path and os.path.isfile(candidate):
        return FileResponse(candidate)
    index = os.path.join(static_root, "index.html")
    if not os.path.isfile(index):
        return failure(404, "Front end not built")
    return FileResponse(index)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=config.HOST, port=config.PORT, reload=True)
