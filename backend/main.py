import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from core.config import CORS_ORIGINS, LOG_LEVEL, PORT
from core.database import create_db_and_tables
from core.exceptions import (
    ComplaintDeskError,
    ForbiddenError,
    InternalError,
    InvalidStateError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)
from core.logging import configure_logging
from routes import auth, complaints

configure_logging(LOG_LEVEL)
logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    ValidationError: 400,
    InvalidStateError: 400,
    UnauthenticatedError: 401,
    ForbiddenError: 403,
    NotFoundError: 404,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    yield


app = FastAPI(title="Campus Complaint Desk", lifespan=lifespan)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ComplaintDeskError)
async def complaint_desk_error_handler(request: Request, exc: ComplaintDeskError):
    status_code = ERROR_STATUS_CODES.get(type(exc))
    if status_code is None:
        # InternalError and anything unmapped: log the cause, hide it from the client
        logger.error("%s %s failed", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": InternalError.default_detail})

    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(status_code=status_code, content={"detail": exc.detail}, headers=headers)


app.include_router(auth.router, prefix="/api/auth")
app.include_router(complaints.router, prefix="/api/complaints")


@app.get("/", tags=["Health"])
def root():
    return {"message": "Complaint Management System API"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=PORT)
