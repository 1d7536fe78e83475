from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from ticketing.config import LOG_LEVEL

# Configure base logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("ticketing")

from ticketing import models  # noqa: F401  registers tables
from ticketing.database import Base, SessionLocal, engine
from ticketing.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    SeatAllocationError,
    TicketingError,
    TransactionFailure,
    ValidationError,
)
from ticketing.init_db import create_initial_admin
from ticketing.routers import (
    auth,
    fixtures,
    orders,
    payments,
    stadiums,
    teams,
    zones,
)
import uvicorn

# Create database tables
Base.metadata.create_all(bind=engine)

logger.info("Initializing database with admin account...")
with SessionLocal() as db:
    create_initial_admin(db)

app = FastAPI(
    title="Ticketing API",
    description="API for booking match tickets and managing fixtures, stadiums and orders",
    version="1.0.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router, prefix="/auth", tags=["authentication"])
app.include_router(teams.router, prefix="/teams", tags=["teams"])
app.include_router(stadiums.router, prefix="/stadiums", tags=["stadiums"])
app.include_router(zones.router, prefix="/zones", tags=["zones"])
app.include_router(fixtures.router, prefix="/fixtures", tags=["fixtures"])
app.include_router(orders.router, prefix="/orders", tags=["orders"])
app.include_router(payments.router, prefix="/payments", tags=["payments"])

ERROR_STATUS_CODES = [
    (NotFoundError, 404),
    (ValidationError, 422),
    (ConflictError, 409),
    (SeatAllocationError, 409),
    (AuthenticationError, 401),
    (TransactionFailure, 503),
]


def status_code_for(exc: TicketingError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return 400


@app.get("/")
def read_root():
    return {"message": "Welcome to the Ticketing API"}


@app.exception_handler(TicketingError)
async def ticketing_error_handler(request: Request, exc: TicketingError):
    status_code = status_code_for(exc)
    logger.info(
        "Request rejected | path=%s | status=%s | error=%s",
        request.url.path,
        status_code,
        exc.message,
    )
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


# Global unhandled exception handler -> logs ERROR
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled error | path=%s | method=%s | client=%s",
        request.url.path,
        request.method,
        request.client.host if request.client else "unknown",
    )
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


if __name__ == "__main__":
    uvicorn.run("ticketing.main:app", host="0.0.0.0", port=8000, reload=True)
