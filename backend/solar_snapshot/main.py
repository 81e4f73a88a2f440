"""
Solar Snapshot: FastAPI application entry point.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from solar_snapshot.api.router import router
from solar_snapshot.api.solar import status_code_for
from solar_snapshot.engine.errors import SolarDataError

app = FastAPI(
    title="Solar Snapshot API",
    description="Annual solar resource (GHI/DNI) for a point from NSRDB hourly series",
    version="0.1.0",
)

# CORS: public read-only API
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type"],
)

app.include_router(router)


@app.exception_handler(SolarDataError)
async def solar_data_error_handler(request: Request, exc: SolarDataError):
    # Errors raised outside a route body, e.g. while resolving settings
    return JSONResponse(status_code=status_code_for(exc), content={"detail": exc.to_detail()})


@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "solar-snapshot"}
