import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import ALLOWED_ORIGINS, LOG_LEVEL
from routes.projection import router as projection_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="PensionSim - Retirement Projection API",
    description="Retirement projections for people with monthly, seasonal or gig-based income",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(projection_router, prefix="/api")


@app.get("/")
def root():
    return {
        "name": "PensionSim Retirement Projection API",
        "version": "1.0.0",
        "endpoints": {
            "projection": "/api/projection/run",
            "compare": "/api/projection/compare",
            "insights": "/api/projection/insights",
            "risk_profiles": "/api/projection/risk-profiles",
            "assumptions": "/api/projection/assumptions",
        }
    }


@app.get("/health")
def health_check():
    return {"status": "healthy"}
