from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.discharge.api.v1.routes_system import router as system_router_v1
from src.discharge.api.v1.routes_discharge import router as discharge_router_v1
from src.discharge.api.v1.routes_patients import router as patients_router_v1
from src.discharge.api.v1.routes_practitioners import router as practitioners_router_v1
from src.discharge.config import settings

app = FastAPI(title="Discharge Summary Builder API")

# CORS configuration – permissive by default for development. Tighten via
# CORS_ALLOW_ORIGINS in production deployments.
allow_origins = [origin.strip() for origin in settings.cors_allow_origins.split(",") if origin.strip()] or ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", tags=["system"])
async def health_check() -> dict:
    """Basic liveness probe for the API root."""
    return {"status": "ok"}


# Versioned API routers
app.include_router(system_router_v1, prefix="/api/v1")
app.include_router(discharge_router_v1, prefix="/api/v1")
app.include_router(patients_router_v1, prefix="/api/v1")
app.include_router(practitioners_router_v1, prefix="/api/v1")
