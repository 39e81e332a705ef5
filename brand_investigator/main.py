from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from brand_investigator.api.routes import credentials, investigations
from brand_investigator.config import settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    yield
    # Shutdown


app = FastAPI(
    title="Brand Investigator",
    description="D2C brand due-diligence: is this brand a manufacturer or a reseller?",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(investigations.router)
app.include_router(credentials.router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "service": "brand_investigator"}
