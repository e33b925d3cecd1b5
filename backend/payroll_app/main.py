from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from payroll_app.api.v1.router import api_router
from payroll_app.core.config import settings
from payroll_app.services.employee_repository import employee_repository

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    try:
        await employee_repository.initialize(settings)
    except Exception:
        logger.exception("Failed to initialize HttpEmployeeRepository — continuing with in-memory employees")
    yield
    await employee_repository.close()


app = FastAPI(
    title="Payroll Employee Records API",
    description="Employee table and create/update form for the payroll screen",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "Payroll Employee Records API"}
