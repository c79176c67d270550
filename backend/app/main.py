"""FastAPI application for the LFT severance calculator.

Expone el cálculo de liquidación (conciliación vs. juicio) y la lectura
de credenciales INE/IFE, más un endpoint de ping.
"""

import logging
import os

from fastapi import FastAPI
from pydantic import BaseModel

from app.api.v1.endpoints.calculator import router as calculator_router
from app.api.v1.endpoints.identity import router as identity_router

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)


class PingResponse(BaseModel):
    """Response model for the ping endpoint.

    Attributes:
        message: Human readable message.
    """

    message: str


app: FastAPI = FastAPI(title=os.getenv("PROJECT_NAME", "Calculadora LFT"))

app.include_router(calculator_router, prefix="/api/v1/calculadora", tags=["Calculadora"])
app.include_router(identity_router, prefix="/api/v1/ine", tags=["INE"])


@app.get("/ping", response_model=PingResponse)
async def ping() -> PingResponse:
    """Ping endpoint to validate the API is up.

    Returns:
        PingResponse: Object containing a simple ping/pong message.
    """

    return PingResponse(message="pong")
