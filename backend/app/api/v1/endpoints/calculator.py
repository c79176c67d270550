"""Severance calculator endpoint."""

from __future__ import annotations

from app.core.exceptions import LiquidacionError
from app.schemas.liquidacion import DesgloseLiquidacion, RegistroLaboral
from app.services.severance_engine import compute_severance
from fastapi import APIRouter, HTTPException, status

router = APIRouter(tags=["calculadora"])


@router.post("/", response_model=DesgloseLiquidacion, status_code=status.HTTP_200_OK)
def calcular_liquidacion(registro: RegistroLaboral) -> DesgloseLiquidacion:
    """
    Calcula los escenarios de conciliación y juicio para un registro laboral.
    """
    try:
        return compute_severance(registro)
    except LiquidacionError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
