"""INE/IFE voter-ID endpoints."""

from __future__ import annotations

import logging

from app.schemas.ine import (
    CalidadOCRResponse,
    CombinarINERequest,
    DatosINE,
    EscaneoINEResponse,
    ResultadoValidacion,
    TextoOCR,
    ValidarINERequest,
)
from app.services.ine_parser import (
    combine_front_and_back,
    extract_identity_fields,
    validate_against_user_input,
)
from app.services.ocr import OCRService
from fastapi import APIRouter, File, HTTPException, UploadFile, status

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ine"])


@router.post("/extraer", response_model=DatosINE, status_code=status.HTTP_200_OK)
def extraer_ine(payload: TextoOCR) -> DatosINE:
    return extract_identity_fields(payload.texto)


@router.post("/combinar", response_model=DatosINE, status_code=status.HTTP_200_OK)
def combinar_ine(payload: CombinarINERequest) -> DatosINE:
    return combine_front_and_back(payload.frente, payload.reverso)


@router.post("/validar", response_model=ResultadoValidacion, status_code=status.HTTP_200_OK)
def validar_ine(payload: ValidarINERequest) -> ResultadoValidacion:
    return validate_against_user_input(payload.datos_ine, payload.datos_usuario)


def _leer_cara(archivo: UploadFile) -> tuple[DatosINE, CalidadOCRResponse]:
    try:
        contenido = archivo.file.read()
    finally:
        archivo.file.close()

    try:
        texto, estrategia = OCRService.read_document(contenido, archivo.filename)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    texto = OCRService.clean_ocr_text(texto)
    calidad = OCRService.assess_ocr_text(texto)
    if not calidad.valido:
        logger.warning("ine_scan_low_quality filename=%s score=%s", archivo.filename, calidad.puntaje)
    respuesta_calidad = CalidadOCRResponse(
        valido=calidad.valido,
        puntaje=calidad.puntaje,
        motivo=calidad.motivo,
        estrategia=estrategia,
    )
    return extract_identity_fields(texto), respuesta_calidad


@router.post("/escanear", response_model=EscaneoINEResponse, status_code=status.HTTP_200_OK)
def escanear_ine(
    frente: UploadFile = File(...),
    reverso: UploadFile | None = File(None),
) -> EscaneoINEResponse:
    """
    OCR de la credencial: lee el frente (y el reverso si se envía), extrae
    los campos y, con ambas caras, los combina en un solo resultado.
    """
    datos, calidad_frente = _leer_cara(frente)
    calidad_reverso = None
    if reverso is not None:
        datos_reverso, calidad_reverso = _leer_cara(reverso)
        datos = combine_front_and_back(datos, datos_reverso)
    return EscaneoINEResponse(datos=datos, calidad_frente=calidad_frente, calidad_reverso=calidad_reverso)
