"""Pydantic schemas for INE/IFE voter-ID extraction."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Literal

from pydantic import BaseModel


class LadoINE(str, Enum):
    FRENTE = "FRENTE"
    REVERSO = "REVERSO"
    DESCONOCIDO = "DESCONOCIDO"


class Domicilio(BaseModel):
    calle: str | None = None
    numero_exterior: str | None = None
    numero_interior: str | None = None
    colonia: str | None = None
    codigo_postal: str | None = None
    municipio: str | None = None
    estado: str | None = None
    domicilio_completo: str | None = None


class DatosINE(BaseModel):
    """Campos extraídos de una credencial; todos opcionales (OCR ruidoso)."""

    curp: str | None = None
    clave_elector: str | None = None
    numero_ine: str | None = None
    nombre: str | None = None
    apellido_paterno: str | None = None
    apellido_materno: str | None = None
    nombre_completo: str | None = None
    fecha_nacimiento: date | None = None
    fecha_nacimiento_texto: str | None = None
    sexo: Literal["H", "M"] | None = None
    estado_nacimiento: str | None = None
    domicilio: Domicilio | None = None
    vigencia: str | None = None
    seccion: str | None = None
    anio_registro: str | None = None
    emision: str | None = None
    confianza: int = 0
    advertencias: list[str] = []
    lado: LadoINE = LadoINE.DESCONOCIDO


class DatosUsuario(BaseModel):
    nombre: str | None = None
    curp: str | None = None
    fecha_nacimiento: date | None = None


class ResultadoValidacion(BaseModel):
    es_valido: bool
    coincidencias: list[str] = []
    discrepancias: list[str] = []


class TextoOCR(BaseModel):
    texto: str


class CombinarINERequest(BaseModel):
    frente: DatosINE
    reverso: DatosINE


class ValidarINERequest(BaseModel):
    datos_ine: DatosINE
    datos_usuario: DatosUsuario


class CalidadOCRResponse(BaseModel):
    valido: bool
    puntaje: int
    motivo: str
    estrategia: str


class EscaneoINEResponse(BaseModel):
    datos: DatosINE
    calidad_frente: CalidadOCRResponse
    calidad_reverso: CalidadOCRResponse | None = None
