"""Modelos del cálculo de liquidación laboral (LFT México).

Define el registro laboral que captura el trabajador y el desglose inmutable
que produce el motor de cálculo para los escenarios de conciliación y juicio.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TipoTerminacion(str, Enum):
    """Causa de terminación de la relación laboral."""

    DESPIDO_INJUSTIFICADO = "DESPIDO_INJUSTIFICADO"
    RESCISION_JUSTIFICADA = "RESCISION_JUSTIFICADA"
    TERMINACION_VOLUNTARIA = "TERMINACION_VOLUNTARIA"
    OTRO = "OTRO"


class OtroConcepto(BaseModel):
    """Prestación adicional reclamada en juicio (monto capturado por el usuario)."""

    model_config = ConfigDict(frozen=True)

    nombre: str
    monto: Decimal = Decimal("0")


# ---------------------------------------------------------------------------
# Registro laboral: entrada del motor
# ---------------------------------------------------------------------------
class RegistroLaboral(BaseModel):
    """Hechos de la relación laboral necesarios para calcular la liquidación.

    Las reglas de negocio (rango de fechas, salario positivo, tipo de
    terminación del catálogo) las valida el motor de cálculo para poder
    reportar errores específicos; este modelo sólo tipa los datos.
    """

    model_config = ConfigDict(frozen=True)

    fecha_ingreso: date
    fecha_salida: date
    salario_diario: Decimal | None = None
    salario_mensual: Decimal | None = None
    tipo_terminacion: str = TipoTerminacion.DESPIDO_INJUSTIFICADO.value

    # Vacaciones y aguinaldo
    dias_vacaciones_tomados: Decimal = Decimal("0")
    anios_vacaciones_adeudados: int = 1
    dias_vacaciones_pendientes: Decimal | None = None
    dias_aguinaldo: Decimal = Decimal("15")
    dias_aguinaldo_adeudado_anterior: Decimal = Decimal("0")
    salarios_adeudados: Decimal = Decimal("0")

    # Conceptos exclusivos del juicio
    fecha_referencia_juicio: date | None = None
    horas_extra: Decimal = Decimal("0")
    prima_dominical: Decimal = Decimal("0")
    dias_festivos: Decimal = Decimal("0")
    comisiones_pendientes: Decimal = Decimal("0")
    diferencias_salariales: Decimal = Decimal("0")
    otros_conceptos: tuple[OtroConcepto, ...] = ()

    @field_validator("tipo_terminacion", mode="before")
    @classmethod
    def tipo_terminacion_normalizado(cls, v: Any) -> str:
        """Acepta el enum o su valor en cualquier combinación de mayúsculas."""
        if isinstance(v, TipoTerminacion):
            return v.value
        return str(v).strip().upper() if v is not None else ""


# ---------------------------------------------------------------------------
# Desglose: salida del motor
# ---------------------------------------------------------------------------
class Antiguedad(BaseModel):
    """Antigüedad entre ingreso y salida descompuesta en años, meses y días."""

    model_config = ConfigDict(frozen=True)

    anios: int = Field(ge=0)
    meses: int = Field(ge=0)
    dias: int = Field(ge=0)
    dias_totales: int = Field(ge=0)
    anios_decimales: Decimal


class EscenarioLiquidacion(BaseModel):
    """Conceptos y totales de un escenario (conciliación o juicio)."""

    model_config = ConfigDict(frozen=True)

    conceptos: dict[str, Decimal]
    total_bruto: Decimal
    tasa_honorarios: Decimal
    honorarios: Decimal
    total_neto: Decimal


class DesgloseLiquidacion(BaseModel):
    """Resultado completo del cálculo; se construye nuevo en cada llamada."""

    model_config = ConfigDict(frozen=True)

    antiguedad: Antiguedad
    salario_diario: Decimal
    tipo_terminacion: TipoTerminacion
    conciliacion: EscenarioLiquidacion
    juicio: EscenarioLiquidacion
    diferencia: Decimal
    diferencia_porcentaje: Decimal | None = None
    advertencias: tuple[str, ...] = ()
