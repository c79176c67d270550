"""Constantes legales centralizadas según la Ley Federal del Trabajo (LFT) México.

Este módulo agrupa los parámetros numéricos y tablas derivados de la LFT
para uso en el cálculo de liquidaciones y en la lectura de credenciales INE.
Todas las constantes documentan el artículo de la LFT que las sustenta.
"""

from decimal import Decimal
from types import MappingProxyType
from typing import Final, Mapping

# ---------------------------------------------------------------------------
# Art. 87 LFT: Aguinaldo
# Los trabajadores tendrán derecho a una gratificación anual de al menos
# 15 días de salario. Quienes no hayan cumplido el año tendrán derecho
# a la parte proporcional.
# ---------------------------------------------------------------------------
"""Art. 87 LFT: Días mínimos de aguinaldo anual."""
DIAS_AGUINALDO: Final[int] = 15

"""Días del año usados para prorratear aguinaldo y vacaciones."""
DIAS_POR_ANIO: Final[int] = 365

# ---------------------------------------------------------------------------
# Art. 80 LFT: Prima vacacional
# Los trabajadores tendrán derecho a una prima no menor de 25% sobre
# los salarios que les correspondan durante el período de vacaciones.
# ---------------------------------------------------------------------------
"""Art. 80 LFT: Porcentaje mínimo de prima vacacional sobre salarios vacacionales."""
PORCENTAJE_PRIMA_VACACIONAL: Final[Decimal] = Decimal("0.25")

# ---------------------------------------------------------------------------
# Art. 48 LFT: Indemnización constitucional (despido injustificado)
# En caso de despido injustificado el patrón estará obligado a pagar
# tres meses de salario (90 días).
# ---------------------------------------------------------------------------
"""Art. 48 LFT: Meses de salario por indemnización constitucional."""
INDEMNIZACION_CONSTITUCIONAL_MESES: Final[int] = 3

"""Días de salario por mes usados por la LFT (salario mensual = diario × 30)."""
DIAS_POR_MES: Final[int] = 30

"""Art. 48 LFT: Días de salario de la indemnización constitucional."""
INDEMNIZACION_CONSTITUCIONAL_DIAS: Final[int] = INDEMNIZACION_CONSTITUCIONAL_MESES * DIAS_POR_MES

# ---------------------------------------------------------------------------
# Art. 50 LFT: 20 días de salario por cada año de servicios
# ---------------------------------------------------------------------------
"""Art. 50 LFT: Días de salario por año de antigüedad (tiempo indeterminado)."""
INDEMNIZACION_DIAS_POR_ANIO: Final[int] = 20

# ---------------------------------------------------------------------------
# Art. 162 LFT: Prima de antigüedad
# Los trabajadores de planta tienen derecho a una prima por antigüedad de
# 12 días de salario por cada año de servicios. El salario base no podrá
# exceder del doble del salario mínimo general (Art. 486).
# ---------------------------------------------------------------------------
"""Art. 162 LFT: Días de salario por año para prima de antigüedad."""
PRIMA_ANTIGUEDAD_DIAS_POR_ANIO: Final[int] = 12

"""Art. 162 LFT: Tope de prima de antigüedad (veces el salario mínimo)."""
PRIMA_ANTIGUEDAD_TOPE_VECES_SALARIO_MINIMO: Final[int] = 2

"""Salario mínimo general diario 2025 (referencia para el tope del Art. 162)."""
SALARIO_MINIMO_GENERAL_DIARIO: Final[Decimal] = Decimal("278.80")

# ---------------------------------------------------------------------------
# Art. 48 LFT: Salarios caídos
# Máximo 12 meses de salarios vencidos; después corren intereses del 2%
# mensual sobre el importe de esos 12 meses de salario.
# ---------------------------------------------------------------------------
"""Art. 48 LFT: Tope de días de salarios caídos (12 meses)."""
SALARIOS_CAIDOS_TOPE_DIAS: Final[int] = 365

"""Art. 48 LFT: Interés mensual sobre salarios caídos después del tope."""
INTERES_SALARIOS_CAIDOS_MENSUAL: Final[Decimal] = Decimal("0.02")

"""Duración estimada de un juicio cuando no se conoce fecha de referencia."""
DIAS_JUICIO_ESTIMADO: Final[int] = 180

# ---------------------------------------------------------------------------
# Arts. 66-68, 73, 75 LFT: Tiempo extra, prima dominical y días de descanso
# ---------------------------------------------------------------------------
"""Art. 67 LFT: Horas extra semanales pagadas al doble."""
HORAS_EXTRA_DOBLES_SEMANALES: Final[int] = 9

"""Art. 67 LFT: Factor de pago de las primeras 9 horas extra semanales."""
FACTOR_HORA_EXTRA_DOBLE: Final[Decimal] = Decimal("2")

"""Art. 68 LFT: Factor de pago de las horas extra que exceden 9 semanales."""
FACTOR_HORA_EXTRA_TRIPLE: Final[Decimal] = Decimal("3")

"""Art. 61 LFT: Horas de la jornada diurna usadas para el valor hora."""
HORAS_JORNADA_DIURNA: Final[int] = 8

"""Art. 71 LFT: Prima dominical sobre el salario diario."""
PORCENTAJE_PRIMA_DOMINICAL: Final[Decimal] = Decimal("0.25")

"""Art. 75 LFT: Factor de pago por día de descanso obligatorio laborado."""
FACTOR_DIA_FESTIVO: Final[Decimal] = Decimal("2")

# ---------------------------------------------------------------------------
# Honorarios del despacho (política fija, no configurable)
# ---------------------------------------------------------------------------
"""Honorarios sobre el total bruto en conciliación."""
HONORARIOS_CONCILIACION: Final[Decimal] = Decimal("0.25")

"""Honorarios sobre el total bruto en juicio."""
HONORARIOS_JUICIO: Final[Decimal] = Decimal("0.35")

# ---------------------------------------------------------------------------
# Vacaciones Dignas (reforma LFT, en vigor desde 2023): Art. 76
# Tabla progresiva de días de vacaciones según años de antigüedad.
# Años 1-5: 12, 14, 16, 18, 20 días; después +2 días cada 5 años (máx. 32).
# ---------------------------------------------------------------------------
_VACACIONES_BASE: list[tuple[int, int]] = [
    (1, 12),
    (2, 14),
    (3, 16),
    (4, 18),
    (5, 20),
]
_VACACIONES_RANGOS: list[tuple[int, int]] = [
    (10, 22),
    (15, 24),
    (20, 26),
    (25, 28),
    (30, 30),
    (35, 32),
]

"""Días de vacaciones a partir del año 31 de servicio."""
VACACIONES_DIAS_MAXIMO: Final[int] = 32


def _build_vacaciones_dignas_dict() -> dict[int, int]:
    """Construye el diccionario año -> días de vacaciones (Vacaciones Dignas)."""
    result: dict[int, int] = {}
    for anio, dias in _VACACIONES_BASE:
        result[anio] = dias
    ultimo_anio = 5
    for tope_anio, dias in _VACACIONES_RANGOS:
        for anio in range(ultimo_anio + 1, tope_anio + 1):
            result[anio] = dias
        ultimo_anio = tope_anio
    return result


"""Tabla de días de vacaciones por año de antigüedad (Vacaciones Dignas, LFT)."""
VACACIONES_DIGNAS: Final[Mapping[int, int]] = MappingProxyType(_build_vacaciones_dignas_dict())


def dias_vacaciones_por_anio(anio_servicio: int) -> int:
    """Días de vacaciones que corresponden al año de servicio indicado (1 = primer año)."""
    if anio_servicio <= 0:
        return 0
    return VACACIONES_DIGNAS.get(anio_servicio, VACACIONES_DIAS_MAXIMO)


# ---------------------------------------------------------------------------
# Claves de entidad federativa (RENAPO) usadas en las posiciones 12-13 de la CURP
# ---------------------------------------------------------------------------
"""Clave RENAPO para personas nacidas fuera de México."""
CLAVE_NACIDO_EXTRANJERO: Final[str] = "NE"

ESTADOS_MEXICO: Final[Mapping[str, str]] = MappingProxyType(
    {
        "AS": "Aguascalientes",
        "BC": "Baja California",
        "BS": "Baja California Sur",
        "CC": "Campeche",
        "CL": "Coahuila",
        "CM": "Colima",
        "CS": "Chiapas",
        "CH": "Chihuahua",
        "DF": "Ciudad de México",
        "DG": "Durango",
        "GT": "Guanajuato",
        "GR": "Guerrero",
        "HG": "Hidalgo",
        "JC": "Jalisco",
        "MC": "México",
        "MN": "Michoacán",
        "MS": "Morelos",
        "NT": "Nayarit",
        "NL": "Nuevo León",
        "OC": "Oaxaca",
        "PL": "Puebla",
        "QT": "Querétaro",
        "QR": "Quintana Roo",
        "SP": "San Luis Potosí",
        "SL": "Sinaloa",
        "SR": "Sonora",
        "TC": "Tabasco",
        "TS": "Tamaulipas",
        "TL": "Tlaxcala",
        "VZ": "Veracruz",
        "YN": "Yucatán",
        "ZS": "Zacatecas",
        CLAVE_NACIDO_EXTRANJERO: "Nacido en el Extranjero",
    }
)
