from __future__ import annotations

import logging
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal

from dateutil.relativedelta import relativedelta

from app.core.exceptions import InvalidDateRangeError, InvalidSalaryError, UnknownTerminationTypeError
from app.core.legal_constants import (
    DIAS_AGUINALDO,
    DIAS_JUICIO_ESTIMADO,
    DIAS_POR_ANIO,
    DIAS_POR_MES,
    FACTOR_DIA_FESTIVO,
    FACTOR_HORA_EXTRA_DOBLE,
    FACTOR_HORA_EXTRA_TRIPLE,
    HONORARIOS_CONCILIACION,
    HONORARIOS_JUICIO,
    HORAS_EXTRA_DOBLES_SEMANALES,
    HORAS_JORNADA_DIURNA,
    INDEMNIZACION_CONSTITUCIONAL_DIAS,
    INDEMNIZACION_DIAS_POR_ANIO,
    INTERES_SALARIOS_CAIDOS_MENSUAL,
    PORCENTAJE_PRIMA_DOMINICAL,
    PORCENTAJE_PRIMA_VACACIONAL,
    PRIMA_ANTIGUEDAD_DIAS_POR_ANIO,
    PRIMA_ANTIGUEDAD_TOPE_VECES_SALARIO_MINIMO,
    SALARIO_MINIMO_GENERAL_DIARIO,
    SALARIOS_CAIDOS_TOPE_DIAS,
    dias_vacaciones_por_anio,
)
from app.schemas.liquidacion import (
    Antiguedad,
    DesgloseLiquidacion,
    EscenarioLiquidacion,
    RegistroLaboral,
    TipoTerminacion,
)

logger = logging.getLogger(__name__)

CENTAVOS = Decimal("0.01")
CIEN = Decimal("100")

# Orden de presentación de los conceptos de cada escenario.
CONCEPTOS_CONCILIACION: tuple[str, ...] = (
    "indemnizacion_constitucional",
    "indemnizacion_20_dias",
    "prima_antiguedad",
    "vacaciones_pendientes",
    "vacaciones_proporcionales",
    "prima_vacacional",
    "aguinaldo_proporcional",
    "aguinaldo_adeudado_anterior",
    "salarios_adeudados",
)
CONCEPTOS_SOLO_JUICIO: tuple[str, ...] = (
    "salarios_caidos",
    "intereses_salarios_caidos",
    "horas_extra",
    "prima_dominical",
    "dias_festivos",
    "comisiones_pendientes",
    "diferencias_salariales",
    "otros_conceptos",
)


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENTAVOS, rounding=ROUND_HALF_UP)


def _non_negative(concepto: str, value: Decimal, advertencias: list[str]) -> Decimal:
    if value < 0:
        advertencias.append(f"{concepto} resultó negativo ({_money(value)}); se ajustó a 0.")
        return Decimal("0")
    return value


def compute_tenure(fecha_ingreso: date, fecha_salida: date) -> Antiguedad:
    """Antigüedad calendario exacta (años, meses y días restantes)."""
    if fecha_salida < fecha_ingreso:
        raise InvalidDateRangeError(fecha_ingreso, fecha_salida)
    delta = relativedelta(fecha_salida, fecha_ingreso)
    anios_decimales = (
        Decimal(delta.years)
        + Decimal(delta.months) / Decimal(12)
        + Decimal(delta.days) / Decimal(DIAS_POR_ANIO)
    )
    return Antiguedad(
        anios=delta.years,
        meses=delta.months,
        dias=delta.days,
        dias_totales=(fecha_salida - fecha_ingreso).days,
        anios_decimales=anios_decimales.quantize(Decimal("0.0001"), rounding=ROUND_HALF_UP),
    )


def _resolve_daily_salary(registro: RegistroLaboral) -> Decimal:
    if registro.salario_diario is not None:
        salario = registro.salario_diario
    elif registro.salario_mensual is not None:
        salario = registro.salario_mensual / Decimal(DIAS_POR_MES)
    else:
        raise InvalidSalaryError("Se requiere salario_diario o salario_mensual")
    salario_redondeado = _money(salario)
    if salario_redondeado <= 0:
        raise InvalidSalaryError(f"El salario diario debe ser mayor que cero (recibido {salario})")
    return salario_redondeado


def _resolve_termination_type(valor: str) -> TipoTerminacion:
    try:
        return TipoTerminacion(valor)
    except ValueError:
        raise UnknownTerminationTypeError(valor) from None


def _owed_vacation_days(registro: RegistroLaboral, antiguedad: Antiguedad) -> Decimal:
    if registro.dias_vacaciones_pendientes is not None:
        return registro.dias_vacaciones_pendientes
    anios_adeudados = max(0, min(registro.anios_vacaciones_adeudados, antiguedad.anios))
    primer_anio = antiguedad.anios - anios_adeudados + 1
    dias = sum(dias_vacaciones_por_anio(anio) for anio in range(primer_anio, antiguedad.anios + 1))
    return Decimal(dias) - registro.dias_vacaciones_tomados


def _days_worked_in_calendar_year(fecha_salida: date, antiguedad: Antiguedad) -> int:
    inicio_anio = date(fecha_salida.year, 1, 1)
    return min((fecha_salida - inicio_anio).days, antiguedad.dias_totales)


def _build_scenario(conceptos: dict[str, Decimal], tasa: Decimal) -> EscenarioLiquidacion:
    total_bruto = sum(conceptos.values(), Decimal("0.00"))
    honorarios = _money(total_bruto * tasa)
    return EscenarioLiquidacion(
        conceptos=conceptos,
        total_bruto=total_bruto,
        tasa_honorarios=tasa,
        honorarios=honorarios,
        total_neto=total_bruto - honorarios,
    )


def compute_severance(registro: RegistroLaboral) -> DesgloseLiquidacion:
    """
    Calcula la liquidación en conciliación y en juicio para un registro laboral.

    Función pura: no hay I/O y el mismo registro produce siempre el mismo desglose.
    Los errores de captura (fechas, salario, tipo de terminación) se lanzan antes
    de calcular cualquier concepto.
    """
    if registro.fecha_ingreso >= registro.fecha_salida:
        raise InvalidDateRangeError(registro.fecha_ingreso, registro.fecha_salida)
    sd = _resolve_daily_salary(registro)
    tipo = _resolve_termination_type(registro.tipo_terminacion)

    antiguedad = compute_tenure(registro.fecha_ingreso, registro.fecha_salida)
    anios = antiguedad.anios_decimales
    advertencias: list[str] = []
    despido = tipo is TipoTerminacion.DESPIDO_INJUSTIFICADO

    # Art. 48 y 50: sólo proceden por despido injustificado.
    indemnizacion_constitucional = sd * INDEMNIZACION_CONSTITUCIONAL_DIAS if despido else Decimal("0")
    indemnizacion_20_dias = sd * INDEMNIZACION_DIAS_POR_ANIO * anios if despido else Decimal("0")

    tope_prima = SALARIO_MINIMO_GENERAL_DIARIO * PRIMA_ANTIGUEDAD_TOPE_VECES_SALARIO_MINIMO
    prima_antiguedad = min(sd, tope_prima) * PRIMA_ANTIGUEDAD_DIAS_POR_ANIO * anios

    dias_pendientes = _non_negative(
        "dias_vacaciones_pendientes", _owed_vacation_days(registro, antiguedad), advertencias
    )
    dias_proporcionales = (
        Decimal(dias_vacaciones_por_anio(antiguedad.anios + 1)) * Decimal(antiguedad.meses) / Decimal(12)
    )
    prima_vacacional = PORCENTAJE_PRIMA_VACACIONAL * (dias_pendientes + dias_proporcionales) * sd

    dias_aguinaldo = registro.dias_aguinaldo
    if dias_aguinaldo < DIAS_AGUINALDO:
        advertencias.append(
            f"dias_aguinaldo ({dias_aguinaldo}) es menor al mínimo legal; se usan {DIAS_AGUINALDO} días."
        )
        dias_aguinaldo = Decimal(DIAS_AGUINALDO)
    dias_trabajados_anio = _days_worked_in_calendar_year(registro.fecha_salida, antiguedad)
    aguinaldo_proporcional = dias_aguinaldo * sd * Decimal(dias_trabajados_anio) / Decimal(DIAS_POR_ANIO)

    aguinaldo_anterior = registro.dias_aguinaldo_adeudado_anterior * sd

    montos_conciliacion = {
        "indemnizacion_constitucional": indemnizacion_constitucional,
        "indemnizacion_20_dias": indemnizacion_20_dias,
        "prima_antiguedad": prima_antiguedad,
        "vacaciones_pendientes": dias_pendientes * sd,
        "vacaciones_proporcionales": dias_proporcionales * sd,
        "prima_vacacional": prima_vacacional,
        "aguinaldo_proporcional": aguinaldo_proporcional,
        "aguinaldo_adeudado_anterior": aguinaldo_anterior,
        "salarios_adeudados": registro.salarios_adeudados,
    }

    # Salarios caídos: tope de 12 meses, intereses del 2% mensual a partir de ahí.
    fecha_referencia = registro.fecha_referencia_juicio or (
        registro.fecha_salida + timedelta(days=DIAS_JUICIO_ESTIMADO)
    )
    dias_desde_salida = Decimal((fecha_referencia - registro.fecha_salida).days)
    dias_desde_salida = _non_negative("dias_desde_salida", dias_desde_salida, advertencias)
    salarios_caidos = sd * min(dias_desde_salida, Decimal(SALARIOS_CAIDOS_TOPE_DIAS))
    meses_excedentes = max(0, int(dias_desde_salida) - SALARIOS_CAIDOS_TOPE_DIAS) // DIAS_POR_MES
    intereses = sd * SALARIOS_CAIDOS_TOPE_DIAS * INTERES_SALARIOS_CAIDOS_MENSUAL * meses_excedentes

    montos_juicio = {
        "salarios_caidos": salarios_caidos,
        "intereses_salarios_caidos": intereses,
        "horas_extra": registro.horas_extra,
        "prima_dominical": registro.prima_dominical,
        "dias_festivos": registro.dias_festivos,
        "comisiones_pendientes": registro.comisiones_pendientes,
        "diferencias_salariales": registro.diferencias_salariales,
        "otros_conceptos": sum((c.monto for c in registro.otros_conceptos), Decimal("0")),
    }

    conceptos_conciliacion = {
        nombre: _money(_non_negative(nombre, montos_conciliacion[nombre], advertencias))
        for nombre in CONCEPTOS_CONCILIACION
    }
    conceptos_juicio = dict(conceptos_conciliacion)
    for nombre in CONCEPTOS_SOLO_JUICIO:
        conceptos_juicio[nombre] = _money(_non_negative(nombre, montos_juicio[nombre], advertencias))

    conciliacion = _build_scenario(conceptos_conciliacion, HONORARIOS_CONCILIACION)
    juicio = _build_scenario(conceptos_juicio, HONORARIOS_JUICIO)

    diferencia = juicio.total_neto - conciliacion.total_neto
    diferencia_porcentaje = None
    if conciliacion.total_neto != 0:
        diferencia_porcentaje = _money(diferencia / conciliacion.total_neto * CIEN)

    logger.info(
        "severance_computed tipo=%s anios=%s sd=%s conciliacion_neto=%s juicio_neto=%s advertencias=%s",
        tipo.value,
        antiguedad.anios,
        sd,
        conciliacion.total_neto,
        juicio.total_neto,
        len(advertencias),
    )
    return DesgloseLiquidacion(
        antiguedad=antiguedad,
        salario_diario=sd,
        tipo_terminacion=tipo,
        conciliacion=conciliacion,
        juicio=juicio,
        diferencia=diferencia,
        diferencia_porcentaje=diferencia_porcentaje,
        advertencias=tuple(advertencias),
    )


# ---------------------------------------------------------------------------
# Auxiliares para estimar los montos que el usuario captura para el juicio
# ---------------------------------------------------------------------------
def calcular_horas_extra(salario_diario: Decimal, horas_semanales: Decimal, semanas: int) -> Decimal:
    """Arts. 67-68 LFT: primeras 9 horas semanales al doble, el excedente al triple."""
    if horas_semanales <= 0 or semanas <= 0:
        return Decimal("0.00")
    valor_hora = salario_diario / HORAS_JORNADA_DIURNA
    horas_dobles = min(horas_semanales, Decimal(HORAS_EXTRA_DOBLES_SEMANALES)) * semanas
    horas_triples = max(Decimal("0"), horas_semanales - HORAS_EXTRA_DOBLES_SEMANALES) * semanas
    monto = horas_dobles * valor_hora * FACTOR_HORA_EXTRA_DOBLE + horas_triples * valor_hora * FACTOR_HORA_EXTRA_TRIPLE
    return _money(monto)


def calcular_prima_dominical(salario_diario: Decimal, domingos: int) -> Decimal:
    """Art. 71 LFT: 25% del salario diario por cada domingo laborado."""
    return _money(salario_diario * PORCENTAJE_PRIMA_DOMINICAL * max(domingos, 0))


def calcular_dias_festivos(salario_diario: Decimal, dias: int) -> Decimal:
    """Art. 75 LFT: salario doble adicional por día de descanso obligatorio laborado."""
    return _money(salario_diario * FACTOR_DIA_FESTIVO * max(dias, 0))
