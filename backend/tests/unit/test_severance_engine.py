from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

import pytest

from app.core.exceptions import (
    InvalidDateRangeError,
    InvalidSalaryError,
    LiquidacionError,
    UnknownTerminationTypeError,
)
from app.core.legal_constants import dias_vacaciones_por_anio
from app.schemas.liquidacion import RegistroLaboral, TipoTerminacion
from app.services.severance_engine import (
    CONCEPTOS_CONCILIACION,
    CONCEPTOS_SOLO_JUICIO,
    calcular_dias_festivos,
    calcular_horas_extra,
    calcular_prima_dominical,
    compute_severance,
    compute_tenure,
)
from tests.fixtures.synthetic_cases import (
    CASE_DESPIDO_CUATRO_ANIOS,
    CASE_JUICIO_COMPLETO,
    CASE_SALARIO_MENSUAL,
    CASE_UN_DIA_SALARIO_MINIMO,
)


def _registro(base: dict, **overrides) -> RegistroLaboral:
    return RegistroLaboral(**{**base, **overrides})


def test_unjustified_dismissal_four_years():
    desglose = compute_severance(_registro(CASE_DESPIDO_CUATRO_ANIOS))
    conceptos = desglose.conciliacion.conceptos

    assert desglose.antiguedad.anios == 4
    assert desglose.antiguedad.anios_decimales == Decimal("4")
    assert desglose.tipo_terminacion is TipoTerminacion.DESPIDO_INJUSTIFICADO
    assert conceptos["indemnizacion_constitucional"] == Decimal("45000.00")
    assert conceptos["indemnizacion_20_dias"] == Decimal("40000.00")
    assert list(conceptos) == list(CONCEPTOS_CONCILIACION)


def test_trial_scenario_is_superset_of_conciliation():
    desglose = compute_severance(_registro(CASE_JUICIO_COMPLETO))

    for nombre, monto in desglose.conciliacion.conceptos.items():
        assert desglose.juicio.conceptos[nombre] == monto
    assert list(desglose.juicio.conceptos) == list(CONCEPTOS_CONCILIACION) + list(CONCEPTOS_SOLO_JUICIO)
    assert desglose.juicio.total_bruto >= desglose.conciliacion.total_bruto


def test_back_pay_capped_with_interest_beyond_twelve_months():
    desglose = compute_severance(_registro(CASE_JUICIO_COMPLETO))
    juicio = desglose.juicio.conceptos

    # 731 días entre salida y referencia: 365 topados, 12 meses completos de excedente.
    assert juicio["salarios_caidos"] == Decimal("292000.00")
    assert juicio["intereses_salarios_caidos"] == Decimal("70080.00")
    assert juicio["otros_conceptos"] == Decimal("5000.00")
    assert juicio["horas_extra"] == Decimal("12000.00")


def test_default_trial_reference_is_six_months_after_termination():
    desglose = compute_severance(_registro(CASE_DESPIDO_CUATRO_ANIOS))

    assert desglose.juicio.conceptos["salarios_caidos"] == Decimal("90000.00")
    assert desglose.juicio.conceptos["intereses_salarios_caidos"] == Decimal("0.00")


def test_fee_math_for_both_scenarios():
    desglose = compute_severance(_registro(CASE_SALARIO_MENSUAL))

    for escenario, tasa in ((desglose.conciliacion, "0.25"), (desglose.juicio, "0.35")):
        esperado = (escenario.total_bruto * Decimal(tasa)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        assert escenario.tasa_honorarios == Decimal(tasa)
        assert escenario.honorarios == esperado
        assert escenario.total_neto == escenario.total_bruto - escenario.honorarios
        assert escenario.total_bruto == sum(escenario.conceptos.values())
    assert desglose.diferencia == desglose.juicio.total_neto - desglose.conciliacion.total_neto


def test_monthly_salary_and_vacation_concepts():
    desglose = compute_severance(_registro(CASE_SALARIO_MENSUAL))
    conceptos = desglose.conciliacion.conceptos

    assert desglose.salario_diario == Decimal("500.00")
    assert (desglose.antiguedad.anios, desglose.antiguedad.meses, desglose.antiguedad.dias) == (5, 6, 15)
    # Año 5: 20 días menos 4 tomados; año 6 en curso: 22 días × 6/12.
    assert conceptos["vacaciones_pendientes"] == Decimal("8000.00")
    assert conceptos["vacaciones_proporcionales"] == Decimal("5500.00")
    assert conceptos["prima_vacacional"] == Decimal("3375.00")
    assert conceptos["salarios_adeudados"] == Decimal("2500.00")


def test_seniority_premium_uses_minimum_wage_cap():
    desglose = compute_severance(_registro(CASE_JUICIO_COMPLETO))

    # 800 > 2 × 278.80, el tope es 557.60 × 12 días × 8 años.
    assert desglose.conciliacion.conceptos["prima_antiguedad"] == Decimal("53529.60")


def test_voluntary_termination_has_no_indemnity():
    desglose = compute_severance(_registro(CASE_DESPIDO_CUATRO_ANIOS, tipo_terminacion="TERMINACION_VOLUNTARIA"))

    assert desglose.conciliacion.conceptos["indemnizacion_constitucional"] == Decimal("0.00")
    assert desglose.conciliacion.conceptos["indemnizacion_20_dias"] == Decimal("0.00")
    assert desglose.conciliacion.conceptos["prima_antiguedad"] > 0


def test_compute_severance_is_idempotent():
    registro = _registro(CASE_JUICIO_COMPLETO)

    assert compute_severance(registro) == compute_severance(registro)


def test_one_day_tenure_yields_breakdown_without_percentage():
    desglose = compute_severance(_registro(CASE_UN_DIA_SALARIO_MINIMO))

    assert desglose.antiguedad.dias_totales == 1
    assert desglose.conciliacion.total_neto == Decimal("0.00")
    assert desglose.diferencia_porcentaje is None


def test_difference_percentage_when_conciliation_positive():
    desglose = compute_severance(_registro(CASE_DESPIDO_CUATRO_ANIOS))

    esperado = (desglose.diferencia / desglose.conciliacion.total_neto * 100).quantize(
        Decimal("0.01"), rounding=ROUND_HALF_UP
    )
    assert desglose.diferencia_porcentaje == esperado


@pytest.mark.parametrize("fecha_salida", [date(2020, 1, 1), date(2019, 12, 31)])
def test_invalid_date_range(fecha_salida):
    with pytest.raises(InvalidDateRangeError):
        compute_severance(_registro(CASE_DESPIDO_CUATRO_ANIOS, fecha_salida=fecha_salida))


def test_missing_or_non_positive_salary():
    sin_salario = {k: v for k, v in CASE_DESPIDO_CUATRO_ANIOS.items() if k != "salario_diario"}
    with pytest.raises(InvalidSalaryError):
        compute_severance(RegistroLaboral(**sin_salario))
    with pytest.raises(InvalidSalaryError):
        compute_severance(_registro(CASE_DESPIDO_CUATRO_ANIOS, salario_diario=Decimal("0")))


def test_salary_that_rounds_to_zero_is_rejected():
    with pytest.raises(InvalidSalaryError):
        compute_severance(_registro(CASE_DESPIDO_CUATRO_ANIOS, salario_diario=Decimal("0.004")))

    sin_diario = {k: v for k, v in CASE_DESPIDO_CUATRO_ANIOS.items() if k != "salario_diario"}
    with pytest.raises(InvalidSalaryError):
        compute_severance(RegistroLaboral(**sin_diario, salario_mensual=Decimal("0.1")))

    # 0.005 redondea a 0.01 y sigue siendo válido.
    assert compute_severance(
        _registro(CASE_DESPIDO_CUATRO_ANIOS, salario_diario=Decimal("0.005"))
    ).salario_diario == Decimal("0.01")


def test_unknown_termination_type():
    with pytest.raises(UnknownTerminationTypeError) as exc_info:
        compute_severance(_registro(CASE_DESPIDO_CUATRO_ANIOS, tipo_terminacion="RENUNCIA"))
    assert exc_info.value.valor == "RENUNCIA"
    assert isinstance(exc_info.value, LiquidacionError)


def test_date_range_checked_before_salary():
    with pytest.raises(InvalidDateRangeError):
        compute_severance(
            _registro(
                CASE_DESPIDO_CUATRO_ANIOS,
                fecha_salida=date(2019, 1, 1),
                salario_diario=Decimal("-5"),
                tipo_terminacion="RENUNCIA",
            )
        )


def test_negative_pending_vacation_is_clamped_with_warning():
    desglose = compute_severance(_registro(CASE_DESPIDO_CUATRO_ANIOS, dias_vacaciones_tomados=Decimal("30")))

    assert desglose.conciliacion.conceptos["vacaciones_pendientes"] == Decimal("0.00")
    assert any("dias_vacaciones_pendientes" in a for a in desglose.advertencias)


def test_christmas_bonus_below_minimum_is_raised_with_warning():
    base = compute_severance(_registro(CASE_SALARIO_MENSUAL))
    desglose = compute_severance(_registro(CASE_SALARIO_MENSUAL, dias_aguinaldo=Decimal("10")))

    assert desglose.conciliacion.conceptos["aguinaldo_proporcional"] == base.conciliacion.conceptos["aguinaldo_proporcional"]
    assert any("dias_aguinaldo" in a for a in desglose.advertencias)


def test_termination_type_is_case_insensitive():
    registro = _registro(CASE_DESPIDO_CUATRO_ANIOS, tipo_terminacion="  rescision_justificada ")

    assert compute_severance(registro).tipo_terminacion is TipoTerminacion.RESCISION_JUSTIFICADA


def test_compute_tenure_with_leap_day():
    antiguedad = compute_tenure(date(2020, 2, 29), date(2021, 3, 1))

    assert antiguedad.anios == 1
    assert antiguedad.dias_totales == 366


def test_vacation_table():
    assert dias_vacaciones_por_anio(0) == 0
    assert dias_vacaciones_por_anio(1) == 12
    assert dias_vacaciones_por_anio(5) == 20
    assert dias_vacaciones_por_anio(6) == 22
    assert dias_vacaciones_por_anio(40) == 32


def test_overtime_and_premium_helpers():
    assert calcular_horas_extra(Decimal("400"), Decimal("12"), 4) == Decimal("5400.00")
    assert calcular_horas_extra(Decimal("400"), Decimal("0"), 4) == Decimal("0.00")
    assert calcular_prima_dominical(Decimal("400"), 4) == Decimal("400.00")
    assert calcular_dias_festivos(Decimal("400"), 3) == Decimal("2400.00")
