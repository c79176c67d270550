"""Errores de validación del cálculo de liquidación."""

from __future__ import annotations


class LiquidacionError(ValueError):
    """Base de los errores de datos de entrada del cálculo de liquidación."""


class InvalidDateRangeError(LiquidacionError):
    """La fecha de salida no es posterior a la fecha de ingreso."""

    def __init__(self, fecha_ingreso, fecha_salida) -> None:
        self.fecha_ingreso = fecha_ingreso
        self.fecha_salida = fecha_salida
        super().__init__(
            f"fecha_salida ({fecha_salida}) debe ser posterior a fecha_ingreso ({fecha_ingreso})"
        )


class InvalidSalaryError(LiquidacionError):
    """No hay salario o el salario diario no es positivo."""


class UnknownTerminationTypeError(LiquidacionError):
    """El tipo de terminación no pertenece al catálogo."""

    def __init__(self, valor: str) -> None:
        self.valor = valor
        super().__init__(f"Tipo de terminación desconocido: {valor!r}")
