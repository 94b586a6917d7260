# ==============================================================================
# VALORES DE REPORTE - Resultados del motor de agregación
# ==============================================================================
# Objetos de valor inmutables. Se recalculan desde cero en cada consulta;
# nunca se persisten ni se actualizan incrementalmente.
# ==============================================================================

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

from app_finanzas.models.entities import ZERO, MetodoPago, format_money


@dataclass(frozen=True)
class CategoryBreakdown:
    """Subtotal de un grupo (categoría de gasto)."""
    category: str
    total: Decimal
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'categoria': self.category,
            'total': format_money(self.total),
            'cantidad': self.count,
        }


@dataclass(frozen=True)
class DailyBreakdown:
    """Subtotal de un día."""
    date: str
    total: Decimal
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'fecha': self.date,
            'total': format_money(self.total),
            'cantidad': self.count,
        }


@dataclass(frozen=True)
class PaymentBreakdown:
    """Totales por método de pago."""
    visa: Decimal = ZERO
    yape: Decimal = ZERO
    plin: Decimal = ZERO
    efectivo: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.visa + self.yape + self.plin + self.efectivo

    def get(self, metodo: MetodoPago) -> Decimal:
        return getattr(self, metodo.value)

    def to_dict(self) -> Dict[str, str]:
        return {m.value: format_money(self.get(m)) for m in MetodoPago}


@dataclass(frozen=True)
class Aggregation:
    """
    Resumen de una secuencia de registros de un mismo tipo.

    Attributes:
        total: Suma exacta de los montos válidos
        count: Cantidad de registros válidos
        by_group: Subtotales por grupo, mayor total primero
        by_date: Subtotales por día, fecha ascendente
        skipped: Registros omitidos por datos incompletos
    """
    total: Decimal = ZERO
    count: int = 0
    by_group: Tuple[CategoryBreakdown, ...] = ()
    by_date: Tuple[DailyBreakdown, ...] = ()
    skipped: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total': format_money(self.total),
            'cantidad': self.count,
            'por_grupo': [g.to_dict() for g in self.by_group],
            'por_dia': [d.to_dict() for d in self.by_date],
            'omitidos': self.skipped,
        }


@dataclass(frozen=True)
class OrderAggregation(Aggregation):
    """
    Resumen de pedidos: agrega el desglose por método de pago.

    Attributes:
        payments: Suma de cada método, acumulada en paralelo al total
        mismatched: Pedidos cuya suma de métodos no coincide con su total
    """
    payments: PaymentBreakdown = field(default_factory=PaymentBreakdown)
    mismatched: int = 0

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d['metodo_pago'] = self.payments.to_dict()
        d['descuadrados'] = self.mismatched
        return d


@dataclass(frozen=True)
class PaymentShare:
    """Participación de un método de pago (datos del gráfico circular)."""
    metodo: MetodoPago
    total: Decimal
    percent: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            'metodo': self.metodo.value,
            'nombre': self.metodo.label,
            'total': format_money(self.total),
            'porcentaje': format_money(self.percent),
        }


@dataclass(frozen=True)
class Report:
    """
    Reporte financiero de un conjunto de fechas.

    Todos los montos son Decimal; el formato de moneda (S/, separadores)
    es responsabilidad de la capa de presentación.
    """
    total_revenue: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    margin_percent: Decimal
    average_ticket: Decimal
    best_day: Optional[DailyBreakdown]
    payment_breakdown: PaymentBreakdown
    expense_category_breakdown: Tuple[CategoryBreakdown, ...]
    daily_breakdown: Tuple[DailyBreakdown, ...]
    order_count: int = 0
    expense_count: int = 0
    skipped: int = 0
    mismatched: int = 0
    fechas: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario serializable (montos como texto)."""
        return {
            'fechas': list(self.fechas),
            'total_ingresos': format_money(self.total_revenue),
            'total_gastos': format_money(self.total_expenses),
            'ganancia_neta': format_money(self.net_profit),
            'margen': format_money(self.margin_percent),
            'ticket_promedio': format_money(self.average_ticket),
            'mejor_dia': self.best_day.to_dict() if self.best_day else None,
            'metodo_pago': self.payment_breakdown.to_dict(),
            'gastos_por_categoria': [
                c.to_dict() for c in self.expense_category_breakdown
            ],
            'pedidos_por_dia': [d.to_dict() for d in self.daily_breakdown],
            'total_pedidos': self.order_count,
            'cantidad_gastos': self.expense_count,
            'omitidos': self.skipped,
            'descuadrados': self.mismatched,
        }
