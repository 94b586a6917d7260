# ==============================================================================
# FUENTE DE REGISTROS JSON
# ==============================================================================
# Implementación de IRecordSource sobre los repositorios JSON.
# Convierte filas crudas en entidades (Gasto, Pedido) y resuelve la
# descripción de la categoría de cada gasto.
# ==============================================================================

import logging
from typing import List

from app_finanzas.models import CategoriaGasto, Gasto, Pedido
from app_finanzas.repositories.interfaces import (
    ICategoryRepository,
    IExpenseRepository,
    IOrderRepository,
)


logger = logging.getLogger(__name__)


class JsonRecordSource:
    """
    Fuente de gastos y pedidos basada en archivos JSON.

    Uso:
        source = JsonRecordSource(ExpenseRepository(path),
                                  OrderRepository(path),
                                  CategoryRepository(path))
        gastos = source.fetch_expenses(DateSet.single('2024-01-01'))
    """

    def __init__(
        self,
        expense_repo: IExpenseRepository,
        order_repo: IOrderRepository,
        category_repo: ICategoryRepository
    ):
        self.expense_repo = expense_repo
        self.order_repo = order_repo
        self.category_repo = category_repo

    def fetch_expenses(self, date_set) -> List[Gasto]:
        """Gastos del conjunto de fechas, con la categoría resuelta."""
        if not date_set:
            return []
        rows = self.expense_repo.get_by_dates(date_set)
        categorias = self.category_repo.get_description_map()
        gastos = [Gasto.from_dict(row, categorias) for row in rows]
        logger.debug('Gastos leídos para %r: %d', date_set, len(gastos))
        return gastos

    def fetch_orders(self, date_set) -> List[Pedido]:
        """Pedidos finalizados y no borrados del conjunto de fechas."""
        if not date_set:
            return []
        rows = self.order_repo.get_finalized_by_dates(date_set)
        pedidos = [Pedido.from_dict(row) for row in rows]
        logger.debug('Pedidos leídos para %r: %d', date_set, len(pedidos))
        return pedidos

    def get_categories(self) -> List[CategoriaGasto]:
        return [CategoriaGasto.from_dict(row) for row in self.category_repo.get_categories()]
