# ==============================================================================
# CAPA DE REPOSITORIOS - Acceso a datos
# ==============================================================================
# Esta capa encapsula todo el acceso a los registros del backend
# (actualmente archivos JSON exportados).
#
# ESTRUCTURA:
# ├── interfaces.py          → Protocolos (IRecordSource y repositorios)
# ├── base.py                → ListRepository (lectura de JSON)
# ├── expense_repository.py  → gastos.json
# ├── order_repository.py    → pedidos.json (solo finalizados)
# ├── category_repository.py → categoriagastos.json
# └── record_source.py       → JsonRecordSource (filas → entidades)
# ==============================================================================

# Interfaces
from app_finanzas.repositories.interfaces import (
    IExpenseRepository,
    IOrderRepository,
    ICategoryRepository,
    IRecordSource,
)

# Implementaciones JSON
from app_finanzas.repositories.base import ListRepository
from app_finanzas.repositories.expense_repository import ExpenseRepository
from app_finanzas.repositories.order_repository import OrderRepository
from app_finanzas.repositories.category_repository import CategoryRepository
from app_finanzas.repositories.record_source import JsonRecordSource

__all__ = [
    # Interfaces
    'IExpenseRepository',
    'IOrderRepository',
    'ICategoryRepository',
    'IRecordSource',

    # Clase base
    'ListRepository',

    # Implementaciones JSON
    'ExpenseRepository',
    'OrderRepository',
    'CategoryRepository',
    'JsonRecordSource',
]
