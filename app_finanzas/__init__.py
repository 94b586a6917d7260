"""Reportes financieros de gastos y pedidos para el negocio."""

__version__ = '1.0.0'
