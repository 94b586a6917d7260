# ==============================================================================
# REPOSITORIO DE GASTOS
# ==============================================================================
# Encapsula el acceso a gastos.json (export de la tabla gastos).
# ==============================================================================

from typing import Any, Dict, Iterable, List

from app_finanzas.repositories.base import ListRepository


class ExpenseRepository(ListRepository):
    """
    Repositorio de gastos.

    Formato de datos en gastos.json:
    [
        {
            "idgastos": 10,
            "fecha": "2024-01-01",
            "monto": 50.0,
            "descripcion": "Verduras",
            "idcategoriagastos": 2
        }
    ]
    """

    FILE_NAME = 'gastos.json'

    def get_by_dates(self, fechas: Iterable[str]) -> List[Dict[str, Any]]:
        """
        Gastos de las fechas indicadas, más recientes primero.

        Args:
            fechas: Claves YYYY-MM-DD

        Returns:
            Filas de gastos
        """
        rows = self.find_all_in('fecha', fechas)
        return sorted(rows, key=lambda r: str(r.get('fecha') or ''), reverse=True)
