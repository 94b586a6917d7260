# ==============================================================================
# REPOSITORIO DE CATEGORÍAS DE GASTOS
# ==============================================================================
# Encapsula el acceso a categoriagastos.json.
# ==============================================================================

from typing import Any, Dict, List

from app_finanzas.repositories.base import ListRepository


class CategoryRepository(ListRepository):
    """
    Repositorio de categorías.

    Formato: [{"idcategoriagastos": 1, "descripcion": "Insumos"}, ...]
    """

    FILE_NAME = 'categoriagastos.json'

    def get_categories(self) -> List[Dict[str, Any]]:
        """Categorías ordenadas por descripción."""
        return sorted(self.get_all(), key=lambda r: str(r.get('descripcion') or '').lower())

    def get_description_map(self) -> Dict[int, str]:
        """
        Mapa id -> descripción para resolver la categoría de cada gasto.
        Se omiten filas sin id numérico o sin descripción.
        """
        result: Dict[int, str] = {}
        for row in self.get_all():
            try:
                cat_id = int(row.get('idcategoriagastos'))
            except (TypeError, ValueError):
                continue
            descripcion = row.get('descripcion')
            if descripcion:
                result[cat_id] = descripcion
        return result
