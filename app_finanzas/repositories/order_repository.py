# ==============================================================================
# REPOSITORIO DE PEDIDOS
# ==============================================================================
# Encapsula el acceso a pedidos.json (export de la tabla pedido del POS).
#
# REGLA: solo pedidos FINALIZADOS (estado 3) y NO borrados llegan al motor.
# Pedidos abiertos, anulados o con borrado lógico nunca cuentan.
# ==============================================================================

from typing import Any, Dict, Iterable, List

from app_finanzas.config import ESTADO_FINALIZADO
from app_finanzas.repositories.base import ListRepository


def _is_finalized(row: Dict[str, Any]) -> bool:
    try:
        estado = int(row.get('estado'))
    except (TypeError, ValueError):
        return False
    return estado == ESTADO_FINALIZADO and not row.get('deleted')


class OrderRepository(ListRepository):
    """
    Repositorio de pedidos.

    Formato de datos en pedidos.json:
    [
        {
            "idpedido": 501,
            "fecha": "2024-01-01",
            "total": 200.0,
            "estado": 3,
            "deleted": null,
            "visa": 100.0, "yape": 50.0, "plin": 0, "efectivo": 50.0,
            "created_at": "2024-01-01T13:05:00-05:00"
        }
    ]
    """

    FILE_NAME = 'pedidos.json'

    def get_finalized_by_dates(self, fechas: Iterable[str]) -> List[Dict[str, Any]]:
        """
        Pedidos finalizados y no borrados de las fechas indicadas,
        más recientes primero (por created_at).
        """
        rows = [r for r in self.find_all_in('fecha', fechas) if _is_finalized(r)]
        return sorted(rows, key=lambda r: str(r.get('created_at') or ''), reverse=True)
