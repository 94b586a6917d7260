# ==============================================================================
# AGRUPADOR - "Agrupar por clave y sumar"
# ==============================================================================
# Utilidad común para los desgloses por categoría y por día.
# Conserva el orden en que aparece cada clave por primera vez; el orden
# final de salida lo decide el agregador.
# ==============================================================================

from decimal import Decimal
from typing import Any, Callable, Dict, Hashable, Iterable, TypeVar

from app_finanzas.models import ZERO


T = TypeVar('T')


def group_by(
    records: Iterable[T],
    key_fn: Callable[[T], Hashable],
    value_fn: Callable[[T], Decimal]
) -> Dict[Hashable, Dict[str, Any]]:
    """
    Agrupa registros por clave sumando un valor numérico.

    Args:
        records: Registros a agrupar
        key_fn: Obtiene la clave de grupo de un registro
        value_fn: Obtiene el monto a sumar

    Returns:
        {clave: {'total': Decimal, 'count': int}} en orden de primera aparición
    """
    groups: Dict[Hashable, Dict[str, Any]] = {}
    for record in records:
        key = key_fn(record)
        bucket = groups.get(key)
        if bucket is None:
            bucket = groups[key] = {'total': ZERO, 'count': 0}
        bucket['total'] += value_fn(record)
        bucket['count'] += 1
    return groups
