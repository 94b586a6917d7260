# ==============================================================================
# REPOSITORIO BASE - Lectura de archivos JSON exportados del backend
# ==============================================================================
# Solo lectura: los archivos los genera el export del backend. Un archivo
# ausente se lee como lista vacía; nunca se crea desde aquí.
# ==============================================================================

import json
import logging
import os
import threading
from collections.abc import Hashable
from typing import Any, Dict, Iterable, List


logger = logging.getLogger(__name__)


class ListRepository:
    """
    Repositorio de registros almacenados como lista en un archivo JSON.

    Ejemplo: pedidos.json -> [{...}, {...}]

    Al migrar a Supabase:
    - Esta clase se reemplaza por consultas al backend
    - Los filtros de fecha se vuelven .in('fecha', fechas)
    """

    # Lock global para evitar leer un archivo a medio reemplazar por el export
    _file_lock = threading.RLock()

    FILE_NAME = ''

    def __init__(self, base_path: str):
        """
        Args:
            base_path: Directorio donde está el archivo JSON
        """
        self.file_path = os.path.join(base_path, self.FILE_NAME)

    def _read_raw(self) -> Any:
        """
        Lee los datos crudos del archivo JSON.

        Un archivo corrupto o ausente se trata como lista vacía (y se avisa
        en el log): un reporte en cero es preferible a una pantalla de error.
        """
        with self._file_lock:
            try:
                with open(self.file_path, 'r', encoding='utf-8') as f:
                    return json.load(f)
            except FileNotFoundError:
                logger.warning('No existe %s; se lee como lista vacía', self.file_path)
                return []
            except json.JSONDecodeError as exc:
                logger.error('JSON inválido en %s: %s', self.file_path, exc)
                return []

    def get_all(self) -> List[Dict[str, Any]]:
        """Todos los registros (solo los que son diccionarios)."""
        data = self._read_raw()
        if not isinstance(data, list):
            logger.error('%s no contiene una lista', self.file_path)
            return []
        return [r for r in data if isinstance(r, dict)]

    def find_all_in(self, field: str, values: Iterable[Any]) -> List[Dict[str, Any]]:
        """
        Registros cuyo campo está en `values` (equivalente a .in(field, values)).

        Args:
            field: Nombre del campo
            values: Valores aceptados

        Returns:
            Lista de registros que coinciden
        """
        wanted = set(values)
        if not wanted:
            return []
        return [
            r for r in self.get_all()
            if isinstance(r.get(field), Hashable) and r.get(field) in wanted
        ]
