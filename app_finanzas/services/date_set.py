# ==============================================================================
# CONJUNTO DE FECHAS - Ventana de un reporte
# ==============================================================================
# Un reporte puede pedirse para:
#   - Un día (pestaña "Reporte")
#   - Un rango continuo (pestaña "Gastos")
#   - Fechas sueltas elegidas en el calendario (pestaña "Consolidado")
#
# Las tres formas terminan siendo el mismo objeto: un conjunto de claves
# YYYY-MM-DD, sin orden ni duplicados. Al ser fechas civiles (sin hora ni
# zona), el orden lexicográfico es el orden cronológico.
# ==============================================================================

import re
from datetime import date, datetime, timedelta
from typing import FrozenSet, Iterable, Iterator, List, Optional, Union

from app_finanzas import config
from app_finanzas.services.errors import InvalidRange


_DATE_KEY_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')

DateLike = Union[str, date]


def parse_date_key(value: DateLike) -> date:
    """
    Convierte una clave YYYY-MM-DD (o un date) a date.

    Raises:
        InvalidRange: Si el texto no es una fecha civil válida
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = (value or '').strip() if isinstance(value, str) else ''
    if not _DATE_KEY_RE.match(text):
        raise InvalidRange(f'Fecha inválida: {value!r} (formato esperado YYYY-MM-DD)')
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise InvalidRange(f'Fecha inexistente: {value!r}')


def normalize_date_key(value: DateLike) -> str:
    """Valida y devuelve la clave en forma canónica."""
    return parse_date_key(value).isoformat()


def is_date_key(value) -> bool:
    """True si el valor es una clave YYYY-MM-DD válida."""
    try:
        parse_date_key(value)
    except InvalidRange:
        return False
    return True


class DateSet:
    """
    Conjunto normalizado de fechas civiles.

    Inmutable y sin orden propio; se enumera ascendente para desgloses
    diarios y descendente para listados. Un DateSet vacío es válido y
    representa "no se pidió ningún dato".
    """

    __slots__ = ('_keys',)

    def __init__(self, keys: Iterable[DateLike] = ()):
        self._keys: FrozenSet[str] = frozenset(normalize_date_key(k) for k in keys)

    # =========================================================================
    # CONSTRUCTORES
    # =========================================================================

    @classmethod
    def from_range(cls, start: DateLike, end: DateLike) -> 'DateSet':
        """
        Todas las fechas de start a end, ambas inclusive.

        Raises:
            InvalidRange: Si start > end o alguna fecha es inválida
        """
        start_date = parse_date_key(start)
        end_date = parse_date_key(end)
        if start_date > end_date:
            raise InvalidRange(
                f'Rango inválido: inicio {start_date.isoformat()} '
                f'es posterior a fin {end_date.isoformat()}'
            )

        keys = []
        current = start_date
        while current <= end_date:
            keys.append(current)
            current += timedelta(days=1)
        return cls(keys)

    @classmethod
    def from_explicit_dates(cls, dates: Iterable[DateLike]) -> 'DateSet':
        """Fechas sueltas; se ignoran duplicados y el orden de entrada."""
        return cls(dates)

    @classmethod
    def single(cls, day: DateLike) -> 'DateSet':
        """Un solo día."""
        return cls([day])

    @classmethod
    def last_days(cls, days: int, today: Optional[DateLike] = None) -> 'DateSet':
        """
        Los últimos `days` días terminando en `today` (incluido).

        Args:
            days: Cantidad de días (>= 1)
            today: Fecha final; por defecto hoy en la zona del negocio
        """
        if days < 1:
            raise InvalidRange(f'Cantidad de días inválida: {days}')
        end = parse_date_key(today) if today is not None else config.today()
        return cls.from_range(end - timedelta(days=days - 1), end)

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def sorted_ascending(self) -> List[str]:
        return sorted(self._keys)

    def sorted_descending(self) -> List[str]:
        return sorted(self._keys, reverse=True)

    @property
    def start(self) -> Optional[str]:
        """Fecha más antigua, o None si está vacío."""
        return min(self._keys) if self._keys else None

    @property
    def end(self) -> Optional[str]:
        """Fecha más reciente, o None si está vacío."""
        return max(self._keys) if self._keys else None

    def is_contiguous(self) -> bool:
        """True si las fechas forman un rango sin huecos."""
        if not self._keys:
            return True
        span = (parse_date_key(self.end) - parse_date_key(self.start)).days + 1
        return span == len(self._keys)

    def __contains__(self, value) -> bool:
        if isinstance(value, date):
            value = parse_date_key(value).isoformat()
        return value in self._keys

    def __iter__(self) -> Iterator[str]:
        return iter(self.sorted_ascending())

    def __len__(self) -> int:
        return len(self._keys)

    def __bool__(self) -> bool:
        return bool(self._keys)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DateSet):
            return NotImplemented
        return self._keys == other._keys

    def __hash__(self) -> int:
        return hash(self._keys)

    def __repr__(self) -> str:
        if len(self._keys) <= 3:
            return f'DateSet({self.sorted_ascending()!r})'
        return f'DateSet({self.start}..{self.end}, n={len(self._keys)})'
