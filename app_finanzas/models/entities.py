# ==============================================================================
# ENTIDADES DEL DOMINIO - Gastos, pedidos y categorías
# ==============================================================================
# Registros tal como llegan del backend (Supabase / JSON).
# Son inmutables para el motor de reportes: se leen, nunca se modifican.
#
# DINERO: siempre Decimal. Los floats del JSON pasan por str() antes de
# convertirse para no arrastrar errores binarios (0.1 + 0.2 != 0.3).
# ==============================================================================

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum
from typing import Any, Dict, Optional


ZERO = Decimal('0')
CENT = Decimal('0.01')


def to_money(value: Any) -> Optional[Decimal]:
    """
    Convierte un valor crudo a Decimal.

    Retorna None si el valor falta o no es numérico; el agregador decide
    qué hacer con eso (omitir el registro).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        amount = Decimal(str(value))
        return amount if amount.is_finite() else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return None
        return amount if amount.is_finite() else None
    return None


def quantize_money(value: Decimal) -> Decimal:
    """Redondea a céntimos (half-up, como toFixed(2))."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(value: Decimal) -> str:
    """Representación estable para JSON: '1234.50'."""
    return str(quantize_money(value))


def _to_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _clean_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


# ==============================================================================
# ENUMERACIONES
# ==============================================================================

class MetodoPago(str, Enum):
    """Métodos de pago que registra el punto de venta en cada pedido."""
    VISA = 'visa'
    YAPE = 'yape'
    PLIN = 'plin'
    EFECTIVO = 'efectivo'

    @property
    def label(self) -> str:
        return self.value.capitalize()


# ==============================================================================
# CATEGORÍAS
# ==============================================================================

@dataclass(frozen=True)
class CategoriaGasto:
    """
    Categoría de gasto (tabla categoriagastos).

    Attributes:
        idcategoriagastos: Identificador de la categoría
        descripcion: Nombre visible; puede faltar en datos antiguos
    """
    idcategoriagastos: int
    descripcion: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'idcategoriagastos': self.idcategoriagastos,
            'descripcion': self.descripcion,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CategoriaGasto':
        return cls(
            idcategoriagastos=_to_int(data.get('idcategoriagastos')) or 0,
            descripcion=_clean_str(data.get('descripcion')),
        )


# ==============================================================================
# GASTOS
# ==============================================================================

@dataclass(frozen=True)
class Gasto:
    """
    Gasto registrado por el usuario.

    Attributes:
        fecha: Fecha civil YYYY-MM-DD (sin hora ni zona)
        monto: Monto del gasto; None si el registro viene incompleto
        descripcion: Texto libre
        idcategoriagastos: Referencia a la categoría
        categoria: Descripción de la categoría ya resuelta (None si no se pudo)
        idgastos: Identificador en el backend
    """
    fecha: Optional[str]
    monto: Optional[Decimal]
    descripcion: str = ''
    idcategoriagastos: Optional[int] = None
    categoria: Optional[str] = None
    idgastos: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'idgastos': self.idgastos,
            'fecha': self.fecha,
            'monto': format_money(self.monto) if self.monto is not None else None,
            'descripcion': self.descripcion,
            'idcategoriagastos': self.idcategoriagastos,
            'categoria': self.categoria,
        }

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        categorias: Optional[Dict[int, str]] = None
    ) -> 'Gasto':
        """
        Crea instancia desde una fila del backend.

        La categoría se toma del join anidado ('categoriagastos': {...}) si
        viene; si no, se busca el id en el mapa de categorías recibido.
        """
        id_categoria = _to_int(data.get('idcategoriagastos'))

        categoria = None
        nested = data.get('categoriagastos')
        if isinstance(nested, dict):
            categoria = _clean_str(nested.get('descripcion'))
        if categoria is None and categorias and id_categoria is not None:
            categoria = _clean_str(categorias.get(id_categoria))

        return cls(
            fecha=_clean_str(data.get('fecha')),
            monto=to_money(data.get('monto')),
            descripcion=data.get('descripcion') or '',
            idcategoriagastos=id_categoria,
            categoria=categoria,
            idgastos=_to_int(data.get('idgastos', data.get('id'))),
        )


# ==============================================================================
# PEDIDOS
# ==============================================================================

@dataclass(frozen=True)
class Pedido:
    """
    Pedido cerrado en el punto de venta.

    La suma visa + yape + plin + efectivo DEBERÍA ser igual a total, pero el
    backend no lo garantiza. El motor no corrige los datos, solo lo reporta.

    Attributes:
        fecha: Fecha civil YYYY-MM-DD
        total: Total cobrado; None si el registro viene incompleto
        visa, yape, plin, efectivo: Monto cobrado por cada método
        idpedido: Identificador en el backend
        estado: Estado del pedido (3 = finalizado)
        deleted: Borrado lógico
    """
    fecha: Optional[str]
    total: Optional[Decimal]
    visa: Decimal = ZERO
    yape: Decimal = ZERO
    plin: Decimal = ZERO
    efectivo: Decimal = ZERO
    idpedido: Optional[int] = None
    estado: Optional[int] = None
    deleted: bool = False

    def monto_metodo(self, metodo: MetodoPago) -> Decimal:
        """Monto cobrado con un método de pago."""
        return getattr(self, metodo.value)

    @property
    def total_metodos(self) -> Decimal:
        """Suma de los cuatro métodos de pago."""
        return sum((self.monto_metodo(m) for m in MetodoPago), ZERO)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'idpedido': self.idpedido,
            'fecha': self.fecha,
            'total': format_money(self.total) if self.total is not None else None,
            'visa': format_money(self.visa),
            'yape': format_money(self.yape),
            'plin': format_money(self.plin),
            'efectivo': format_money(self.efectivo),
            'estado': self.estado,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Pedido':
        """Crea instancia desde una fila de la tabla pedido."""
        return cls(
            fecha=_clean_str(data.get('fecha')),
            total=to_money(data.get('total')),
            visa=to_money(data.get('visa')) or ZERO,
            yape=to_money(data.get('yape')) or ZERO,
            plin=to_money(data.get('plin')) or ZERO,
            efectivo=to_money(data.get('efectivo')) or ZERO,
            idpedido=_to_int(data.get('idpedido')),
            estado=_to_int(data.get('estado')),
            deleted=bool(data.get('deleted')),
        )
