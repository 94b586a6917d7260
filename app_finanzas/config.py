# ==============================================================================
# CONFIGURACIÓN DE LA APLICACIÓN
# ==============================================================================
# Valores por defecto pensados para el negocio (Perú, soles).
# Cualquier valor puede sobrescribirse con variables de entorno:
#
#   export FINANZAS_DATA_DIR="/ruta/a/los/json"
#   export FINANZAS_SECRET_KEY="clave_larga_y_aleatoria"
#   export FINANZAS_UTC_OFFSET_HOURS="-5"
#   export FINANZAS_PROFILING="0"
#   export FINANZAS_LOG_LEVEL="DEBUG"
# ==============================================================================

import os
from datetime import date, datetime, timedelta, timezone


BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def _env_bool(name: str, default: bool) -> bool:
    """Lee una variable de entorno booleana ('1', 'true', 'si' => True)."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'si', 'sí', 'on')


# ═══════════════════════════════════════════════════════════════════════════════
# DATOS
# ═══════════════════════════════════════════════════════════════════════════════
# Directorio donde viven gastos.json, pedidos.json y categoriagastos.json
DATA_DIR = os.environ.get('FINANZAS_DATA_DIR') or BASE_DIR

# Estado de pedido que cuenta para reportes (pedido cerrado en caja)
ESTADO_FINALIZADO = 3

# Categoría sintética para gastos sin categoría resoluble
SIN_CATEGORIA = 'Sin categoría'

# ═══════════════════════════════════════════════════════════════════════════════
# VENTANAS DE FECHAS POR DEFECTO
# ═══════════════════════════════════════════════════════════════════════════════
DEFAULT_CONSOLIDADO_DAYS = 7   # Últimos 7 días (incluye hoy)
DEFAULT_GASTOS_DAYS = 31       # Hoy y los 30 días anteriores

# Perú no usa horario de verano: un offset fijo basta
UTC_OFFSET_HOURS = int(os.environ.get('FINANZAS_UTC_OFFSET_HOURS', '-5'))
LOCAL_TZ = timezone(timedelta(hours=UTC_OFFSET_HOURS))

# ═══════════════════════════════════════════════════════════════════════════════
# FLASK / LOGGING
# ═══════════════════════════════════════════════════════════════════════════════
_DEFAULT_SECRET = 'app_finanzas_dev_secret_key_change_in_production'
SECRET_KEY = os.environ.get('FINANZAS_SECRET_KEY') or _DEFAULT_SECRET
DEBUG = os.environ.get('FLASK_DEBUG', '0') == '1'

LOG_LEVEL = os.environ.get('FINANZAS_LOG_LEVEL', 'INFO').upper()
LOGS_DIR = os.environ.get('FINANZAS_LOGS_DIR') or os.path.join(BASE_DIR, 'logs')

# Profiling de rutas y funciones (ver performance_logger.py)
ENABLE_PROFILING = _env_bool('FINANZAS_PROFILING', True)
THRESHOLD_WARNING = 300   # ms
THRESHOLD_CRITICAL = 700  # ms


def today() -> date:
    """Fecha civil de hoy en la zona horaria del negocio."""
    return datetime.now(LOCAL_TZ).date()
