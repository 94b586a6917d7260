# ==============================================================================
# LOGGING Y PROFILING INTERNO
# ==============================================================================
# - setup_logging(): configura el logger raíz 'app_finanzas' (consola)
# - init_profiling(app): mide cada ruta Flask
# - @profile_function: mide funciones clave (ej. generar reporte)
#
# Los tiempos se escriben en /logs/ en formato legible:
#   performance.log     → todas las rutas
#   slow_routes.log     → rutas sobre el umbral
#   slow_functions.log  → funciones sobre el umbral
#
# ACTIVAR/DESACTIVAR: FINANZAS_PROFILING=0
# ==============================================================================

import logging
import os
import threading
import time
from collections import defaultdict
from functools import wraps

from app_finanzas import config


ENABLE_PROFILING = config.ENABLE_PROFILING
THRESHOLD_WARNING = config.THRESHOLD_WARNING
THRESHOLD_CRITICAL = config.THRESHOLD_CRITICAL

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

# Nombres legibles de rutas (para logs más humanos)
ROUTE_NAMES = {
    'GET /api/reporte': 'Reporte del día',
    'GET /api/consolidado': 'Reporte consolidado',
    'GET /api/gastos': 'Listado de gastos',
    'GET /api/categorias': 'Categorías de gastos',
}

_PERF_LOGGERS = {
    'performance': 'app_finanzas.perf.routes',
    'slow_routes': 'app_finanzas.perf.slow_routes',
    'slow_functions': 'app_finanzas.perf.slow_functions',
}


# ═══════════════════════════════════════════════════════════════════════════
# CONFIGURACIÓN DE LOGGING
# ═══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = None) -> logging.Logger:
    """
    Configura el logger de la aplicación (consola).
    Es idempotente: llamarlo varias veces no duplica handlers.
    """
    logger = logging.getLogger('app_finanzas')
    logger.setLevel(getattr(logging, (level or config.LOG_LEVEL), logging.INFO))
    if not any(getattr(h, '_finanzas_console', False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._finanzas_console = True
        logger.addHandler(handler)
    return logger


def _perf_logger(kind: str) -> logging.Logger:
    """
    Logger de profiling con su propio archivo en LOGS_DIR.
    El archivo se crea recién cuando se escribe la primera línea.
    """
    logger = logging.getLogger(_PERF_LOGGERS[kind])
    if not logger.handlers:
        os.makedirs(config.LOGS_DIR, exist_ok=True)
        handler = logging.FileHandler(
            os.path.join(config.LOGS_DIR, f'{kind}.log'),
            encoding='utf-8',
            delay=True,
        )
        handler.setFormatter(logging.Formatter('%(asctime)s %(message)s'))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    return logger


# ═══════════════════════════════════════════════════════════════════════════
# ESTADÍSTICAS DE FUNCIONES (en memoria)
# ═══════════════════════════════════════════════════════════════════════════

# {nombre_funcion: {calls: int, total_time: float, max_time: float}}
_function_stats = defaultdict(lambda: {'calls': 0, 'total_time': 0.0, 'max_time': 0.0})
_stats_lock = threading.Lock()


def _get_route_name(method, rule):
    """Nombre legible de una ruta; si no está en ROUTE_NAMES, la ruta cruda."""
    key = f'{method} {rule}'
    return ROUTE_NAMES.get(key, key)


# ═══════════════════════════════════════════════════════════════════════════
# 1️⃣ PROFILING DE RUTAS
# ═══════════════════════════════════════════════════════════════════════════

def log_route_performance(method, path, rule, time_ms):
    """Registra el tiempo de una ruta en performance.log."""
    if not ENABLE_PROFILING:
        return
    _perf_logger('performance').info(
        '[PERFORMANCE] %s | %s %s | %.0f ms',
        _get_route_name(method, rule), method, path, time_ms
    )


def log_slow_route(method, path, rule, time_ms, level='WARNING'):
    """
    Registra una ruta lenta en slow_routes.log

    Args:
        level: 'WARNING' (>300ms) o 'CRITICAL' (>700ms)
    """
    if not ENABLE_PROFILING:
        return
    threshold = THRESHOLD_WARNING if level == 'WARNING' else THRESHOLD_CRITICAL
    severity = 'LENTA' if level == 'WARNING' else 'MUY LENTA'
    _perf_logger('slow_routes').log(
        getattr(logging, level),
        '[%s] Ruta %s: %s | %s %s | %.0f ms (umbral: %d ms)',
        level, severity, _get_route_name(method, rule), method, path, time_ms, threshold
    )


def init_profiling(app):
    """
    Registra hooks before_request / after_request en una app Flask.

    Uso:
        from app_finanzas.performance_logger import init_profiling
        init_profiling(app)
    """
    if not ENABLE_PROFILING:
        return

    @app.before_request
    def _start_timer():
        from flask import g
        g.start_time = time.perf_counter()

    @app.after_request
    def _log_request(response):
        from flask import g, request

        if not hasattr(g, 'start_time'):
            return response

        elapsed = (time.perf_counter() - g.start_time) * 1000
        method = request.method
        path = request.path
        rule = str(request.url_rule) if request.url_rule else path

        if path.startswith('/static'):
            return response

        log_route_performance(method, path, rule, elapsed)

        if elapsed >= THRESHOLD_CRITICAL:
            log_slow_route(method, path, rule, elapsed, 'CRITICAL')
        elif elapsed >= THRESHOLD_WARNING:
            log_slow_route(method, path, rule, elapsed, 'WARNING')

        return response


# ═══════════════════════════════════════════════════════════════════════════
# 2️⃣ DECORADOR PARA FUNCIONES CLAVE
# ═══════════════════════════════════════════════════════════════════════════

def profile_function(func=None, name=None):
    """
    Decorador para medir rendimiento de funciones críticas.

    Uso:
        @profile_function
        def mi_funcion():
            ...

        @profile_function(name="Generar reporte financiero")
        def build_report():
            ...

    Registra cantidad de llamadas, tiempo promedio y tiempo máximo.
    """
    def decorator(fn):
        if not ENABLE_PROFILING:
            return fn

        func_name = name or fn.__name__

        @wraps(fn)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                return fn(*args, **kwargs)
            finally:
                elapsed_ms = (time.perf_counter() - start) * 1000

                with _stats_lock:
                    stats = _function_stats[func_name]
                    stats['calls'] += 1
                    stats['total_time'] += elapsed_ms
                    if elapsed_ms > stats['max_time']:
                        stats['max_time'] = elapsed_ms

                if elapsed_ms >= THRESHOLD_WARNING:
                    _log_slow_function_call(func_name, elapsed_ms)

        return wrapper

    # Permitir uso sin paréntesis: @profile_function
    if func is not None:
        return decorator(func)
    return decorator


def _log_slow_function_call(func_name, time_ms):
    severity = 'CRÍTICO' if time_ms >= THRESHOLD_CRITICAL else 'LENTO'
    _perf_logger('slow_functions').warning(
        '[%s] Función: %s | %.0f ms', severity, func_name, time_ms
    )


# ═══════════════════════════════════════════════════════════════════════════
# 3️⃣ REPORTE DE ESTADÍSTICAS
# ═══════════════════════════════════════════════════════════════════════════

def get_function_stats():
    """
    Estadísticas de todas las funciones perfiladas.

    Returns:
        dict: {nombre: {calls, avg_time, max_time}}
    """
    with _stats_lock:
        result = {}
        for func_name, stats in _function_stats.items():
            calls = stats['calls']
            avg = stats['total_time'] / calls if calls > 0 else 0
            result[func_name] = {
                'calls': calls,
                'avg_time': round(avg, 2),
                'max_time': round(stats['max_time'], 2)
            }
        return result


def reset_stats():
    """Reinicia todas las estadísticas (útil para testing)."""
    with _stats_lock:
        _function_stats.clear()


__all__ = [
    'ENABLE_PROFILING',
    'setup_logging',
    'init_profiling',
    'profile_function',
    'get_function_stats',
    'reset_stats',
]
