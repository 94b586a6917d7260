# ==============================================================================
# API JSON - Reportes de gastos y ventas
# ==============================================================================
# Capa delgada: request → servicio → JSON. Toda la lógica está en services/.
#
# RUTAS:
#   GET /api/reporte?fecha=YYYY-MM-DD              → reporte de un día
#   GET /api/consolidado?fechas=a,b,c              → fechas sueltas
#   GET /api/consolidado?inicio=...&fin=...        → rango continuo
#   GET /api/gastos?inicio=&fin=&categoria=        → gastos agrupados por día
#   GET /api/categorias                            → categorías de gastos
#
# Los errores del motor (fechas inválidas) responden 400:
#   {"ok": false, "error": "..."}
# ==============================================================================

import logging
from typing import Optional

from flask import Flask, jsonify, request

from app_finanzas import config
from app_finanzas.app_container import get_container
from app_finanzas.models import format_money
from app_finanzas.performance_logger import init_profiling, setup_logging
from app_finanzas.services import DateSet, ReportError, payment_shares


logger = logging.getLogger(__name__)

setup_logging()

app = Flask(__name__)
app.secret_key = config.SECRET_KEY
app.json.sort_keys = False

init_profiling(app)


# ═══════════════════════════════════════════════════════════════════════════════
# HELPERS DE PARÁMETROS
# ═══════════════════════════════════════════════════════════════════════════════

def _date_set_from_args(default_days: int) -> DateSet:
    """
    Arma el DateSet a partir de la query string.

    Prioridad: ?fechas=a,b,c  >  ?inicio=&fin=  >  últimos `default_days` días.
    Si solo viene uno de inicio/fin, el otro toma el mismo valor.
    """
    fechas = request.args.get('fechas')
    if fechas is not None:
        return DateSet.from_explicit_dates(f for f in fechas.split(',') if f.strip())

    inicio = request.args.get('inicio', '').strip()
    fin = request.args.get('fin', '').strip()
    if inicio or fin:
        return DateSet.from_range(inicio or fin, fin or inicio)

    return DateSet.last_days(default_days)


def _categoria_from_args() -> Optional[int]:
    """Id de categoría de ?categoria=; None si no viene. Un valor no numérico es un error."""
    raw = request.args.get('categoria', '').strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ReportError(f'Categoría inválida: {raw!r}')


def _report_payload(report):
    data = report.to_dict()
    data['participacion_metodos'] = [s.to_dict() for s in payment_shares(report.payment_breakdown)]
    return data


# ═══════════════════════════════════════════════════════════════════════════════
# ERRORES
# ═══════════════════════════════════════════════════════════════════════════════

@app.errorhandler(ReportError)
def handle_report_error(exc):
    logger.info('Solicitud rechazada (%s): %s', request.path, exc)
    return jsonify({'ok': False, 'error': str(exc)}), 400


# ═══════════════════════════════════════════════════════════════════════════════
# RUTAS
# ═══════════════════════════════════════════════════════════════════════════════

@app.route('/api/reporte')
def reporte_dia():
    """Reporte de un día (por defecto hoy en la zona del negocio)."""
    fecha = request.args.get('fecha', '').strip() or config.today().isoformat()
    report = get_container().report_service.daily_report(fecha)
    return jsonify({'ok': True, 'reporte': _report_payload(report)})


@app.route('/api/consolidado')
def reporte_consolidado():
    """Reporte consolidado (por defecto los últimos 7 días)."""
    date_set = _date_set_from_args(config.DEFAULT_CONSOLIDADO_DAYS)
    report = get_container().report_service.build_report(date_set)
    return jsonify({'ok': True, 'reporte': _report_payload(report)})


@app.route('/api/gastos')
def listar_gastos():
    """Gastos agrupados por día (por defecto hoy y los 30 días anteriores)."""
    date_set = _date_set_from_args(config.DEFAULT_GASTOS_DAYS)
    categoria = _categoria_from_args()

    listado = get_container().expense_service.list_expenses(date_set, categoria)
    resumen = listado['resumen']

    return jsonify({
        'ok': True,
        'fechas': listado['fechas'],
        'total': format_money(resumen.total),
        'cantidad': resumen.count,
        'por_categoria': [c.to_dict() for c in resumen.by_group],
        'grupos': [
            {
                'fecha': grupo['fecha'],
                'total': format_money(grupo['total']),
                'cantidad': grupo['cantidad'],
                'gastos': [g.to_dict() for g in grupo['gastos']],
            }
            for grupo in listado['grupos']
        ],
        'omitidos': resumen.skipped,
    })


@app.route('/api/categorias')
def listar_categorias():
    categorias = get_container().expense_service.get_categories()
    return jsonify({'ok': True, 'categorias': [c.to_dict() for c in categorias]})


if __name__ == '__main__':
    app.run(debug=config.DEBUG, host='0.0.0.0', port=5000)
