import json

import pytest

from app_finanzas.main import app


@pytest.fixture
def client(container):
    with app.test_client() as c:
        yield c


def test_daily_report(client):
    r = client.get('/api/reporte?fecha=2024-01-01')
    assert r.status_code == 200
    data = r.get_json()
    assert data['ok'] is True

    reporte = data['reporte']
    assert reporte['fechas'] == ['2024-01-01']
    assert reporte['total_ingresos'] == '200.00'
    assert reporte['total_gastos'] == '80.00'
    assert reporte['ganancia_neta'] == '120.00'
    assert reporte['margen'] == '60.00'
    assert reporte['ticket_promedio'] == '200.00'
    assert reporte['total_pedidos'] == 1
    assert reporte['metodo_pago'] == {'visa': '100.00', 'yape': '50.00', 'plin': '0.00', 'efectivo': '50.00'}
    assert [s['porcentaje'] for s in reporte['participacion_metodos']] == ['50.00', '25.00', '0.00', '25.00']


def test_consolidated_with_loose_dates(client):
    r = client.get('/api/consolidado?fechas=2024-01-05,2024-01-01')
    assert r.status_code == 200
    reporte = r.get_json()['reporte']
    assert reporte['fechas'] == ['2024-01-05', '2024-01-01']
    assert reporte['total_ingresos'] == '200.00'
    assert reporte['total_gastos'] == '380.00'
    assert reporte['ganancia_neta'] == '-180.00'
    assert reporte['mejor_dia']['fecha'] == '2024-01-01'


def test_consolidated_with_range(client):
    r = client.get('/api/consolidado?inicio=2024-01-01&fin=2024-01-02')
    reporte = r.get_json()['reporte']
    assert reporte['total_ingresos'] == '320.00'
    assert [d['fecha'] for d in reporte['pedidos_por_dia']] == ['2024-01-01', '2024-01-02']
    assert reporte['mejor_dia'] == {'fecha': '2024-01-01', 'total': '200.00', 'cantidad': 1}


def test_empty_date_list_gives_zero_report(client):
    r = client.get('/api/consolidado?fechas=')
    assert r.status_code == 200
    reporte = r.get_json()['reporte']
    assert reporte['fechas'] == []
    assert reporte['total_ingresos'] == '0.00'
    assert reporte['mejor_dia'] is None


def test_inverted_range_is_rejected(client):
    r = client.get('/api/consolidado?inicio=2024-01-10&fin=2024-01-01')
    assert r.status_code == 400
    data = r.get_json()
    assert data['ok'] is False
    assert 'posterior' in data['error']


def test_malformed_date_is_rejected(client):
    r = client.get('/api/reporte?fecha=01-01-2024')
    assert r.status_code == 400
    assert r.get_json()['ok'] is False


def test_expenses_listing(client):
    r = client.get('/api/gastos?inicio=2024-01-01&fin=2024-01-03')
    assert r.status_code == 200
    data = r.get_json()
    assert data['total'] == '115.50'
    assert data['cantidad'] == 4
    assert [g['fecha'] for g in data['grupos']] == ['2024-01-03', '2024-01-02', '2024-01-01']
    assert data['grupos'][0]['gastos'][0]['categoria'] is None
    assert data['por_categoria'][-1] == {'categoria': 'Sin categoría', 'total': '15.50', 'cantidad': 1}


def test_expenses_listing_by_category(client):
    r = client.get('/api/gastos?inicio=2024-01-01&fin=2024-01-05&categoria=3')
    data = r.get_json()
    assert data['total'] == '20.00'
    assert data['cantidad'] == 1
    assert data['grupos'][0]['gastos'][0]['descripcion'] == 'Taxi'


def test_categories(client):
    r = client.get('/api/categorias')
    assert r.status_code == 200
    categorias = r.get_json()['categorias']
    assert [c['descripcion'] for c in categorias] == ['Alquiler', 'Insumos', 'Transporte']


def test_non_numeric_category_is_rejected(client):
    r = client.get('/api/gastos?inicio=2024-01-01&fin=2024-01-05&categoria=abc')
    assert r.status_code == 400
    data = r.get_json()
    assert data['ok'] is False
    assert 'abc' in data['error']


def _append_row(data_dir, name, row):
    path = data_dir / name
    rows = json.loads(path.read_text(encoding='utf-8'))
    rows.append(row)
    path.write_text(json.dumps(rows), encoding='utf-8')


def test_report_survives_nan_order_total(client, data_dir):
    _append_row(data_dir, 'pedidos.json', {
        'idpedido': 90, 'fecha': '2024-01-01', 'total': float('nan'), 'estado': 3, 'deleted': None,
    })
    r = client.get('/api/reporte?fecha=2024-01-01')
    assert r.status_code == 200
    reporte = r.get_json()['reporte']
    assert reporte['omitidos'] == 1
    assert reporte['total_ingresos'] == '200.00'


def test_expenses_survive_infinite_amount(client, data_dir):
    _append_row(data_dir, 'gastos.json', {
        'idgastos': 90, 'fecha': '2024-01-01', 'monto': float('inf'), 'idcategoriagastos': 1,
    })
    r = client.get('/api/gastos?inicio=2024-01-01&fin=2024-01-01')
    assert r.status_code == 200
    data = r.get_json()
    assert data['omitidos'] == 1
    assert data['total'] == '80.00'
    assert data['grupos'][0]['cantidad'] == 2
