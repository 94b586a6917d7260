import json
import os
import sys
import tempfile

# Logs de profiling fuera del árbol del proyecto durante los tests
os.environ.setdefault('FINANZAS_LOGS_DIR', tempfile.mkdtemp(prefix='finanzas_logs_'))

# ensure project root is on sys.path when running from tests/ folder
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

import pytest

from app_finanzas.app_container import AppContainer


CATEGORIAS = [
    {'idcategoriagastos': 1, 'descripcion': 'Insumos'},
    {'idcategoriagastos': 2, 'descripcion': 'Alquiler'},
    {'idcategoriagastos': 3, 'descripcion': 'Transporte'},
]

GASTOS = [
    {'idgastos': 1, 'fecha': '2024-01-01', 'monto': 50.0, 'descripcion': 'Verduras', 'idcategoriagastos': 1},
    {'idgastos': 2, 'fecha': '2024-01-01', 'monto': 30.0, 'descripcion': 'Carnes', 'idcategoriagastos': 1},
    {'idgastos': 3, 'fecha': '2024-01-02', 'monto': 20.0, 'descripcion': 'Taxi', 'idcategoriagastos': 3},
    {'idgastos': 4, 'fecha': '2024-01-03', 'monto': 15.5, 'descripcion': 'Bolsas', 'idcategoriagastos': 99},
    {'idgastos': 5, 'fecha': '2024-01-05', 'monto': 300.0, 'descripcion': 'Local', 'idcategoriagastos': 2},
]

PEDIDOS = [
    {'idpedido': 1, 'fecha': '2024-01-01', 'total': 200.0, 'estado': 3, 'deleted': None,
     'visa': 100.0, 'yape': 50.0, 'plin': 0, 'efectivo': 50.0, 'created_at': '2024-01-01T12:00:00-05:00'},
    {'idpedido': 2, 'fecha': '2024-01-02', 'total': 80.0, 'estado': 3, 'deleted': None,
     'visa': 0, 'yape': 0, 'plin': 80.0, 'efectivo': 0, 'created_at': '2024-01-02T13:00:00-05:00'},
    {'idpedido': 3, 'fecha': '2024-01-02', 'total': 40.0, 'estado': 3, 'deleted': None,
     'visa': 0, 'yape': 0, 'plin': 0, 'efectivo': 40.0, 'created_at': '2024-01-02T14:00:00-05:00'},
    # Pedido abierto: no cuenta
    {'idpedido': 4, 'fecha': '2024-01-01', 'total': 999.0, 'estado': 1, 'deleted': None,
     'visa': 999.0, 'yape': 0, 'plin': 0, 'efectivo': 0, 'created_at': '2024-01-01T15:00:00-05:00'},
    # Pedido con borrado lógico: no cuenta
    {'idpedido': 5, 'fecha': '2024-01-02', 'total': 500.0, 'estado': 3, 'deleted': True,
     'visa': 0, 'yape': 500.0, 'plin': 0, 'efectivo': 0, 'created_at': '2024-01-02T16:00:00-05:00'},
]


def write_json(directory, name, data):
    with open(os.path.join(str(directory), name), 'w', encoding='utf-8') as f:
        json.dump(data, f)


@pytest.fixture
def data_dir(tmp_path):
    """Directorio con gastos.json, pedidos.json y categoriagastos.json de ejemplo."""
    write_json(tmp_path, 'categoriagastos.json', CATEGORIAS)
    write_json(tmp_path, 'gastos.json', GASTOS)
    write_json(tmp_path, 'pedidos.json', PEDIDOS)
    return tmp_path


@pytest.fixture
def container(data_dir):
    AppContainer.reset_instance()
    c = AppContainer.get_instance(str(data_dir))
    yield c
    AppContainer.reset_instance()
