# ==============================================================================
# ERRORES DEL MOTOR DE REPORTES
# ==============================================================================
# Fallos de valor, sin estado. La capa HTTP los convierte en respuestas
# {'ok': False, 'error': ...}; nunca llegan crudos al usuario.
# ==============================================================================


class ReportError(Exception):
    """Base de los errores del motor de reportes."""
    pass


class InvalidRange(ReportError, ValueError):
    """Ventana de fechas inválida (inicio > fin o fecha mal formada)."""
    pass


class MalformedRecord(ReportError):
    """Registro sin un campo obligatorio (fecha o monto) o con valor inválido."""

    def __init__(self, message: str, record=None):
        super().__init__(message)
        self.record = record
