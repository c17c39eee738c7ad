# employee_cache/exceptions.py
from typing import List, Optional


class EmployeeCacheError(Exception):
    """Base de todos los errores del servicio."""


class UpstreamTransportError(EmployeeCacheError):
    """Falla de red/HTTP hablando con la API externa de empleados."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DeletionRejected(UpstreamTransportError):
    """La API externa respondió, pero informó que no eliminó al empleado."""

    def __init__(self, name: str):
        super().__init__(f"La API externa no eliminó al empleado '{name}'", status_code=500)
        self.name = name


class RecordNotFound(EmployeeCacheError):
    def __init__(self, employee_id: str):
        super().__init__(f"Employee not found with ID: {employee_id}")
        self.employee_id = employee_id


class IndexWriteFailure(EmployeeCacheError):
    """
    Falló alguna de las escrituras del índice (documento principal o ZSET de salarios).
    `errors` guarda las excepciones originales de cada sub-escritura fallida.
    """

    def __init__(self, employee_id: str, errors: List[Exception]):
        detail = "; ".join(str(e) for e in errors)
        super().__init__(f"Error indexando empleado {employee_id}: {detail}")
        self.employee_id = employee_id
        self.errors = errors


class DeserializationError(EmployeeCacheError):
    def __init__(self, key: Optional[str], reason: str):
        super().__init__(f"No se pudo leer el empleado guardado en {key or '<desconocido>'}: {reason}")
        self.key = key
        self.reason = reason


class InvalidEmployeeId(EmployeeCacheError):
    """Id vacío o en blanco recibido en una operación puntual."""

    def __init__(self, employee_id: Optional[str]):
        super().__init__("ID cannot be null or blank")
        self.employee_id = employee_id
