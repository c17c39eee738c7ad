import json
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from employee_cache.exceptions import DeserializationError
from employee_cache.models.employee_model import Employee

logger = logging.getLogger(__name__)


class EmployeeCodec:
    """
    Traduce Employee <-> documento JSON de Redis y define el esquema de claves.
    Clave: {prefix}{employeeId}  (por defecto employee:{id}).
    """

    def __init__(self, prefix: str = "employee:"):
        self.prefix = prefix

    def key_for(self, employee_id: str) -> str:
        return f"{self.prefix}{employee_id}"

    def encode(self, employee: Employee) -> Dict[str, Any]:
        # email nulo no se guarda (igual que el formato de la API)
        return employee.model_dump(exclude_none=True)

    def decode(self, raw: Any, key: Optional[str] = None) -> Employee:
        """
        Acepta un dict, un string JSON o la lista de un solo elemento que
        devuelve JSON.GET con path "$". Lanza DeserializationError si no se puede.
        """
        if raw is None:
            raise DeserializationError(key, "documento vacío")
        if isinstance(raw, (str, bytes)):
            try:
                raw = json.loads(raw)
            except ValueError as e:
                raise DeserializationError(key, f"JSON inválido: {e}")
        if isinstance(raw, list):
            if len(raw) != 1:
                raise DeserializationError(key, f"se esperaba un documento, llegaron {len(raw)}")
            raw = raw[0]
        if not isinstance(raw, dict):
            raise DeserializationError(key, f"tipo inesperado {type(raw).__name__}")
        try:
            return Employee.model_validate(raw)
        except ValidationError as e:
            raise DeserializationError(key, str(e))

    def try_decode(self, raw: Any, key: Optional[str] = None) -> Optional[Employee]:
        """Versión tolerante: registra el problema y devuelve None."""
        try:
            return self.decode(raw, key)
        except DeserializationError as e:
            logger.warning(f"Failed to deserialize employee JSON from {key}: {e.reason}")
            return None
