import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from employee_cache.config.settings import Settings
from employee_cache.exceptions import UpstreamTransportError
from employee_cache.models.employee_model import CreateEmployeeInput, Employee
from employee_cache.models.upstream_model import UpstreamEmployee, UpstreamResponse

logger = logging.getLogger(__name__)


class EmployeeApiClient:
    """
    Cliente HTTP de la API externa de empleados (fuente de verdad).
    Toda falla de transporte o status != 2xx se traduce a UpstreamTransportError.
    """

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.base_url = settings.api_base_url.rstrip("/")
        self.get_all_path = settings.api_get_all_path
        self.create_path = settings.api_create_path
        self.delete_path = settings.api_delete_path
        self.timeout = settings.api_timeout_seconds
        self.session = session or requests.Session()
        logger.info(f"EmployeeApiClient initialized with base URL: {self.base_url}")

    def _url(self, path: str) -> str:
        if not path:
            return self.base_url
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = self._url(path)
        try:
            response = self.session.request(method, url, json=body, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.error(f"Downstream API error: {status} {method} {url}")
            raise UpstreamTransportError("Employee API error", status) from e
        except requests.exceptions.RequestException as e:
            # conexión rechazada, timeouts, etc.
            logger.error(f"Employee API unreachable ({method} {url}): {e}")
            raise UpstreamTransportError(f"Employee API unreachable: {e}") from e
        except ValueError as e:
            logger.error(f"Employee API returned a non-JSON body ({method} {url})")
            raise UpstreamTransportError("Employee API returned an invalid body") from e

    # ==============================================
    # 📥 Roster completo
    # ==============================================
    def list_all(self) -> List[Employee]:
        logger.info(f"Fetching all employees from: {self._url(self.get_all_path)}")
        payload = self._request("GET", self.get_all_path)

        try:
            envelope = UpstreamResponse[List[Dict[str, Any]]].model_validate(payload)
        except ValidationError as e:
            raise UpstreamTransportError(f"Unexpected roster format: {e}")

        employees = []
        for item in envelope.data or []:
            try:
                employees.append(UpstreamEmployee.model_validate(item).to_employee())
            except ValidationError as e:
                logger.warning(f"Skipping malformed employee from API ({item.get('id')}): {e}")

        if not employees:
            logger.warning("No employees found in the response.")
        else:
            logger.info(f"Mapped {len(employees)} employees from the API.")
        return employees

    # ==============================================
    # ➕ Alta
    # ==============================================
    def create(self, employee_input: CreateEmployeeInput) -> Employee:
        logger.info(f"Creating employee via: {self._url(self.create_path)}")
        payload = self._request("POST", self.create_path, employee_input.model_dump(exclude_none=True))

        try:
            envelope = UpstreamResponse[UpstreamEmployee].model_validate(payload)
        except ValidationError as e:
            raise UpstreamTransportError(f"Unexpected create response: {e}")
        if envelope.data is None:
            raise UpstreamTransportError("Employee API returned no employee for create")
        return envelope.data.to_employee()

    # ==============================================
    # 🗑 Baja (la API elimina por nombre, no por id)
    # ==============================================
    def delete_by_name(self, name: str) -> bool:
        logger.info(f"Deleting employee '{name}' via: {self._url(self.delete_path)}")
        payload = self._request("DELETE", self.delete_path, {"name": name})
        if not isinstance(payload, dict):
            raise UpstreamTransportError("Unexpected delete response")
        return bool(payload.get("data"))

    def close(self) -> None:
        self.session.close()
