import logging
from typing import Iterator, List

from employee_cache.exceptions import DeletionRejected, InvalidEmployeeId, RecordNotFound
from employee_cache.models.employee_model import CreateEmployeeInput, Employee
from employee_cache.repositories.employee_api_client import EmployeeApiClient
from employee_cache.services.employee_query_service import EmployeeQueryService
from employee_cache.services.index_maintainer import IndexMaintainer

logger = logging.getLogger(__name__)


class EmployeeService:
    """
    Superficie que consume la capa HTTP.
    Las lecturas salen de Redis; las escrituras van primero a la API externa
    y solo si ésta confirma se reflejan en la caché.
    """

    def __init__(self, client: EmployeeApiClient, maintainer: IndexMaintainer, queries: EmployeeQueryService):
        self.client = client
        self.maintainer = maintainer
        self.queries = queries

    # ==============================================
    # 🔎 Lecturas
    # ==============================================
    def get_all(self) -> Iterator[Employee]:
        return self.queries.get_all()

    def get_by_id(self, employee_id: str) -> Employee:
        employee = self.queries.get_by_id(employee_id)
        if employee is None:
            raise RecordNotFound(employee_id)
        return employee

    def search_by_name(self, fragment: str) -> List[Employee]:
        return self.queries.search_by_name(fragment)

    def get_highest_salary(self) -> int:
        salary = self.queries.get_highest_salary()
        if salary is None:
            raise RecordNotFound("highest-salary")
        return salary

    def get_top_earner_names(self, n: int = 10) -> List[str]:
        return self.queries.get_top_earner_names(n)

    # ==============================================
    # ✍️ Escrituras
    # ==============================================
    def create(self, employee_input: CreateEmployeeInput) -> Employee:
        """
        Alta en la API externa y luego indexado en Redis.
        Si falla la API no se toca la caché. Si falla el indexado, el empleado
        ya existe afuera y aparecerá en el próximo refresco (se informa el error).
        """
        employee = self.client.create(employee_input)
        logger.info(f"Employee {employee.id} created upstream, indexing in cache.")
        self.maintainer.index_employee(employee)
        return employee

    def delete_by_id(self, employee_id: str) -> str:
        """
        La API externa borra por nombre: se resuelve el nombre desde la caché.
        Devuelve el nombre del empleado eliminado.
        """
        if not employee_id or not employee_id.strip():
            raise InvalidEmployeeId(employee_id)

        employee = self.queries.get_by_id(employee_id)
        if employee is None:
            raise RecordNotFound(employee_id)

        if not self.client.delete_by_name(employee.name):
            logger.error(f"Employee API did not delete '{employee.name}' ({employee_id}).")
            raise DeletionRejected(employee.name)

        self.maintainer.remove_employee(employee_id)
        logger.info(f"Employee {employee_id} ('{employee.name}') deleted.")
        return employee.name
