import logging
from typing import List

from redis.commands.search.field import TagField, TextField

from employee_cache.config.settings import Settings
from employee_cache.exceptions import IndexWriteFailure
from employee_cache.models.employee_model import Employee
from employee_cache.repositories.redis_repository import RedisRepository
from employee_cache.utils.employee_codec import EmployeeCodec

logger = logging.getLogger(__name__)


class IndexMaintainer:
    """
    Mantiene juntas las vistas de un empleado en Redis:
      1. documento principal  employee:{id}   (JSON)
      2. ZSET de salarios     employee_salaries (member=id, score=salary)
      3. índice de búsqueda   employeeIdx (se actualiza solo al escribir el JSON)
    """

    def __init__(self, repository: RedisRepository, codec: EmployeeCodec, settings: Settings):
        self.repo = repository
        self.codec = codec
        self.salary_zset = settings.salary_zset
        self.search_index = settings.search_index

    def ensure_search_index(self) -> bool:
        """Crea el índice de búsqueda si no existe. Idempotente."""
        fields = [
            TagField("$.id", as_name="id"),
            TextField("$.name", as_name="name", no_stem=True, sortable=True),
        ]
        created = self.repo.search_create_index(self.search_index, self.codec.prefix, fields)
        if created:
            logger.info(f"RedisSearch index '{self.search_index}' created successfully.")
        else:
            logger.info(f"RedisSearch index '{self.search_index}' already exists.")
        return created

    def index_employee(self, employee: Employee) -> None:
        """
        Escribe el documento y actualiza el score en el ZSET.
        Se intentan ambas escrituras; si alguna falla lanza IndexWriteFailure (sin reintentos).
        """
        errors: List[Exception] = []
        key = self.codec.key_for(employee.id)

        try:
            self.repo.set(key, self.codec.encode(employee))
        except Exception as e:
            logger.error(f"Failed JSON write for {employee.id}: {e}")
            errors.append(e)

        try:
            # el score es float en Redis; el salario sigue siendo entero hacia afuera
            self.repo.zadd(self.salary_zset, float(employee.salary), employee.id)
        except Exception as e:
            logger.error(f"Failed ZSET insert for {employee.id}: {e}")
            errors.append(e)

        if errors:
            raise IndexWriteFailure(employee.id, errors)

    def remove_employee(self, employee_id: str) -> None:
        """Borra documento y miembro del ZSET. Que falte alguno no es error."""
        errors: List[Exception] = []

        try:
            self.repo.delete(self.codec.key_for(employee_id))
        except Exception as e:
            logger.error(f"Failed to delete document for {employee_id}: {e}")
            errors.append(e)

        try:
            self.repo.zrem(self.salary_zset, employee_id)
        except Exception as e:
            logger.error(f"Failed ZSET removal for {employee_id}: {e}")
            errors.append(e)

        if errors:
            raise IndexWriteFailure(employee_id, errors)
