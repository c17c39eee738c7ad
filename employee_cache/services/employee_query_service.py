import logging
import re
from typing import Iterator, List, Optional

from employee_cache.config.settings import Settings
from employee_cache.models.employee_model import Employee
from employee_cache.repositories.redis_repository import RedisRepository
from employee_cache.utils.employee_codec import EmployeeCodec

logger = logging.getLogger(__name__)

# caracteres con significado en la sintaxis de consulta de RediSearch
_SEARCH_SPECIAL = re.compile(r"([,.<>{}\[\]\"':;!@#$%^&*()\-+=~|/\\?])")


def build_name_query(fragment: str) -> Optional[str]:
    """
    "Wire Alice" -> "@name:(*wire* *alice*)". Devuelve None si no queda nada que buscar.
    """
    tokens = [_SEARCH_SPECIAL.sub(r"\\\1", t) for t in fragment.lower().split()]
    tokens = [t for t in tokens if t]
    if not tokens:
        return None
    return "@name:(" + " ".join(f"*{t}*" for t in tokens) + ")"


class EmployeeQueryService:
    """Lecturas directas sobre Redis. No hay snapshot: cada llamada lee el estado actual."""

    def __init__(self, repository: RedisRepository, codec: EmployeeCodec, settings: Settings):
        self.repo = repository
        self.codec = codec
        self.salary_zset = settings.salary_zset
        self.search_index = settings.search_index
        self.search_limit = settings.search_limit

    def get_all(self) -> Iterator[Employee]:
        logger.info("Retrieving all employees from Redis JSON store.")
        for key in self.repo.keys_with_prefix(self.codec.prefix):
            raw = self.repo.get(key)
            if raw is None:
                # borrado entre el SCAN y el GET
                continue
            employee = self.codec.try_decode(raw, key)
            if employee is not None:
                yield employee

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        logger.info(f"Fetching employee with ID: {employee_id}")
        key = self.codec.key_for(employee_id)
        raw = self.repo.get(key)
        if raw is None:
            return None
        return self.codec.try_decode(raw, key)

    def search_by_name(self, fragment: str) -> List[Employee]:
        logger.info(f"Searching employees by name fragment: '{fragment}'")
        query = build_name_query(fragment)
        if query is None:
            return []
        results = []
        for raw in self.repo.search(self.search_index, query, self.search_limit):
            employee = self.codec.try_decode(raw)
            if employee is not None:
                results.append(employee)
        return results

    def get_highest_salary(self) -> Optional[int]:
        top = self.repo.zrevrange_with_scores(self.salary_zset, 0, 0)
        if not top:
            return None
        _, score = top[0]
        return int(score)

    def get_top_earner_names(self, n: int = 10) -> List[str]:
        """
        Nombres de los n mejores pagos, en orden de salario descendente.
        Ids del ZSET sin documento (ventana de refresco) se omiten.
        """
        if n < 1:
            return []
        names = []
        for employee_id in self.repo.zrevrange(self.salary_zset, 0, n - 1):
            employee = self.get_by_id(employee_id)
            if employee is None:
                logger.debug(f"Ranked employee {employee_id} missing from primary store, skipping.")
                continue
            names.append(employee.name)
        return names
