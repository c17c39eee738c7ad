"""
Fixtures compartidos.

InMemoryRedisRepository reemplaza a RedisRepository en los tests de servicios:
mismos métodos, datos en dicts, y la búsqueda entiende el subconjunto
"@name:(*a* *b*)" que arma EmployeeQueryService.
"""
import json
import re
from typing import Dict, List, Optional
from unittest.mock import Mock

import pytest

from employee_cache.config.settings import Settings
from employee_cache.models.employee_model import Employee
from employee_cache.repositories.employee_api_client import EmployeeApiClient
from employee_cache.services.cache_refresh_service import CacheRefreshService
from employee_cache.services.employee_query_service import EmployeeQueryService
from employee_cache.services.employee_service import EmployeeService
from employee_cache.services.index_maintainer import IndexMaintainer
from employee_cache.utils.employee_codec import EmployeeCodec


class InMemoryRedisRepository:
    def __init__(self):
        self.documents: Dict[str, dict] = {}
        self.zsets: Dict[str, Dict[str, float]] = {}
        self.indexes: Dict[str, str] = {}

    def get(self, key):
        doc = self.documents.get(key)
        return json.loads(json.dumps(doc)) if doc is not None else None

    def set(self, key, document):
        self.documents[key] = json.loads(json.dumps(document))

    def delete(self, *keys):
        count = 0
        for key in keys:
            if self.documents.pop(key, None) is not None:
                count += 1
            if self.zsets.pop(key, None) is not None:
                count += 1
        return count

    def keys_with_prefix(self, prefix):
        return iter([k for k in list(self.documents) if k.startswith(prefix)])

    def zadd(self, name, score, member):
        zset = self.zsets.setdefault(name, {})
        added = 0 if member in zset else 1
        zset[member] = float(score)
        return added

    def zrem(self, name, member):
        return 1 if self.zsets.get(name, {}).pop(member, None) is not None else 0

    def _ranked(self, name):
        zset = self.zsets.get(name, {})
        # mismo orden que ZREVRANGE: score desc, empate por member desc
        return sorted(zset.items(), key=lambda item: (item[1], item[0]), reverse=True)

    def zrevrange(self, name, start, stop):
        return [m for m, _ in self._ranked(name)[start:stop + 1]]

    def zrevrange_with_scores(self, name, start, stop):
        return self._ranked(name)[start:stop + 1]

    def search_create_index(self, name, prefix, fields):
        if name in self.indexes:
            return False
        self.indexes[name] = prefix
        return True

    def search(self, name, query, limit=1000):
        prefix = self.indexes.get(name, "employee:")
        tokens = [t.replace("\\", "") for t in re.findall(r"\*((?:\\.|[^*])+)\*", query)]
        results = []
        for key, doc in self.documents.items():
            if not key.startswith(prefix):
                continue
            name_value = str(doc.get("name", "")).lower()
            if all(t in name_value for t in tokens):
                results.append(json.dumps(doc))
        return results[:limit]


def make_employee(employee_id: str, name: str, salary: int, age: int = 30,
                  title: str = "Engineer", email: Optional[str] = None) -> Employee:
    return Employee(id=employee_id, name=name, salary=salary, age=age, title=title, email=email)


@pytest.fixture
def settings():
    return Settings(refresh_interval_ms=50, refresh_workers=4)


@pytest.fixture
def codec(settings):
    return EmployeeCodec(settings.key_prefix)


@pytest.fixture
def repo():
    return InMemoryRedisRepository()


@pytest.fixture
def api_client():
    return Mock(spec=EmployeeApiClient)


@pytest.fixture
def maintainer(repo, codec, settings):
    return IndexMaintainer(repo, codec, settings)


@pytest.fixture
def queries(repo, codec, settings):
    return EmployeeQueryService(repo, codec, settings)


@pytest.fixture
def refresher(api_client, repo, maintainer, settings):
    service = CacheRefreshService(api_client, repo, maintainer, settings)
    yield service
    service.stop()


@pytest.fixture
def employee_service(api_client, maintainer, queries):
    return EmployeeService(api_client, maintainer, queries)


@pytest.fixture
def seed(maintainer):
    """Indexa una lista de empleados y la devuelve."""
    def _seed(employees: List[Employee]) -> List[Employee]:
        for employee in employees:
            maintainer.index_employee(employee)
        return employees
    return _seed
