import logging
from typing import Optional

import redis

from employee_cache.config.database import close_redis_client, get_redis_client, probar_redis
from employee_cache.config.settings import Settings
from employee_cache.repositories.employee_api_client import EmployeeApiClient
from employee_cache.repositories.redis_repository import RedisRepository
from employee_cache.services.cache_refresh_service import CacheRefreshService
from employee_cache.services.employee_query_service import EmployeeQueryService
from employee_cache.services.employee_service import EmployeeService
from employee_cache.services.index_maintainer import IndexMaintainer
from employee_cache.utils.employee_codec import EmployeeCodec

logger = logging.getLogger(__name__)


class AppState:
    """
    Contenedor de todo lo que vive mientras vive el proceso.
    Se arma una sola vez (build), se inicia en startup() y se libera en shutdown().
    """

    def __init__(
        self,
        settings: Settings,
        redis_client: Optional[redis.Redis],
        api_client: EmployeeApiClient,
        repository: RedisRepository,
        maintainer: IndexMaintainer,
        refresher: CacheRefreshService,
        employees: EmployeeService,
    ):
        self.settings = settings
        self.redis_client = redis_client
        self.api_client = api_client
        self.repository = repository
        self.maintainer = maintainer
        self.refresher = refresher
        self.employees = employees

    @classmethod
    def build(cls, settings: Settings) -> "AppState":
        redis_client = get_redis_client(settings.redis_uri)
        repository = RedisRepository(redis_client)
        codec = EmployeeCodec(settings.key_prefix)
        api_client = EmployeeApiClient(settings)
        maintainer = IndexMaintainer(repository, codec, settings)
        queries = EmployeeQueryService(repository, codec, settings)
        refresher = CacheRefreshService(api_client, repository, maintainer, settings)
        employees = EmployeeService(api_client, maintainer, queries)
        return cls(settings, redis_client, api_client, repository, maintainer, refresher, employees)

    def startup(self) -> None:
        logger.info("Initializing Redis cache and indexes...")
        if self.redis_client is not None:
            probar_redis(self.redis_client)
        try:
            self.maintainer.ensure_search_index()
        except redis.exceptions.RedisError as e:
            # sin índice solo falla la búsqueda por nombre; el resto sigue andando
            logger.warning(f"RedisSearch index creation failed: {e}")
        self.refresher.start()

    def shutdown(self) -> None:
        self.refresher.stop()
        self.api_client.close()
        close_redis_client(self.redis_client)
