import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import List, Optional

from employee_cache.config.settings import Settings
from employee_cache.repositories.employee_api_client import EmployeeApiClient
from employee_cache.repositories.redis_repository import RedisRepository
from employee_cache.services.index_maintainer import IndexMaintainer

logger = logging.getLogger(__name__)


@dataclass
class RefreshReport:
    """Resultado de un ciclo de refresco."""
    fetched: int = 0
    purged: int = 0
    indexed: int = 0
    failed: List[str] = field(default_factory=list)
    aborted: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.aborted is None and not self.failed


class CacheRefreshService:
    """
    Reconstruye la caché completa desde la API externa:
    borrar todo -> volver a indexar cada empleado (en paralelo).
    Corre al iniciar y luego cada `refresh_interval_ms`.
    """

    def __init__(
        self,
        client: EmployeeApiClient,
        repository: RedisRepository,
        maintainer: IndexMaintainer,
        settings: Settings,
    ):
        self.client = client
        self.repo = repository
        self.maintainer = maintainer
        self.key_prefix = settings.key_prefix
        self.salary_zset = settings.salary_zset
        if settings.refresh_interval_ms <= 0:
            raise ValueError(f"refresh_interval_ms debe ser positivo (recibido: {settings.refresh_interval_ms})")
        self.interval_seconds = settings.refresh_interval_seconds
        self.workers = max(1, settings.refresh_workers)

        self.last_report: Optional[RefreshReport] = None
        self._stop_event = threading.Event()
        self._scheduler: Optional[threading.Thread] = None
        # refrescos lanzados por trigger() que pueden seguir corriendo
        self._runs: List[threading.Thread] = []
        self._runs_lock = threading.Lock()

    # ===============================================================
    # 🔄 Ciclo de refresco
    # ===============================================================
    def refresh(self) -> RefreshReport:
        """
        Ciclo completo. Nunca lanza: si la API falla o no trae empleados,
        la caché actual queda intacta y el reporte sale abortado.
        """
        logger.info("Cache refresh: fetching all employees from external API.")
        report = RefreshReport()

        try:
            employees = self.client.list_all()
        except Exception as e:
            logger.error(f"Failed to refresh Redis cache from external API: {e}")
            report.aborted = f"upstream error: {e}"
            return self._finish(report)

        report.fetched = len(employees)
        if not employees:
            logger.warning("No employees found from external API to refresh cache. Redis cache might remain stale.")
            report.aborted = "empty roster"
            return self._finish(report)

        try:
            report.purged = self._purge()
        except Exception as e:
            logger.error(f"Failed to purge employee keys during refresh: {e}")
            report.aborted = f"purge error: {e}"
            return self._finish(report)

        with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="cache-refresh") as pool:
            futures = {pool.submit(self.maintainer.index_employee, emp): emp.id for emp in employees}
            for future in as_completed(futures):
                employee_id = futures[future]
                try:
                    future.result()
                    report.indexed += 1
                except Exception as e:
                    logger.error(f"Failed to index employee {employee_id} during refresh: {e}")
                    report.failed.append(employee_id)

        if report.failed:
            logger.warning(
                f"Refreshed Redis cache with {report.indexed}/{report.fetched} employees "
                f"({len(report.failed)} failed)."
            )
        else:
            logger.info(f"Successfully refreshed Redis cache with {report.indexed} employees.")
        return self._finish(report)

    def _purge(self) -> int:
        """Borra todos los documentos employee:* y el ZSET de salarios."""
        logger.info("Deleting existing employee keys and salary ZSET from Redis before refresh.")
        keys = list(self.repo.keys_with_prefix(self.key_prefix))
        deleted = self.repo.delete(*keys) if keys else 0
        self.repo.delete(self.salary_zset)
        return deleted

    def _finish(self, report: RefreshReport) -> RefreshReport:
        self.last_report = report
        return report

    # ===============================================================
    # ⏱ Disparo asíncrono y scheduler
    # ===============================================================
    def trigger(self) -> threading.Thread:
        """Lanza un refresco en segundo plano sin bloquear a quien llama."""
        thread = threading.Thread(target=self._safe_refresh, name="cache-refresh-run", daemon=True)
        with self._runs_lock:
            self._runs = [t for t in self._runs if t.is_alive()]
            self._runs.append(thread)
        thread.start()
        return thread

    def _safe_refresh(self) -> None:
        try:
            self.refresh()
        except Exception:
            logger.exception("Unexpected error during cache refresh")

    def start(self) -> None:
        """
        Arranca el scheduler: refresca ya mismo y luego a intervalo fijo.
        Si un ciclo tarda más que el intervalo, el siguiente se superpone.
        """
        if self._scheduler is not None and self._scheduler.is_alive():
            return
        self._stop_event.clear()
        self._scheduler = threading.Thread(target=self._run_schedule, name="cache-refresh-scheduler", daemon=True)
        self._scheduler.start()
        logger.info(f"Cache refresh scheduled every {self.interval_seconds:.0f}s.")

    def _run_schedule(self) -> None:
        while not self._stop_event.is_set():
            self.trigger()
            if self._stop_event.wait(self.interval_seconds):
                break

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """Detiene el scheduler y espera (hasta timeout) los refrescos en curso."""
        self._stop_event.set()
        if self._scheduler is not None:
            self._scheduler.join(timeout)
            self._scheduler = None
        with self._runs_lock:
            runs, self._runs = self._runs, []
        for thread in runs:
            thread.join(timeout)
            if thread.is_alive():
                logger.warning("Cache refresh still running after stop timeout.")

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.is_alive()
