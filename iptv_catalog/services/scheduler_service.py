import logging
from datetime import datetime
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from iptv_catalog.errors import CatalogError
from iptv_catalog.services.iptv_repository_service import IptvRepository
from iptv_catalog.utils.logging_helpers import log_refresh_start


logger = logging.getLogger(__name__)

class SourceRefreshScheduler:
    """Scheduler that periodically refetches the source to keep the cache warm"""

    def __init__(self):
        self.scheduler: AsyncIOScheduler | None = None
        self._repository: IptvRepository | None = None

    async def _refresh_job(self) -> None:
        """
        Refetch the source through the repository with a zero cache time

        The repository stores the new text in its cache, so requests served
        after the job see the refreshed source. Catalog errors are logged and
        the previous cache entry stays in place.
        """
        if self._repository is None:
            return

        log_refresh_start(logger, self._repository.source_url)
        try:
            groups = await self._repository.get_channel_group_list(cache_time=0)
            logger.info(
                f"Scheduled refresh complete: {len(groups)} groups, {groups.channel_count} channels"
            )
        except CatalogError as e:
            logger.error(f"Scheduled refresh failed: {e}")

    def start(self, repository: IptvRepository, cron: str, misfire_grace_sec: int) -> None:
        """
        Start the scheduler with the source refresh job

        Args:
            repository: Repository whose source is refetched on each run
            cron: Crontab expression for the refresh schedule
            misfire_grace_sec: How late a missed run may still start
        """
        if self.scheduler and self.scheduler.running:
            logger.warning("Scheduler already running")
            return

        try:
            trigger = CronTrigger.from_crontab(cron)
        except (ValueError, KeyError) as exc:
            logger.error("Invalid cron expression '%s': %s", cron, exc)
            raise

        self._repository = repository
        self.scheduler = AsyncIOScheduler(timezone='UTC')
        self.scheduler.add_job(
            self._refresh_job,
            trigger=trigger,
            id='source_refresh',
            max_instances=1,
            coalesce=True,
            misfire_grace_time=misfire_grace_sec
        )

        self.scheduler.start()
        next_time = self.get_next_run_time()
        logger.info(
            "Scheduler started. Next refresh: %s",
            next_time.isoformat() if next_time else "unknown"
        )

    def shutdown(self) -> None:
        """Shutdown the scheduler"""
        if self.scheduler and self.scheduler.running:
            self.scheduler.shutdown()
            logger.info("Scheduler stopped")
            self.scheduler = None

    def is_running(self) -> bool:
        return bool(self.scheduler and self.scheduler.running)

    def get_next_run_time(self) -> datetime | None:
        """Get next scheduled refresh time"""
        if not self.scheduler:
            return None
        job = self.scheduler.get_job('source_refresh')
        return job.next_run_time if job else None


refresh_scheduler = SourceRefreshScheduler()
