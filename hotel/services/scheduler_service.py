"""
Сервис планировщика фоновых задач
"""

import logging
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from hotel.core.config import settings

logger = logging.getLogger(__name__)

ROOM_STATUS_JOB_ID = "room_status_sweep"


class SchedulerService:
    """Сервис для управления периодическими задачами"""

    def __init__(self):
        self.scheduler = AsyncIOScheduler()
        self._jobs_registered = False

    def register_jobs(self):
        """Регистрация всех периодических задач"""
        if self._jobs_registered:
            logger.warning("Jobs already registered")
            return

        if not settings.enable_room_status_sweep:
            logger.info("Room status sweep is disabled in settings")
            return

        if settings.room_status_sweep_interval_minutes <= 0:
            logger.info("Room status sweep disabled (interval = 0)")
            return

        # Импортируем здесь чтобы избежать циклических зависимостей
        from hotel.jobs.room_status_job import reconcile_room_statuses_job

        # max_instances=1: новый тик не стартует, пока не закончился предыдущий
        self.scheduler.add_job(
            reconcile_room_statuses_job,
            IntervalTrigger(minutes=settings.room_status_sweep_interval_minutes),
            id=ROOM_STATUS_JOB_ID,
            name="Reconcile room statuses",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        logger.info(
            f"Registered room status sweep (every {settings.room_status_sweep_interval_minutes} minutes)"
        )

        self._jobs_registered = True

    def start(self):
        """Запуск планировщика"""
        if not self.scheduler.running:
            self.register_jobs()
            self.scheduler.start()
            logger.info("Scheduler started")
        else:
            logger.warning("Scheduler already running")

    def shutdown(self):
        """Остановка планировщика"""
        if self.scheduler.running:
            self.scheduler.shutdown()
            logger.info("Scheduler stopped")

    def get_jobs(self):
        """Получить список всех задач"""
        return self.scheduler.get_jobs()


# Глобальный экземпляр
scheduler_service = SchedulerService()
