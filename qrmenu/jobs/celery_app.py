"""Celery application configuration"""

from celery import Celery
from celery.schedules import crontab
from qrmenu.config import settings

celery_app = Celery(
    "qrmenu",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=[
        "qrmenu.jobs.tasks",
    ],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_time_limit=120,
    task_acks_late=True,

    # Maintenance runs outside service hours
    beat_schedule={
        "purge-expired-invitations": {
            "task": "purge_expired_invitations",
            "schedule": crontab(hour=3, minute=0),
        },
    },
)
