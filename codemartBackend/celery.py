"""
Celery Configuration for CodeMart Backend

Runs the asynchronous side of the checkout and payout pipelines:
payment confirmation, seller transfers, and access expiry housekeeping.
"""

import os

from celery import Celery
from celery.schedules import crontab


os.environ.setdefault("DJANGO_SETTINGS_MODULE", "codemartBackend.settings")

app = Celery("codemartBackend")

# Read CELERY_* keys from Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")

app.autodiscover_tasks()
app.autodiscover_tasks(["payment_system.Tasks"])

app.conf.beat_schedule = {
    # Drop expired repo access grants once a day
    "expire-repo-access-daily": {
        "task": "payment_system.Tasks.access_tasks.expire_repo_access_task",
        "schedule": crontab(hour=0, minute=15),
        "options": {"expires": 30.0 * 60.0, "queue": "marketplace_tasks"},
    },
}

app.conf.update(
    task_routes={
        "payment_system.Tasks.payment_tasks.*": {"queue": "payment_tasks"},
        "payment_system.Tasks.payout_tasks.*": {"queue": "payment_tasks"},
        "payment_system.Tasks.access_tasks.*": {"queue": "marketplace_tasks"},
    },
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    result_expires=60 * 60 * 24,
    worker_max_tasks_per_child=1000,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    task_time_limit=30 * 60,
    task_soft_time_limit=25 * 60,
    beat_scheduler="django_celery_beat.schedulers:DatabaseScheduler",
)


@app.task(bind=True, ignore_result=True)
def debug_task(self):
    print(f"Request: {self.request!r}")
