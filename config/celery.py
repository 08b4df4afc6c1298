import os

from celery import Celery
from celery.schedules import crontab  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("room_booking")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


# ============================================================================
# CELERY BEAT SCHEDULE (Periodic Tasks)
# ============================================================================

app.conf.beat_schedule = {
    # Pending requests for days that are already over are closed as rejected
    "expire-stale-bookings": {
        "task": "bookings.expire_stale_bookings",
        "schedule": crontab(hour=0, minute=5),
    },
}
