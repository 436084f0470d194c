import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("riderent")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


app.conf.beat_schedule = {
    # Release dates held by pending bookings nobody acted on
    "expire-pending-bookings": {
        "task": "bookings.expire_pending_bookings",
        "schedule": 15 * 60.0,
        "options": {"expires": 10 * 60},
    },
}
