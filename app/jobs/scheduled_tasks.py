import functools
import json
import threading
import time
from typing import Callable, List, Optional

import schedule
from pydantic import ValidationError

from infrastructure.logging import get_module_logger
from infrastructure.notifications import (
    NotificationRunReport,
    NotificationService,
    Subscription,
)
from infrastructure.storage.base import KeyValueStore

logger = get_module_logger()

# Returns the subscriptions due for a reminder, already filtered
DueSubscriptionsProvider = Callable[[], List[Subscription]]


def safe_run(job):
    @functools.wraps(job)
    def wrapper(*args, **kwargs):
        try:
            return job(*args, **kwargs)
        except Exception as e:  # pylint: disable=broad-except
            logger.error("scheduled_job_failed", job=job.__name__, error=str(e))
            return None

    return wrapper


def load_due_subscriptions(store: KeyValueStore, key: str) -> List[Subscription]:
    """Read the JSON list of due subscriptions left in the store.

    Entries that do not validate are logged and skipped.
    """
    raw = store.get(key)
    if not raw:
        return []
    try:
        items = json.loads(raw)
    except ValueError as e:
        logger.error("due_subscriptions_malformed", key=key, error=str(e))
        return []
    if not isinstance(items, list):
        logger.error("due_subscriptions_malformed", key=key, error="not a list")
        return []

    subscriptions = []
    for item in items:
        try:
            subscriptions.append(Subscription.model_validate(item))
        except ValidationError as e:
            logger.warning("due_subscription_invalid", key=key, error=str(e))
    return subscriptions


def send_reminders(
    service: NotificationService,
    provider: DueSubscriptionsProvider,
    stop_event: Optional[threading.Event] = None,
) -> NotificationRunReport:
    subscriptions = provider()
    logger.info("scheduled_reminder_run", subscriptions=len(subscriptions))
    return service.run(subscriptions, stop_event=stop_event)


def init(
    service: NotificationService,
    provider: DueSubscriptionsProvider,
    run_at: str = "08:00",
    stop_event: Optional[threading.Event] = None,
):
    logger.info("scheduled_tasks_initialized", reminder_run_at=run_at)

    schedule.every().day.at(run_at).do(
        safe_run(send_reminders),
        service=service,
        provider=provider,
        stop_event=stop_event,
    )
    schedule.every(5).minutes.do(safe_run(scheduler_heartbeat))


def scheduler_heartbeat():
    logger.info("scheduler_heartbeat", time=time.ctime())


def run_continuously(interval=1, cease_continuous_run=None):
    """Continuously run, while executing pending jobs at each
    elapsed time interval.
    @return cease_continuous_run: threading. Event which can
    be set to cease continuous run. Setting it also makes a reminder
    run in progress skip the targets it has not started yet.
    Please note that it is *intended behavior that run_continuously()
    does not run missed jobs*. For example, if you've registered a job
    that should run every minute and you set a continuous run
    interval of one hour then your job won't be run 60 times
    at each interval but only once.
    """
    if cease_continuous_run is None:
        cease_continuous_run = threading.Event()

    class ScheduleThread(threading.Thread):
        @classmethod
        def run(cls):
            while not cease_continuous_run.is_set():
                schedule.run_pending()
                time.sleep(interval)

    continuous_thread = ScheduleThread(daemon=True, name="reminder-scheduler")
    continuous_thread.start()
    return cease_continuous_run
