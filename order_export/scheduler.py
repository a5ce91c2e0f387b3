from __future__ import annotations

import logging
import re
from typing import Optional

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.cron import CronTrigger

from .config import ExportSettings
from .job import ExportJob

logger = logging.getLogger(__name__)

JOB_ID = "weekly_order_export"

# crontab numbering: 0 and 7 are Sunday
_CRON_WEEKDAYS = ("sun", "mon", "tue", "wed", "thu", "fri", "sat", "sun")


def _weekday_name(token: str) -> str:
    if not token.isdigit():
        return token
    n = int(token)
    if n > 7:
        raise ValueError(f"Invalid day of week: {token}")
    return _CRON_WEEKDAYS[n]


def _expand_step(rng: str, step: str) -> list:
    # Stepped fields are spelled out day by day, in crontab numbering.
    if not step.isdigit() or int(step) == 0:
        raise ValueError(f"Invalid step in day of week: {step!r}")

    if rng == "*":
        first, last = 0, 6
    else:
        lo, dash, hi = rng.partition("-")
        if not lo.isdigit() or (dash and not hi.isdigit()):
            raise ValueError(f"Invalid day of week range: {rng!r}")
        first, last = int(lo), int(hi) if dash else 7

    names = []
    for n in range(first, last + 1, int(step)):
        name = _weekday_name(str(n))
        if name not in names:
            names.append(name)
    return names


def _weekday_names(field: str) -> str:
    """Translate a crontab day-of-week field to weekday names (APScheduler counts from Monday)."""
    out = []
    for part in field.split(","):
        rng, slash, step = part.partition("/")
        if slash and not re.search(r"[a-z]", rng, re.IGNORECASE):
            out.extend(_expand_step(rng, step))
            continue
        first, dash, last = rng.partition("-")
        if dash and first == "0":
            # Sunday-first range: 'mon-<last>' plus Sunday.
            out.append(f"mon-{_weekday_name(last)}{slash}{step}")
            out.append("sun")
            continue
        rng = re.sub(r"\d+", lambda m: _weekday_name(m.group()), rng)
        out.append(f"{rng}{slash}{step}")
    return ",".join(out)


def cron_trigger(expr: str, timezone: str = "UTC") -> CronTrigger:
    values = expr.split()
    if len(values) != 5:
        raise ValueError(f"Wrong number of fields; got {len(values)}, expected 5")

    minute, hour, day, month, day_of_week = values
    return CronTrigger(
        minute=minute,
        hour=hour,
        day=day,
        month=month,
        day_of_week=_weekday_names(day_of_week),
        timezone=timezone,
    )


def build_scheduler(job: ExportJob, cron: str, *, timezone: str = "UTC", scheduler: Optional[BlockingScheduler] = None) -> BlockingScheduler:
    """
    Register `job.run` on a crontab expression.

    At most one run is active at a time; runs missed while one is in progress
    are coalesced into a single run.
    """
    scheduler = scheduler or BlockingScheduler(timezone=timezone)
    scheduler.add_job(
        job.run,
        cron_trigger(cron, timezone),
        id=JOB_ID,
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )
    return scheduler


def serve(settings: ExportSettings) -> None:
    job = ExportJob.from_settings(settings)
    scheduler = build_scheduler(job, settings.schedule, timezone=settings.timezone)
    logger.info("Export scheduled with '%s' (%s)", settings.schedule, settings.timezone)
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        logger.info("Scheduler stopped.")
