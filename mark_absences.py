"""Mark every active student without an attendance record today as absent.

Meant to run once a day after curfew, e.g. from cron::

    0 23 * * * cd /srv/housing && python mark_absences.py
"""
import logging
from app import app
from queries import mark_daily_absences

logger = logging.getLogger("mark_absences")

if __name__ == "__main__":
    with app.app_context():
        logger.info("Running daily attendance check...")
        try:
            marked = mark_daily_absences()
        except Exception:
            logger.exception("Daily attendance check failed")
            raise
        logger.info("Daily attendance complete. Marked %s students as absent.", marked)
