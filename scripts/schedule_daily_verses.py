# scripts/schedule_daily_verses.py
"""Keep the daily verse schedule two months ahead.

Meant to run from a timer (cron, platform scheduler). Safe to run as often
as wanted: months that are already scheduled are left alone.
"""
import logging
import sys
from pathlib import Path

# Add the parent directory to the Python path properly
current_dir = Path(__file__).resolve().parent
sys.path.insert(0, str(current_dir.parent))

from utils.daily_verses import DailyVerseScheduler
from utils.errors import ScriptureError

logger = logging.getLogger('schedule_daily_verses')


def main():
    logger.info("Starting daily verse scheduling...")
    try:
        targets = DailyVerseScheduler().ensure_buffer()
    except ScriptureError as e:
        logger.error(f"Daily verse scheduling failed: {e}", exc_info=True)
        return 1

    if targets:
        months = ', '.join(f"{year}-{month:02d}" for year, month in targets)
        logger.info(f"Scheduled months: {months}")
    logger.info("Daily verse scheduling complete")
    return 0


if __name__ == '__main__':
    sys.exit(main())
