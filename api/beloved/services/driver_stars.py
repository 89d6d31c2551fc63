"""
Driver star ratings and the weekly counter reset
"""
import logging
from datetime import date, datetime
from typing import Optional

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from beloved.models.driver_profile import DriverProfile

logger = logging.getLogger(__name__)

SUNDAY = 6  # date.weekday()

NOT_SUNDAY_MESSAGE = "Not Sunday, weekly stars reset not triggered. Use ?force=true to force reset."
RESET_MESSAGE = "Weekly stars reset successful"


def award_stars(driver_profile: DriverProfile, stars: int) -> DriverProfile:
    driver_profile.weekly_stars_count = (driver_profile.weekly_stars_count or 0) + stars
    driver_profile.total_stars = (driver_profile.total_stars or 0) + stars
    return driver_profile


async def reset_weekly_stars(db: AsyncSession, today: Optional[date] = None, force: bool = False) -> dict:
    """Zero every driver's weekly star count on Sundays, or any day when forced"""
    today = today or date.today()
    if today.weekday() != SUNDAY and not force:
        return {"message": NOT_SUNDAY_MESSAGE, "reset": False, "timestamp": None}

    result = await db.execute(update(DriverProfile).values(weekly_stars_count=0))
    await db.commit()
    logger.info("Weekly stars reset for %s drivers", result.rowcount)
    return {"message": RESET_MESSAGE, "reset": True, "timestamp": datetime.utcnow()}
