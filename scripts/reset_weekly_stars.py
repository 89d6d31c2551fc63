"""
Reset every driver's weekly star count and show the current leaders.
Meant for a Sunday cron job; always forces the reset.
"""
import asyncio
import sys
from pathlib import Path

# Add the api directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "api"))

from sqlalchemy import select
from beloved.core.database import AsyncSessionLocal, engine
from beloved.models import Profile, DriverProfile
from beloved.services.driver_stars import reset_weekly_stars


async def main():
    async with AsyncSessionLocal() as session:
        result = await reset_weekly_stars(session, force=True)
        print(f"{result['message']} at {result['timestamp']:%Y-%m-%d %H:%M:%S}")

        leaders = await session.execute(
            select(Profile.full_name, DriverProfile.total_stars)
            .join(DriverProfile, DriverProfile.id == Profile.id)
            .order_by(DriverProfile.total_stars.desc())
            .limit(5)
        )
        print("\nTop drivers by total stars:")
        for rank, (name, stars) in enumerate(leaders.all(), start=1):
            print(f"  {rank}. {name} - {stars}")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
