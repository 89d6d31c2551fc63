"""
Seed script to create test data
"""
import asyncio
import sys
from pathlib import Path
from datetime import datetime, timedelta
import random

# Add the api directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "api"))

from sqlalchemy import select
from beloved.core.database import AsyncSessionLocal, init_db
from beloved.models import Profile, DriverProfile
from beloved.models.profile import UserRole
from beloved.models.ride import PaymentMethod
from beloved.services.profiles import create_profile
from beloved.services.rides import assign_driver, create_ride

HOME_ADDRESSES = [
    {"address": "1200 N Meridian St", "city": "Indianapolis", "state": "IN", "zip": "46202"},
    {"address": "455 Mass Ave", "city": "Indianapolis", "state": "IN", "zip": "46204"},
    {"address": "3802 E 10th St", "city": "Indianapolis", "state": "IN", "zip": "46201"},
    {"address": "901 Virginia Ave", "city": "Indianapolis", "state": "IN", "zip": "46203"},
]

PROVIDERS = [
    ("Eskenazi Health", {"address": "720 Eskenazi Ave", "city": "Indianapolis", "state": "IN", "zip": "46202"}),
    ("IU Health Methodist", {"address": "1701 N Senate Blvd", "city": "Indianapolis", "state": "IN", "zip": "46202"}),
    ("Community East Dialysis", {"address": "1500 N Ritter Ave", "city": "Indianapolis", "state": "IN", "zip": "46219"}),
]

DRIVERS = [
    ("james.driver@belovedtransportation.com", "James Carter", "jcarter", "Toyota", "Sienna", "2021", "Silver", "BLV-101"),
    ("maria.driver@belovedtransportation.com", "Maria Lopez", "mlopez", "Honda", "Odyssey", "2022", "White", "BLV-102"),
]

MEMBERS = [
    ("ruth.member@belovedtransportation.com", "Ruth Johnson", "317-555-0101"),
    ("walter.member@belovedtransportation.com", "Walter Green", "317-555-0102"),
    ("dolores.member@belovedtransportation.com", "Dolores Price", "317-555-0103"),
    ("henry.member@belovedtransportation.com", "Henry Adams", "317-555-0104"),
]


async def seed_data():
    """Seed the database with test data"""
    await init_db()

    async with AsyncSessionLocal() as session:
        existing = await session.execute(select(Profile).limit(1))
        if existing.scalar_one_or_none():
            print("Database already has profiles, skipping seed")
            return

        await create_profile(
            session,
            email="owner@belovedtransportation.com",
            full_name="BeLoved Owner",
            phone="317-555-0001",
            password="admin123",
            role=UserRole.SUPER_ADMIN,
        )
        await create_profile(
            session,
            email="dispatch@belovedtransportation.com",
            full_name="Dispatch Desk",
            phone="317-555-0002",
            password="admin123",
            role=UserRole.ADMIN,
        )

        drivers = []
        for email, name, username, make, model, year, color, plate in DRIVERS:
            driver = await create_profile(
                session,
                email=email,
                full_name=name,
                phone="317-555-0200",
                password="password123",
                username=username,
                role=UserRole.DRIVER,
            )
            session.add(DriverProfile(
                id=driver.id,
                license_number=f"IN-{random.randint(1000000, 9999999)}",
                vehicle_make=make,
                vehicle_model=model,
                vehicle_year=year,
                vehicle_color=color,
                vehicle_plate=plate,
            ))
            drivers.append(driver)

        members = []
        for (email, name, phone), home in zip(MEMBERS, HOME_ADDRESSES):
            member = await create_profile(
                session,
                email=email,
                full_name=name,
                phone=phone,
                password="password123",
                home_address=home,
            )
            members.append(member)

        # Rides over the next two weeks, some already under way
        now = datetime.utcnow().replace(minute=0, second=0, microsecond=0)
        for i in range(12):
            member = random.choice(members)
            provider_name, provider_address = random.choice(PROVIDERS)
            appointment = now + timedelta(days=random.randint(0, 14), hours=random.randint(8, 16))
            ride = await create_ride(
                session,
                member_id=member.id,
                pickup_address=member.home_address,
                dropoff_address=provider_address,
                scheduled_pickup_time=appointment - timedelta(hours=1),
                appointment_time=appointment,
                provider_name=provider_name,
                payment_method=random.choice(list(PaymentMethod)),
            )
            if i % 3 == 0:
                assign_driver(session, ride, random.choice(drivers))

        await session.commit()

    print("Seed data created successfully!")
    print("   - 1 super admin, 1 admin")
    print(f"   - {len(DRIVERS)} drivers")
    print(f"   - {len(MEMBERS)} members")
    print("   - 12 rides")
    print("\nLogin credentials:")
    print("  owner@belovedtransportation.com / admin123")
    print("  dispatch@belovedtransportation.com / admin123")
    print("  james.driver@belovedtransportation.com / password123")
    print("  ruth.member@belovedtransportation.com / password123")


if __name__ == "__main__":
    asyncio.run(seed_data())
