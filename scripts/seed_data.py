#!/usr/bin/env python3
"""
Database seeding script for development and testing.
Creates a demo admin, field users, a project, a chat board and sample time cards.
"""

import asyncio
import sys
from pathlib import Path
from datetime import datetime, timedelta

# Add parent directory to path to import our modules
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import select
from fieldops.database import async_engine, Base, AsyncSessionLocal
from fieldops.models import (
    Board,
    BoardMember,
    Location,
    Project,
    ProjectMember,
    TimeCard,
    User,
)
from fieldops.services.auth_service import AuthService
from fieldops.services.time_accounting import compute_total_hours

DEMO_ADMIN_EMAIL = "demo@fieldops.app"
DEMO_PASSWORD = "demo123"


async def create_tables():
    """Create all database tables"""
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("✓ Database tables created")


async def seed_data():
    """Seed the database with sample data"""
    async with AsyncSessionLocal() as session:
        try:
            existing = await session.execute(select(User).where(User.email == DEMO_ADMIN_EMAIL))
            if existing.scalar_one_or_none():
                print("Demo data already present, nothing to do")
                return

            password_hash = AuthService.hash_password(DEMO_PASSWORD)

            # Create users
            admin = User(
                email=DEMO_ADMIN_EMAIL,
                first_name="Demo",
                last_name="Admin",
                role="admin",
                password_hash=password_hash,
            )
            user1 = User(
                email="john.doe@fieldops.app",
                first_name="John",
                last_name="Doe",
                role="user",
                password_hash=password_hash,
            )
            user2 = User(
                email="jane.smith@fieldops.app",
                first_name="Jane",
                last_name="Smith",
                role="user",
                password_hash=password_hash,
            )
            session.add_all([admin, user1, user2])
            await session.flush()
            print("✓ Created users")

            # Create project
            project = Project(
                name="Downtown Office Renovation",
                description="Complete renovation of 5-story office building",
                created_by=admin.id,
            )
            session.add(project)
            await session.flush()
            session.add_all([
                ProjectMember(project_id=project.id, user_id=user1.id),
                ProjectMember(project_id=project.id, user_id=user2.id),
            ])
            print("✓ Created project")

            # Create board
            board = Board(name="Field Crew", type="group", created_by=admin.id)
            session.add(board)
            await session.flush()
            session.add_all([
                BoardMember(board_id=board.id, user_id=admin.id, can_edit=True),
                BoardMember(board_id=board.id, user_id=user1.id),
                BoardMember(board_id=board.id, user_id=user2.id),
            ])
            print("✓ Created board")

            # Create finished time cards for the last few days
            now = datetime.utcnow()
            cards = 0
            for user in (user1, user2):
                for days_ago in range(1, 4):
                    start = (now - timedelta(days=days_ago)).replace(hour=8, minute=0, second=0, microsecond=0)
                    end = start + timedelta(hours=8, minutes=30)
                    session.add(TimeCard(
                        user_id=user.id,
                        start_time=start,
                        end_time=end,
                        total_hours=compute_total_hours(start, end),
                        notes="Seeded shift",
                    ))
                    cards += 1
            print("✓ Created time cards")

            session.add_all([
                Location(user_id=user1.id, lat=40.7128, lng=-74.0060, timestamp=now),
                Location(user_id=user2.id, lat=40.7306, lng=-73.9352, timestamp=now),
            ])
            print("✓ Created locations")

            await session.commit()
            print("\n✅ Database seeding completed successfully!")

            # Print summary
            print("\nSummary:")
            print(f"  - Users: 3 (admin login {DEMO_ADMIN_EMAIL} / {DEMO_PASSWORD})")
            print(f"  - Projects: 1")
            print(f"  - Boards: 1")
            print(f"  - Time cards: {cards}")
            print(f"  - Locations: 2")

        except Exception as e:
            await session.rollback()
            print(f"❌ Error seeding database: {e}")
            raise


async def main():
    """Main function"""
    print("Starting database seeding...\n")
    await create_tables()
    await seed_data()


if __name__ == "__main__":
    asyncio.run(main())
