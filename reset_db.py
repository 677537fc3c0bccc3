import asyncio
import sys
import os

# Add backend/ to PYTHONPATH to import frameflicker.*
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "backend"))

from frameflicker.core.config import get_settings
from frameflicker.core.database import Database


async def reset():
    settings = get_settings()
    database = Database.from_settings(settings)
    print(f"Connecting to {database.dialect} database, dropping tables...")
    try:
        await database.drop_schema()
        print("Tables dropped. Creating new tables...")
        await database.create_schema()
    finally:
        await database.dispose()
    print("Database reset successfully!")

if __name__ == "__main__":
    asyncio.run(reset())
