import asyncio

from storyforge.config import get_settings
from storyforge.infrastructure.database import connect_database, get_stories_collection


async def clear_data():
    settings = get_settings()
    client, database = await connect_database(settings)
    try:
        result = await get_stories_collection(database).delete_many({})
        # Uploaded media objects are left in the bucket
        print(f"Stories cleared! {result.deleted_count} documents removed.")
    finally:
        await client.close()


asyncio.run(clear_data())
