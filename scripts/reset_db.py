"""Reset database to empty state.

Clears all data from:
- products
- categories

Also clears Redis rate limit data.

Usage:
    uv run python -m scripts.reset_db
"""

import asyncio

from redis.exceptions import RedisError
from sqlalchemy import text

from catalog.core.database import async_session_maker, engine
from catalog.core.redis import close_redis, get_redis


async def reset_database():
    """Clear all data from the database."""
    print("=" * 60)
    print("Resetting database to empty state...")
    print("=" * 60)

    async with async_session_maker() as session:
        # Products first, they reference categories
        tables = ["products", "categories"]

        for table in tables:
            result = await session.execute(text(f"DELETE FROM {table}"))
            print(f"  Deleted {result.rowcount} rows from {table}")

        await session.commit()
        print("\nDatabase cleared successfully!")


async def reset_redis():
    """Clear rate limit keys from Redis."""
    print("\nResetting Redis...")

    try:
        redis = await get_redis()
        deleted = 0
        async for key in redis.scan_iter(match="ratelimit:*"):
            deleted += await redis.delete(key)
        print(f"  Removed {deleted} rate limit keys")
    except RedisError as e:
        print(f"  Warning: Could not clear Redis: {e}")
        print("  (This is OK if Redis is not running locally)")
    finally:
        await close_redis()


async def main():
    await reset_database()
    await reset_redis()

    print("\n" + "=" * 60)
    print("Reset complete!")
    print("=" * 60)
    print("\nTo re-seed the database, run:")
    print("  uv run python -m scripts.seed_data")
    print("=" * 60)

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
