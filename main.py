"""Main entry point: opens the data store and reports its totals."""

import asyncio

from gateway.router import create_app

app = create_app()


async def main() -> None:
    async with app:
        stats = await app.dispatch("dashboardStats")
        if not stats.success:
            print(f"Error: {stats.message}")
            return
        print(f"Database: {app.settings.db_path}")
        print(f"Records: {stats.record_count}")
        print(f"Total owed: {stats.total_owed:.2f}")
        print(f"Total received: {stats.total_received:.2f}")


if __name__ == "__main__":
    asyncio.run(main())
