"""
Seed Data Generator — fills a storage folder with realistic fake sessions.

Run: python scripts/seed_data.py [storage_dir] [project]
"""

import random
import sys
from datetime import datetime, timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.config import load_config
from src.data.log_store import LogStore
from src.data.models import SessionRecord
from src.data.table_renderers import get_renderer


def seed(storage_dir: Path, project: str, num_days: int = 14) -> None:
    config = load_config()
    store = LogStore(
        storage_dir, project,
        renderer=get_renderer(config["table_format"]),
        date_format=config["date_format"],
    )

    base_date = datetime.now() - timedelta(days=num_days)
    count = 0
    for day in range(num_days):
        if random.random() < 0.2:
            continue  # a day off

        cursor = (base_date + timedelta(days=day)).replace(
            hour=random.randint(8, 10), minute=random.randint(0, 59), second=0
        )
        for _ in range(random.randint(1, 4)):
            work_ms = random.randint(20, 120) * 60 * 1000
            end = cursor + timedelta(milliseconds=work_ms)
            store.save(SessionRecord(
                date=end.strftime(config["date_format"]),
                start_time=cursor.strftime(config["time_format"]),
                end_time=end.strftime(config["time_format"]),
                project=project,
                total_duration_ms=work_ms,
            ))
            count += 1
            cursor = end + timedelta(minutes=random.randint(5, 60))

    print(f"Seeded {count} sessions into {store.storage_dir}")
    print(f"  raw log: {store.raw_log.path}")
    print(f"  table:   {store.table_path}")


if __name__ == "__main__":
    target = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(load_config()["storage_dir"]).expanduser()
    name = sys.argv[2] if len(sys.argv) > 2 else "demo-project"
    seed(target, name)
