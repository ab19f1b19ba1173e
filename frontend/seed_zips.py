"""
Seed script to populate the zips collection.

Usage:
    python -m frontend.seed_zips                        # Add 20 sample zips
    python -m frontend.seed_zips --count 50             # Add 50 sample zips
    python -m frontend.seed_zips --file zips.json       # Import a mongoimport-style dataset
    python -m frontend.seed_zips --file zips.json --clear   # Clear the collection first

The dataset file holds one JSON document per line, e.g.
    {"_id": "01001", "city": "AGAWAM", "loc": [-72.62, 42.07], "pop": 15338, "state": "MA"}
Extra fields such as loc are stored as-is; the API never returns them.
"""

import argparse
import json
import random
from typing import Dict, Iterable, Iterator, List

from dotenv import load_dotenv
from pymongo import MongoClient

from src.common.repositories import RepositoryConfig

load_dotenv()

# Sample data for generating zip records
CITIES = [
    ("AGAWAM", "MA"), ("CUSHMAN", "MA"), ("BARRE", "MA"), ("BELCHERTOWN", "MA"),
    ("NEW YORK", "NY"), ("BROOKLYN", "NY"), ("ALBANY", "NY"),
    ("BALTIMORE", "MD"), ("ANNAPOLIS", "MD"),
    ("AUSTIN", "TX"), ("DALLAS", "TX"), ("HOUSTON", "TX"),
    ("SEATTLE", "WA"), ("SPOKANE", "WA"),
    ("CHICAGO", "IL"), ("SPRINGFIELD", "IL"),
    ("DENVER", "CO"), ("BOULDER", "CO"),
]


def generate_sample_zip(used_ids: set) -> Dict:
    """Generate a single sample zip document with an unused _id."""
    while True:
        zip_id = f"{random.randint(1000, 99950):05d}"
        if zip_id not in used_ids:
            used_ids.add(zip_id)
            break

    city, state = random.choice(CITIES)
    return {
        "_id": zip_id,
        "city": city,
        "state": state,
        "pop": random.randint(0, 60000),
    }


def read_dataset(lines: Iterable[str]) -> Iterator[Dict]:
    """
    Parse JSON-lines zip documents, skipping blank lines.

    Raises:
        ValueError: If a line is not valid JSON (includes the line number)
    """
    for number, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            yield json.loads(line)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON on line {number}: {e}") from e


def seed_zips(count: int = 20, clear: bool = False, file: str = None) -> int:
    """
    Seed the zips collection.

    Args:
        count: Number of sample zips to create when no file is given
        clear: If True, clear existing zips first
        file: Path to a JSON-lines dataset to import instead of samples

    Returns:
        Number of documents inserted
    """
    config = RepositoryConfig.from_env()
    client = MongoClient(config.mongodb_uri, serverSelectionTimeoutMS=config.timeout_ms)
    collection = client[config.database][config.collection]

    if clear:
        result = collection.delete_many({})
        print(f"Cleared {result.deleted_count} existing zips")

    if file:
        with open(file, encoding="utf-8") as f:
            docs: List[Dict] = list(read_dataset(f))
    else:
        used_ids = set()
        docs = [generate_sample_zip(used_ids) for _ in range(count)]

    if not docs:
        print("Nothing to insert")
        return 0

    result = collection.insert_many(docs)
    inserted = len(result.inserted_ids)
    print(f"Inserted {inserted} zips into {config.database}.{config.collection}")

    print("\nSample zips:")
    for doc in docs[:3]:
        print(f"  - {doc.get('_id')}: {doc.get('city')}, {doc.get('state')} (pop {doc.get('pop')})")

    total = collection.count_documents({})
    print(f"\nTotal zips in {config.collection}: {total}")
    return inserted


def main():
    parser = argparse.ArgumentParser(description="Seed the zips collection")
    parser.add_argument("--count", type=int, default=20, help="Number of sample zips to create")
    parser.add_argument("--file", help="JSON-lines zips dataset to import")
    parser.add_argument("--clear", action="store_true", help="Clear existing zips first")

    args = parser.parse_args()

    seed_zips(count=args.count, clear=args.clear, file=args.file)


if __name__ == "__main__":
    main()
