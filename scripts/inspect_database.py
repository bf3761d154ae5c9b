#!/usr/bin/env python3
import argparse
import logging
from collections import Counter

from moviemaster.core.config import Settings
from moviemaster.core.database import MongoConnection
from moviemaster.core.exceptions import MovieStoreError
from moviemaster.core.movie_service import MovieService
from moviemaster.models.movie import MovieFields

logging.basicConfig(level=logging.INFO)


def summarize(docs):
    """
    Per-field presence counts plus how many documents carry keys the movie
    schema does not know about.
    """
    known = set(MovieFields.model_fields) | {"_id", "createdAt", "updatedAt"}
    present = Counter()
    unknown = Counter()

    for doc in docs:
        for key in doc:
            if key in known:
                present[key] += 1
            else:
                unknown[key] += 1

    missing = {name: len(docs) - present[name] for name in MovieFields.model_fields}
    return {
        "total": len(docs),
        "missing": missing,
        "unknown_fields": dict(unknown),
        "users": len({d.get("addedBy") for d in docs if d.get("addedBy")}),
    }


def main() -> int:
    parser = argparse.ArgumentParser(description="Print basic stats about the movies collection.")
    parser.add_argument("--sample", type=int, default=5, help="Number of recent movies to print (default: 5)")
    args = parser.parse_args()

    settings = Settings.from_env()
    connection = MongoConnection(settings)
    if not connection.ensure_connected():
        print("Could not connect to MongoDB.")
        return 1

    service = MovieService(connection)
    try:
        docs = service.list_all()
        recent = service.recent(limit=args.sample)
    except MovieStoreError as e:
        print(f"{e.message}: {e.error}")
        return 1
    finally:
        connection.close()

    stats = summarize(docs)
    print(f"Number of movies: {stats['total']}")
    print(f"Distinct submitting users: {stats['users']}")
    print(f"Missing values per field: {stats['missing']}")
    print(f"Fields outside the movie schema: {stats['unknown_fields']}")

    print(f"Most recent {len(recent)} movies:")
    for doc in recent:
        print(f"  - {doc['_id']} {doc.get('title')!r} rating={doc.get('rating')} addedBy={doc.get('addedBy')}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
