#!/usr/bin/env python3
import argparse
import logging

from ingestion.ingest import ingest_many, load_json_file
from moviemaster.core.config import Settings
from moviemaster.core.database import MongoConnection
from moviemaster.core.exceptions import MovieStoreError
from moviemaster.core.movie_service import MovieService


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the movies collection from a JSON array or JSONL file.")
    parser.add_argument("path", help="JSON or JSONL file with one movie object per entry")
    parser.add_argument("--added-by", default=None, help="Set addedBy on records that do not carry one")
    parser.add_argument("--strict", action="store_true", help="Abort on the first invalid record")
    args = parser.parse_args()

    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level)

    movies = ingest_many(load_json_file(args.path), continue_on_error=not args.strict)

    connection = MongoConnection(settings)
    if not connection.ensure_connected():
        print("Could not connect to MongoDB, nothing inserted.")
        return 1

    service = MovieService(connection)
    inserted = 0
    try:
        for movie in movies:
            if args.added_by and movie.addedBy is None:
                movie.addedBy = args.added_by
            service.create(movie)
            inserted += 1
    except MovieStoreError as e:
        print(f"{e.message}: {e.error}")
        return 1
    finally:
        connection.close()

    print(f"Inserted {inserted} of {len(movies)} movies.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
