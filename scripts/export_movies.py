#!/usr/bin/env python3
import argparse
import logging

from ingestion.ingest import save_jsonl
from moviemaster.core.config import Settings
from moviemaster.core.database import MongoConnection
from moviemaster.core.exceptions import MovieStoreError
from moviemaster.core.movie_service import MovieService
from moviemaster.models.movie import movie_to_json


def main() -> int:
    parser = argparse.ArgumentParser(description="Export the movies collection to a JSONL file.")
    parser.add_argument("path", help="Output JSONL file")
    parser.add_argument("--append", action="store_true", help="Append instead of replacing the file")
    args = parser.parse_args()

    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level)

    connection = MongoConnection(settings)
    if not connection.ensure_connected():
        print("Could not connect to MongoDB.")
        return 1

    try:
        docs = MovieService(connection).list_all()
    except MovieStoreError as e:
        print(f"{e.message}: {e.error}")
        return 1
    finally:
        connection.close()

    count = save_jsonl(
        (movie_to_json(d) for d in docs),
        args.path,
        append=args.append,
    )
    print(f"Exported {count} movies to {args.path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
