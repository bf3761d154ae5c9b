from moviemaster.models.movie import MovieCreate
from pydantic import ValidationError
import logging
from typing import Optional, Iterable, List
import json
import tempfile
import os

def ingest_one(raw: dict) -> Optional[MovieCreate]:
    if not isinstance(raw, dict):
        logging.warning("Skipping non-object movie record: %r", raw)
        return None

    try:
        movie = MovieCreate.model_validate(raw)
    except ValidationError as e:
        logging.warning("Skipping movie title=%s: %s", raw.get('title', "<missing>"), e)
        return None

    return movie

def ingest_many(raw_list: Iterable[dict], continue_on_error=True) -> List[MovieCreate]:
    results = []
    ok_count = 0
    skipped_count = 0

    for raw in raw_list:
        result = ingest_one(raw)

        if result is None:
            if not continue_on_error:
                raise ValueError("Invalid movie record during batch ingestion")
            skipped_count += 1
            continue

        ok_count += 1
        results.append(result)

    logging.info("OK=%s SKIP=%s", ok_count, skipped_count)

    return results

def load_json_file(path):
    with open(path, "r", encoding="utf-8") as f:
        first_char = f.read(1)
        f.seek(0)

        # Case 1: JSON array
        if first_char == "[":
            data = json.load(f)

            for item in data:
                if isinstance(item, dict):
                    yield item
                else:
                    logging.warning("Item in JSON file is not an object, skipping")

        # Case 2: NDJSON
        else:
            for lineno, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue

                try:
                    obj = json.loads(line)
                except json.JSONDecodeError as e:
                    logging.warning("Skipping invalid JSON line %d: %s", lineno, e)
                    continue

                if isinstance(obj, dict):
                    yield obj
                else:
                    logging.warning("Line %d is not an object, skipping", lineno)

def save_jsonl(docs: Iterable[dict], path: str, append: bool = False):

    tmp_path = None
    use_atomic = False

    if append:
        f = open(path, "a", encoding="utf-8")
    else:
        dir_name = os.path.dirname(os.path.abspath(path))
        tmp_fd, tmp_path = tempfile.mkstemp(dir=dir_name, prefix=".tmp_export_", text=True)
        f = os.fdopen(tmp_fd, "w", encoding="utf-8")
        use_atomic = True

    count = 0

    with f:
        for doc in docs:
            if not isinstance(doc, dict):
                logging.warning("Skipping non-dict object in output")
                continue
            line = json.dumps(doc, ensure_ascii=False, default=str)
            f.write(line + "\n")
            count += 1

    if use_atomic and tmp_path is not None:
        os.replace(tmp_path, path)

    logging.info("Saved %d documents to %s", count, path)
    return count
