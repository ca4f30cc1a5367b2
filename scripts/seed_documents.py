#!/usr/bin/env python3
"""Seed documents from a JSON file through the HTTP API.

The file holds a list of ``{"title": ..., "content": ...}`` records. Records
are posted in batches; each batch is ingested atomically by the API.

Usage:
    export API_URL=http://localhost:8000
    python scripts/seed_documents.py data/documents.json [--offset 0] [--limit 20] [--batch-size 5]
"""
from __future__ import annotations

import argparse
import json
import os
import sys
import time

import httpx


def load_records(path: str, offset: int, limit: int) -> list[dict]:
    with open(path, encoding="utf-8") as f:
        records = json.load(f)
    if not isinstance(records, list):
        raise ValueError(f"{path} must contain a JSON list")
    selected = records[offset : offset + limit]
    print(f"Loaded {len(records)} records, using {offset + 1}-{offset + len(selected)}")
    return selected


def count_documents(client: httpx.Client, api_url: str) -> int:
    r = client.get(f"{api_url}/v1/documents")
    r.raise_for_status()
    return r.json()["count"]


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed documents through the API")
    parser.add_argument("path", help="JSON file with title/content records")
    parser.add_argument("--offset", type=int, default=None, help="First record (default: current document count)")
    parser.add_argument("--limit", type=int, default=20, help="Number of records to post")
    parser.add_argument("--batch-size", type=int, default=5, help="Documents per request")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")

    with httpx.Client(timeout=300.0) as client:
        health = client.get(f"{api_url}/v1/health/ready")
        if health.status_code != 200:
            print(f"API not ready: {health.text}")
            return 1

        offset = args.offset if args.offset is not None else count_documents(client, api_url)
        records = load_records(args.path, offset, args.limit)
        if not records:
            print("Nothing to seed.")
            return 0

        created = 0
        chunks = 0
        errors = 0
        start = time.perf_counter()
        for i in range(0, len(records), args.batch_size):
            batch = records[i : i + args.batch_size]
            r = client.post(
                f"{api_url}/v1/documents",
                json={"documents": [{"title": b["title"], "content": b["content"]} for b in batch]},
            )
            if r.status_code != 201:
                errors += len(batch)
                print(f"  batch {i // args.batch_size + 1} failed: {r.status_code} {r.text}")
                continue
            for item in r.json()["items"]:
                created += 1
                chunks += item["chunkCount"]
                print(f"  [{created}] {item['document']['title'][:60]} ({item['chunkCount']} chunks)")
        elapsed = time.perf_counter() - start

    print(f"Created {created} documents with {chunks} chunks in {elapsed:.1f} s (errors={errors})")
    return 0 if errors == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
