"""
read_load.py — simple async load script against the redirect path

Usage:
  python read_load.py --base http://127.0.0.1:8000 --in links_created.jsonl --count 15000 --concurrency 200
"""
import argparse
import asyncio
import json
import random
import time
from datetime import datetime, timezone

import httpx


def _now_iso():
    return datetime.now(timezone.utc).isoformat()


def _load_ids(path):
    ids = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            try:
                short_id = json.loads(line).get("shortId")
            except json.JSONDecodeError:
                continue
            if short_id:
                ids.append(short_id)
    return ids


async def _hit_one(client: httpx.AsyncClient, base: str, short_id: str):
    try:
        r = await client.get(f"{base}/{short_id}", follow_redirects=False, timeout=10)
    except httpx.HTTPError:
        return False
    # Expect 302; a 404 means the background write never landed
    return r.status_code == 302


async def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--base", default="http://127.0.0.1:8000")
    parser.add_argument("--in", dest="ids_file", default="links_created.jsonl")
    parser.add_argument("--count", type=int, default=15000)
    parser.add_argument("--concurrency", type=int, default=200)
    args = parser.parse_args()

    ids = _load_ids(args.ids_file)
    if not ids:
        print(f"No short ids found in {args.ids_file}. Run write_load.py first.")
        return

    start_iso = _now_iso()
    t0 = time.perf_counter()
    success = 0

    limit = httpx.Limits(max_connections=args.concurrency, max_keepalive_connections=args.concurrency)
    async with httpx.AsyncClient(limits=limit) as client:
        sem = asyncio.Semaphore(args.concurrency)

        async def _task(i):
            nonlocal success
            async with sem:
                if await _hit_one(client, args.base, random.choice(ids)):
                    success += 1

        await asyncio.gather(*(_task(i) for i in range(args.count)))

    dt = time.perf_counter() - t0
    print(f"START: {start_iso}")
    print(f"END:   {_now_iso()}")
    print(f"TOTAL: {dt:.3f} s")
    print(f"OPS:   reads={args.count}, ok={success}, fail={args.count - success}")
    if dt > 0:
        print(f"RPS:   {success/dt:.1f} req/s")


if __name__ == "__main__":
    asyncio.run(main())
