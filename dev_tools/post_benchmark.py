#!/usr/bin/env python3

"""
Creates feeds and posts to them through the public API.

Each feed accepts one post per rate window, so anything beyond that comes
back as 429 and is counted separately from real errors.

Example usage:
``python post_benchmark.py --base http://localhost:8000 --feeds 50 --rps 200 --duration 30 --concurrency 20``
"""

import asyncio, json, random, time, argparse
import httpx

async def create_feeds(client: httpx.AsyncClient, base: str, count: int):
    feeds = []
    for _ in range(count):
        res = await client.post(f"{base}/api/feed")
        res.raise_for_status()
        data = res.json()
        feeds.append((data["id"], data["writeKey"]))
    return feeds

async def poster(client: httpx.AsyncClient, base: str, feeds, rps: float, duration: float, metrics: dict):
    interval = 1.0 / rps if rps > 0 else 0
    deadline = time.perf_counter() + duration if duration > 0 else float("inf")
    i = 0
    while time.perf_counter() < deadline:
        i += 1
        feed_id, write_key = random.choice(feeds)
        payload = {"content": f"bench post {i} at {time.time():.3f}", "url": None}
        try:
            res = await client.post(
                f"{base}/api/feed/{feed_id}/post",
                json=payload,
                headers={"X-Write-Key": write_key},
                timeout=10.0,
            )
            if res.status_code == 200:
                metrics["posted"] += 1
            elif res.status_code == 429:
                metrics["rate_limited"] += 1
            else:
                metrics["errors"] += 1
        except httpx.HTTPError:
            metrics["errors"] += 1
        if interval:
            await asyncio.sleep(interval)

async def run(args):
    base = args.base.rstrip("/")
    limits = httpx.Limits(max_connections=args.concurrency * 2, max_keepalive_connections=args.concurrency * 2)
    async with httpx.AsyncClient(limits=limits, timeout=10.0) as client:
        feeds = await create_feeds(client, base, args.feeds)
        metrics = {"posted": 0, "rate_limited": 0, "errors": 0}
        tasks = [
            asyncio.create_task(poster(client, base, feeds, args.rps/args.concurrency, args.duration, metrics))
            for _ in range(args.concurrency)
        ]
        t0 = time.perf_counter()
        try:
            await asyncio.gather(*tasks)
        finally:
            elapsed = max(1e-9, time.perf_counter() - t0)
            total = metrics["posted"] + metrics["rate_limited"] + metrics["errors"]
            print(json.dumps({
                **metrics,
                "feeds": len(feeds),
                "elapsed_sec": elapsed,
                "achieved_rps": total/elapsed
            }, indent=2))

def parse_args():
    p = argparse.ArgumentParser(description="tinyfeed post benchmark")
    p.add_argument("--base", default="http://localhost:8000", help="Base URL of the service")
    p.add_argument("--feeds", type=int, default=10, help="Number of feeds to create and post to")
    p.add_argument("--rps", type=float, default=50.0, help="Total post requests per second")
    p.add_argument("--duration", type=float, default=30.0, help="Test duration in seconds (0 = infinite)")
    p.add_argument("--concurrency", type=int, default=10, help="Concurrent poster tasks")
    return p.parse_args()

if __name__ == "__main__":
    asyncio.run(run(parse_args()))
