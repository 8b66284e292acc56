# load_test.py
import argparse
import asyncio
import random
import time
from collections import Counter

import aiohttp

DEFAULT_URL = "http://localhost:8080/orders"
CATEGORIES = ["light", "ale", "stout"]


async def send_order(session: aiohttp.ClientSession, url: str, max_magnitude: int):
    """
    Place a single random order and return (status, latency_seconds).
    """
    payload = {
        "category": random.choice(CATEGORIES),
        "magnitude": random.randint(0, max_magnitude),
    }

    start = time.time()
    try:
        async with session.post(url, json=payload) as resp:
            status = resp.status
    except Exception:
        status = None
    latency = time.time() - start
    return status, latency


async def run_load_test(url: str, rpm: int, duration: int, concurrency: int, max_magnitude: int):
    """
    Place orders against the order service.

    - url: orders URL (/orders)
    - rpm: target orders per minute
    - duration: duration in seconds
    - concurrency: max concurrent in-flight requests
    - max_magnitude: upper bound of the random magnitude
    """
    if rpm <= 0 or duration <= 0:
        raise ValueError("rpm and duration must be positive integers")

    total_requests = max(1, int(rpm * duration / 60))
    interval = 60.0 / rpm  # seconds between request starts
    semaphore = asyncio.Semaphore(concurrency)

    print(
        f"Target: {total_requests} orders over {duration}s "
        f"({rpm} orders/min, concurrency={concurrency})"
    )

    async with aiohttp.ClientSession() as session:
        tasks = []

        async def worker():
            async with semaphore:
                return await send_order(session, url, max_magnitude)

        start = time.time()
        for _ in range(total_requests):
            tasks.append(asyncio.create_task(worker()))
            await asyncio.sleep(interval)

        results = await asyncio.gather(*tasks)
        elapsed = time.time() - start

        async with session.get(url) as resp:
            status = await resp.json()

    statuses = [s for (s, _) in results]
    latencies = [lat for (s, lat) in results if s == 202]
    counts = Counter(statuses)

    print("\n=== Results ===")
    print(f"Total orders: {len(statuses)}")
    print(f"202 Accepted: {counts.get(202, 0)}")
    for code, count in sorted(counts.items(), key=lambda kv: (kv[0] is None, kv[0] or 0)):
        if code is None:
            print(f"Errors (exceptions): {count}")
        elif code != 202:
            print(f"{code} responses: {count}")

    print(f"\nTotal time: {elapsed:.2f}s")
    print(f"Effective rate: {len(statuses) / elapsed:.1f} req/sec")
    print(f"Queue after run: {status.get('data')}")

    if latencies:
        latencies_sorted = sorted(latencies)
        p50 = latencies_sorted[int(0.50 * len(latencies_sorted))]
        p95 = latencies_sorted[int(0.95 * len(latencies_sorted))]

        print("\nLatency (for 202 responses):")
        print(f"  avg : {sum(latencies) / len(latencies):.3f}s")
        print(f"  p50 : {p50:.3f}s")
        print(f"  p95 : {p95:.3f}s")


def parse_args():
    parser = argparse.ArgumentParser(description="Order generator for the order queue service.")
    parser.add_argument(
        "url",
        nargs="?",
        default=DEFAULT_URL,
        help=f"Orders URL (default: {DEFAULT_URL})",
    )
    parser.add_argument("--rpm", type=int, default=120, help="Orders per minute (default: 120)")
    parser.add_argument("--duration", type=int, default=60, help="Duration in seconds (default: 60)")
    parser.add_argument(
        "--concurrency", type=int, default=10, help="Max concurrent requests (default: 10)"
    )
    parser.add_argument(
        "--max-magnitude", type=int, default=4, help="Largest order magnitude (default: 4)"
    )
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    asyncio.run(
        run_load_test(
            url=args.url,
            rpm=args.rpm,
            duration=args.duration,
            concurrency=args.concurrency,
            max_magnitude=args.max_magnitude,
        )
    )
