#!/usr/bin/env python3
"""
Basic expansion example: crawling a simulated site with AsyncQueue.

This example demonstrates:
- Seeding a queue and expanding each page into its links
- Bounding the crawl by depth and by total page count
- Collecting a map of page -> parent with collect_transformed_data
"""

import asyncio
import random
import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from asyncqueue import AsyncQueue, values_by_layer


SITE = {
    '/': ['/docs', '/blog', '/about'],
    '/docs': ['/docs/install', '/docs/api'],
    '/docs/api': ['/docs/api/queue', '/docs/api/config'],
    '/blog': ['/blog/2024', '/blog/2025'],
    '/blog/2025': ['/blog/2025/release'],
}


async def fetch(url):
    """Pretend to download a page."""
    await asyncio.sleep(random.uniform(0.01, 0.05))
    return {'url': url, 'links': SITE.get(url, [])}


async def main():
    max_depth = int(sys.argv[1]) if len(sys.argv) > 1 else 2

    queue = AsyncQueue(
        max_depth=max_depth,
        max_results=20,
        collect_transformed_data=lambda page, args: {page['url']: len(page['links'])},
    )
    queue.enqueue(
        fetch,
        ['/'],
        callback=lambda page: page,
        requeue=lambda page: [[link] for link in page['links']],
    )

    result = await queue.begin()

    print(f"Crawled {len(result['all'])} pages (max depth {max_depth})")
    for layer, pages in values_by_layer(result):
        print(f"\nLayer {layer}:")
        for page in pages:
            print(f"  {page['url']}  ({result['transformed_data_map'][page['url']]} links)")


if __name__ == "__main__":
    print("AsyncQueue - Basic Expansion Example")
    print("=" * 50)
    asyncio.run(main())
