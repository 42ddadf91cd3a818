"""Protean Engine runner for Atelier domains.

Starts Engine workers that process events asynchronously:
- OutboxProcessor: polls outbox table, publishes events to Redis Streams
- StreamSubscriptions: reads Redis Streams, invokes projectors and event handlers

Usage:
    python src/server.py                         # Run every domain engine
    python src/server.py --domain marketplace    # Run only the marketplace engine
"""

import argparse
import asyncio

from protean.server.engine import Engine

DOMAIN_NAMES = ("identity", "marketplace", "administration")


def _get_domain(name):
    """Import and initialize a domain by name."""
    if name == "identity":
        from identity.domain import identity as domain
    elif name == "marketplace":
        from marketplace.domain import marketplace as domain
    elif name == "administration":
        from administration.domain import administration as domain
    else:
        raise ValueError(f"Unknown domain: {name}")

    domain.init()
    return domain


async def run(domain_names):
    engines = [Engine(_get_domain(name)) for name in domain_names]
    await asyncio.gather(*(engine.run() for engine in engines))


def main():
    parser = argparse.ArgumentParser(description="Atelier Engine runner")
    parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        help="Run a single domain engine (default: run all)",
    )
    args = parser.parse_args()

    domain_names = [args.domain] if args.domain else list(DOMAIN_NAMES)

    asyncio.run(run(domain_names))


if __name__ == "__main__":
    main()
