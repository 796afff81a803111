"""Search-as-you-type: only the last keystroke in a burst triggers a search."""

from __future__ import annotations

import asyncio

from fnkit import Trace, rate_limit


def search(query: str) -> None:
    print(f"searching for {query!r}")


async def main() -> None:
    trace = Trace()
    on_keystroke = rate_limit(150, search, trace=trace)

    for prefix in ("m", "mo", "mon", "mona", "monad"):
        on_keystroke(prefix)
        await asyncio.sleep(0.05)

    await asyncio.sleep(0.2)

    cancel = on_keystroke("monoid")
    cancel()
    await asyncio.sleep(0.2)

    for event in trace.events:
        print(event.id, event.action, event.info)


if __name__ == "__main__":
    asyncio.run(main())
