"""Time one cycle with a pulse timer and one with an immediate timer."""

import asyncio

import cycletime


async def main() -> None:
    client = cycletime.create("eu-central-1", "AWS-KEY", "AWS-SECRET", "namespace")

    timer = client.get_timer("my-timer", 10)
    silent_timer = client.get_timer("i-am-silent", 0)

    timer.start()
    silent_timer.start()

    await asyncio.sleep(1)

    timer.end()
    silent_timer.end()

    await asyncio.sleep(10.5)
    timer.stop()
    await client.reporter.drain()


if __name__ == "__main__":
    asyncio.run(main())
