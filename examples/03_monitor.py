"""
Step by step upload with a progress monitor
"""
import asyncio
from kollupy import KollusClient, TransportError


async def main():
    async with KollusClient("your-access-token") as kollus:

        dest = await kollus.create_destination(category_key="cat123", title="Demo")
        outcome = await kollus.transfer(dest.upload_url, "video.mp4")
        if outcome.error:
            print(f"Transfer failed: {outcome.message}")
            return

        monitor = kollus.monitor(dest.progress_url)

        def on_error(error):
            if isinstance(error, TransportError):
                print(f"Progress check failed: {error}")

        monitor.start(
            on_progress=lambda value: print(f"Progress: {value}%"),
            on_complete=lambda: print("Processing complete"),
            on_error=on_error,
            interval=1.0
        )

        # Give up after ten minutes
        try:
            await asyncio.wait_for(monitor.wait(), timeout=600)
        except asyncio.TimeoutError:
            monitor.stop()
            print("Still processing, stopped watching")


if __name__ == "__main__":
    asyncio.run(main())
