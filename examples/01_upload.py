"""
Upload a media file to Kollus
"""
import asyncio
from kollupy import KollusClient


async def main():
    async with KollusClient("your-access-token") as kollus:

        # Simple upload, waits until processing completes
        session = await kollus.upload("video.mp4")
        print(f"Uploaded: {session.destination.upload_file_key}")

        # Upload into a category with a custom title
        session = await kollus.upload(
            "lecture.mp4",
            category_key="cat123",
            title="Lecture 1"
        )
        print(f"Completed: {session.completed}")

        # Upload with progress callback
        def on_progress(value):
            print(f"Processing: {value}%")

        session = await kollus.upload("clip.mp4", on_progress=on_progress, interval=2.0)

        # Transfer only, check progress later
        session = await kollus.upload("audio.mp3", wait=False)
        print(f"Progress URL: {session.destination.progress_url}")


if __name__ == "__main__":
    asyncio.run(main())
