"""
Passthrough and filelive uploads
"""
import asyncio
from kollupy import KollusClient, UploadVariant, ConfigurationError
from kollupy.core.utils import format_expire_time


async def main():
    async with KollusClient("your-access-token") as kollus:

        # Passthrough keeps the source encoding, needs a profile key
        dest = await kollus.create_destination(
            variant=UploadVariant.PASSTHROUGH,
            profile_key="profile-hd",
            category_key="cat123"
        )
        print(f"Passthrough URL: {dest.upload_url}")
        print(f"Expires: {format_expire_time(dest.expired_at)}")

        # Filelive derives its profile from the category key
        dest = await kollus.create_destination(
            variant="filelive",
            category_key="cat123",
            expire_time=3600
        )
        print(f"Filelive URL: {dest.upload_url}")

        # Missing keys fail before any request is sent
        try:
            await kollus.create_destination(variant="passthrough")
        except ConfigurationError as e:
            print(f"Error: {e}")


if __name__ == "__main__":
    asyncio.run(main())
