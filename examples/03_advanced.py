"""
Explicit auth profiles, custom configuration and wire logging
"""
import asyncio
import logging
from datetime import timedelta

from tonupload import (
    TonClient,
    TonConfig,
    UserAuth,
    TransportError,
    setup_logging,
    upload,
)


async def main():
    logging.basicConfig(level=logging.DEBUG)
    setup_logging(logging.DEBUG)  # includes tonupload.wire (Authorization redacted)
    
    profile = UserAuth(
        consumer_key="...",
        consumer_secret="...",
        token="...",
        secret="..."
    )
    config = TonConfig(
        expires_after=timedelta(days=3),
        single_chunk_threshold=4 * 1024 * 1024,
    )
    
    async with TonClient(profile, config) as ton:
        try:
            location = await ton.upload("archive.tar.gz", "backups")
            print(f"Stored at: {location}")
        except TransportError as e:
            print(f"Upload failed with HTTP {e.status}: {e.detail}")
    
    # One-shot helper
    location = await upload("report.pdf", profile, "ton.twitter.com", "reports")
    print(f"Stored at: {location}")


if __name__ == "__main__":
    asyncio.run(main())
