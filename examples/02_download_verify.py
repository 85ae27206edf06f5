"""
Download stored objects and verify uploads (app auth only)
"""
import asyncio
from tonupload import TonClient, JSONCredentialStore, VerificationMismatch
from tonupload.core.download import TransferVerifier


async def main():
    ton = await TonClient.from_store(JSONCredentialStore(), app_auth=True)
    async with ton:
        
        # Download to the staging file
        path = await ton.download("/1.1/ton/bucket/my_bucket/abc123")
        print(f"Downloaded to: {path}")
        
        # Download to a specific file
        path = await ton.download("/1.1/ton/bucket/my_bucket/abc123", "./copy.bin")
        print(f"Downloaded to: {path}")
        
        # Upload, download again and compare digests
        location, matched = await ton.verify_upload("movie.mp4", "my_bucket")
        print(f"{location}: {'match' if matched else 'MISMATCH'}")
        
        # Raise instead of returning False
        try:
            digest = await TransferVerifier(ton.signer).check(location, "movie.mp4")
            print(f"MD5: {digest}")
        except VerificationMismatch as e:
            print(f"Corrupted: {e}")


if __name__ == "__main__":
    asyncio.run(main())
