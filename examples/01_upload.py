"""
Upload files to a TON bucket
"""
import asyncio
from tonupload import TonClient, JSONCredentialStore


async def main():
    ton = await TonClient.from_store(JSONCredentialStore())
    async with ton:
        
        # Small files go up in one request
        location = await ton.upload("notes.txt", "my_bucket")
        print(f"Stored at: {location}")
        
        # Large files are sent chunk by chunk
        def on_progress(progress):
            print(f"Progress: {progress.percentage:.1f}% "
                  f"({progress.uploaded_chunks}/{progress.total_chunks} chunks)")
        
        result = await ton.upload_file("movie.mp4", "my_bucket", progress_callback=on_progress)
        print(f"Uploaded {result.file_size} bytes as {result.content_type} ({result.strategy.value})")
        print(f"Stored at: {result.location}")


if __name__ == "__main__":
    asyncio.run(main())
