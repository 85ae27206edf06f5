"""
Upload coordinator.

Orchestrates the upload process using injected dependencies: the signer
that talks to the server and the configuration that fixes thresholds and
URLs.
"""
from contextlib import aclosing
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union
import time

from .models import UploadTarget, UploadResult, UploadProgress, UploadStrategy
from .protocols import SignerProtocol
from .services import (
    FileValidator,
    ChunkReader,
    ChunkUploader,
    SessionInitiator,
    detect_content_type,
    read_file,
)
from .strategies import select_strategy
from ..config import TonConfig, validate_bucket
from ..exceptions import TransportError
from ..logging import get_logger

logger = get_logger('tonupload.upload.coordinator')


class UploadCoordinator:
    """
    Coordinates the file upload process.

    Small files go up in a single POST. Anything at or above the
    configured threshold opens a resumable session and is sent chunk by
    chunk, each chunk only after the previous one was acknowledged.

    Example:
        >>> coordinator = UploadCoordinator(signer, TonConfig())
        >>> location = await coordinator.upload("movie.mp4", "my_bucket")
    """

    def __init__(
        self,
        signer: SignerProtocol,
        config: Optional[TonConfig] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize upload coordinator.

        Args:
            signer: Authorized transport for every request
            config: Client configuration
            progress_callback: Optional callback for progress updates
            clock: Returns "now" (timezone-aware) for X-TON-Expires
        """
        self._signer = signer
        self._config = config or TonConfig.default()
        self._progress_callback = progress_callback
        self._clock = clock
        self._validator = FileValidator()

    async def upload(self, file_path: Union[str, Path], bucket: str) -> str:
        """
        Upload a file and return its stored location.

        Raises:
            ConfigError: If the bucket name is invalid
            FileError: If the file cannot be read
            TransportError: On any unexpected response
        """
        result = await self.upload_file(file_path, bucket)
        return result.location

    async def upload_file(self, file_path: Union[str, Path], bucket: str) -> UploadResult:
        """
        Execute the complete upload process.

        Args:
            file_path: Local file
            bucket: Destination bucket

        Returns:
            UploadResult with the stored location
        """
        validate_bucket(bucket)
        target = self.prepare_target(file_path, bucket)
        strategy = select_strategy(target.file_size, self._config.single_chunk_threshold)
        expires = self._config.expires_header(self._clock() if self._clock else None)

        size_mb = target.file_size / (1024 * 1024)
        logger.info(
            f"Starting {strategy.value} upload: {target.file_path.name} "
            f"({size_mb:.2f} MB, {target.content_type}) to {bucket}"
        )

        start = time.time()
        if strategy is UploadStrategy.SINGLE:
            result = await self._upload_single(target, expires)
        else:
            result = await self._upload_multipart(target, expires)

        logger.info(f"Upload finished in {time.time() - start:.2f}s: {result.location}")
        return result

    def prepare_target(self, file_path: Union[str, Path], bucket: str) -> UploadTarget:
        """Measure the file once; size and type stay fixed for the upload."""
        path, file_size = self._validator.validate(file_path)
        return UploadTarget(
            api_domain=self._config.domain,
            bucket_name=bucket,
            file_path=path,
            content_type=detect_content_type(path),
            file_size=file_size
        )

    async def _upload_single(self, target: UploadTarget, expires: str) -> UploadResult:
        """One POST with the whole body."""
        body = await read_file(target.file_path, target.file_size)
        headers = {
            'Content-Type': target.content_type,
            'Content-Length': str(target.file_size),
            'X-TON-Expires': expires,
        }
        response = await self._signer.send(
            'POST', self._config.bucket_url(target.bucket_name), headers, body
        )
        response.raise_for_status("Upload")

        location = response.header('location')
        if not location:
            raise TransportError(
                "Upload response carried no Location",
                status=response.status, body=response.body, headers=response.headers
            )

        self._report(UploadProgress(
            total_chunks=1,
            uploaded_chunks=1,
            total_bytes=target.file_size,
            uploaded_bytes=target.file_size
        ))
        return UploadResult(
            location=location,
            file_size=target.file_size,
            content_type=target.content_type,
            strategy=UploadStrategy.SINGLE
        )

    async def _upload_multipart(self, target: UploadTarget, expires: str) -> UploadResult:
        """Open a resumable session and send the chunks in order."""
        initiator = SessionInitiator(self._signer, self._config)
        session = await initiator.initiate(
            target.bucket_name, target.content_type, target.file_size, expires
        )

        reader = ChunkReader(target.file_path, session.negotiated_chunk_size, target.file_size)
        uploader = ChunkUploader(
            self._signer,
            session,
            target.file_size,
            target.content_type,
            verify_ranges=self._config.verify_ranges
        )
        progress = UploadProgress(
            total_chunks=reader.total_chunks,
            total_bytes=target.file_size
        )
        logger.info(
            f"File split into {progress.total_chunks} chunks of up to "
            f"{session.negotiated_chunk_size} bytes"
        )

        location = None
        async with aclosing(reader.iterate()) as chunks:
            async for chunk, data in chunks:
                chunk_start = time.time()
                location = await uploader.upload_chunk(chunk, data)
                elapsed = time.time() - chunk_start
                speed_kbps = (chunk.length / 1024 / elapsed) if elapsed > 0 else 0
                logger.debug(f"Chunk {chunk.index}/{progress.total_chunks} done in {elapsed:.2f}s ({speed_kbps:.1f} KB/s)")

                progress.uploaded_chunks = chunk.index
                progress.uploaded_bytes = chunk.bytes_read
                self._report(progress)

        if location is None:
            raise TransportError("Upload ended without a stored location")

        return UploadResult(
            location=location,
            file_size=target.file_size,
            content_type=target.content_type,
            strategy=UploadStrategy.MULTIPART,
            chunks=progress.uploaded_chunks
        )

    def _report(self, progress: UploadProgress) -> None:
        if self._progress_callback:
            self._progress_callback(progress)
