"""Tests for download and verification."""
import pytest

from tonupload.core.auth import AppAuth, UserAuth, BearerSigner, OAuth1Signer
from tonupload.core.download import Downloader, TransferVerifier, file_digest
from tonupload.core.exceptions import ConfigError, FileError, TransportError, VerificationMismatch


class TestFileDigest:
    """Test suite for file_digest."""

    def test_known_digest(self, make_file):
        assert file_digest(make_file('a.txt', b'hello')) == '5d41402abc4b2a76b9719d911017c592'

    def test_empty_file(self, make_file):
        assert file_digest(make_file('e.txt', b'')) == 'd41d8cd98f00b204e9800998ecf8427e'

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileError):
            file_digest(tmp_path / 'missing.bin')


class TestDownloader:
    """Test suite for Downloader."""

    def test_requires_app_auth(self):
        """Test downloads refuse user (OAuth 1.0a) auth up front."""
        with pytest.raises(ConfigError, match="app auth"):
            Downloader(OAuth1Signer(UserAuth('ck', 'cs', 'tok', 'ts')))

    @pytest.mark.asyncio
    async def test_download_to_staging_path(self, fake_ton, tmp_path):
        fake_ton.objects['obj9'] = b'stored content'
        async with fake_ton.serve(tmp_path) as config:
            async with BearerSigner(AppAuth(fake_ton.bearer_token), config) as signer:
                path = await Downloader(signer, config).download('/1.1/ton/bucket/my_bucket/obj9')

        assert path == config.staging_path
        assert path.read_bytes() == b'stored content'
        assert fake_ton.requests[-1].method == 'GET'

    @pytest.mark.asyncio
    async def test_staging_file_overwritten(self, fake_ton, tmp_path):
        fake_ton.objects['obj9'] = b'new'
        async with fake_ton.serve(tmp_path) as config:
            config.staging_path.write_bytes(b'old and longer content')
            async with BearerSigner(AppAuth(fake_ton.bearer_token), config) as signer:
                path = await Downloader(signer, config).download('/1.1/ton/bucket/my_bucket/obj9')

        assert path.read_bytes() == b'new'

    @pytest.mark.asyncio
    async def test_download_to_explicit_destination(self, fake_ton, tmp_path):
        fake_ton.objects['obj9'] = b'abc'
        dest = tmp_path / 'out' / 'copy.bin'
        async with fake_ton.serve(tmp_path) as config:
            async with BearerSigner(AppAuth(fake_ton.bearer_token), config) as signer:
                path = await Downloader(signer, config).download(
                    f"{config.base_url}/1.1/ton/bucket/my_bucket/obj9", dest
                )

        assert path == dest
        assert dest.read_bytes() == b'abc'

    @pytest.mark.asyncio
    async def test_missing_object(self, fake_ton, tmp_path):
        async with fake_ton.serve(tmp_path) as config:
            async with BearerSigner(AppAuth(fake_ton.bearer_token), config) as signer:
                with pytest.raises(TransportError) as exc_info:
                    await Downloader(signer, config).download('/1.1/ton/bucket/my_bucket/nope')

        assert exc_info.value.status == 404
        assert 'not found' in str(exc_info.value)


class TestTransferVerifier:
    """Test suite for TransferVerifier."""

    @pytest.mark.asyncio
    async def test_match(self, fake_ton, tmp_path, make_file):
        original = make_file('a.txt', b'same bytes')
        fake_ton.objects['obj1'] = b'same bytes'
        async with fake_ton.serve(tmp_path) as config:
            async with BearerSigner(AppAuth(fake_ton.bearer_token), config) as signer:
                verifier = TransferVerifier(signer, config)
                matched = await verifier.verify('/1.1/ton/bucket/my_bucket/obj1', original)
                digest = await verifier.check('/1.1/ton/bucket/my_bucket/obj1', original)

        assert matched is True
        assert digest == file_digest(original)
        assert config.staging_path.exists()

    @pytest.mark.asyncio
    async def test_mismatch(self, fake_ton, tmp_path, make_file):
        original = make_file('a.txt', b'same bytes')
        fake_ton.objects['obj1'] = b'same bytes'
        fake_ton.corrupt_downloads = True
        async with fake_ton.serve(tmp_path) as config:
            async with BearerSigner(AppAuth(fake_ton.bearer_token), config) as signer:
                verifier = TransferVerifier(signer, config)
                matched = await verifier.verify('/1.1/ton/bucket/my_bucket/obj1', original)
                with pytest.raises(VerificationMismatch) as exc_info:
                    await verifier.check('/1.1/ton/bucket/my_bucket/obj1', original)

        assert matched is False
        assert exc_info.value.expected == file_digest(original)

    @pytest.mark.asyncio
    async def test_wrong_token(self, fake_ton, tmp_path, make_file):
        original = make_file('a.txt', b'x')
        fake_ton.objects['obj1'] = b'x'
        async with fake_ton.serve(tmp_path) as config:
            async with BearerSigner(AppAuth('stale'), config) as signer:
                with pytest.raises(TransportError) as exc_info:
                    await TransferVerifier(signer, config).verify('/1.1/ton/bucket/my_bucket/obj1', original)

        assert exc_info.value.status == 403
