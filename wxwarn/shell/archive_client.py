"""NWS Warnings Archive Client - Imperative Shell.

This module downloads the bulk alert polygon archive and unpacks it.
All I/O is contained here; matching logic is in the core module.
"""

import logging
import tarfile
import tempfile
import zlib
from pathlib import Path

import requests

from wxwarn.core.config import DEFAULT_ARCHIVE_URL
from wxwarn.core.errors import DecodeError, IoError, TransportError


logger = logging.getLogger(__name__)


# Download chunk size (bytes)
CHUNK_SIZE = 64 * 1024


class ArchiveClient:
    """Client for fetching and unpacking the alert polygon archive.

    This is part of the imperative shell - it handles HTTP and file I/O.
    """

    def __init__(
        self,
        session: requests.Session,
        archive_url: str = DEFAULT_ARCHIVE_URL,
        timeout: float | None = None,
    ) -> None:
        """Initialize archive client.

        Args:
            session: Shared HTTP session
            archive_url: URL of the gzipped tar archive
            timeout: Request timeout in seconds (None = no timeout)
        """
        self.session = session
        self.archive_url = archive_url
        self.timeout = timeout

    def download(self, scratch_dir: str | Path) -> Path:
        """Download the archive into a new temp file in scratch_dir.

        This method performs HTTP and file I/O. The file is left for the
        owner of scratch_dir to remove.

        Args:
            scratch_dir: Directory to create the temp file in

        Returns:
            Path of the downloaded archive

        Raises:
            TransportError: If the request fails
            IoError: If the local copy cannot be written
        """
        logger.info("Downloading alert archive from %s", self.archive_url)

        try:
            response = self.session.get(
                self.archive_url,
                stream=True,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise TransportError(
                "Failed to download alerts shapefile",
                url=self.archive_url,
                reason=str(e),
            ) from e

        try:
            with response, tempfile.NamedTemporaryFile(
                dir=scratch_dir,
                suffix=".tar.gz",
                delete=False,
            ) as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    f.write(chunk)
                path = Path(f.name)
        except requests.RequestException as e:
            raise TransportError(
                "Connection failed while downloading alerts shapefile",
                url=self.archive_url,
                reason=str(e),
            ) from e
        except OSError as e:
            raise IoError(
                "Failed to copy archive content",
                directory=str(scratch_dir),
                reason=str(e),
            ) from e

        logger.info("Saved %d bytes to %s", path.stat().st_size, path)
        return path


def extract_archive(archive_path: str | Path) -> Path:
    """Unpack a gzipped tar archive next to itself.

    Entries are written into the archive's parent directory, using a
    streaming read so the tarball is never fully decompressed in memory.

    Args:
        archive_path: Path of the .tar.gz file

    Returns:
        Directory the entries were written to

    Raises:
        DecodeError: If the gzip or tar structure is malformed
        IoError: If the archive cannot be read or an entry cannot be written
    """
    archive_path = Path(archive_path)
    expand_path = archive_path.parent

    logger.info("Unpacking %s into %s", archive_path.name, expand_path)

    try:
        with tarfile.open(archive_path, mode="r|gz") as archive:
            archive.extractall(expand_path, filter="data")
    except (tarfile.TarError, EOFError, zlib.error) as e:
        raise DecodeError(
            "Error unpacking tar file",
            path=str(archive_path),
            reason=str(e),
        ) from e
    except OSError as e:
        raise IoError(
            "Cannot write archive entries",
            path=str(archive_path),
            reason=str(e),
        ) from e

    return expand_path
