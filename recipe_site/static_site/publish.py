"""
Publishing a generated website to an S3 bucket.

Every file beneath the output directory is uploaded with a key equal to its
path relative to that directory. Uploads are performed by a fixed pool of
worker threads reading from a shared queue which is filled by walking the
output directory.

Publishing is best-effort: a file which fails to upload is logged and
recorded in the returned :py:class:`PublishReport` but does not stop the
remaining files being uploaded.
"""

from typing import Any, Iterator, List, Optional, Tuple

from pathlib import Path

from dataclasses import dataclass, field

from queue import Queue

from threading import Thread

import logging
import mimetypes
import os

import boto3  # type: ignore
from botocore.exceptions import BotoCoreError  # type: ignore

from recipe_site.static_site.exceptions import PublishConfigError, PublishError


logger = logging.getLogger(__name__)


UPLOAD_WORKERS = 5
"""The number of files uploaded concurrently."""

DEFAULT_CONTENT_TYPE = "application/octet-stream"

PAGE_CACHE_CONTROL = "no-cache, no-store, must-revalidate"
"""Pages may change whenever the site is regenerated so are never cached."""

ASSET_CACHE_CONTROL = "public, max-age=31536000"
"""All other files may be cached for a year."""


def content_type_for(path: Path) -> str:
    content_type, _encoding = mimetypes.guess_type(path.name)
    if content_type is None:
        return DEFAULT_CONTENT_TYPE
    if content_type.startswith("text/"):
        return f"{content_type}; charset=utf-8"
    return content_type


def cache_control_for(path: Path) -> str:
    if path.suffix == ".html":
        return PAGE_CACHE_CONTROL
    else:
        return ASSET_CACHE_CONTROL


def object_key_for(path: Path, root: Path) -> str:
    """
    The object key for a file: its path relative to the root directory, using
    '/' as the separator.
    """
    return path.relative_to(root).as_posix()


def iter_output_files(root: Path) -> Iterator[Path]:
    """
    Recursively iterate over every file (i.e. non-directory) beneath the
    given directory. Raises :py:exc:`PublishError` if any directory cannot be
    listed.
    """

    def onerror(e: OSError) -> None:
        raise PublishError(f"Cannot list {e.filename}: {e.strerror}")

    if not root.is_dir():
        raise PublishError(f"{root} is not a directory")

    for dirpath, dirnames, filenames in os.walk(root, onerror=onerror):
        dirnames.sort()
        for filename in sorted(filenames):
            yield Path(dirpath) / filename


def make_s3_client() -> Any:
    """
    Create an S3 client using the default AWS credential chain (environment
    variables, shared credentials file, instance metadata and so on).
    """
    try:
        session = boto3.session.Session()
        if session.get_credentials() is None:
            raise PublishConfigError("Unable to load AWS credentials")
        return session.client("s3")
    except BotoCoreError as e:
        raise PublishConfigError(f"Unable to load AWS configuration: {e}")


@dataclass
class PublishReport:
    uploaded: List[str] = field(default_factory=list)
    """The keys of the files successfully uploaded."""

    failed: List[Tuple[str, str]] = field(default_factory=list)
    """(key, error message) for each file which failed to upload."""

    @classmethod
    def merge(cls, reports: List["PublishReport"]) -> "PublishReport":
        merged = cls()
        for report in reports:
            merged.uploaded.extend(report.uploaded)
            merged.failed.extend(report.failed)
        return merged


class Publisher:
    """
    Uploads the contents of a generated website directory to a bucket.

    Parameters
    ==========
    client
        An S3 client (see :py:func:`make_s3_client`). Shared between all
        worker threads so must be thread safe.
    bucket : str
        The bucket name.
    output_directory : Path
        The generated website.
    workers : int
        The number of concurrent uploads.
    """

    def __init__(
        self,
        client: Any,
        bucket: str,
        output_directory: Path,
        workers: int = UPLOAD_WORKERS,
    ) -> None:
        self.client = client
        self.bucket = bucket
        self.output_directory = output_directory
        self.workers = workers

    def upload_file(self, path: Path) -> str:
        """Upload a single file, returning its key."""
        key = object_key_for(path, self.output_directory)
        with path.open("rb") as f:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=f,
                ContentType=content_type_for(path),
                CacheControl=cache_control_for(path),
            )
        logger.info("Uploaded %s", key)
        return key

    def _worker(self, files: "Queue[Optional[Path]]", report: PublishReport) -> None:
        while True:
            path = files.get()
            if path is None:
                return
            try:
                report.uploaded.append(self.upload_file(path))
            except Exception as e:
                key = object_key_for(path, self.output_directory)
                logger.error("Error uploading %s: %s", key, e)
                report.failed.append((key, str(e)))

    def publish(self) -> PublishReport:
        """
        Upload every file in the output directory, waiting for all uploads to
        be attempted before returning.

        Raises :py:exc:`PublishError` if the output directory cannot be
        walked. Upload failures are reported, not raised.
        """
        files: "Queue[Optional[Path]]" = Queue()

        # NB: Each worker records its results in its own report so that no
        # state is shared between workers besides the queue.
        reports = [PublishReport() for _ in range(self.workers)]
        threads = [
            Thread(
                target=self._worker,
                args=(files, report),
                name=f"upload-worker-{i}",
                daemon=True,
            )
            for i, report in enumerate(reports)
        ]
        for thread in threads:
            thread.start()

        try:
            for path in iter_output_files(self.output_directory):
                files.put(path)
        finally:
            # One sentinel per worker marks the end of the queue.
            for _ in threads:
                files.put(None)
            for thread in threads:
                thread.join()

        report = PublishReport.merge(reports)
        logger.info(
            "Published %d files to %s (%d failed)",
            len(report.uploaded),
            self.bucket,
            len(report.failed),
        )
        return report
