"""
Grouped copy operations for SampleSift.

This module contains the GroupedCopier class, which partitions an ordered
list of matched samples into fixed-size batches and copies each batch into
its own numbered subfolder of the destination.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional

from samplesift.models import (
    DEFAULT_GROUP_SIZE,
    DEFAULT_MAX_FILES,
    Batch,
    BatchResult,
    CopyOutcome,
    CopyStatus,
)

# Configure module logger
logger = logging.getLogger(__name__)

# Buffer size for streamed copies (1MB)
CHUNK_SIZE = 1024 * 1024


class GroupedCopier:
    """
    Copies matched samples into capacity-bounded group folders.

    Batches are numbered from 1 and hold at most ``group_size`` files; at
    most ``max_files`` matches are ever placed in a batch. A failure on one
    file or one group folder is recorded and the copier moves on. All
    operations support dry-run mode.
    """

    def __init__(
        self,
        destination: Path,
        group_size: int = DEFAULT_GROUP_SIZE,
        max_files: int = DEFAULT_MAX_FILES,
        dry_run: bool = False,
        progress_callback: Optional[Callable[[int, int, str], None]] = None,
    ) -> None:
        """
        Create a GroupedCopier writing under ``destination``.

        Parameters:
            destination (Path): Root directory that receives the group_<N> folders.
            group_size (int): Maximum number of files per group folder; also the flush threshold.
            max_files (int): Global cap on the number of matches placed in batches.
            dry_run (bool): If True, report copies without creating folders or writing bytes.
            progress_callback (Callable[[int, int, str], None] | None): Called after each file
                with (index within batch, batch size, filename).

        Raises:
            ValueError: If group_size is below 1 or max_files is negative.
        """
        if group_size < 1:
            raise ValueError(f"group_size must be at least 1, got {group_size}")
        if max_files < 0:
            raise ValueError(f"max_files must not be negative, got {max_files}")

        self.destination = destination
        self.group_size = group_size
        self.max_files = max_files
        self.dry_run = dry_run
        self.progress_callback = progress_callback
        self.max_reached = False

    def iter_batches(self, matches: Iterable[Path]) -> Iterator[Batch]:
        """
        Partition matches into numbered batches, honouring the max cap.

        A full batch is only yielded once the next match is considered, and
        whatever remains buffered is yielded as a final, possibly partial,
        batch. Iteration stops as soon as ``max_files`` matches have been
        considered; ``max_reached`` is set when further matches were left out.

        Parameters:
            matches (Iterable[Path]): Matched samples in discovery order.

        Yields:
            Batch: Batches with indices 1, 2, 3, ... in discovery order.
        """
        self.max_reached = False
        index = 1
        buffer: List[Path] = []

        for considered, path in enumerate(matches):
            if considered >= self.max_files:
                self.max_reached = True
                break

            if len(buffer) >= self.group_size:
                yield Batch(index=index, paths=buffer)
                index += 1
                buffer = []

            buffer.append(path)

        # Copy the left overs
        if buffer:
            yield Batch(index=index, paths=buffer)

    def group_folder(self, index: int) -> Path:
        """Return the subfolder that batch ``index`` is copied into."""
        return self.destination / Batch(index=index, paths=[]).folder_name

    def copy_batch(self, batch: Batch) -> BatchResult:
        """
        Copy every file of a batch into its group folder.

        The group folder is created first (in live mode). If that fails the
        error is recorded on the result and no file of the batch is attempted.
        Otherwise each file is copied to ``<folder>/<filename>``; a failed file
        is recorded and the next one is still attempted.

        Parameters:
            batch (Batch): The batch to copy.

        Returns:
            BatchResult: One CopyOutcome per attempted file, plus any folder error.
        """
        folder = self.group_folder(batch.index)
        result = BatchResult(batch=batch, folder=folder)

        if not self.dry_run:
            try:
                folder.mkdir(mode=0o777, parents=True, exist_ok=True)
            except OSError as e:
                error_msg = f"Could not create group folder {folder} - {e}"
                logger.error(error_msg)
                result.error = error_msg
                return result

        total = len(batch)
        for position, source in enumerate(batch.paths):
            destination = folder / source.name
            logger.debug(f"Copying {source} to {destination}")

            result.outcomes.append(self.copy_file(source, destination))

            if self.progress_callback is not None:
                self.progress_callback(position, total, source.name)

        return result

    def copy_file(self, source: Path, destination: Path) -> CopyOutcome:
        """
        Stream one file's bytes to ``destination``, overwriting any existing file.

        The destination is flushed and fsynced before the copy counts as done.
        Both file handles are closed on every path out of this method. In
        dry-run mode the intended copy is logged and nothing is written.

        Parameters:
            source (Path): Sample to copy.
            destination (Path): Target path inside a group folder.

        Returns:
            CopyOutcome: COPIED, DRY_RUN, or FAILED with the cause.
        """
        if self.dry_run:
            logger.info(f"[DRY RUN] Would copy: {source} -> {destination}")
            return CopyOutcome(source, destination, CopyStatus.DRY_RUN)

        try:
            # Opening the destination for writing would truncate the source
            if destination.exists() and os.path.samefile(source, destination):
                logger.debug(f"Skipped copy onto itself: {source}")
                return CopyOutcome(source, destination, CopyStatus.COPIED)

            with open(source, "rb") as src, open(destination, "wb") as dst:
                shutil.copyfileobj(src, dst, CHUNK_SIZE)
                dst.flush()
                os.fsync(dst.fileno())
        except OSError as e:
            error_msg = f"Failed to copy {source} to {destination} - {e}"
            logger.warning(error_msg)
            return CopyOutcome(source, destination, CopyStatus.FAILED, error_msg)

        return CopyOutcome(source, destination, CopyStatus.COPIED)
