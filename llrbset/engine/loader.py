"""
KeySetLoader - Build an ordered key set from a flat binary key stream.
"""

import logging
from dataclasses import dataclass

from llrbset.interfaces.ordered_key_set import OrderedKeySet
from llrbset.models.key_stream import KeyStream

logger = logging.getLogger()


@dataclass
class LoadReport:
    """
    Summary of a bulk load.

    Attributes:
        records: Complete records read from the stream.
        added: Keys inserted into the set.
        duplicates: Records skipped because the key was already present.
        trailing_bytes: Bytes of an incomplete final record that were ignored.
    """

    records: int = 0
    added: int = 0
    duplicates: int = 0
    trailing_bytes: int = 0


class KeySetLoader:
    """
    Replays a key stream into an ordered key set.

    Used at startup to populate the set from the input file. Records are
    inserted in file order; a truncated tail ends the load and whatever was
    read before it stays loaded.
    """

    def load(self, stream: KeyStream, key_set: OrderedKeySet) -> LoadReport:
        """
        Insert every complete record of the stream.

        Args:
            stream: The key stream to replay.
            key_set: Set to populate. Existing keys are kept.

        Returns:
            LoadReport describing what was read.

        Raises:
            FileNotFoundError: If the stream file does not exist.
        """
        report = LoadReport()

        for key in stream:
            report.records += 1
            if key_set.insert(key):
                report.added += 1
            else:
                report.duplicates += 1

        report.trailing_bytes = stream.trailing_bytes()
        if report.trailing_bytes:
            logger.warning(
                f"Ignored {report.trailing_bytes} trailing bytes in {stream.file_path}"
            )

        logger.info(
            f"Loaded {report.added} keys from {stream.file_path} "
            f"({report.records} records, {report.duplicates} duplicates)"
        )
        return report
