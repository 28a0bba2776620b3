import logging
import os
from typing import Protocol, Sequence

import pandas as pd

from src.scrapers.types import RECORD_COLUMNS, RECORD_HEADERS, ReactionRecord
from src.utils.exceptions import PersistenceFailureException

logger = logging.getLogger(__name__)


class OutputSink(Protocol):
    path: str

    def write(self, records: Sequence[ReactionRecord]) -> str:
        ...


def records_to_dataframe(records: Sequence[ReactionRecord]) -> pd.DataFrame:
    """One row per record, fixed column order, literal header titles. Input is not modified."""
    rows = [[r.get(col, '') for col in RECORD_COLUMNS] for r in records]
    return pd.DataFrame(rows, columns=list(RECORD_HEADERS))


class CsvOutputSink:
    def __init__(self, path: str, encoding: str = 'utf-8'):
        self.path = path
        self.encoding = encoding

    def write(self, records: Sequence[ReactionRecord]) -> str:
        """Write the records as CSV and return the path.

        Raises PersistenceFailureException carrying the attempted path on any
        filesystem or encoding error.
        """
        df = records_to_dataframe(records)
        try:
            parent = os.path.dirname(self.path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            df.to_csv(self.path, index=False, encoding=self.encoding)
        except (OSError, UnicodeError) as e:
            raise PersistenceFailureException(self.path, e) from e
        logger.info(f"output.csv written records={len(df)} path={self.path}")
        return self.path
