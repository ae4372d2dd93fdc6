"""
Data I/O utilities.

This module provides CSV loading and saving for record sequences.
Every cell is read as a string and nothing is coerced to NaN, so the
missing-value tokens used by the cleaning helpers survive import.
"""

import os
from typing import List, Optional

import pandas as pd

from .config import Config, get_config
from .logging import get_logger

logger = get_logger(__name__)


class DataLoader:
    """
    CSV loading utilities.

    Provides a single place for the encoding, delimiter and string-only
    parsing rules applied to every imported file.
    """

    def __init__(self,
                 base_path: str = ".",
                 encoding: Optional[str] = None,
                 delimiter: Optional[str] = None,
                 config: Optional[Config] = None):
        """
        Initialize data loader.

        Parameters:
        -----------
        base_path : str
            Base path for data files
        encoding : str, optional
            File encoding (config ``io.encoding`` when omitted)
        delimiter : str, optional
            Field delimiter (config ``io.delimiter`` when omitted)
        config : Config, optional
            Configuration to read defaults from
        """
        config = config or get_config()
        self.base_path = base_path
        self.encoding = encoding or config.get('io.encoding', 'utf-8')
        self.delimiter = delimiter or config.get('io.delimiter', ',')

    def _path(self, filename: str) -> str:
        return os.path.join(self.base_path, filename)

    def _read_kwargs(self, **kwargs) -> dict:
        options = {
            'encoding': self.encoding,
            'sep': self.delimiter,
            'dtype': str,
            'keep_default_na': False,
        }
        options.update(kwargs)
        return options

    def load_csv(self, filename: str, clean_headers: bool = False, **kwargs) -> pd.DataFrame:
        """
        Load CSV file.

        Parameters:
        -----------
        filename : str
            Filename or path
        clean_headers : bool
            Normalize column names with ``clean_header`` after reading
        **kwargs : dict
            Additional arguments for pd.read_csv

        Returns:
        --------
        pd.DataFrame
            Loaded data, one row per data line of the file
        """
        filepath = self._path(filename)
        df = pd.read_csv(filepath, **self._read_kwargs(**kwargs))
        logger.debug("Loaded %d rows x %d columns from %s", len(df), len(df.columns), filepath)

        if clean_headers:
            from ..cleaning.cleaner import DataCleaner
            df = DataCleaner().normalize_headers(df)
        return df

    def load_csv_with_headers(self, filename: str, headers: List[str], **kwargs) -> pd.DataFrame:
        """
        Load CSV file with an explicit header list.

        The file's own header line is skipped so it does not turn up
        as a data row.

        Parameters:
        -----------
        filename : str
            Filename or path
        headers : list
            Column names to use, one per field

        Returns:
        --------
        pd.DataFrame
            Loaded data with the given column names
        """
        if len(set(headers)) != len(headers):
            raise ValueError(f"Duplicate header names: {headers}")
        return self.load_csv(filename, header=0, names=list(headers), **kwargs)

    def save_csv(self, data: pd.DataFrame, filename: str, **kwargs):
        """
        Save DataFrame to CSV.

        Parameters:
        -----------
        data : pd.DataFrame
            Data to save
        filename : str
            Output filename
        **kwargs : dict
            Additional arguments for to_csv
        """
        filepath = self._path(filename)
        directory = os.path.dirname(filepath)
        if directory:
            os.makedirs(directory, exist_ok=True)
        options = {'index': False, 'encoding': self.encoding, 'sep': self.delimiter}
        options.update(kwargs)
        data.to_csv(filepath, **options)
        logger.debug("Saved %d rows to %s", len(data), filepath)
