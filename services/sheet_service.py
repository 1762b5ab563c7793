"""
Flight Sheet Services

Fetch the flight-operations sheet either from a published Google Sheet
(CSV export over HTTP) or from a CSV file on disk.

Fetches are one-shot: a failure is returned to the caller, who surfaces it
to the user and lets them retry. Nothing here retries on its own.
"""

import csv
import io
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, List

import requests
from requests.exceptions import RequestException

from app.config import SourceConfig
from app.errors import ConfigurationError
from models.flight import SheetTable
from services.base_service import IDataService, ServiceResult
from utils.validators import decode_content

logger = logging.getLogger(__name__)

EXPORT_URL = "https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=csv&gid={gid}"


def unique_headers(headers: List[str]) -> List[str]:
    """
    Suffix repeated header names so every column keeps its own key

    The first occurrence keeps the bare name: ['PAX', 'PAX'] -> ['PAX', 'PAX_1']
    """
    used = set()
    unique = []
    for header in headers:
        name = header
        suffix = 1
        while name in used:
            name = f"{header}_{suffix}"
            suffix += 1
        if name != header:
            logger.debug(f"Duplicate header '{header}' renamed to '{name}'")
        used.add(name)
        unique.append(name)
    return unique


def parse_csv_table(text: str, source: str = '') -> SheetTable:
    """
    Parse CSV text into a SheetTable

    The first non-blank row is the header row; repeated header names are
    made unique with unique_headers(). Blank rows are dropped and short rows
    are padded with ''.
    """
    reader = csv.reader(io.StringIO(text))

    headers: Optional[List[str]] = None
    rows = []
    for raw in reader:
        if not any(cell.strip() for cell in raw):
            continue
        if headers is None:
            headers = unique_headers([cell.strip() for cell in raw])
            continue

        cells = raw + [''] * (len(headers) - len(raw))
        rows.append({header: cells[i] for i, header in enumerate(headers)})

    return SheetTable(
        headers=headers or [],
        rows=rows,
        source=source,
        fetched_at=datetime.now()
    )


class GoogleSheetsService(IDataService):
    """
    Google Sheets CSV export

    Configuration (Environment Variables):
        SHEET_ID: Spreadsheet id of the published sheet
        SHEET_GID: Worksheet gid (default: 0)
        SHEET_TIMEOUT: Request timeout in seconds (default: 30)
    """

    def __init__(self, sheet_id: Optional[str], gid: str = '0', timeout: int = 30,
                 session: Optional[requests.Session] = None):
        self.sheet_id = sheet_id
        self.gid = gid
        self.timeout = timeout
        self._session = session or requests.Session()

    @property
    def url(self) -> str:
        return EXPORT_URL.format(sheet_id=self.sheet_id, gid=self.gid)

    def describe(self) -> str:
        return f"Google Sheet {self.sheet_id} (gid {self.gid})"

    def is_available(self) -> bool:
        return bool(self.sheet_id)

    def get_table(self) -> ServiceResult[SheetTable]:
        if not self.is_available():
            return ServiceResult.fail("Google Sheet not configured (SHEET_ID missing)")

        logger.info(f"Fetching flight sheet from {self.describe()}")
        try:
            response = self._session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
        except RequestException as e:
            logger.error(f"Sheet fetch failed: {e}")
            return ServiceResult.fail(f"Falha ao carregar planilha: {e}")

        table = parse_csv_table(decode_content(response.content), source=self.describe())
        if not table.headers:
            return ServiceResult.fail("Planilha vazia: nenhum cabeçalho encontrado")

        logger.info(f"Loaded {len(table.rows)} rows, {len(table.headers)} columns")
        return ServiceResult.ok(table, {'url': self.url})


class CsvFileService(IDataService):
    """Flight sheet exported to a CSV file"""

    def __init__(self, file_path):
        self.file_path = Path(file_path) if file_path else None

    def describe(self) -> str:
        return f"CSV file {self.file_path}"

    def is_available(self) -> bool:
        return self.file_path is not None and self.file_path.exists()

    def get_table(self) -> ServiceResult[SheetTable]:
        if not self.is_available():
            return ServiceResult.fail(f"Arquivo CSV não encontrado: {self.file_path}")

        try:
            content = self.file_path.read_bytes()
        except OSError as e:
            logger.error(f"Error reading {self.file_path}: {e}")
            return ServiceResult.fail(f"Erro ao ler {self.file_path.name}: {e}")

        table = parse_csv_table(decode_content(content), source=self.describe())
        if not table.headers:
            return ServiceResult.fail(f"Arquivo vazio: {self.file_path.name}")

        logger.info(f"Loaded {len(table.rows)} rows from {self.file_path.name}")
        return ServiceResult.ok(table, {'path': str(self.file_path)})


def get_data_service(config: SourceConfig) -> IDataService:
    """Build the data service selected by configuration"""
    if config.kind == 'sheets':
        return GoogleSheetsService(config.sheet_id, config.sheet_gid, config.timeout)
    if config.kind == 'csv':
        return CsvFileService(config.csv_path)
    raise ConfigurationError('DATA_SOURCE', f"Unknown data source '{config.kind}'")
