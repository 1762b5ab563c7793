"""
Base Service Interface

Defines abstract interface for data services.
Both the Google Sheets and CSV file services implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, Generic, TypeVar
from dataclasses import dataclass

from models.flight import SheetTable


T = TypeVar('T')


@dataclass
class ServiceResult(Generic[T]):
    """Standard service response wrapper"""
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def ok(cls, data: T, metadata: Dict[str, Any] = None) -> 'ServiceResult[T]':
        """Create successful result"""
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def fail(cls, error: str, metadata: Dict[str, Any] = None) -> 'ServiceResult[T]':
        """Create failure result"""
        return cls(success=False, error=error, metadata=metadata)


class IDataService(ABC):
    """
    Abstract interface for flight sheet sources

    Implemented by:
    - GoogleSheetsService: CSV export of a published Google Sheet
    - CsvFileService: CSV file on local disk
    """

    @abstractmethod
    def get_table(self) -> ServiceResult[SheetTable]:
        """
        Fetch the whole flight sheet

        One request per call; callers decide when to call again.

        Returns:
            ServiceResult containing the SheetTable, or the failure reason
        """
        pass

    @abstractmethod
    def describe(self) -> str:
        """Human readable description of the source"""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if service is configured"""
        pass

    def test_connection(self) -> ServiceResult[Dict[str, Any]]:
        """Test connection to data source"""
        if not self.is_available():
            return ServiceResult.fail(f"{self.describe()} is not configured")

        result = self.get_table()
        if not result.success:
            return ServiceResult.fail(result.error)

        return ServiceResult.ok({
            'source': self.describe(),
            'headers': len(result.data.headers),
            'rows': len(result.data.rows)
        })
