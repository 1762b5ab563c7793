"""
Application Configuration

Centralized configuration management with validation.
Loads settings from environment variables (and a local .env file) with sensible defaults.
"""

import os
from dataclasses import dataclass
from typing import Optional
import logging

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()

SOURCE_KINDS = ('sheets', 'csv')
SLA_POLICIES = ('attainment_average', 'conformance_rate', 'potential_flights')


@dataclass
class SourceConfig:
    """Where the flight-operations sheet is fetched from"""
    kind: str
    sheet_id: Optional[str] = None
    sheet_gid: str = '0'
    csv_path: Optional[str] = None
    timeout: int = 30

    @classmethod
    def from_env(cls) -> 'SourceConfig':
        """Load data source config from environment"""
        return cls(
            kind=os.environ.get('DATA_SOURCE', 'sheets').lower(),
            sheet_id=os.environ.get('SHEET_ID'),
            sheet_gid=os.environ.get('SHEET_GID', '0'),
            csv_path=os.environ.get('CSV_PATH'),
            timeout=int(os.environ.get('SHEET_TIMEOUT', '30'))
        )

    def is_ready(self) -> bool:
        """Check if the selected source has what it needs"""
        if self.kind == 'sheets':
            return bool(self.sheet_id)
        if self.kind == 'csv':
            return bool(self.csv_path)
        return False


@dataclass
class SlaConfig:
    """SLA engine settings"""
    policy: str = 'attainment_average'
    default_segment: str = 'geral'

    @classmethod
    def from_env(cls) -> 'SlaConfig':
        """Load SLA settings from environment"""
        return cls(
            policy=os.environ.get('SLA_POLICY', 'attainment_average').lower(),
            default_segment=os.environ.get('DEFAULT_SEGMENT', 'geral').lower()
        )


@dataclass
class AppConfig:
    """Main application configuration"""
    debug: bool
    secret_key: str
    log_level: str
    source: SourceConfig
    sla: SlaConfig

    @classmethod
    def from_env(cls) -> 'AppConfig':
        """Load all configuration from environment"""
        return cls(
            debug=os.environ.get('DEBUG', 'false').lower() == 'true',
            secret_key=os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production'),
            log_level=os.environ.get('LOG_LEVEL', 'INFO').upper(),
            source=SourceConfig.from_env(),
            sla=SlaConfig.from_env()
        )

    def validate(self) -> list:
        """Validate configuration and return list of issues"""
        issues = []

        if self.secret_key == 'dev-secret-key-change-in-production':
            issues.append("SECRET_KEY should be changed in production")

        if self.source.kind not in SOURCE_KINDS:
            issues.append(f"Unknown DATA_SOURCE '{self.source.kind}' - expected one of {', '.join(SOURCE_KINDS)}")
        elif not self.source.is_ready():
            if self.source.kind == 'sheets':
                issues.append("SHEET_ID not set - dashboard starts empty until a CSV is uploaded")
            else:
                issues.append("CSV_PATH not set - dashboard starts empty until a CSV is uploaded")

        if self.sla.policy not in SLA_POLICIES:
            issues.append(f"Unknown SLA_POLICY '{self.sla.policy}' - falling back to attainment_average")
        elif self.sla.policy == 'potential_flights':
            issues.append("SLA_POLICY 'potential_flights' is deprecated")

        return issues


# Singleton config instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get or create application config singleton"""
    global _config
    if _config is None:
        _config = AppConfig.from_env()

        # Log configuration status
        issues = _config.validate()
        for issue in issues:
            logger.warning(f"Config: {issue}")

        logger.info(f"Config loaded - Debug: {_config.debug}, Source: {_config.source.kind}, "
                    f"Policy: {_config.sla.policy}")

    return _config


def reload_config() -> AppConfig:
    """Force reload configuration from environment"""
    global _config
    _config = None
    return get_config()
