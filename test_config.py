from app.config import AppConfig, SourceConfig, SlaConfig, get_config, reload_config
from app.errors import AppError, DataFetchError, CSVParseError, ValidationError


def test_defaults_from_environment():
    config = get_config()
    assert config.source.kind == 'csv'
    assert config.source.csv_path is None
    assert config.sla.policy == 'attainment_average'
    assert config.sla.default_segment == 'geral'


def test_sheet_source_from_environment(monkeypatch):
    monkeypatch.setenv('DATA_SOURCE', 'Sheets')
    monkeypatch.setenv('SHEET_ID', 'abc123')
    monkeypatch.setenv('SHEET_GID', '42')
    monkeypatch.setenv('SHEET_TIMEOUT', '10')

    source = reload_config().source

    assert source == SourceConfig(kind='sheets', sheet_id='abc123', sheet_gid='42', timeout=10)
    assert source.is_ready()


def test_config_singleton():
    assert get_config() is get_config()


def make_config(**overrides):
    values = dict(
        debug=False,
        secret_key='s3cret',
        log_level='INFO',
        source=SourceConfig(kind='sheets', sheet_id='abc'),
        sla=SlaConfig()
    )
    values.update(overrides)
    return AppConfig(**values)


def test_validate_clean_config():
    assert make_config().validate() == []


def test_validate_reports_missing_sheet_id():
    issues = make_config(source=SourceConfig(kind='sheets')).validate()
    assert any('SHEET_ID' in issue for issue in issues)


def test_validate_reports_unknown_source():
    issues = make_config(source=SourceConfig(kind='ftp')).validate()
    assert any("DATA_SOURCE 'ftp'" in issue for issue in issues)


def test_validate_reports_policies():
    assert any('deprecated' in issue for issue in make_config(sla=SlaConfig(policy='potential_flights')).validate())
    assert any('Unknown SLA_POLICY' in issue for issue in make_config(sla=SlaConfig(policy='median')).validate())


def test_validate_default_secret():
    issues = make_config(secret_key='dev-secret-key-change-in-production').validate()
    assert issues == ["SECRET_KEY should be changed in production"]


def test_data_fetch_error_keeps_reason_verbatim():
    error = DataFetchError('Falha ao carregar planilha: timeout', source='Google Sheet x')
    assert isinstance(error, AppError)
    assert error.to_dict() == {
        'error': True,
        'code': 'DATA_FETCH_ERROR',
        'message': 'Falha ao carregar planilha: timeout',
        'details': {'service': 'Google Sheet x', 'reason': 'Falha ao carregar planilha: timeout'}
    }


def test_csv_parse_error_message():
    error = CSVParseError('voos.csv', line=3, reason='bad quote')
    assert isinstance(error, ValidationError)
    assert error.message == 'Failed to parse CSV file: voos.csv at line 3 - bad quote'
    assert error.code == 'CSV_PARSE_ERROR'
