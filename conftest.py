import os

# Keep the suite offline: no Google Sheet is configured
os.environ['DATA_SOURCE'] = 'csv'
os.environ.pop('CSV_PATH', None)
os.environ.pop('SHEET_ID', None)
os.environ.pop('SLA_POLICY', None)

import pytest

from app.config import reload_config
from models.flight import SheetTable
from services.base_service import IDataService, ServiceResult


GENERAL_HEADERS = [
    'DATA',
    'ID',
    'VOO',
    'Previsão Decolagem',
    'Abertura CHECK IN',
    'Fechamento CHECK IN',
    'Início Embarque',
    'Último PAX a bordo',
    'PAX',
    '% de PONTUALIDADE ORBITAL',
    '% DE PONTUALIDADE DA BASE',
    'BAGS de Mão Atendidos',
    'MÉDIA DE TEMPO ATENDIMENTO CHECK IN',
    'MÉDIA DE TEMPO AGUARDANDO NA FILA',
]
AHL_HEADERS = ['AHL Registrados', 'AHL Resolvidos', 'PAX']
OHD_HEADERS = ['OHD Registrados', 'OHD Entregues']
RAMP_HEADERS = ['Pouso', 'Calço', 'Abertura Porão', 'Início Descarga',
                'Fim Descarga', 'Início Carregamento', 'Fim Carregamento']
CLEANING_HEADERS = ['Início Limpeza', 'Fim Limpeza', 'Nota Limpeza']
SAFETY_HEADERS = [f'Safety {i}' for i in range(1, 10)]

HEADERS = GENERAL_HEADERS + AHL_HEADERS + OHD_HEADERS + RAMP_HEADERS + CLEANING_HEADERS + SAFETY_HEADERS


def make_row(date='03/02/2025', std='14:00', checkin_open='10:00', checkin_close='12:55',
             boarding='13:15', last_pax='13:45', pax='100', bags='0', orbital='90%',
             base='80%', checkin_time='5', queue_time='10', flight='TP1001', flight_id='1'):
    """Sheet row with every General checkpoint on time by default"""
    row = {header: '' for header in HEADERS}
    row.update({
        'DATA': date,
        'ID': flight_id,
        'VOO': flight,
        'Previsão Decolagem': std,
        'Abertura CHECK IN': checkin_open,
        'Fechamento CHECK IN': checkin_close,
        'Início Embarque': boarding,
        'Último PAX a bordo': last_pax,
        'PAX': pax,
        '% de PONTUALIDADE ORBITAL': orbital,
        '% DE PONTUALIDADE DA BASE': base,
        'BAGS de Mão Atendidos': bags,
        'MÉDIA DE TEMPO ATENDIMENTO CHECK IN': checkin_time,
        'MÉDIA DE TEMPO AGUARDANDO NA FILA': queue_time,
        'Pouso': '12:30',
    })
    return row


class StaticService(IDataService):
    """In-memory data source for tests"""

    def __init__(self, table=None, error=None):
        self.table = table
        self.error = error
        self.calls = 0

    def describe(self):
        return 'static test sheet'

    def is_available(self):
        return True

    def get_table(self):
        self.calls += 1
        if self.error:
            return ServiceResult.fail(self.error)
        return ServiceResult.ok(self.table)


@pytest.fixture(autouse=True)
def fresh_config():
    reload_config()
    yield


@pytest.fixture
def headers():
    return list(HEADERS)


@pytest.fixture
def february_rows():
    return [
        make_row(flight_id='1', flight='TP1001'),
        make_row(flight_id='2', flight='TP1003', date='05/02/2025 00:00:00',
                 checkin_open='10:45', pax='120', bags='35'),
        make_row(flight_id='3', flight='TP1005', date='07/02/2025', std='',
                 pax='150', bags='17.5', orbital='70%', base='60%'),
    ]


@pytest.fixture
def sheet(february_rows):
    march = make_row(flight_id='4', flight='TP1007', date='03/03/2025')
    return SheetTable(headers=list(HEADERS), rows=february_rows + [march], source='test')
