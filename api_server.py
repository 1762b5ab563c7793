"""
Flask Server for Performance SLA Dashboard
Serves the computed SLA aggregates as JSON to the presentation layer.
Features: sheet refresh on demand (retry), CSV upload, centralized error handling
"""

from flask import Flask, request, jsonify
import logging
from datetime import datetime

from api.middleware.error_handler import setup_error_handlers, setup_request_logging, safe_endpoint
from app.config import get_config
from app.errors import DataFetchError, ValidationError
from data_processor import get_processor, refresh_data
from models.segment import SEGMENT_LAYOUT
from utils.validators import (
    validate_month,
    validate_year,
    validate_segment,
    validate_file_extension,
    default_period
)

config = get_config()

logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = config.secret_key
app.config['MAX_CONTENT_LENGTH'] = 16 * 1024 * 1024  # 16MB max file size

setup_error_handlers(app)
if config.debug:
    setup_request_logging(app)

ALLOWED_EXTENSIONS = ['csv']
RESERVED_PARAMS = {'segment', 'month', 'year'}


def _period_args():
    """Read month/year query parameters, defaulting to the current month"""
    default_month, default_year = default_period()

    is_valid, error, month = validate_month(request.args.get('month', default_month))
    if not is_valid:
        raise ValidationError(error, field='month')

    is_valid, error, year = validate_year(request.args.get('year', default_year))
    if not is_valid:
        raise ValidationError(error, field='year')

    return month, year


def _segment_arg(default=None):
    value = request.args.get('segment', default)
    if value is None:
        return None
    is_valid, error, segment = validate_segment(value)
    if not is_valid:
        raise ValidationError(error, field='segment')
    return segment


def _column_filters():
    return {key: value for key, value in request.args.items() if key not in RESERVED_PARAMS}


def _require_data(processor):
    """A failed first load leaves nothing to show: surface the fetch error as-is"""
    if processor.last_error and not processor.rows:
        raise DataFetchError(processor.last_error, source=processor.service.describe())


@app.route('/api/health', methods=['GET'])
def health():
    processor = get_processor()
    return jsonify({
        'status': 'ok',
        'source': processor.service.describe(),
        'records': len(processor.rows),
        'last_loaded': processor.last_loaded.isoformat() if processor.last_loaded else None,
        'error': processor.last_error
    })


@app.route('/api/segments', methods=['GET'])
def segments():
    return jsonify({'segments': [layout.to_dict() for layout in SEGMENT_LAYOUT]})


@app.route('/api/periods', methods=['GET'])
@safe_endpoint
def periods():
    processor = get_processor()
    _require_data(processor)
    return jsonify({
        'periods': [{'year': year, 'month': month} for year, month in processor.get_available_periods()]
    })


@app.route('/api/dashboard', methods=['GET'])
@safe_endpoint
def dashboard():
    """SLA summary for the month/year/segment selection, narrowed by any column filters"""
    processor = get_processor()
    _require_data(processor)

    month, year = _period_args()
    segment = _segment_arg(config.sla.default_segment)
    data = processor.get_dashboard_data(month, year, segment, _column_filters())
    return jsonify(data)


@app.route('/api/flights', methods=['GET'])
@safe_endpoint
def flights():
    """Per-flight checkpoint evaluations for the month/year selection"""
    processor = get_processor()
    _require_data(processor)

    month, year = _period_args()
    evaluations = processor.get_flight_evaluations(month, year, _column_filters())
    return jsonify({
        'month': month,
        'year': year,
        'count': len(evaluations),
        'flights': [evaluation.to_dict() for evaluation in evaluations]
    })


@app.route('/api/table', methods=['GET'])
@safe_endpoint
def table():
    """Raw sheet, optionally narrowed to one segment and filtered by column"""
    processor = get_processor()
    _require_data(processor)

    segment = _segment_arg()
    return jsonify(processor.get_table(segment, _column_filters()))


@app.route('/api/refresh', methods=['POST'])
@safe_endpoint
def refresh():
    """User-triggered reload of the sheet"""
    processor = get_processor()
    result = refresh_data()
    if not result.success:
        raise DataFetchError(result.error, source=processor.service.describe())

    return jsonify({
        'success': True,
        'records': len(processor.rows),
        'last_loaded': processor.last_loaded.isoformat() if processor.last_loaded else None
    })


@app.route('/upload', methods=['POST'])
@safe_endpoint
def upload_file():
    """Replace the loaded sheet with an uploaded CSV export"""
    file = request.files.get('sheet')
    if file is None or not file.filename:
        raise ValidationError("No file uploaded", field='sheet')

    is_valid, error = validate_file_extension(file.filename, ALLOWED_EXTENSIONS)
    if not is_valid:
        raise ValidationError(error, field='sheet')

    processor = get_processor()
    count = processor.load_from_content(file.read(), file.filename)
    logger.info(f"Processed upload {file.filename}: {count} records")

    return jsonify({
        'success': True,
        'filename': file.filename,
        'records': count,
        'uploaded_at': datetime.now().isoformat()
    })


if __name__ == '__main__':
    # Initialize processor on startup
    get_processor()

    print("============================================================")
    print("Performance SLA Dashboard API")
    print("============================================================")
    print("")
    print("Starting server on port 5000...")
    print("Dashboard data: http://localhost:5000/api/dashboard")
    print("")
    print("Press Ctrl+C to stop")
    print("============================================================")
    app.run(host='0.0.0.0', port=5000, debug=config.debug)
