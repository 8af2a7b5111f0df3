# audit_report/routes.py
import base64
import io
import logging
from functools import wraps

from flask import jsonify, request, send_file
from pydantic import ValidationError

from audit_report.config import Config
from audit_report.models import AuditReportRequest
from audit_report.normalizers import normalize_payload
from audit_report.pdf import ReportComposer, ReportGenerationError

logger = logging.getLogger(__name__)


def handle_errors(logger):
    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except ValidationError as e:
                logger.warning("Invalid report payload: %s", e)
                return jsonify({'error': 'Invalid report payload', 'msg': str(e)}), 400
            except ReportGenerationError as e:
                return jsonify({'error': str(e)}), 500
            except Exception as e:
                logger.exception("Unexpected error")
                return jsonify({'error': 'Internal server error', 'msg': str(e)}), 500
        return decorated
    return decorator


def init_routes(app, logger, composer=None):
    composer = composer or ReportComposer(app.config.get('REPORT_CONFIG') or Config)

    def _read_request():
        """Returns (AuditReportRequest, None) or (None, error response)."""
        payload = request.get_json(silent=True)
        if not payload or not isinstance(payload, dict):
            return None, (jsonify({'error': 'Invalid or missing JSON payload'}), 400)

        norm = normalize_payload(payload)
        if not norm.get('parent'):
            return None, (jsonify({'error': 'Missing parent issue'}), 400)
        return AuditReportRequest(**norm), None

    @app.route('/')
    def index():
        return "Audit Report Service"

    @app.route('/health')
    def health():
        return jsonify({'status': 'ok'})

    @app.route('/reports/audit', methods=['POST'])
    @handle_errors(logger)
    def generate_audit_report():
        report_request, error = _read_request()
        if error:
            return error

        report = composer.generate(report_request.parent, report_request.subtasks)

        resp = send_file(
            io.BytesIO(report.content),
            mimetype='application/pdf',
            as_attachment=True,
            download_name=report.filename,
        )
        resp.headers['X-Report-Size'] = str(report.size)
        resp.headers['X-Report-Pages'] = str(report.page_count)
        return resp

    @app.route('/reports/audit/base64', methods=['POST'])
    @handle_errors(logger)
    def generate_audit_report_base64():
        report_request, error = _read_request()
        if error:
            return error

        report = composer.generate(report_request.parent, report_request.subtasks)
        logger.info("Report %s encoded for transfer (%d bytes)", report.filename, report.size)
        return jsonify({
            'pdf': base64.b64encode(report.content).decode('ascii'),
            'filename': report.filename,
            'size': report.size,
        })
