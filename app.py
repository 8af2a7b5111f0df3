from flask import Flask
from audit_report.config import Config
from audit_report.routes import init_routes
import logging
from logging.handlers import RotatingFileHandler
import os


def setup_logging(config=Config):
    logger = logging.getLogger('audit_report')
    logger.setLevel(getattr(logging, str(getattr(config, 'LOG_LEVEL', 'INFO')).upper(), logging.INFO))

    # avoid duplicated handlers when create_app is called more than once
    if not logger.handlers:
        log_path = getattr(config, 'LOG_PATH', None) or os.path.join(os.getcwd(), 'app.log')
        file_handler = RotatingFileHandler(log_path, maxBytes=10_000_000, backupCount=5, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))
        logger.addHandler(file_handler)
        logger.addHandler(stream_handler)

    return logger


def create_app(config_object=Config, composer=None):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.config['REPORT_CONFIG'] = config_object

    logger = setup_logging(config_object)

    init_routes(app, logger, composer=composer)

    # log every unhandled request exception with its traceback
    from flask import got_request_exception, request
    import traceback

    def _log_request_exception(sender, exception, **extra):
        rid = request.headers.get('X-Request-ID', '') or ''
        logger.error("Unhandled exception (rid=%s): %s", rid, traceback.format_exc())

    got_request_exception.connect(_log_request_exception, app, weak=False)

    return app


if __name__ == '__main__':
    app = create_app()
    port = int(os.environ.get('PORT', 5000))
    app.run(host='0.0.0.0', port=port, debug=Config.DEBUG)
