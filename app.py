"""
TOS Compare - Flask Application
Serves the comparison engine over HTTP for the upload/extraction front end.
"""
from flask import Flask

from config_logging import get_config, get_logger
from tos_compare.routes import compare_blueprint

config = get_config()
logger = get_logger('app')

app = Flask(__name__)
# JSON escaping can grow each text up to six-fold
app.config['MAX_CONTENT_LENGTH'] = 12 * config.max_text_bytes
app.register_blueprint(compare_blueprint)


if __name__ == '__main__':
    is_valid, errors = config.validate()
    if not is_valid:
        for error in errors:
            logger.error(f"Configuration error: {error}")
        raise SystemExit(1)

    logger.info(f"Server running on http://{config.host}:{config.port}")
    app.run(host=config.host, port=config.port, debug=config.debug)
