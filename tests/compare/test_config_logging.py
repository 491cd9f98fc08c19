"""
Tests for Configuration, Logging and Errors
===========================================
"""

import json
import logging

import pytest

from config_logging import (
    DEFAULT_MAX_TEXT_BYTES, AppConfig, JsonFormatter, ProcessingError,
    StructuredLogger, TOSCompareError, ValidationError, get_config, get_logger,
    handle_errors, reset_config,
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ('TOSC_ENV', 'TOSC_PORT', 'TOSC_DEBUG', 'TOSC_MAX_TEXT_BYTES',
                 'TOSC_LOG_LEVEL', 'TOSC_LOG_FORMAT', 'TOSC_LOG_TO_FILE'):
        monkeypatch.delenv(name, raising=False)
    yield monkeypatch


class TestAppConfig:
    """Tests for AppConfig."""

    def test_defaults(self, clean_env):
        config = AppConfig.from_env()
        assert config.host == '127.0.0.1'
        assert config.max_text_bytes == DEFAULT_MAX_TEXT_BYTES
        assert config.validate() == (True, [])

    def test_from_env(self, clean_env):
        clean_env.setenv('TOSC_PORT', '6000')
        clean_env.setenv('TOSC_DEBUG', 'true')
        clean_env.setenv('TOSC_MAX_TEXT_BYTES', '2048')
        config = AppConfig.from_env()
        assert config.port == 6000
        assert config.debug is True
        assert config.max_text_bytes == 2048

    def test_production_forces_debug_off(self, clean_env):
        clean_env.setenv('TOSC_ENV', 'production')
        config = AppConfig(debug=True)
        assert config.debug is False
        assert config.log_level == 'WARNING'

    @pytest.mark.parametrize("kwargs, fragment", [
        ({'max_text_bytes': 0}, 'must be positive'),
        ({'max_text_bytes': 51 * 1024 * 1024}, 'safe limit'),
        ({'log_format': 'xml'}, 'log_format'),
        ({'log_level': 'LOUD'}, 'log_level'),
    ])
    def test_validate_rejects(self, clean_env, kwargs, fragment):
        is_valid, errors = AppConfig(**kwargs).validate()
        assert not is_valid
        assert any(fragment in e for e in errors)

    def test_get_config_cached(self, clean_env):
        reset_config()
        try:
            assert get_config() is get_config()
        finally:
            reset_config()


class TestStructuredLogger:
    """Tests for StructuredLogger."""

    def test_correlation_id(self):
        new_id = StructuredLogger.new_correlation_id()
        assert len(new_id) == 12
        assert StructuredLogger.get_correlation_id() == new_id

    def test_json_output(self, caplog):
        logger = get_logger('tos_compare.test')
        logger.logger.propagate = True
        with caplog.at_level(logging.INFO, logger='tos_compare.test'):
            logger.info("hello", pair='a/b')
        record = json.loads(caplog.records[-1].getMessage())
        assert record['message'] == 'hello'
        assert record['pair'] == 'a/b'
        assert record['level'] == 'INFO'

    def test_exception_serialized_once(self, caplog):
        logger = get_logger('tos_compare.test')
        logger.logger.propagate = True
        with caplog.at_level(logging.ERROR, logger='tos_compare.test'):
            try:
                raise ValueError("bad value")
            except ValueError:
                logger.exception("stage failed")
        emitted = caplog.records[-1]
        assert emitted.exc_info is None

        data = json.loads(JsonFormatter().format(emitted))
        assert data['message'] == 'stage failed'
        assert 'ValueError: bad value' in data['traceback']
        assert data['traceback'].count('Traceback') == 1

    def test_log_operation_reraises(self):
        logger = get_logger('tos_compare.test')
        with pytest.raises(KeyError):
            with logger.log_operation('lookup'):
                raise KeyError('missing')

    def test_formatter_passes_serialized_messages(self):
        record = logging.LogRecord('x', logging.INFO, __file__, 1, '{"a": 1}', None, None)
        assert JsonFormatter().format(record) == '{"a": 1}'

    def test_formatter_wraps_plain_messages(self):
        record = logging.LogRecord('x', logging.INFO, __file__, 1, 'plain', None, None)
        data = json.loads(JsonFormatter().format(record))
        assert data['message'] == 'plain'
        assert data['logger'] == 'x'


class TestErrors:
    """Tests for the error taxonomy and handle_errors."""

    def test_validation_error(self):
        error = ValidationError("bad input", field='text1')
        assert isinstance(error, TOSCompareError)
        assert error.to_dict() == {
            'success': False,
            'error': {'code': 'VALIDATION_ERROR', 'message': 'bad input',
                      'details': {'field': 'text1'}},
        }

    def test_handle_errors_maps_value_error(self):
        @handle_errors()
        def parse():
            raise ValueError("not a number")

        with pytest.raises(ValidationError):
            parse()

    def test_handle_errors_maps_unexpected(self):
        @handle_errors()
        def explode():
            raise RuntimeError("boom")

        with pytest.raises(ProcessingError) as exc_info:
            explode()
        assert exc_info.value.details['stage'] == 'explode'

    def test_handle_errors_passes_domain_errors(self):
        @handle_errors()
        def reject():
            raise ValidationError("nope")

        with pytest.raises(ValidationError):
            reject()
