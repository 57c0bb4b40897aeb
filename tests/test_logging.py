"""Tests for the logging module."""

import json

from popcore import logging as pop_logging
from popcore.logging import (
    FileSink,
    LogLevel,
    NullSink,
    configure_logging,
    create_sink_for_environment,
    emit_record,
    get_logger,
    register_sink,
)


class TestLevels:
    """Per-module log levels."""

    def test_default_level_filters(self, logging_config, capsys):
        configure_logging(level='WARNING')
        log = get_logger('levels_test')
        log.info("hidden")
        log.warning("shown %d", 3)
        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "[levels_test] WARN: shown 3" in out

    def test_module_override(self, logging_config, capsys):
        configure_logging(level='ERROR', modules={'chatty': 'DEBUG'})
        get_logger('chatty').debug("details")
        get_logger('quiet').warning("nope")
        out = capsys.readouterr().out
        assert "[chatty] DEBUG: details" in out
        assert "nope" not in out

    def test_bad_format_args_do_not_raise(self, logging_config, capsys):
        configure_logging(level='INFO')
        get_logger('fmt').info("value %d", "not a number")
        assert "value %d" in capsys.readouterr().out

    def test_loggers_are_cached(self):
        assert get_logger('same') is get_logger('same')

    def test_level_names(self):
        assert pop_logging._level_from_string('warn') == LogLevel.WARNING
        assert pop_logging._level_from_string('bogus') == LogLevel.INFO

    def test_env_config(self, logging_config, monkeypatch):
        monkeypatch.setenv('POP_LOG_LEVEL', 'ERROR')
        monkeypatch.setenv('POP_LOG_BUBBLE', 'TRACE')
        monkeypatch.setenv('POP_LOGGING_SESSION_ENABLED', 'true')
        pop_logging._load_env_config()

        assert logging_config['default_level'] == LogLevel.ERROR
        assert logging_config['module_levels']['bubble'] == LogLevel.TRACE
        assert pop_logging.get_module_config('session') == {'enabled': True}


class TestSinks:
    """Structured records."""

    def test_no_sink_drops_record(self, logging_config):
        assert emit_record('nowhere', {'type': 'x'}) is False

    def test_file_sink_writes_jsonl(self, logging_config, tmp_path):
        sink = FileSink(log_dir=str(tmp_path), session_name='run1')
        register_sink('session', sink)

        assert emit_record('session', {'type': 'run_summary', 'score': 12}) is True
        path = sink.log_paths['session']
        sink.close()

        records = [json.loads(line) for line in path.read_text().splitlines()]
        assert [r['type'] for r in records] == ['header', 'run_summary', 'footer']
        assert records[1]['score'] == 12
        assert 'wall_time' in records[1]

    def test_disabled_module_gets_null_sink(self, logging_config):
        assert isinstance(create_sink_for_environment('session'), NullSink)

    def test_enabled_module_gets_file_sink(self, logging_config, tmp_path):
        logging_config['modules']['session'] = {'enabled': True, 'dir': str(tmp_path)}
        sink = create_sink_for_environment('session', session_name='s')
        assert isinstance(sink, FileSink)
        sink.close()

    def test_run_summary_record_on_end(self, logging_config, tmp_path, engine):
        sink = FileSink(log_dir=str(tmp_path), session_name='end')
        register_sink('session', sink)
        engine.add_score(5, is_special=True)
        engine.end()
        path = sink.log_paths['session']
        sink.close()

        summary = json.loads(path.read_text().splitlines()[1])
        assert summary['type'] == 'run_summary'
        assert summary['score'] == 5
        assert summary['gold_popped'] == 1
