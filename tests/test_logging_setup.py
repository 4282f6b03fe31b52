import io
import logging

from transaction_analysis import TransactionAnalyzer, configure_logging, get_logger


def _pkg_logger() -> logging.Logger:
    return logging.getLogger("transaction_analysis")


def test_get_logger_installs_null_handler_until_configured():
    logger = get_logger("transaction_analysis.something")
    assert logger.name == "transaction_analysis.something"
    assert any(isinstance(h, logging.NullHandler) for h in _pkg_logger().handlers)


def test_configure_logging_attaches_single_stream_handler():
    stream = io.StringIO()
    get_logger("transaction_analysis.analyzer")
    configure_logging("DEBUG", stream=stream)
    configure_logging("ERROR", stream=io.StringIO())  # second call is a no-op

    pkg = _pkg_logger()
    assert len(pkg.handlers) == 1
    assert isinstance(pkg.handlers[0], logging.StreamHandler)
    assert pkg.level == logging.DEBUG
    assert pkg.propagate is False

    TransactionAnalyzer().find_by_id("missing")
    assert "no transaction with id='missing'" in stream.getvalue()


def test_configure_logging_reads_level_from_environment(monkeypatch):
    monkeypatch.setenv("TRANSACTION_ANALYSIS_LOG_LEVEL", "warning")
    configure_logging(stream=io.StringIO())
    assert _pkg_logger().level == logging.WARNING


def test_configure_logging_accepts_numeric_level_string():
    configure_logging("15", stream=io.StringIO())
    assert _pkg_logger().level == 15


def test_configure_logging_custom_format():
    stream = io.StringIO()
    configure_logging(logging.WARNING, fmt="%(levelname)s|%(message)s", stream=stream)
    get_logger("transaction_analysis.coercion").warning("hello")
    assert stream.getvalue() == "WARNING|hello\n"


def test_configure_logging_force_replaces_handler():
    first, second = io.StringIO(), io.StringIO()
    configure_logging("INFO", stream=first)
    logger = configure_logging("WARNING", stream=second, force=True)

    assert logger is _pkg_logger()
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
    get_logger("transaction_analysis.analyzer").warning("after")
    assert first.getvalue() == ""
    assert "after" in second.getvalue()


def test_unknown_level_name_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("TRANSACTION_ANALYSIS_LOG_LEVEL", "chatty")
    configure_logging(stream=io.StringIO())
    assert _pkg_logger().level == logging.INFO


def test_coercion_warning_reaches_configured_stream():
    stream = io.StringIO()
    configure_logging("WARNING", fmt="%(name)s %(message)s", stream=stream)
    TransactionAnalyzer(
        [{"transaction_id": "1", "transaction_date": "2021-01-01", "transaction_amount": "n/a"}]
    )
    expected = "transaction_analysis.coercion non-numeric amount 'n/a' stored as NaN"
    assert expected in stream.getvalue()
