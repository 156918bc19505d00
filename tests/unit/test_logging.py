import logging

from timeless.core.logging import setup_logging
from timeless.utils.logging_redaction import RedactingFilter, install_redaction_filter, redact_message


def test_redacts_database_url_password():
    message = "connecting to postgresql+asyncpg://board:s3cret@db:5432/timeless"
    assert redact_message(message) == "connecting to postgresql+asyncpg://board:[REDACTED]@db:5432/timeless"


def test_redacts_key_value_secrets():
    assert redact_message("password=hunter2 user=admin") == "password=[REDACTED] user=admin"
    assert redact_message("nothing to hide") == "nothing to hide"


def test_filter_rewrites_formatted_record():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "url=%s", ("sqlite://u:p@h/db",), None)
    assert RedactingFilter().filter(record) is True
    assert record.getMessage() == "url=sqlite://u:[REDACTED]@h/db"


def test_setup_logging_writes_rotating_file(tmp_path):
    log_file = tmp_path / "logs" / "board.log"
    try:
        setup_logging("DEBUG", log_file=str(log_file))
        install_redaction_filter()
        install_redaction_filter()

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert all(
            sum(isinstance(f, RedactingFilter) for f in handler.filters) == 1
            for handler in root.handlers
        )

        logging.getLogger("timeless.test").info("password=abc")
        for handler in root.handlers:
            handler.flush()

        content = log_file.read_text()
        assert "| INFO | timeless.test | password=[REDACTED]" in content
    finally:
        setup_logging("INFO")
