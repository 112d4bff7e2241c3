import logging

from kmeans_interactive.utils.logging import (
    PrefixedLogger,
    format_session_prefix,
    setup_logger,
)


def test_setup_logger_is_idempotent():
    a = setup_logger()
    b = setup_logger(logging.DEBUG)

    assert a is b
    # pytest может добавить свои LogCaptureHandler, считаем только наш
    assert sum(type(h) is logging.StreamHandler for h in b.handlers) == 1
    assert b.level == logging.DEBUG
    assert b.propagate is False


def test_format_session_prefix():
    prefix = format_session_prefix({"N": 9, "k": 3, "seed": 42, "init": "kmeans++"})

    assert prefix == "[N=9 k=3 seed=42 init=kmeans++]"


def test_prefixed_logger(caplog):
    base = logging.getLogger("prefixed_logger_test")
    wrapped = PrefixedLogger(base, "[x]")

    with caplog.at_level(logging.INFO, logger="prefixed_logger_test"):
        wrapped.info("hello")

    assert "[x] hello" in caplog.text


def test_prefixed_logger_without_base():
    # без базового логгера сообщения просто отбрасываются
    PrefixedLogger(None, "[x]").warning("ignored")
