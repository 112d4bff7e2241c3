import logging
from typing import Any, Dict


def setup_logger(level: int = logging.INFO) -> logging.Logger:
    """
    Создаёт и настраивает корневой логгер проекта ``kmeans_interactive``.

    :param level: минимальный уровень логирования
    :return: настроенный экземпляр :class:`logging.Logger`
    """
    logger = logging.getLogger("kmeans_interactive")
    logger.setLevel(level)

    # Внешние обработчики (например, LogCaptureHandler pytest) не в счёт
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "[%(asctime)s] %(levelname)s: %(message)s",
            datefmt="%H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    # Чтобы сообщения не дублировались через root-логгер
    logger.propagate = False

    return logger


def format_session_prefix(meta: Dict[str, Any]) -> str:
    """
    Формирует текстовый префикс для логов по параметрам сессии.

    Ожидается словарь с ключами ``N``, ``k``, ``seed`` и опциональным
    ``init``.
    """
    return (
        f"[N={meta['N']} k={meta['k']} seed={meta['seed']} "
        f"init={meta.get('init', 'uniform')}]"
    )


class PrefixedLogger:
    """Обёртка над логгером, добавляющая префикс к каждому сообщению."""

    def __init__(self, base_logger: logging.Logger | None, prefix: str) -> None:
        self._base = base_logger
        self._prefix = prefix

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self._base:
            self._base.debug(f"{self._prefix} {msg}", *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self._base:
            self._base.info(f"{self._prefix} {msg}", *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self._base:
            self._base.warning(f"{self._prefix} {msg}", *args, **kwargs)
