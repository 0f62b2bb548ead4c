import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[request_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def setup_logger(level: str = "DEBUG"):
    """Loguru 설정. lifespan 시작 시 한 번 호출.

    request_id는 RequestLoggingMiddleware가 요청마다 contextualize로 채운다.
    요청 밖(시작/종료 로그)에서는 "-"로 찍힌다.
    """
    logger.remove()
    logger.configure(extra={"request_id": "-"})
    logger.add(sys.stderr, format=LOG_FORMAT, level=level)
    return logger
