import logging
from colorlog import ColoredFormatter
from app.core.settings import settings

LOG_FORMAT = (
    "%(log_color)s[%(asctime)s] [%(levelname)-8s] "
    "%(reset)s%(blue)s%(name)s:%(reset)s %(message)s"
)

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


def build_handler() -> logging.Handler:
    h = logging.StreamHandler()
    h.setFormatter(ColoredFormatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S", reset=True, log_colors=LOG_COLORS))
    return h


logger = logging.getLogger("invest")
logger.setLevel(settings.LOG_LEVEL.upper())
if not logger.handlers:
    logger.addHandler(build_handler())
logger.propagate = False

# httpx registra cada request a Resend en INFO
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.DEBUG else logging.WARNING)
