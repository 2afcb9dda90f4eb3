# boutique/logging_config.py
import contextvars
import logging
import sys
import time

request_id_cv = contextvars.ContextVar("request_id", default="-")


class RequestFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(record.created))
        rid = request_id_cv.get()
        rid_str = f" [{rid[:8]}]" if rid != "-" else ""

        base = f"{ts} : {record.levelname:<5} : {record.name}{rid_str} : {record.getMessage()}"
        if record.exc_info:
            base += f"\n{self.formatException(record.exc_info)}"
        return base


def configure_logging(level: str = "INFO"):
    """Route every logger through one stdout handler."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(numeric_level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(RequestFormatter())
    root.addHandler(handler)

    # uvicorn access lines duplicate the request middleware output
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    sqlalchemy_level = logging.INFO if numeric_level == logging.DEBUG else logging.WARNING
    logging.getLogger("sqlalchemy.engine").setLevel(sqlalchemy_level)

    logging.getLogger("boutique").setLevel(numeric_level)
    logging.getLogger("boutique.core").info("Logging initialized: level=%s", level.upper())


def set_request_id(value: str) -> None:
    request_id_cv.set(value)
