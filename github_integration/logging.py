import logging
import sys

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | "
    "%(event)s | %(message)s"
)


class EventTagFilter(logging.Filter):
    """Подставляет тег event по умолчанию для записей без него"""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "event"):
            record.event = "-"
        return True


def setup_logging(level=logging.INFO):
    handler = logging.StreamHandler(sys.stdout)  # важно для Docker
    handler.addFilter(EventTagFilter())

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[handler],
    )
