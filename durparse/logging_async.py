import asyncio, logging, sys

LOG_FORMAT = "[%(asctime)s] %(levelname)s> %(message)s"
DATE_FORMAT = "%H:%M:%S"


class AsyncQueueHandler(logging.Handler):
    """Non-blocking handler that hands formatted records to ``log_worker``."""

    def __init__(self, queue: asyncio.Queue):
        super().__init__()
        self.queue = queue

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            self.queue.put_nowait((record.levelno, msg))
        except Exception:
            self.handleError(record)


async def log_worker(
    queue: asyncio.Queue, stop_event: asyncio.Event, level=logging.INFO, stream=None
) -> None:
    """Drain ``queue`` to ``stream`` until ``stop_event`` is set and it is empty."""
    base_handler = logging.StreamHandler(stream or sys.stdout)
    base_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    base_handler.setLevel(level)

    while not stop_event.is_set() or not queue.empty():
        try:
            lvl, msg = await asyncio.wait_for(queue.get(), timeout=0.5)
        except asyncio.TimeoutError:
            continue
        try:
            if lvl >= level:
                record = logging.LogRecord("durparse", lvl, "", 0, msg, None, None)
                base_handler.emit(record)
        except Exception as e:
            sys.stderr.write(f"[log_worker error] {e}\n")
        finally:
            queue.task_done()

    base_handler.flush()


def get_logger(queue: asyncio.Queue, name: str = "durparse.web") -> logging.Logger:
    logger = logging.getLogger(name)
    for existing in logger.handlers:
        if isinstance(existing, AsyncQueueHandler):
            existing.queue = queue
            return logger
    handler = AsyncQueueHandler(queue)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


def configure_logging(verbose: bool = False) -> None:
    """Plain stderr logging for one-shot CLI commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stderr,
    )
