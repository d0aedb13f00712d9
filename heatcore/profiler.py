import logging
import time

logger = logging.getLogger(__name__)


class Profiler:
    def __init__(self, name="Run"):
        self.name = name
        self.start_time = 0
        self.end_time = 0
        self.duration = 0

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        # Steppers block on their own results, so wall time covers the work
        self.end_time = time.perf_counter()
        self.duration = self.end_time - self.start_time
        logger.debug("%s took %.4f s", self.name, self.duration)
