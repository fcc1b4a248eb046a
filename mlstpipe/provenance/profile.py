"""Timing of pipeline stages, reported to the run log.
"""
import contextlib
import time

from mlstpipe.log import logger

@contextlib.contextmanager
def report(label):
    """Log start and elapsed time of a pipeline stage."""
    logger.info("Timing: %s" % label)
    start = time.time()
    yield None
    logger.debug("Timing: %s finished in %.1fs" % (label, time.time() - start))
