"""Run per-sample tasks on a single machine, optionally several samples at once.
"""
import joblib

from mlstpipe.log import logger

def run_multicore(fn, items, jobs=1):
    """Run the function over the given argument lists, returning results in input order.

    With jobs > 1 a bounded pool of threads processes samples concurrently;
    the work happens in external programs so threads are sufficient. The
    first failure is raised once running tasks finish.
    """
    items = [x for x in items if x is not None]
    if len(items) == 0:
        return []
    jobs = max(1, min(int(jobs), len(items)))
    if jobs == 1:
        return [fn(*x) for x in items]
    logger.info("multiprocessing: %s with %s concurrent jobs" % (fn.__name__, jobs))
    return list(joblib.Parallel(jobs, batch_size=1, backend="threading")(
        joblib.delayed(fn)(*x) for x in items))
