"""Multi-locus sequence typing of all assemblies at once with mlst.

https://github.com/tseemann/mlst
"""
import collections
import glob
import os
import shlex

from mlstpipe.distributed.transaction import file_transaction
from mlstpipe.log import logger
from mlstpipe.pipeline import config_utils
from mlstpipe.provenance import do

REPORT_SUFFIX = "MLST.tsv"

TypingResult = collections.namedtuple("TypingResult", ["report", "rows"])

def report_file(config):
    return os.path.join(config.work_dir, "%s_%s" % (config.run_name, REPORT_SUFFIX))

def run_typing(workspace, config):
    """Type every staged assembly in the workspace, writing one tabular report.
    """
    in_files = sorted(glob.glob(os.path.join(workspace, "*")))
    out_file = report_file(config)
    mlst = config_utils.get_program("mlst", config)
    opts = config_utils.get_program_options("mlst", config)
    with file_transaction(out_file) as tx_out_file:
        cmd = " ".join(shlex.quote(str(x)) for x in
                       [mlst, "-t", config.threads, "-q"] + opts + in_files)
        do.run("%s > %s" % (cmd, shlex.quote(tx_out_file)), "MLST typing")
    with open(out_file) as in_handle:
        rows = len([l for l in in_handle if l.strip()])
    logger.info("MLST report with %s rows written to %s" % (rows, out_file))
    return TypingResult(out_file, rows)
