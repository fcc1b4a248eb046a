"""Convert Prokka GFF annotations to GTF with AGAT.

https://github.com/NBISweden/AGAT
"""
import os
import re

from mlstpipe.annotation import prokka
from mlstpipe.log import logger
from mlstpipe.pipeline import config_utils
from mlstpipe.provenance import do

def sample_dirs(config):
    """Per-sample output directories of this run, `<run_name>_<index>`, in index order.
    """
    pattern = re.compile(r"^%s_(\d+)$" % re.escape(config.run_name))
    found = []
    for dname in os.listdir(config.work_dir):
        match = pattern.match(dname)
        if match and os.path.isdir(os.path.join(config.work_dir, dname)):
            found.append((int(match.group(1)), os.path.join(config.work_dir, dname)))
    return [d for _, d in sorted(found)]

def convert_gff(gff, config):
    gtf = "%s.gtf" % os.path.splitext(gff)[0]
    agat = config_utils.get_program("agat", config, "agat_convert_sp_gff2gtf.pl")
    cmd = [agat, "--gff", gff, "-o", gtf] + config_utils.get_program_options("agat", config)
    do.run(cmd, "GFF to GTF conversion: %s" % os.path.basename(os.path.dirname(os.path.dirname(gff))),
           checks=[do.file_exists(gtf)])
    return gtf

def run_conversion(annotations, config):
    """Convert the annotation of every per-sample directory, filling in the GTF outputs.
    """
    by_dir = {os.path.dirname(a.directory): a for a in annotations}
    out = []
    for dname in sample_dirs(config):
        if dname not in by_dir:
            logger.warning("Skipping GTF conversion of %s: not a sample of this run" % dname)
            continue
        gtf = convert_gff(os.path.join(dname, "annotation", "%s.gff" % prokka.PREFIX), config)
        out.append(by_dir.pop(dname)._replace(gtf=gtf))
    return out + list(by_dir.values())
