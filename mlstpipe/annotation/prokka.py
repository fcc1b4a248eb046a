"""Gene annotation of assembled contigs with Prokka.

https://github.com/tseemann/prokka
"""
import collections
import os

from mlstpipe.pipeline import config_utils
from mlstpipe.provenance import do

PREFIX = "prokka"

AnnotationResult = collections.namedtuple("AnnotationResult", ["sample", "directory", "gff", "gtf"])

def run_annotation(assembly, config):
    """Annotate a sample's contigs into an `annotation` directory next to its assembly.
    """
    out_dir = os.path.join(os.path.dirname(assembly.directory), "annotation")
    gff = os.path.join(out_dir, "%s.gff" % PREFIX)
    prokka = config_utils.get_program("prokka", config)
    cmd = [prokka, "--outdir", out_dir, "--prefix", PREFIX, "--cpus", config.threads] + \
        config_utils.get_program_options("prokka", config) + [assembly.contigs]
    do.run(cmd, "Prokka annotation", assembly.sample, [do.file_exists(gff)])
    return AnnotationResult(assembly.sample, out_dir, gff, None)
