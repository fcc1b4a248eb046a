"""De novo assembly of paired-end reads with SPAdes.

http://cab.spbu.ru/software/spades/
"""
import collections
import os

from mlstpipe import utils
from mlstpipe.distributed.transaction import file_transaction
from mlstpipe.log import logger
from mlstpipe.pipeline import config_utils
from mlstpipe.provenance import do

CONTIGS = "contigs.fasta"
REF_ASSEMBLY = "ref_assembly.fasta"
REF_HEADER = ">Assembly"

AssemblyResult = collections.namedtuple("AssemblyResult", ["sample", "directory", "contigs", "ref_assembly"])

def sample_dir(sample, config):
    """Index keyed output directory for a sample, before renaming to its name.
    """
    return os.path.join(config.work_dir, "%s_%s" % (config.run_name, sample.index))

def run_assembly(sample, config):
    """Assemble a sample's reads and build a single sequence reference from the contigs.
    """
    # reruns start from scratch for this sample
    utils.remove_safe(sample_dir(sample, config))
    out_dir = os.path.join(sample_dir(sample, config), "assembly")
    contigs = os.path.join(out_dir, CONTIGS)
    spades = config_utils.get_program("spades", config, "spades.py")
    cmd = [spades, "-1", sample.forward_file, "-2", sample.reverse_file,
           "--careful", "--threads", config.threads, "--cov-cutoff", "auto",
           "-o", out_dir] + config_utils.get_program_options("spades", config)
    do.run(cmd, "SPAdes assembly", sample, [do.file_nonempty(contigs)])
    ref_assembly = make_ref_assembly(contigs, os.path.join(out_dir, REF_ASSEMBLY))
    return AssemblyResult(sample, out_dir, contigs, ref_assembly)

def make_ref_assembly(contigs, out_file):
    """Concatenate all contig sequences under a single `Assembly` header.

    Sequence lines are kept as they are, only contig header lines are dropped.
    """
    with file_transaction(out_file) as tx_out_file:
        with open(contigs) as in_handle, open(tx_out_file, "w") as out_handle:
            out_handle.write(REF_HEADER + "\n")
            for line in in_handle:
                if not line.startswith(">"):
                    out_handle.write(line)
    logger.debug("Reference assembly written to %s" % out_file)
    return out_file
