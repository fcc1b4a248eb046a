"""Retrieve run information from the input folder: validate inputs and pair samples.

Input files are listed once, in sorted order, and paired positionally:
sample 1 is the first two files, sample 2 the next two, and so on.
"""
import collections
import os
import re

from mlstpipe import utils
from mlstpipe.log import logger

FASTQ_EXTENSIONS = ("fastq", "fq")

Sample = collections.namedtuple("Sample", ["index", "forward_file", "reverse_file", "name"])

class InvalidInput(ValueError):
    """Malformed or missing configuration or input.
    """
    exit_code = 1

    def __init__(self, message, solution=None):
        super(InvalidInput, self).__init__(message)
        self.solution = solution

class MissingInput(InvalidInput):
    pass

# ## Validation

def validate_input_dir(input_folder):
    """Check the input folder exists and only contains FASTQ files.
    """
    if not input_folder or not os.path.isdir(input_folder):
        raise MissingInput("Error: --fastqfolder doesn't exist: %s" % input_folder,
                           "Solution: check if the path to this directory is correct.")
    for fname in list_input_files(input_folder):
        if not is_fastq(fname):
            raise InvalidInput("Error: --fastqfolder should only contain FASTQ files. "
                               "Found: %s" % fname,
                               "Solution: remove any other file from this directory.")
    return input_folder

def validate_threads(threads, option="--threads"):
    """Check a raw thread count is a positive integer, returning it as an int.
    """
    if not re.fullmatch(r"[0-9]+", str(threads)) or int(threads) == 0:
        raise InvalidInput("Error: %s is not a positive integer: %r" % (option, threads),
                           "Solution: remove this optional parameter or use an integer.")
    return int(threads)

def validate_run_name(run_name):
    """Check the run name can prefix output paths: non-empty, no path separators.
    """
    if not run_name or os.sep in run_name or run_name in (os.curdir, os.pardir):
        raise InvalidInput("Error: --outname is not a valid name: %r" % run_name,
                           "Solution: use a name without path separators.")
    return run_name

def fastq_extension(fname):
    """Effective extension of a read file, looking past gzip compression.

    Compression is detected from the file content, not its name.
    """
    base = os.path.basename(fname)
    if utils.is_gzipped(fname):
        base = os.path.splitext(base)[0]
    return os.path.splitext(base)[1].lstrip(".")

def is_fastq(fname):
    return os.path.isfile(fname) and fastq_extension(fname).lower() in FASTQ_EXTENSIONS

# ## Sample pairing

def list_input_files(input_folder):
    """Sorted listing of visible entries in the input folder, as full paths.
    """
    return [os.path.join(input_folder, x) for x in sorted(os.listdir(input_folder))
            if not x.startswith(".")]

def sample_name(fname):
    """Name of a sample from a read file: without compression and format extensions.
    """
    base = os.path.basename(fname)
    if utils.is_gzipped(fname):
        base = os.path.splitext(base)[0]
    return os.path.splitext(base)[0]

def pair_samples(files):
    """Pair consecutive files into forward/reverse samples.

    With an odd number of files, the last one is left out with a warning.
    """
    samples = []
    for i in range(len(files) // 2):
        forward, reverse = files[2 * i], files[2 * i + 1]
        assert forward != reverse, forward
        samples.append(Sample(index=i + 1, forward_file=forward, reverse_file=reverse,
                              name=sample_name(reverse)))
    if len(files) % 2 == 1:
        logger.warning("Odd number of input files (%s); %s is not part of any sample "
                       "and will not be analysed." % (len(files), os.path.basename(files[-1])))
    for sample in samples:
        logger.info("Sample %s: %s (%s, %s)" % (sample.index, sample.name,
                                                os.path.basename(sample.forward_file),
                                                os.path.basename(sample.reverse_file)))
    return samples

def organize_samples(input_folder):
    """Validate the input folder and return the ordered list of samples.
    """
    validate_input_dir(input_folder)
    samples = pair_samples(list_input_files(os.path.abspath(input_folder)))
    if not samples:
        raise InvalidInput("Error: --fastqfolder does not contain a pair of FASTQ files: %s"
                           % input_folder,
                           "Solution: provide forward and reverse paired-end reads.")
    names = [x.name for x in samples]
    dups = sorted(set(x for x in names if names.count(x) > 1))
    if dups:
        raise InvalidInput("Error: samples share output names: %s" % ", ".join(dups),
                           "Solution: rename the reverse read files so each sample name is unique.")
    return samples
