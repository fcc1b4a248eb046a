"""Parse command line arguments and map pipeline failures to exit codes.
"""
import argparse
import os
import sys

from mlstpipe.log import logger
from mlstpipe.pipeline import config_utils, run_info, version
from mlstpipe.pipeline.main import run_main
from mlstpipe.provenance import do, programs

class _UsageParser(argparse.ArgumentParser):
    """Argument parser reporting usage errors with exit status 1.
    """
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, "%s: error: %s\n" % (self.prog, message))

class _HelpAction(argparse.Action):
    def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, help=None):
        super(_HelpAction, self).__init__(option_strings=option_strings, dest=dest,
                                          default=default, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        parser.print_help()
        parser.exit(1)

def parse_cl_args(in_args):
    """Parse input commandline arguments, returning keyword arguments for run_main.

    Thread and job counts are kept as strings so they are validated with
    the other inputs.
    """
    description = ("Assemble paired-end reads with SPAdes, type them with mlst, "
                   "annotate with Prokka and optionally convert annotations to GTF.")
    parser = _UsageParser(prog="mlstpipeline", description=description, add_help=False)
    required = parser.add_argument_group("Required arguments")
    required.add_argument("-f", "--fastqfolder", required=True,
                          help=("Path to the folder that contains ALL your FASTQ files. "
                                "Only FASTQ files should be placed in it. You need "
                                "forward and reverse paired-end reads."))
    optional = parser.add_argument_group("Optional arguments")
    optional.add_argument("-h", "--help", action=_HelpAction,
                          help="Show this help message and exit.")
    optional.add_argument("-o", "--outname", default=config_utils.DEFAULT_RUN_NAME,
                          help=("Name of your analysis. It will be used to name the "
                                "output files. Default: %(default)s."))
    optional.add_argument("-t", "--threads", default=str(config_utils.DEFAULT_THREADS),
                          help=("Number of threads that will be used. It must be an "
                                "integer. Default: %(default)s."))
    optional.add_argument("-c", "--conversion", action="store_true", default=False,
                          help=("If the argument is included, convert the prokka.gff "
                                "to prokka.gtf. Default: no conversion."))
    optional.add_argument("-j", "--jobs", default="1",
                          help=("Number of samples to assemble and annotate at the "
                                "same time. Default: %(default)s."))
    optional.add_argument("--workdir", default=os.getcwd(),
                          help=("Directory to process in. Defaults to current "
                                "working directory"))
    optional.add_argument("--config",
                          help=("YAML system configuration with program locations "
                                "and options (resources)"))
    optional.add_argument("-v", "--version", action="version",
                          version="%(prog)s " + version.__version__,
                          help="Print current version")
    args = parser.parse_args(in_args)
    return {"fastqfolder": args.fastqfolder,
            "outname": args.outname,
            "threads": args.threads,
            "conversion": args.conversion,
            "jobs": args.jobs,
            "workdir": os.path.abspath(args.workdir),
            "config_file": args.config}

def main(in_args=None):
    """Command line entry point, returning the process exit status.
    """
    kwargs = parse_cl_args(sys.argv[1:] if in_args is None else in_args)
    try:
        run_main(**kwargs)
    except (programs.ToolMissing, run_info.InvalidInput) as e:
        logger.error(str(e))
        if e.solution:
            logger.error(e.solution)
        return e.exit_code
    except do.ExternalToolFailure as e:
        logger.error("Pipeline stopped: %s" % e)
        return 1
    logger.info("Done! All analyses finished successfully. Good luck with the results!")
    return 0
