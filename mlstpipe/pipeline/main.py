"""Main entry point for the assembly, typing and annotation pipeline.

Handles running the full pipeline over a folder of paired-end reads. Stages
run in a fixed order and the first failing external program stops the run.
"""
import collections
import os

from mlstpipe import log
from mlstpipe.annotation import agat, prokka
from mlstpipe.assembly import spades
from mlstpipe.distributed import multi
from mlstpipe.log import logger
from mlstpipe.pipeline import config_utils, run_info, workspace
from mlstpipe.provenance import profile, programs
from mlstpipe.strain import mlst

RunResult = collections.namedtuple("RunResult", ["samples", "typing", "annotations", "output_dirs"])

def run_main(fastqfolder, outname=config_utils.DEFAULT_RUN_NAME,
             threads=config_utils.DEFAULT_THREADS, conversion=False, workdir=None,
             jobs=1, config_file=None):
    """Run the pipeline, handling command line options.

    Required programs are checked before anything is read from the input folder.
    """
    workdir = os.path.abspath(workdir or os.getcwd())
    system_config = config_utils.load_system_config(config_file)
    logger.info("Checking if required software is installed...")
    found = programs.check_programs(system_config, conversion)
    logger.info("Required software is properly installed.")

    logger.info("Checking if required inputs are correct...")
    samples = run_info.organize_samples(fastqfolder)
    logger.info("Required inputs seem correct.")
    logger.info("Checking if optional inputs are correct...")
    threads = run_info.validate_threads(threads)
    jobs = run_info.validate_threads(jobs, "--jobs")
    run_name = run_info.validate_run_name(outname)
    logger.info("Optional inputs seem correct.")

    config = config_utils.make_pipeline_config(fastqfolder, workdir, run_name, threads,
                                               conversion, jobs, system_config)
    workspace.check_input_folder(config)
    system_config["log_dir"] = os.path.join(workdir, system_config.get("log_dir", log.DEFAULT_LOG_DIR))
    handler = log.setup_local_logging(system_config)
    try:
        if system_config.get("log_versions", True):
            programs.log_versions(found)
        return run_pipeline(samples, config)
    finally:
        handler.pop_application()
        handler.close()

def run_pipeline(samples, config):
    """Run all stages over the samples in order: assembly, typing, annotation,
    optional GTF conversion and ordering of output files.
    """
    logger.info("Running %s on %s samples with %s threads" % (config.run_name, len(samples),
                                                             config.threads))
    with profile.report("genome assembly"):
        assemblies = multi.run_multicore(spades.run_assembly,
                                         [[x, config] for x in samples], config.jobs)
    with profile.report("MLST typing"):
        with workspace.staged_workspace(assemblies, config) as staged:
            typing = mlst.run_typing(staged, config)
    with profile.report("gene annotation"):
        annotations = multi.run_multicore(prokka.run_annotation,
                                          [[x, config] for x in assemblies], config.jobs)
    if config.conversion:
        with profile.report("GFF to GTF conversion"):
            annotations = agat.run_conversion(annotations, config)
    with profile.report("ordering output files"):
        output_dirs = workspace.consolidate(samples, config)
    logger.info("All analyses finished successfully.")
    return RunResult(samples, typing, annotations, output_dirs)
