"""Manage the shared typing workspace and the final output directory.

The workspace holds one copy of each sample's contigs, named after the sample,
and only lives for the typing stage. The output root collects every
per-sample directory once all stages have finished.
"""
import contextlib
import os
import shutil

from mlstpipe import utils
from mlstpipe.log import logger
from mlstpipe.pipeline import run_info

WORKSPACE = "tmp_mlst"

def workspace_dir(config):
    return os.path.join(config.work_dir, WORKSPACE)

def output_root(config):
    return os.path.join(config.work_dir, config.run_name)

def reset_dir(dname):
    """Remove a directory with any previous content and create it fresh.
    """
    utils.remove_safe(dname)
    utils.safe_makedir(dname)
    return utils.add_owner_rwx(dname)

def stage_contigs(assemblies, config):
    """Copy assembled contigs into a fresh workspace as `<sample name>.fasta`.
    """
    workspace = reset_dir(workspace_dir(config))
    for assembly in assemblies:
        ext = os.path.splitext(assembly.contigs)[1]
        staged = os.path.join(workspace, "%s%s" % (assembly.sample.name, ext))
        shutil.copyfile(assembly.contigs, staged)
    return workspace

@contextlib.contextmanager
def staged_workspace(assemblies, config):
    """Provide a workspace of staged contigs, removing it when done.
    """
    workspace = stage_contigs(assemblies, config)
    try:
        yield workspace
    finally:
        utils.remove_safe(workspace)

def check_input_folder(config):
    """Reject an input folder the run would remove: the workspace or the output root.
    """
    input_folder = os.path.realpath(config.input_folder)
    for dname in [workspace_dir(config), output_root(config)]:
        dname = os.path.realpath(dname)
        if input_folder == dname or input_folder.startswith(dname + os.sep):
            raise run_info.InvalidInput("Error: --fastqfolder %s would be removed by this run (%s)"
                                        % (config.input_folder, dname),
                                        "Solution: move the FASTQ files elsewhere or choose "
                                        "another --outname.")
    return config.input_folder

def consolidate(samples, config):
    """Gather index keyed sample directories into a fresh output root, named by sample.

    Directories move straight from `<run>_<index>` to `<run>/<run>_<name>`, so a
    sample name that looks like an index never touches another sample's directory.
    """
    out_dir = reset_dir(output_root(config))
    final = []
    for sample in samples:
        orig = os.path.join(config.work_dir, "%s_%s" % (config.run_name, sample.index))
        target = os.path.join(out_dir, "%s_%s" % (config.run_name, sample.name))
        shutil.move(orig, target)
        final.append(target)
    logger.info("Results for %s samples in %s" % (len(final), out_dir))
    return final
