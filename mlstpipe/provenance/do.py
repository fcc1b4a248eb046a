"""Centralize running of external commands, providing logging and tracking.
"""
import collections
import os
import subprocess

from mlstpipe import utils
from mlstpipe.log import logger, logger_cl

class ExternalToolFailure(subprocess.CalledProcessError):
    """An external program exited with a non-success status.
    """
    def __init__(self, returncode, cmd, output=None, descr=None):
        super(ExternalToolFailure, self).__init__(returncode, cmd, output)
        self.descr = descr

    def __str__(self):
        msg = "External command failed with exit status %s" % self.returncode
        if self.descr:
            msg += " (%s)" % self.descr
        return "%s: %s" % (msg, self.cmd)

class MissingOutput(ExternalToolFailure):
    """An external program exited successfully without writing its expected output.
    """
    def __init__(self, cmd, output_file, output=None, descr=None):
        super(MissingOutput, self).__init__(0, cmd, output, descr)
        self.output_file = output_file

    def __str__(self):
        msg = "External command did not write %s" % self.output_file
        if self.descr:
            msg += " (%s)" % self.descr
        return "%s: %s" % (msg, self.cmd)

def run(cmd, descr=None, sample=None, checks=None, log_error=True, env=None):
    """Run the provided command, logging details and checking for errors.
    """
    if descr:
        descr = _descr_str(descr, sample)
        logger.debug(descr)
    try:
        logger_cl.debug(" ".join(str(x) for x in cmd) if not isinstance(cmd, str) else cmd)
        _do_run(cmd, checks, env=env, descr=descr)
    except ExternalToolFailure as e:
        if log_error:
            logger.error(str(e))
            if e.output:
                logger.error(e.output)
        raise

def _descr_str(descr, sample):
    """Add the sample name to the description string.
    """
    if sample is not None:
        descr = "{0} : {1}".format(descr, sample.name)
    return descr

def _normalize_cmd_args(cmd):
    """Normalize subprocess arguments: strings run through the shell for redirection.
    """
    if isinstance(cmd, str):
        return cmd, True
    else:
        return [str(x) for x in cmd], False

def _do_run(cmd, checks, env=None, descr=None):
    """Perform running and check results, raising errors for issues.
    """
    cmd, shell_arg = _normalize_cmd_args(cmd)
    cmd_str = " ".join(cmd) if not isinstance(cmd, str) else cmd
    s = subprocess.Popen(
        cmd,
        shell=shell_arg,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        close_fds=True,
        env=env,
    )
    debug_stdout = collections.deque(maxlen=100)
    while 1:
        line = s.stdout.readline().decode("utf-8", errors="replace")
        if line.rstrip():
            debug_stdout.append(line)
            logger.debug(line.rstrip())
        exitcode = s.poll()
        if exitcode is not None:
            for line in s.stdout:
                debug_stdout.append(line.decode("utf-8", errors="replace"))
            s.communicate()
            s.stdout.close()
            if exitcode != 0:
                raise ExternalToolFailure(exitcode, cmd_str, "".join(debug_stdout), descr)
            break
    # Check for problems not identified by shell return codes
    if checks:
        for check in checks:
            if not check():
                raise MissingOutput(cmd_str, getattr(check, "target_file", None),
                                    "".join(debug_stdout), descr)

# checks for validating run completed successfully

def file_nonempty(target_file):
    def check():
        ok = utils.file_exists(target_file)
        if not ok:
            logger.info("Did not find non-empty output file {0}".format(target_file))
        return ok
    check.target_file = target_file
    return check

def file_exists(target_file):
    def check():
        ok = os.path.exists(target_file)
        if not ok:
            logger.info("Did not find output file {0}".format(target_file))
        return ok
    check.target_file = target_file
    return check
