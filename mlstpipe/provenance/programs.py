"""Identify the external programs a run depends on, check they are installed
and record their versions in the run log.
"""
import collections
import contextlib
import subprocess

from mlstpipe import utils
from mlstpipe.log import logger
from mlstpipe.pipeline import config_utils

Program = collections.namedtuple("Program", ["name", "cmd", "descr", "url", "note",
                                             "conversion_only", "version_args"])

_cl_progs = [Program("mlst", "mlst", "MLST", "https://github.com/tseemann/mlst", None, False,
                     "--version"),
             Program("spades", "spades.py", "SPAdes", "https://github.com/ablab/spades", None, False,
                     "--version"),
             Program("prokka", "prokka", "Prokka", "https://github.com/tseemann/prokka", None, False,
                     "--version"),
             Program("agat", "agat_convert_sp_gff2gtf.pl", "agat_convert_sp_gff2gtf.pl",
                     "https://github.com/NBISweden/AGAT",
                     "If agat is installed, but this error persists, reactivate the conda environment.",
                     True, None)]

class ToolMissing(Exception):
    """A required external program is not available on the PATH.
    """
    exit_code = 127

    def __init__(self, program, cmd):
        self.program = program
        self.cmd = cmd
        super(ToolMissing, self).__init__("Missing: %s not found (%s)" % (program.descr, cmd))

    @property
    def solution(self):
        lines = ["Information on the installation:", self.program.url]
        if self.program.note:
            lines.append(self.program.note)
        return "\n".join(lines)

def required_programs(conversion=False):
    """Programs needed for a run; the GFF to GTF converter only with conversion.
    """
    return [p for p in _cl_progs if conversion or not p.conversion_only]

def check_programs(system_config, conversion=False, env=None):
    """Ensure every required program resolves to an executable, returning their paths.

    Raises ToolMissing for the first absent program, before any input is read.
    """
    found = collections.OrderedDict()
    for prog in required_programs(conversion):
        cmd = config_utils.get_program(prog.name, system_config, prog.cmd)
        path = utils.which(cmd, env)
        if not path:
            raise ToolMissing(prog, cmd)
        found[prog.name] = path
    return found

def _parse_version(lines):
    """Last word of the last non-empty output line, without a leading `v`.
    """
    lines = [l.strip() for l in lines if l.strip()]
    if not lines:
        return ""
    v = lines[-1].split()[-1]
    if v.startswith("v") and v[1:2].isdigit():
        v = v[1:]
    return v

def get_version(prog, path):
    """Retrieve the version of a single commandline program.
    """
    if not prog.version_args:
        return ""
    try:
        subp = subprocess.Popen([path, prog.version_args], stdout=subprocess.PIPE,
                                stderr=subprocess.STDOUT)
    except OSError:
        return ""
    with contextlib.closing(subp.stdout) as stdout:
        v = _parse_version(stdout.read().decode("utf-8", errors="replace").split("\n"))
    subp.wait()
    return v

def log_versions(found):
    """Write the version of every checked program to the run log.

    `found` maps program names to executables, as returned by check_programs.
    """
    by_name = {p.name: p for p in _cl_progs}
    versions = collections.OrderedDict()
    for name, path in found.items():
        versions[name] = get_version(by_name[name], path)
        logger.info("Program version: %s %s (%s)" % (by_name[name].descr,
                                                     versions[name] or "unknown", path))
    return versions
