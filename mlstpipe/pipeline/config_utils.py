"""Loads configurations from .yaml files and expands environment variables.

Also defines the immutable run configuration passed to every pipeline stage.
"""
import collections
import copy
import os
import types

import toolz as tz
import yaml

from mlstpipe.pipeline import run_info

DEFAULT_RUN_NAME = "mymlst"
DEFAULT_THREADS = 8

PipelineConfig = collections.namedtuple(
    "PipelineConfig",
    ["input_folder", "run_name", "threads", "conversion", "work_dir", "jobs", "resources"])

def make_pipeline_config(input_folder, work_dir, run_name=DEFAULT_RUN_NAME,
                         threads=DEFAULT_THREADS, conversion=False, jobs=1,
                         system_config=None):
    """Build the read-only configuration for a run from validated inputs.
    """
    resources = (system_config or {}).get("resources", {}) or {}
    return PipelineConfig(input_folder=os.path.abspath(input_folder),
                          run_name=run_name,
                          threads=int(threads),
                          conversion=bool(conversion),
                          work_dir=os.path.abspath(work_dir),
                          jobs=int(jobs),
                          resources=types.MappingProxyType(copy.deepcopy(resources)))

# ## Retrieval functions

def load_system_config(config_file=None):
    """Load an optional YAML system configuration, handling standard defaults.

    Without a configuration file all programs are looked up on the PATH
    with default options.
    """
    if config_file is None:
        config = {}
    else:
        if not os.path.exists(config_file):
            raise run_info.InvalidInput("Error: could not find system configuration file %s" % config_file,
                                        "Solution: check the path given with --config.")
        config = load_config(config_file)
    if "resources" not in config:
        config["resources"] = {}
    return config

def load_config(config_file):
    """Load YAML config file, replacing environmental variables.
    """
    with open(config_file) as in_handle:
        config = yaml.safe_load(in_handle) or {}
    config = _expand_paths(config)
    if "resources" not in config or config["resources"] is None:
        config["resources"] = {}
    # lowercase resource names, the preferred way to specify
    config["resources"] = {k.lower(): v for k, v in config["resources"].items()}
    return config

def _expand_paths(config):
    for field, setting in config.items():
        if isinstance(config[field], dict):
            config[field] = _expand_paths(config[field])
        else:
            config[field] = expand_path(setting)
    return config

def expand_path(path):
    """ Combines os.path.expandvars with replacing ~ with $HOME.
    """
    if not isinstance(path, str):
        return path
    return os.path.expandvars(os.path.expanduser(path))

def get_resources(name, config):
    """Retrieve resources for a program, pulling from the run or system configuration.
    """
    resources = config.resources if isinstance(config, PipelineConfig) else config.get("resources", {})
    return tz.get_in([name], resources, {}) or {}

def get_program(name, config, default=None):
    """Retrieve the command line executable for a program.

    Resources can specify the program as a plain string or as a
    dictionary with a `cmd` key; otherwise the default name is used.
    """
    pconfig = get_resources(name, config)
    if isinstance(pconfig, str):
        return pconfig
    elif "cmd" in pconfig:
        return pconfig["cmd"]
    elif default is not None:
        return default
    else:
        return name

def get_program_options(name, config):
    """Retrieve additional command line options configured for a program.
    """
    pconfig = get_resources(name, config)
    if isinstance(pconfig, str):
        return []
    opts = pconfig.get("options", [])
    if isinstance(opts, str):
        opts = opts.split()
    return [str(x) for x in opts]
