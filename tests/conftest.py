"""Pytest fixtures and test helper functions"""

import gzip
import os

import pytest

from mlstpipe.pipeline import config_utils

FASTQ_RECORD = "@read1\nACGTACGT\n+\nIIIIIIII\n"

FAKE_TOOLS = {
    "spades.py": """#!/bin/sh
[ "$1" = "--version" ] && { echo "SPAdes genome assembler v3.15.5"; exit 0; }
while [ $# -gt 0 ]; do
  case "$1" in
    -o) out="$2"; shift ;;
  esac
  shift
done
mkdir -p "$out"
printf '>NODE_1_length_4\\nACGT\\n>NODE_2_length_4\\nGGTT\\n' > "$out/contigs.fasta"
""",
    "mlst": """#!/bin/sh
[ "$1" = "--version" ] && { echo "mlst 2.23.0"; exit 0; }
while [ $# -gt 0 ]; do
  case "$1" in
    -t) shift ;;
    -q) ;;
    *) printf '%s\\tsaureus\\t5\\n' "$(basename "$1")" ;;
  esac
  shift
done
""",
    "prokka": """#!/bin/sh
[ "$1" = "--version" ] && { echo "prokka 1.14.6"; exit 0; }
while [ $# -gt 0 ]; do
  case "$1" in
    --outdir) out="$2"; shift ;;
    --prefix) prefix="$2"; shift ;;
    --cpus) shift ;;
  esac
  shift
done
mkdir -p "$out"
printf '##gff-version 3\\n' > "$out/$prefix.gff"
""",
    "agat_convert_sp_gff2gtf.pl": """#!/bin/sh
while [ $# -gt 0 ]; do
  case "$1" in
    --gff) gff="$2"; shift ;;
    -o) out="$2"; shift ;;
  esac
  shift
done
cp "$gff" "$out"
""",
}


def write_fastq(dname, name, compress=False):
    fname = os.path.join(str(dname), name)
    if compress:
        with gzip.open(fname, "wt") as out_handle:
            out_handle.write(FASTQ_RECORD)
    else:
        with open(fname, "w") as out_handle:
            out_handle.write(FASTQ_RECORD)
    return fname


def write_tool(bin_dir, name, content):
    fname = os.path.join(str(bin_dir), name)
    with open(fname, "w") as out_handle:
        out_handle.write(content)
    os.chmod(fname, 0o755)
    return fname


@pytest.fixture
def fastq_dir(tmp_path):
    """Two samples: one plain, one gzip compressed."""
    dname = tmp_path / "fastq"
    dname.mkdir()
    write_fastq(dname, "sampleA_R1.fastq")
    write_fastq(dname, "sampleA_R2.fastq")
    write_fastq(dname, "sampleB_R1.fq.gz", compress=True)
    write_fastq(dname, "sampleB_R2.fq.gz", compress=True)
    return str(dname)


@pytest.fixture
def work_dir(tmp_path):
    dname = tmp_path / "work"
    dname.mkdir()
    return str(dname)


@pytest.fixture
def run_config(fastq_dir, work_dir):
    return config_utils.make_pipeline_config(fastq_dir, work_dir, threads=2)


@pytest.fixture
def fake_tools(tmp_path, monkeypatch):
    """Stand-in programs on the PATH writing the outputs the pipeline expects."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    for name, content in FAKE_TOOLS.items():
        write_tool(bin_dir, name, content)
    monkeypatch.setenv("PATH", str(bin_dir) + os.pathsep + os.environ.get("PATH", ""))
    return str(bin_dir)


@pytest.fixture
def make_fastq():
    """Write a small FASTQ file, optionally gzip compressed."""
    return write_fastq
