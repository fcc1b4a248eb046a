#!/usr/bin/env python -Es
"""Run the assembly, MLST typing and annotation pipeline over a folder of reads.

The folder must only contain FASTQ files (optionally gzipped). Files are
sorted by name and consecutive files are paired as forward and reverse
reads of one sample.

Usage:
  mlstpipeline.py -f <fastq folder> [-o <outname>] [-t <threads>] [-c]
     -o name of the analysis, used to name the output files (default mymlst)
     -t number of threads passed to each program (default 8)
     -c convert prokka.gff to prokka.gtf
     -j number of samples to assemble and annotate at the same time
"""
import sys

from mlstpipe.pipeline.clargs import main

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
