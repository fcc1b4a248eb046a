"""High level code for driving the assembly, typing and annotation pipeline.

This structures processing steps into the following modules:

  - run_info.py: Validate the input folder and pair read files into samples.
  - main.py: Run every stage in order over the samples.
    - workspace.py: Stage contigs for typing and gather final outputs.
  - clargs.py: Command line handling and exit codes.
"""
