"""Handle file based transactions so generated files are never left half written.

Output files are written to temporary locations during processing and moved
to the final location when finished. This ensures output files will be
complete independent of method of interruption.
"""
import contextlib
import os
import shutil
import tempfile

from mlstpipe import utils


DEFAULT_TMP = "mlstpipetx"


@contextlib.contextmanager
def tx_tmpdir(base_dir=None):
    """Context manager to create and remove a transactional temporary directory.

    Uses a `mlstpipetx` directory inside base_dir, or the current directory.
    """
    base_dir = base_dir or os.getcwd()
    tmpdir_base = utils.get_abspath(os.path.join(base_dir, DEFAULT_TMP))
    utils.safe_makedir(tmpdir_base)
    tmp_dir = tempfile.mkdtemp(dir=tmpdir_base)
    try:
        yield tmp_dir
    finally:
        utils.remove_safe(tmp_dir)
        # shared by concurrent transactions, removed once empty
        try:
            os.rmdir(tmpdir_base)
        except OSError:
            pass


@contextlib.contextmanager
def file_transaction(*files):
    """Wrap file generation in a transaction, moving to output if finishes.

    Temporary files are created next to the final outputs, in the directory
    of the first file.
    """
    orig_names = [f for f in _flatten(files) if f]
    with tx_tmpdir(os.path.dirname(os.path.abspath(orig_names[0]))) as tmpdir:
        safe_names = [os.path.join(tmpdir, os.path.basename(f)) for f in orig_names]
        if len(safe_names) == 1:
            yield safe_names[0]
        else:
            yield tuple(safe_names)
        for safe, orig in zip(safe_names, orig_names):
            if os.path.exists(safe):
                _move_tmp_file(safe, orig)


def _move_tmp_file(safe, orig):
    """Move transaction file to final location, with size checks avoiding failed transfers.
    """
    utils.safe_makedir(os.path.dirname(orig))
    # If we are rolling back a directory and it already exists
    # this will avoid making a nested set of directories
    if os.path.isdir(orig) and os.path.isdir(safe):
        utils.remove_safe(orig)
    want_size = utils.get_size(safe)
    shutil.move(safe, orig)
    transfer_size = utils.get_size(orig)
    assert want_size == transfer_size, (
        "distributed.transaction.file_transaction: File copy error: "
        "file or directory on temporary storage ({}) size {} bytes "
        "does not equal size after transfer ({}) size {} bytes".format(
            safe, want_size, orig, transfer_size))


def _flatten(iterable):
    for elem in iterable:
        if isinstance(elem, (tuple, list)):
            for i in elem:
                yield i
        else:
            yield elem
