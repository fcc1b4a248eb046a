import os

import pytest

from mlstpipe.distributed import transaction
from mlstpipe.distributed.transaction import file_transaction, tx_tmpdir


class TestTxTmpdir(object):

    def test_creates_and_removes(self, tmp_path):
        with tx_tmpdir(str(tmp_path)) as tmp_dir:
            assert os.path.isdir(tmp_dir)
            assert os.path.dirname(tmp_dir) == str(tmp_path / transaction.DEFAULT_TMP)
        assert not os.path.exists(tmp_dir)
        assert not (tmp_path / transaction.DEFAULT_TMP).exists()

    def test_removed_on_failure(self, tmp_path):
        with pytest.raises(ValueError):
            with tx_tmpdir(str(tmp_path)) as tmp_dir:
                raise ValueError("interrupted")
        assert not os.path.exists(tmp_dir)


class TestFileTransaction(object):

    def test_moves_finished_file(self, tmp_path):
        out_file = str(tmp_path / "out" / "report.tsv")
        os.makedirs(os.path.dirname(out_file))
        with file_transaction(out_file) as tx_out_file:
            assert tx_out_file != out_file
            assert os.path.basename(tx_out_file) == "report.tsv"
            with open(tx_out_file, "w") as out_handle:
                out_handle.write("row\n")
            assert not os.path.exists(out_file)
        with open(out_file) as in_handle:
            assert in_handle.read() == "row\n"
        assert os.listdir(os.path.dirname(out_file)) == ["report.tsv"]

    def test_failure_leaves_no_output(self, tmp_path):
        out_file = str(tmp_path / "report.tsv")
        with pytest.raises(RuntimeError):
            with file_transaction(out_file) as tx_out_file:
                with open(tx_out_file, "w") as out_handle:
                    out_handle.write("partial")
                raise RuntimeError("interrupted")
        assert os.listdir(str(tmp_path)) == []

    def test_multiple_files(self, tmp_path):
        files = [str(tmp_path / "a.txt"), str(tmp_path / "b.txt")]
        with file_transaction(files) as tx_files:
            assert len(tx_files) == 2
            for fname in tx_files:
                with open(fname, "w") as out_handle:
                    out_handle.write("x")
        assert all(os.path.exists(x) for x in files)

    def test_replaces_existing(self, tmp_path):
        out_file = tmp_path / "ref.fasta"
        out_file.write_text("old")
        with file_transaction(str(out_file)) as tx_out_file:
            with open(tx_out_file, "w") as out_handle:
                out_handle.write("new")
        assert out_file.read_text() == "new"
