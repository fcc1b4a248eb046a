import gzip
import os

from mlstpipe import utils


class TestIsGzipped(object):

    def test_detects_content(self, tmp_path):
        fname = str(tmp_path / "reads")
        with gzip.open(fname, "wt") as out_handle:
            out_handle.write("@r\nA\n+\nI\n")
        assert utils.is_gzipped(fname)

    def test_name_alone_is_not_enough(self, tmp_path):
        fname = tmp_path / "reads.fq.gz"
        fname.write_text("@r\nA\n+\nI\n")
        assert not utils.is_gzipped(str(fname))

    def test_directory(self, tmp_path):
        assert not utils.is_gzipped(str(tmp_path))


def test_remove_safe_handles_files_dirs_and_missing(tmp_path):
    dname = tmp_path / "d"
    (dname / "sub").mkdir(parents=True)
    fname = tmp_path / "f"
    fname.write_text("x")
    utils.remove_safe(str(dname))
    utils.remove_safe(str(fname))
    utils.remove_safe(str(tmp_path / "missing"))
    assert not dname.exists()
    assert not fname.exists()


def test_safe_makedir_nested(tmp_path):
    dname = str(tmp_path / "a" / "b")
    assert utils.safe_makedir(dname) == dname
    assert os.path.isdir(dname)
    utils.safe_makedir(dname)


def test_file_exists_requires_content(tmp_path):
    empty = tmp_path / "empty"
    empty.write_text("")
    full = tmp_path / "full"
    full.write_text("x")
    assert not utils.file_exists(str(empty))
    assert utils.file_exists(str(full))
    assert not utils.file_exists(None)


class TestWhich(object):

    def test_finds_executable_on_path(self, tmp_path):
        exe = tmp_path / "tool"
        exe.write_text("#!/bin/sh\n")
        exe.chmod(0o755)
        assert utils.which("tool", {"PATH": str(tmp_path)}) == str(exe)

    def test_skips_non_executable(self, tmp_path):
        (tmp_path / "tool").write_text("")
        assert utils.which("tool", {"PATH": str(tmp_path)}) is None

    def test_full_path(self, tmp_path):
        exe = tmp_path / "tool"
        exe.write_text("#!/bin/sh\n")
        exe.chmod(0o755)
        assert utils.which(str(exe), {"PATH": ""}) == str(exe)
