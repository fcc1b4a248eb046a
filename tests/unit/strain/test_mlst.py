import os

from mlstpipe.strain import mlst


def _stage(workspace, *names):
    os.makedirs(workspace)
    for name in names:
        with open(os.path.join(workspace, name), "w") as out_handle:
            out_handle.write(">c\nACGT\n")


class TestRunTyping(object):

    def test_report_in_working_root(self, fake_tools, run_config):
        workspace = os.path.join(run_config.work_dir, "tmp_mlst")
        _stage(workspace, "sampleB_R2.fasta", "sampleA_R2.fasta")
        result = mlst.run_typing(workspace, run_config)
        assert result.report == os.path.join(run_config.work_dir, "mymlst_MLST.tsv")
        assert result.rows == 2
        with open(result.report) as in_handle:
            rows = [l.split("\t")[0] for l in in_handle]
        assert rows == ["sampleA_R2.fasta", "sampleB_R2.fasta"]

    def test_command(self, mocker, run_config):
        def _write_report(cmd, descr):
            out_file = cmd.split(" > ")[-1]
            with open(out_file, "w") as out_handle:
                out_handle.write("a\tsaureus\t5\nb\tsaureus\t8\n")
        run = mocker.patch("mlstpipe.strain.mlst.do.run", side_effect=_write_report)
        workspace = os.path.join(run_config.work_dir, "tmp_mlst")
        _stage(workspace, "x.fasta")
        result = mlst.run_typing(workspace, run_config)
        cmd = run.call_args[0][0]
        assert cmd.startswith("mlst -t 2 -q %s > " % os.path.join(workspace, "x.fasta"))
        assert result.rows == 2
