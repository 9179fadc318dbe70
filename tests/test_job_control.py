import subprocess

from oscsh.job_control import JobTable


def _start(*args):
    return subprocess.Popen(list(args))


class TestJobTable:
    def test_add_reports_pid(self, capsys):
        jobs = JobTable()
        proc = _start("sleep", "5")
        try:
            jobs.add(proc, "sleep 5")
            assert proc.pid in jobs
            assert f"(PID: {proc.pid})" in capsys.readouterr().out
        finally:
            proc.kill()
            proc.wait()

    def test_reap_finished(self, capsys):
        jobs = JobTable()
        proc = _start("true")
        jobs.add(proc, "true")
        proc.wait()
        assert jobs.reap() == [proc.pid]
        assert len(jobs) == 0
        assert f"[{proc.pid}] finished: true" in capsys.readouterr().out

    def test_reap_leaves_running(self):
        jobs = JobTable()
        proc = _start("sleep", "5")
        try:
            jobs.add(proc, "sleep 5")
            assert jobs.reap() == []
            assert len(jobs) == 1
        finally:
            proc.kill()
            proc.wait()

    def test_show_empty(self, capsys):
        JobTable().show()
        assert capsys.readouterr().out == "No background jobs.\n"

    def test_show_running(self, capsys):
        jobs = JobTable()
        proc = _start("sleep", "5")
        try:
            jobs.add(proc, "sleep 5")
            capsys.readouterr()
            jobs.show()
            out = capsys.readouterr().out
            assert "PID" in out
            assert str(proc.pid) in out
            assert "sleep 5" in out
        finally:
            proc.kill()
            proc.wait()

    def test_show_exit_code(self, capsys):
        jobs = JobTable()
        ok = _start("true")
        failed = _start("false")
        jobs.add(ok, "true")
        jobs.add(failed, "false")
        ok.wait()
        failed.wait()
        capsys.readouterr()
        jobs.show()
        out = capsys.readouterr().out
        assert f"{ok.pid:<8} true  [exited 0]" in out
        assert f"{failed.pid:<8} false  [exited 1]" in out

    def test_show_then_reap(self, capsys):
        jobs = JobTable()
        proc = _start("true")
        jobs.add(proc, "true")
        proc.wait()
        jobs.show()
        assert jobs.reap() == [proc.pid]
