import psutil


class JobTable:
    """Background children started by the shell: pid -> (Popen, command line)."""

    def __init__(self):
        self._jobs = {}

    def __len__(self):
        return len(self._jobs)

    def __contains__(self, pid):
        return pid in self._jobs

    def add(self, proc, cmdline):
        """Track a background child and tell the user its PID."""
        self._jobs[proc.pid] = (proc, cmdline)
        print(f"Process running in background (PID: {proc.pid})", flush=True)

    def reap(self):
        """Collect finished background children without blocking.
        Returns: list of reaped pids
        """
        finished = []
        for pid, (proc, cmdline) in list(self._jobs.items()):
            if proc.poll() is not None:
                del self._jobs[pid]
                finished.append(pid)
                print(f"[{pid}] finished: {cmdline}")
        return finished

    def show(self):
        """List background jobs: running ones with their process status,
        finished ones with their exit code"""
        if not self._jobs:
            print("No background jobs.")
            return

        print(f"{'PID':<8} {'Command'}")
        print("-" * 40)
        for pid, (proc, cmd) in self._jobs.items():
            print(f"{pid:<8} {cmd}  [{_job_status(proc)}]")


def _job_status(proc):
    code = proc.poll()
    if code is not None:
        return f"exited {code}"
    try:
        return psutil.Process(proc.pid).status()
    except psutil.NoSuchProcess:
        return "terminated"
    except psutil.Error:
        return "unknown"
