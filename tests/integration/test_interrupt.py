"""Integration test for Ctrl-C at an interactive prompt.

Runs the CLI in a child process with stdin held open, waits for the first
prompt and sends SIGINT.  The process must exit promptly with status 130.
"""

from __future__ import annotations

import os
import select
import signal
import subprocess
import sys
import time
from pathlib import Path

import pytest

# Forces prompting even though stdin is a pipe.
_SCRIPT = """
import create_appx_app.resolver as resolver
resolver.is_interactive = lambda: True
from create_appx_app.pipeline import main
main(["--skip-install", "--no-git"])
"""


def _read_until(proc: subprocess.Popen, marker: bytes, deadline: float) -> bytes:
    output = b""
    fd = proc.stdout.fileno()
    while marker not in output:
        remaining = deadline - time.monotonic()
        if remaining <= 0 or proc.poll() is not None:
            break
        ready, _, _ = select.select([fd], [], [], remaining)
        if ready:
            chunk = os.read(fd, 4096)
            if not chunk:
                break
            output += chunk
    return output


@pytest.mark.integration
@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals only")
class TestInterrupt:
    def test_ctrl_c_at_prompt_exits_with_130(self, tmp_path: Path):
        env = {**os.environ, "PYTHONUNBUFFERED": "1", "NO_COLOR": "1"}
        proc = subprocess.Popen(
            [sys.executable, "-c", _SCRIPT],
            cwd=tmp_path,
            env=env,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )
        try:
            output = _read_until(proc, b"project name", time.monotonic() + 30)
            assert b"project name" in output, output.decode(errors="replace")

            proc.send_signal(signal.SIGINT)
            returncode = proc.wait(timeout=10)
        finally:
            if proc.poll() is None:
                proc.kill()
                proc.wait()
            proc.stdin.close()
            proc.stdout.close()

        assert returncode == 130
        assert list(tmp_path.iterdir()) == []
