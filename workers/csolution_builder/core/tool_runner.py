"""
Tool runner — blocking child-process execution for companion binaries.

Every invocation waits for the child to terminate.  Quiet runs capture
the output; otherwise stdout is streamed to the console line by line as
the tool writes it.  No timeout is enforced unless the caller asks for one.
"""
from __future__ import annotations

import logging
import os
import subprocess
import sys
import threading
from pathlib import Path
from typing import List, Optional, Tuple

from csolution_builder.core.errors import ToolExecutionError, ToolNotFound
from csolution_builder.policy.options import InstallConfig

logger = logging.getLogger(__name__)


class ToolRunner:
    """Runs a binary with arguments and returns its stdout."""

    def __init__(self, timeout: Optional[int] = None):
        self.timeout = timeout

    def execute(self, binary: str, quiet: bool, *args: str) -> str:
        """
        Execute *binary* with *args*.

        When *quiet* is False the tool's stdout is echoed as it arrives and
        its stderr goes straight to the console.
        Raises ToolExecutionError on spawn failure, timeout or nonzero exit.
        """
        cmd = [str(binary), *args]
        logger.debug("Executing: %s", " ".join(cmd))

        if quiet:
            returncode, stdout, stderr = self._capture(cmd)
        else:
            returncode, stdout, stderr = self._stream(cmd)

        if returncode != 0:
            detail = (stderr or stdout).strip()
            message = f"'{Path(cmd[0]).name} {' '.join(args)}' exited with code {returncode}"
            if detail:
                message = f"{message}: {detail}"
            logger.error(message)
            raise ToolExecutionError(
                message,
                command=cmd,
                returncode=returncode,
                output=stdout,
            )

        return stdout

    def _timed_out(self, cmd: List[str]) -> ToolExecutionError:
        logger.error("%s timed out after %ss", cmd[0], self.timeout)
        return ToolExecutionError(
            f"'{Path(cmd[0]).name}' timed out after {self.timeout}s", command=cmd
        )

    def _start_failed(self, cmd: List[str], e: OSError) -> ToolExecutionError:
        logger.error("failed to start %s: %s", cmd[0], e)
        return ToolExecutionError(f"failed to start '{cmd[0]}': {e}", command=cmd)

    def _capture(self, cmd: List[str]) -> Tuple[int, str, str]:
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                timeout=self.timeout,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except subprocess.TimeoutExpired as e:
            raise self._timed_out(cmd) from e
        except OSError as e:
            raise self._start_failed(cmd, e) from e
        return result.returncode, result.stdout or "", result.stderr or ""

    def _stream(self, cmd: List[str]) -> Tuple[int, str, str]:
        try:
            proc = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            raise self._start_failed(cmd, e) from e

        expired = threading.Event()

        def _kill():
            expired.set()
            proc.kill()

        timer = None
        if self.timeout is not None:
            timer = threading.Timer(self.timeout, _kill)
            timer.daemon = True
            timer.start()

        lines = []
        try:
            for line in proc.stdout:
                lines.append(line)
                sys.stdout.write(line)
                sys.stdout.flush()
            returncode = proc.wait()
        finally:
            if timer is not None:
                timer.cancel()
            proc.stdout.close()

        if expired.is_set():
            raise self._timed_out(cmd)
        return returncode, "".join(lines), ""


def locate_tool(install_config: InstallConfig, name: str) -> Path:
    """Return the path of *name* inside the install bin directory."""
    path = install_config.binary(name)
    if not path.exists():
        logger.error("%s was not found: \"%s\"", name, path)
        raise ToolNotFound(name, str(path))
    return path


def update_env_vars(bin_path: Path, etc_path: Path) -> None:
    """
    Export install locations so child tools can find each other.

    CMSIS_BUILD_ROOT always points at *bin_path*; CMSIS_COMPILER_ROOT
    defaults to *etc_path* unless the user already set it.
    """
    os.environ["CMSIS_BUILD_ROOT"] = str(bin_path)
    os.environ.setdefault("CMSIS_COMPILER_ROOT", str(etc_path))

    path_entries = os.environ.get("PATH", "").split(os.pathsep)
    if str(bin_path) not in path_entries:
        os.environ["PATH"] = os.pathsep.join([str(bin_path), *filter(None, path_entries)])
