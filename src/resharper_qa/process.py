# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run ``inspectcode`` under a watchdog that enforces timeouts and cancellation."""

from __future__ import annotations

import os
import shutil
import signal

# Bandit: subprocess usage is intentional; arguments are passed as a list and
# ``shell=True`` is never used.
import subprocess  # nosec B404
import tempfile
import threading
import time
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import IO, Final

from .errors import (
    AnalyzerCancelledError,
    AnalyzerExecutionError,
    AnalyzerTimeoutError,
    format_output_preview,
)
from .models import ToolInvocation

DEFAULT_POLL_INTERVAL: Final[float] = 0.2
_IS_WINDOWS: Final[bool] = os.name == "nt"


class CancelToken:
    """Thread-safe flag the host sets to abort an in-flight analysis."""

    __slots__ = ("_event",)

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation of the run observing this token."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        """Return ``True`` once :meth:`cancel` has been called."""
        return self._event.is_set()


class RunStatus(str, Enum):
    """Terminal state of an ``inspectcode`` subprocess."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"
    LAUNCH_FAILED = "launch_failed"


@dataclass(frozen=True, slots=True)
class ProcessOutcome:
    """Explicit result of a subprocess run, including captured output."""

    command: tuple[str, ...]
    status: RunStatus
    returncode: int | None
    stdout: str
    stderr: str
    elapsed: float
    detail: str | None = None

    @property
    def ok(self) -> bool:
        """Return ``True`` when the process exited with status zero."""
        return self.status is RunStatus.SUCCEEDED

    def raise_for_status(self) -> None:
        """Raise the error variant matching a non-successful outcome.

        Raises:
            AnalyzerTimeoutError: When the process exceeded its budget.
            AnalyzerCancelledError: When the host cancelled the run.
            AnalyzerExecutionError: When the process could not be launched or
                exited with a non-zero status.
        """

        if self.status is RunStatus.SUCCEEDED:
            return
        executable = self.command[0] if self.command else "<unknown>"
        if self.status is RunStatus.TIMED_OUT:
            raise AnalyzerTimeoutError(f"'{executable}' {self.detail}", self)
        if self.status is RunStatus.CANCELLED:
            raise AnalyzerCancelledError(f"'{executable}' was cancelled", self)
        if self.status is RunStatus.LAUNCH_FAILED:
            raise AnalyzerExecutionError(f"Unable to launch '{executable}': {self.detail}", self)
        raise AnalyzerExecutionError(
            f"'{executable}' exited with status {self.returncode}.\n"
            f"stdout: {format_output_preview(self.stdout) or '<none>'}\n"
            f"stderr: {format_output_preview(self.stderr) or '<none>'}",
            self,
        )


def build_command(invocation: ToolInvocation) -> list[str]:
    """Return the ``inspectcode`` argument list for ``invocation``.

    Args:
        invocation: Resolved invocation arguments.

    Returns:
        list[str]: Command line starting with the executable.
    """

    return [
        invocation.executable,
        f"/output={invocation.report_file.absolute()}",
        "/no-swea",
        f"/project={invocation.project_name}",
        f"/profile={invocation.settings_file.absolute()}",
        "/no-buildin-settings",
        invocation.solution_file,
    ]


def resolve_executable(executable: str) -> str | None:
    """Return an absolute path for ``executable`` or ``None`` when it cannot be found.

    Args:
        executable: Absolute path or bare program name looked up on ``PATH``.

    Returns:
        str | None: Absolute executable path, or ``None`` if unresolved.
    """

    path = Path(executable)
    if path.is_absolute():
        return str(path) if path.exists() else None
    return shutil.which(executable)


def _terminate_tree(process: subprocess.Popen[bytes]) -> None:
    """Kill ``process`` together with every descendant it spawned."""

    if _IS_WINDOWS:
        # Bandit: fixed argument list targeting the child we launched.
        subprocess.run(  # nosec B603 B607
            ["taskkill", "/F", "/T", "/PID", str(process.pid)],
            check=False,
            capture_output=True,
        )
        process.kill()
        return
    try:
        os.killpg(process.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass


class ProcessRunner:
    """Launch ``inspectcode`` and block until it exits, times out or is cancelled."""

    def __init__(self, *, poll_interval: float = DEFAULT_POLL_INTERVAL) -> None:
        self._poll_interval = poll_interval

    def run(self, invocation: ToolInvocation, *, cancel: CancelToken | None = None) -> ProcessOutcome:
        """Execute ``invocation`` under its configured timeout.

        Configuration is not re-validated here; callers pass a complete invocation.

        Args:
            invocation: Resolved invocation arguments.
            cancel: Optional token that aborts the run when set.

        Returns:
            ProcessOutcome: Explicit result describing how the process ended.
        """

        return self.run_command(build_command(invocation), timeout=invocation.timeout_seconds, cancel=cancel)

    def run_command(
        self,
        command: Sequence[str],
        *,
        timeout: float | None,
        cancel: CancelToken | None = None,
        cwd: Path | None = None,
    ) -> ProcessOutcome:
        """Execute ``command`` in its own process group under a watchdog.

        Args:
            command: Executable followed by its arguments.
            timeout: Wall-clock budget in seconds; ``None`` disables the limit.
            cancel: Optional token that aborts the run when set.
            cwd: Optional working directory for the child.

        Returns:
            ProcessOutcome: Explicit result describing how the process ended.
        """

        if not command:
            raise ValueError("subprocess command requires at least one argument")
        started = time.monotonic()
        requested = tuple(command)
        resolved = resolve_executable(command[0])
        if resolved is None:
            return ProcessOutcome(
                command=requested,
                status=RunStatus.LAUNCH_FAILED,
                returncode=None,
                stdout="",
                stderr="",
                elapsed=0.0,
                detail=f"executable '{command[0]}' was not found",
            )
        argv = [resolved, *command[1:]]
        # Files, not pipes: descendants holding the handles cannot delay completion.
        with tempfile.TemporaryFile() as stdout_sink, tempfile.TemporaryFile() as stderr_sink:
            try:
                # Bandit: argument list is built from validated configuration without a shell.
                process = subprocess.Popen(  # nosec B603
                    argv,
                    cwd=str(cwd) if cwd is not None else None,
                    stdin=subprocess.DEVNULL,
                    stdout=stdout_sink,
                    stderr=stderr_sink,
                    start_new_session=not _IS_WINDOWS,
                    creationflags=getattr(subprocess, "CREATE_NEW_PROCESS_GROUP", 0) if _IS_WINDOWS else 0,
                )
            except OSError as exc:
                return ProcessOutcome(
                    command=tuple(argv),
                    status=RunStatus.LAUNCH_FAILED,
                    returncode=None,
                    stdout="",
                    stderr="",
                    elapsed=time.monotonic() - started,
                    detail=str(exc),
                )
            status, detail = self._watch(process, started=started, timeout=timeout, cancel=cancel)
            return ProcessOutcome(
                command=tuple(argv),
                status=status,
                returncode=process.returncode,
                stdout=_read_output(stdout_sink),
                stderr=_read_output(stderr_sink),
                elapsed=time.monotonic() - started,
                detail=detail,
            )

    def _watch(
        self,
        process: subprocess.Popen[bytes],
        *,
        started: float,
        timeout: float | None,
        cancel: CancelToken | None,
    ) -> tuple[RunStatus, str | None]:
        try:
            return self._poll(process, started=started, timeout=timeout, cancel=cancel)
        except BaseException:
            # Children run in their own session; the caller's SIGINT never reaches them.
            _terminate_tree(process)
            raise

    def _poll(
        self,
        process: subprocess.Popen[bytes],
        *,
        started: float,
        timeout: float | None,
        cancel: CancelToken | None,
    ) -> tuple[RunStatus, str | None]:
        deadline = None if timeout is None else started + timeout
        while True:
            if cancel is not None and cancel.cancelled:
                _stop(process)
                return RunStatus.CANCELLED, "was cancelled"
            wait_for = self._poll_interval
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    _stop(process)
                    return RunStatus.TIMED_OUT, f"timed out after {timeout:.1f}s"
                wait_for = min(wait_for, remaining)
            try:
                process.wait(timeout=wait_for)
            except subprocess.TimeoutExpired:
                continue
            # Build servers left behind by the child share its process group.
            _terminate_tree(process)
            status = RunStatus.SUCCEEDED if process.returncode == 0 else RunStatus.FAILED
            return status, None


def _stop(process: subprocess.Popen[bytes]) -> None:
    _terminate_tree(process)
    process.wait()


def _read_output(sink: IO[bytes]) -> str:
    sink.seek(0)
    return sink.read().decode("utf-8", errors="replace")


__all__ = [
    "CancelToken",
    "DEFAULT_POLL_INTERVAL",
    "ProcessOutcome",
    "ProcessRunner",
    "RunStatus",
    "build_command",
    "resolve_executable",
]
