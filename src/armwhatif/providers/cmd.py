"""Run the Azure CLI and capture its output."""

import os
import subprocess
import threading
from dataclasses import dataclass, field
from typing import IO, List, Optional
from ..config.project import DEFAULT_AZ_BINARY
from ..utils.errors import CommandError
from ..utils.logging import get_logger

logger = get_logger("providers.cmd")


@dataclass
class CommandOptions:
    """Executable, arguments and working directory for one command."""
    binary: str = DEFAULT_AZ_BINARY
    flags: List[str] = field(default_factory=list)
    cwd: Optional[str] = None
    timeout: Optional[float] = None


def _forward_lines(stream: IO[bytes], binary: str, captured: List[bytes]) -> None:
    """Log each stderr line as it arrives so long runs are visible."""
    for line in iter(stream.readline, b""):
        captured.append(line)
        text = line.decode("utf-8", errors="replace").rstrip("\r\n")
        if text:
            logger.debug(f"[{binary}] {text}")
    stream.close()


def _read_all(stream: IO[bytes], chunks: List[bytes]) -> None:
    chunks.append(stream.read())
    stream.close()


def run_command(opts: CommandOptions, *args: str) -> bytes:
    """
    Run ``opts.binary`` with ``args`` followed by ``opts.flags``.

    Args:
        opts: Command options
        args: Leading arguments (e.g. a sub-command)

    Returns:
        Everything the command wrote to stdout

    Raises:
        CommandError: If the binary is missing, times out, or exits non-zero;
            captured stderr is attached
    """
    binary = opts.binary or DEFAULT_AZ_BINARY
    argv = [binary, *args, *opts.flags]
    logger.debug(f"Running command: {' '.join(argv)}")

    try:
        process = subprocess.Popen(
            argv,
            cwd=opts.cwd,
            env=os.environ.copy(),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except FileNotFoundError as e:
        raise CommandError(f"Could not find '{binary}'. Is the Azure CLI installed and on PATH?") from e
    except OSError as e:
        raise CommandError(f"Failed to start '{binary}': {e}") from e

    stdout_chunks: List[bytes] = []
    stderr_lines: List[bytes] = []
    readers = [
        threading.Thread(target=_read_all, args=(process.stdout, stdout_chunks), daemon=True),
        threading.Thread(
            target=_forward_lines,
            args=(process.stderr, os.path.basename(binary), stderr_lines),
            daemon=True,
        ),
    ]
    for reader in readers:
        reader.start()

    try:
        returncode = process.wait(timeout=opts.timeout)
    except subprocess.TimeoutExpired as e:
        process.kill()
        process.wait()
        for reader in readers:
            reader.join()
        raise CommandError(
            f"'{binary}' timed out after {opts.timeout} seconds",
            stderr=b"".join(stderr_lines),
        ) from e

    for reader in readers:
        reader.join()
    stdout = b"".join(stdout_chunks)
    stderr = b"".join(stderr_lines)

    if returncode != 0:
        error = CommandError(
            f"'{binary}' exited with status {returncode}",
            stderr=stderr,
            returncode=returncode,
        )
        detail = error.stderr_text()
        if detail:
            error.args = (f"{error.args[0]}: {detail}",)
        raise error

    return stdout
