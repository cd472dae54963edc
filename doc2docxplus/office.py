"""Whole-document conversion through an external LibreOffice server."""
from __future__ import annotations

import logging
import shutil
import socket
import subprocess
import tempfile
from pathlib import Path

from .exceptions import OfficeConnectionError, OfficeConversionError
from .utils import PathLike, ensure_output_directory, time_block, to_path
from .validators import validate_input_bytes

LOGGER = logging.getLogger(__name__)

__all__ = ["OfficeConnection", "convert_with_office_server"]

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8100


class OfficeConnection:
    """Connection to an office conversion server (``unoserver``) listening on ``host:port``.

    Conversions are sent to that server with its ``unoconvert`` client, so the
    document is rendered by the listening office instance and no local office
    process is started.
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        *,
        executable: str = "unoconvert",
        timeout: float = 60.0,
        connect_timeout: float = 5.0,
    ) -> None:
        self.host = host
        self.port = port
        self.executable = executable
        self.timeout = timeout
        self.connect_timeout = connect_timeout
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    def connect(self) -> None:
        LOGGER.debug("Probing office server at %s:%d", self.host, self.port)
        try:
            with socket.create_connection((self.host, self.port), timeout=self.connect_timeout):
                pass
        except OSError as exc:
            raise OfficeConnectionError(
                f"Office server is not reachable at {self.host}:{self.port}: {exc}"
            ) from exc
        self._connected = True
        LOGGER.info("Connected to office server at %s:%d", self.host, self.port)

    def convert(self, input_path: PathLike, output_path: PathLike) -> Path:
        if not self._connected:
            raise OfficeConnectionError("Office connection is not open; call connect() first")

        source = to_path(input_path)
        destination = to_path(output_path)
        ensure_output_directory(destination)
        outdir = Path(tempfile.mkdtemp(prefix="doc2docxplus_office_"))
        produced = outdir / f"{source.stem}.docx"
        try:
            command = [
                self.executable,
                "--host",
                self.host,
                "--port",
                str(self.port),
                "--convert-to",
                "docx",
                str(source),
                str(produced),
            ]
            try:
                completed = subprocess.run(command, capture_output=True, text=True, timeout=self.timeout)
            except subprocess.TimeoutExpired as exc:
                raise OfficeConversionError(
                    f"Office conversion of {source} timed out after {self.timeout:g}s"
                ) from exc
            except OSError as exc:
                raise OfficeConversionError(f"Unable to start {self.executable}: {exc}") from exc

            if completed.returncode != 0:
                raise OfficeConversionError(
                    f"Office conversion failed with exit code {completed.returncode}: {completed.stderr.strip()}"
                )
            if not produced.exists():
                raise OfficeConversionError(f"Office conversion produced no output for {source}")
            shutil.move(str(produced), str(destination))
        finally:
            shutil.rmtree(outdir, ignore_errors=True)
        LOGGER.info("Office conversion completed via %s:%d: %s -> %s", self.host, self.port, source, destination)
        return destination

    def disconnect(self) -> None:
        if self._connected:
            LOGGER.debug("Disconnected from office server at %s:%d", self.host, self.port)
        self._connected = False

    def __enter__(self) -> "OfficeConnection":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disconnect()


def convert_with_office_server(
    data: bytes,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    *,
    timeout: float = 60.0,
) -> bytes:
    """Convert ``.doc`` bytes through the office server and return the DOCX bytes."""
    content = validate_input_bytes(data)
    workdir = Path(tempfile.mkdtemp(prefix="doc2docxplus_"))
    try:
        input_path = workdir / "input.doc"
        output_path = workdir / "output.docx"
        input_path.write_bytes(content)
        with time_block(LOGGER, "Office server conversion"):
            with OfficeConnection(host, port, timeout=timeout) as connection:
                connection.convert(input_path, output_path)
        return output_path.read_bytes()
    finally:
        shutil.rmtree(workdir, ignore_errors=True)
