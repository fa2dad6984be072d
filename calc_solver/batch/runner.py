"""Solve every expression of a file in parallel worker processes."""
from multiprocessing import Pipe, Process, cpu_count
from multiprocessing.connection import Connection
from pathlib import Path
import tarfile
import tempfile
from typing import List, Optional, TextIO, Tuple
import zipfile

import py7zr
from pydantic import BaseModel, ConfigDict, Field, FilePath

from calc_solver.batch.worker import WorkerProcess
from calc_solver.common.logger import logger


def build_output_path(input_path: Path) -> Path:
    """
    Construct the results file path based on the input file.

    - Preserves the original folder
    - Replaces dots in extensions with underscores
    - Appends '_results.txt' at the end

    Examples
    --------
    input: resources/operations_short.7z
    output: resources/operations_short_7z_results.txt

    :param input_path: Path to the input file
    :return: Path to the output file
    """
    suffixes = "".join(input_path.suffixes)
    suffix_safe = suffixes.replace(".", "_")
    stem = input_path.name[: -len(suffixes)] if suffixes else input_path.name
    return input_path.with_name(f"{stem}{suffix_safe}_results.txt")


def format_payload(payload: dict) -> str:
    """
    Format a worker payload as one line of the results file.

    :param dict payload: Payload sent by a WorkerProcess

    :return: "<expression> = <result>" or "<expression> -> ERROR: <message>"
    :rtype: str
    """
    if "result" in payload:
        return f"{payload['expression']} = {payload['result']}\n"
    return f"{payload['expression']} -> ERROR: {payload['error']}\n"


class BatchRunner(BaseModel):
    """
    Solve every non-empty line of an expression file and write results to disk.

    Features:
        - Reads plain text files or the first .txt file of a .zip, .tar.xz or .7z archive.
        - Spawns one worker process per expression.
        - Writes results immediately to disk as soon as a worker finishes.
        - Handles multiple simultaneous workers up to CPU core count.
    """

    model_config = ConfigDict(frozen=True)

    input_file: FilePath = Field(..., description="File or archive holding one expression per line")
    output_file: Path = Field(..., description="Path to write computation results")
    max_workers: Optional[int] = Field(default=None, ge=1, description="Upper bound on simultaneous workers")

    def _read_expressions(self) -> List[str]:
        """
        Load the input file and return its non-empty lines.

        :return: List of non-empty expression lines
        :rtype: List[str]
        :raises ValueError: If the archive format is unsupported or contains no .txt file
        """
        if self.input_file.suffix == ".txt":
            content = self.input_file.read_text(encoding="utf-8")
        else:
            content = self._extract_archive(self.input_file)

        # Remove empty lines
        return [line.strip() for line in content.splitlines() if line.strip()]

    def _extract_archive(self, archive_path: Path) -> str:
        """
        Extract the first .txt file found in a supported archive and return its content as a string.

        Supported formats:
        - .zip
        - .tar.xz
        - .7z

        :param Path archive_path: Path to the archive file

        :return: Content of the extracted .txt file
        :rtype: str
        :raises ValueError: If no .txt file is found or format is unsupported
        """
        # Create a temporary directory for safe extraction
        with tempfile.TemporaryDirectory() as tmpdir:
            tmpdir_path = Path(tmpdir)
            if archive_path.suffix == ".zip":
                with zipfile.ZipFile(archive_path, "r") as zf:
                    txt_files = [f for f in zf.namelist() if f.endswith(".txt")]
                    if not txt_files:
                        raise ValueError("📄❌ No .txt file found in zip archive")
                    zf.extract(txt_files[0], path=tmpdir_path)
                    return (tmpdir_path / txt_files[0]).read_text(encoding="utf-8")

            elif archive_path.suffixes[-2:] == [".tar", ".xz"]:
                with tarfile.open(archive_path, "r:xz") as tf:
                    txt_files = [m for m in tf.getmembers() if m.name.endswith(".txt")]
                    if not txt_files:
                        raise ValueError("📄❌ No .txt file found in tar.xz archive")
                    tf.extract(txt_files[0], path=tmpdir_path, filter="data")
                    return (tmpdir_path / txt_files[0].name).read_text(encoding="utf-8")

            elif archive_path.suffix == ".7z":
                with py7zr.SevenZipFile(archive_path, mode="r") as archive:
                    txt_files = [f for f in archive.getnames() if f.endswith(".txt")]
                    if not txt_files:
                        raise ValueError("📄❌ No .txt file found in 7z archive")
                    archive.extract(targets=[txt_files[0]], path=tmpdir_path)
                    return (tmpdir_path / txt_files[0]).read_text(encoding="utf-8")

            else:
                raise ValueError(f"📄❌ Unsupported archive format: {archive_path.suffix}")

    def _spawn_worker(self, expr: str, line_number: int) -> Tuple[Process, Connection]:
        """
        Spawn a WorkerProcess for the given expression and return process and pipe.

        :param str expr: Arithmetic expression
        :param int line_number: Line number of expression in input

        :return: Tuple of (Process, parent_pipe)
        :rtype: Tuple[Process, Connection]
        """
        parent_conn, child_conn = Pipe()
        worker = WorkerProcess(conn=child_conn, expression=expr, line_number=line_number)
        process = Process(target=worker.run)
        process.start()
        # The child owns its end now
        child_conn.close()
        return process, parent_conn

    def _collect_finished_workers(
        self, active_workers: List[Tuple[Process, Connection]], f_out: TextIO
    ) -> int:
        """
        Collect results from all finished workers and write them to the output file.

        Finished workers are removed from the active_workers list.

        :param list active_workers: List of tuples (Process, Pipe)
        :param TextIO f_out: Open file handle for writing results

        :return: Number of failed expressions among the collected workers
        :rtype: int
        """
        failures = 0
        # Iterate in reverse to safely remove finished workers while iterating
        for i in reversed(range(len(active_workers))):
            proc, pipe_conn = active_workers[i]
            if not proc.is_alive():
                payload = pipe_conn.recv()
                pipe_conn.close()
                proc.join()
                active_workers.pop(i)

                if "result" not in payload:
                    failures += 1

                # Write output immediately
                f_out.write(format_payload(payload))
                f_out.flush()
        return failures

    def run(self) -> int:
        """
        Solve every expression of the input file and write the results file.

        Steps:
            1. Read expressions from the input file or archive.
            2. Spawn worker processes for each expression, respecting max workers.
            3. Write results to output file immediately after each worker finishes.

        Results are written in completion order, not input order.

        :return: Number of expressions that could not be solved
        :rtype: int
        """
        data: List[str] = self._read_expressions()
        logger.info(f"📄 Loaded {len(data)} expressions from {self.input_file}")

        failures = 0
        with self.output_file.open("w", encoding="utf-8") as f_out:
            if not data:
                return failures

            # Limit number of active workers to CPU cores or number of expressions
            max_workers: int = min(self.max_workers or cpu_count(), len(data))
            active_workers: List[Tuple[Process, Connection]] = []

            for line_number, expr in enumerate(data, start=1):
                # Wait until a worker slot is available
                while len(active_workers) >= max_workers:
                    failures += self._collect_finished_workers(active_workers, f_out)

                active_workers.append(self._spawn_worker(expr, line_number))

            # Collect remaining active workers
            while active_workers:
                failures += self._collect_finished_workers(active_workers, f_out)

        logger.info(f"✉️ Results written to {self.output_file} ({failures} failed)")
        return failures
