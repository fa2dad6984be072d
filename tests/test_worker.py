"""Unit tests for WorkerProcess using real Pipe connections."""
from multiprocessing import Pipe

import pytest

from calc_solver.batch.worker import WorkerProcess


@pytest.mark.parametrize(
    "expr,expected",
    [
        ("2 + 3", 5.0),
        ("10 - 4", 6.0),
        ("3 * 4", 12.0),
        ("8 / 2", 4.0),
        ("(2 + 3) * 4", 20.0),
    ],
)
def test_worker_sends_result_for_valid_expression(expr: str, expected: float) -> None:
    """Worker sends computed result through the connection for valid expressions."""
    parent_conn, child_conn = Pipe()
    worker = WorkerProcess(conn=child_conn, expression=expr, line_number=1)
    worker.run()

    msg = parent_conn.recv()
    assert msg["line"] == 1
    assert msg["expression"] == expr
    assert msg["result"] == expected
    assert "error" not in msg


@pytest.mark.parametrize(
    "expr,status",
    [
        ("2 +", "evaluation_error"),
        ("3 4 + 5", "evaluation_error"),
        ("5 / 0", "evaluation_error"),
        (")1+2(", "parse_error"),
        ("1 + y", "parse_error"),
    ],
)
def test_worker_sends_error_for_invalid_expression(expr: str, status: str) -> None:
    """Worker sends an error message and status for malformed arithmetic expressions."""
    parent_conn, child_conn = Pipe()
    worker = WorkerProcess(conn=child_conn, expression=expr, line_number=2)
    worker.run()

    msg = parent_conn.recv()
    assert msg["line"] == 2
    assert msg["expression"] == expr
    assert msg["status"] == status
    assert isinstance(msg["error"], str)
    assert "result" not in msg


def test_worker_closes_connection() -> None:
    """The child end of the pipe is closed once the worker has run."""
    parent_conn, child_conn = Pipe()
    WorkerProcess(conn=child_conn, expression="1 + 1", line_number=1).run()
    parent_conn.recv()
    assert child_conn.closed


def test_worker_rejects_empty_expression() -> None:
    """Pydantic validation prevents creating WorkerProcess with empty expression."""
    _, child_conn = Pipe()
    with pytest.raises(ValueError):
        WorkerProcess(conn=child_conn, expression="   ", line_number=1)


def test_worker_rejects_invalid_line_number() -> None:
    """Line numbers start at 1."""
    _, child_conn = Pipe()
    with pytest.raises(ValueError):
        WorkerProcess(conn=child_conn, expression="1 + 1", line_number=0)
