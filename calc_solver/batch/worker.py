"""Worker process for solving a single arithmetic expression."""
from multiprocessing.connection import Connection

from pydantic import BaseModel, ConfigDict, Field, field_validator

from calc_solver.common.logger import logger
from calc_solver.solver import try_solve


class WorkerProcess(BaseModel):
    """
    Worker process responsible for solving a single arithmetic expression.

    Lifecycle:
        - Spawned by the batch runner
        - Receives one expression only
        - Sends the computed result or error through a Pipe
        - Terminates immediately after computation
    """

    # Make the Pydantic instance immutable (read-only)
    # Allow arbitrary types like multiprocessing.Connection
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    conn: Connection = Field(..., description="Connection object for sending results back to the runner")
    expression: str = Field(..., description="Single arithmetic expression to solve")
    line_number: int = Field(..., ge=1, description="Line number in the input file")

    @field_validator("expression")
    def expression_must_not_be_empty(cls, v: str) -> str:
        """Ensure that the expression is not empty."""
        if not v.strip():
            raise ValueError("Expression cannot be empty")
        return v

    def run(self) -> None:
        """
        Solve the arithmetic expression and send the result or error through the pipe.

        :return: None
        """
        logger.info(f"👷🏁 Worker started on line {self.line_number}: {self.expression}")

        try:
            outcome = try_solve(self.expression)

            if outcome.ok:
                self.conn.send(
                    {
                        "line": self.line_number,
                        "expression": self.expression,
                        "result": outcome.result,
                    }
                )
                logger.info(f"👷✅ Worker finished on line {self.line_number}: {outcome.result}")
            else:
                logger.error(
                    f"👷❌ Worker failed on line {self.line_number} ({outcome.status.value}): {outcome.error}"
                )
                self.conn.send(
                    {
                        "line": self.line_number,
                        "expression": self.expression,
                        "status": outcome.status.value,
                        "error": outcome.error,
                    }
                )

        finally:
            # Always close the connection
            self.conn.close()
