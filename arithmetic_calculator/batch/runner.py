"""Evaluate many expressions in parallel, one worker process per expression."""
from multiprocessing import Pipe, Process, cpu_count
from multiprocessing.connection import Connection
from pathlib import Path
from typing import Iterable, List, Optional, TextIO, Tuple

from pydantic import BaseModel, Field

from arithmetic_calculator.batch.worker import WorkerProcess
from arithmetic_calculator.common.logger import logger
from arithmetic_calculator.common.models import EvaluationResult


# (line number, expression, process, receiving end of its pipe)
ActiveWorker = Tuple[int, str, Process, Connection]


class BatchEvaluator(BaseModel):
    """
    Batch evaluator fanning expressions out to worker processes.

    Features:
        - Spawns one worker process per expression.
        - Writes results to disk as soon as a worker finishes.
        - Ensures each worker is joined immediately after finishing.
        - Handles multiple simultaneous workers up to CPU core count.
    """

    output_file: Path = Field(..., description="Path to write computation results")
    max_workers: Optional[int] = Field(default=None, ge=1, description="Upper bound on simultaneous workers")

    @staticmethod
    def _clean_lines(expressions: Iterable[str]) -> List[str]:
        """
        Strip expressions and drop blank ones.

        :param Iterable[str] expressions: Raw expression lines

        :return: Non-empty expressions
        :rtype: List[str]
        """
        return [line.strip() for line in expressions if line.strip()]

    def _worker_limit(self, pending: int) -> int:
        limit: int = self.max_workers or cpu_count()
        return max(1, min(limit, pending))

    def _spawn_worker(self, expr: str, line_number: int) -> ActiveWorker:
        """
        Spawn a WorkerProcess for the given expression and track it with its pipe.

        :param str expr: Arithmetic expression
        :param int line_number: Line number of expression in input

        :return: Tuple of (line number, expression, Process, parent end of the pipe)
        :rtype: Tuple[int, str, Process, Connection]
        """
        parent_conn, child_conn = Pipe(duplex=False)
        worker = WorkerProcess(conn=child_conn, expression=expr, line_number=line_number)
        process = Process(target=worker.run)
        process.start()
        # The child owns its end now
        child_conn.close()
        return line_number, expr, process, parent_conn

    def _collect_finished_workers(
        self, active_workers: List[ActiveWorker], f_out: TextIO
    ) -> List[EvaluationResult]:
        """
        Collect results from all finished workers and write them to the output file.

        Finished workers are removed from active_workers. A worker that exits
        without sending anything is recorded as an error for its line.

        :param list active_workers: List of tuples (line number, expression, Process, Connection)
        :param TextIO f_out: Open file handle for writing results

        :return: Results collected during this pass
        :rtype: List[EvaluationResult]
        """
        collected: List[EvaluationResult] = []
        # Iterate in reverse to safely remove finished workers while iterating
        for i in reversed(range(len(active_workers))):
            line_number, expr, proc, pipe_conn = active_workers[i]
            if not pipe_conn.poll(0.01):
                continue
            try:
                payload = EvaluationResult.model_validate(pipe_conn.recv())
            except EOFError:
                # The child closed its end without sending a result
                proc.join()
                logger.error(f"👷💀 Worker for line {line_number} exited with code {proc.exitcode} without a result")
                payload = EvaluationResult(
                    line=line_number,
                    expression=expr,
                    error=f"worker exited with code {proc.exitcode}",
                )
            pipe_conn.close()
            proc.join()
            active_workers.pop(i)

            f_out.write(payload.format_line() + "\n")
            f_out.flush()
            collected.append(payload)
        return collected

    def run(self, expressions: Iterable[str]) -> List[EvaluationResult]:
        """
        Evaluate every non-blank expression and write one line per result.

        Lines in the output file appear in completion order; the returned list
        is sorted by line number.

        :param Iterable[str] expressions: Expression lines

        :return: All results, ordered by line number
        :rtype: List[EvaluationResult]
        """
        data: List[str] = self._clean_lines(expressions)
        max_workers: int = self._worker_limit(len(data))
        logger.info(f"🧮 Evaluating {len(data)} expressions with up to {max_workers} workers")

        results: List[EvaluationResult] = []
        active_workers: List[ActiveWorker] = []

        with self.output_file.open("w", encoding="utf-8") as f_out:
            for line_number, expr in enumerate(data, start=1):
                # Wait until a worker slot is available
                while len(active_workers) >= max_workers:
                    results.extend(self._collect_finished_workers(active_workers, f_out))

                active_workers.append(self._spawn_worker(expr, line_number))

            # Collect remaining active workers
            while active_workers:
                results.extend(self._collect_finished_workers(active_workers, f_out))

        logger.info(f"💾 Results written to {self.output_file}")
        return sorted(results, key=lambda r: r.line)
