import logging
from dataclasses import dataclass
from typing import Sequence

from cusp.config import MAX_JACOBI_ITERATIONS, JACOBI_EPSILON

logger = logging.getLogger(__name__)

Matrix = list[list[float]]


@dataclass(frozen=True)
class JacobiResult:
    """
    Outcome of a Jacobi solve. The solver never fails: `solution` is the last
    iterate whether or not the convergence test passed.
    """
    solution: list[float]
    iterations: int
    delta_norm: float   # squared norm of the last update
    converged: bool


def build_141_matrix(n: int) -> Matrix:
    """
    Square n x n tri-diagonal matrix with 4 on the diagonal and 1 on both
    neighbouring diagonals.
    """
    matrix = [[0.0] * n for _ in range(n)]
    for row in range(n):
        matrix[row][row] = 4.0
        if row > 0:
            matrix[row][row - 1] = 1.0
        if row < n - 1:
            matrix[row][row + 1] = 1.0
    return matrix


def jacobi_solve(
        matrix: Sequence[Sequence[float]],
        constants: Sequence[float],
        max_iterations: int = MAX_JACOBI_ITERATIONS,
        epsilon: float = JACOBI_EPSILON,
) -> JacobiResult:
    """
    Solve A.x = b by Jacobi iteration starting from x = 0.

    Each sweep computes every x[row] from the previous iterate only. The loop
    stops as soon as the squared euclidean norm of (x_new - x_old) drops
    below `epsilon`, or after `max_iterations` sweeps. The threshold is not
    scaled by n, so bigger systems end on a looser per-coordinate tolerance.
    """
    n = len(constants)
    previous = [0.0] * n
    current = [0.0] * n
    norm = 0.0
    iterations = 0

    for iterations in range(1, max_iterations + 1):
        for row in range(n):
            a_row = matrix[row]
            delta = 0.0
            for col in range(n):
                if col != row:
                    delta += a_row[col] * previous[col]
            current[row] = (constants[row] - delta) / a_row[row]

        norm = 0.0
        for i in range(n):
            d = current[i] - previous[i]
            norm += d * d

        if norm < epsilon:
            logger.debug(f"Jacobi converged after {iterations} iterations (n={n})")
            return JacobiResult(list(current), iterations, norm, True)
        previous, current = current, previous

    # the swap above left the newest iterate in `previous`
    logger.debug(f"Jacobi stopped at the iteration cap {max_iterations} (n={n}, delta={norm:g})")
    return JacobiResult(list(previous), iterations, norm, False)
