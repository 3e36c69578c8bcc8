"""Endpoint catalog: the fixed set of generation operations the service offers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .config import ENDPOINT_PATHS

HTTP_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})


class Operation(str, Enum):
    SINGLE_QA = "single_qa"
    BATCH_QA = "batch_qa"
    SINGLE_MCQ = "single_mcq"
    BATCH_MCQ = "batch_mcq"


@dataclass(frozen=True)
class Endpoint:
    path: str
    method: str = "POST"

    def __post_init__(self) -> None:
        if self.method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method '{self.method}'")
        if not self.path.startswith("/"):
            raise ValueError(f"Endpoint path must start with '/': {self.path!r}")

    @classmethod
    def custom(cls, path: str, method: str = "POST") -> "Endpoint":
        """Endpoint outside the canonical catalog."""
        return cls(path=path, method=method.upper())


ENDPOINT_CATALOG: dict[Operation, Endpoint] = {
    op: Endpoint(path=ENDPOINT_PATHS[op.value], method="POST") for op in Operation
}


def resolve(operation: Operation | str) -> Endpoint:
    """
    Look up the endpoint bound to a canonical operation.

    Raises:
        KeyError: ``operation`` is not one of the four canonical operations.
    """
    try:
        return ENDPOINT_CATALOG[Operation(operation)]
    except ValueError as exc:
        raise KeyError(f"Unknown operation '{operation}'") from exc
