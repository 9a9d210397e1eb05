from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from .operations import Operation


@dataclass
class ChainStep:
    operation: Operation
    operand: float


@dataclass
class ProgramMetadata:
    description: Optional[str] = None
    owner: Optional[str] = None


@dataclass
class ChainProgram:
    program_id: str
    initial_value: float
    steps: List[ChainStep]
    version: str = "1.0"
    metadata: ProgramMetadata = field(default_factory=ProgramMetadata)
    path: Optional[Path] = None

    def as_pairs(self) -> List[Tuple[Operation, float]]:
        return [(step.operation, step.operand) for step in self.steps]
