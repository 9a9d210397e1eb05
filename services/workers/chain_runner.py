from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from libs.calculator_core import ChainProgram, Evaluator, InvalidArgument, load_chain_program

# run ids and program ids become file names
_SAFE_NAME = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


class ProgramNotFound(FileNotFoundError):
    pass


def _safe_name(value: str, what: str) -> str:
    if not _SAFE_NAME.match(value) or ".." in value:
        raise InvalidArgument(f"{what} {value!r} may only contain letters, digits, '.', '_' and '-'")
    return value


class ChainRunner:
    """Runs stored chain programs from ``<base>/config/programs``."""

    def __init__(self, *, base_path: Path | None = None, evaluator: Optional[Evaluator] = None) -> None:
        self.base_path = base_path or Path.cwd()
        self.evaluator = evaluator or Evaluator()
        self.logger = logging.getLogger("calculator.chain_runner")

    @property
    def programs_root(self) -> Path:
        return self.base_path / "config" / "programs"

    def list_programs(self) -> List[str]:
        if not self.programs_root.exists():
            return []
        return sorted(path.stem for path in self.programs_root.glob("*.xml"))

    def run_program(self, program_path: Path, *, overrides: Optional[Dict[str, object]] = None) -> Dict[str, object]:
        program = load_chain_program(program_path)
        overrides = overrides or {}
        run_id = str(overrides.get("run_id") or datetime.now(timezone.utc).strftime("run-%Y%m%dT%H%M%S"))
        _safe_name(run_id, "Run id")
        initial = overrides.get("initial", program.initial_value)
        self.logger.info("Starting chain %s run_id=%s (%s steps)", program.program_id, run_id, len(program.steps))
        chain = self.evaluator.start_chain(initial)
        start = chain.result()
        chain.apply_all(program.as_pairs())
        result = {
            "program_id": program.program_id,
            "run_id": run_id,
            "initial": start,
            "result": chain.result(),
            "steps": len(program.steps),
        }
        self._write_run_log(program, result)
        self.logger.info("Completed chain %s result=%s", program.program_id, result["result"])
        return result

    def run_by_id(self, program_id: str, *, overrides: Optional[Dict[str, object]] = None) -> Dict[str, object]:
        program_path = self.programs_root / f"{_safe_name(program_id, 'Program id')}.xml"
        if not program_path.exists():
            raise ProgramNotFound(f"Chain program {program_path} not found")
        return self.run_program(program_path, overrides=overrides)

    def _write_run_log(self, program: ChainProgram, result: Dict[str, object]) -> None:
        logs_root = self.base_path / "logs" / "programs"
        logs_root.mkdir(parents=True, exist_ok=True)
        log_entry = {
            **result,
            "version": program.version,
            "executed_at": datetime.now(timezone.utc).isoformat(),
            "config_path": str(program.path or ""),
        }
        log_path = logs_root / f"{program.program_id}_{result['run_id']}.log"
        # allow_nan keeps overflowed results loggable
        log_path.write_text(json.dumps(log_entry, indent=2, allow_nan=True))
        self.logger.info("Chain log recorded at %s", log_path)
