from __future__ import annotations

import logging
import math
import os
from pathlib import Path
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from libs.calculator_core import (
    ArithmeticInvalid,
    CalculatorError,
    Evaluator,
    InvalidArgument,
    MetricsEmitter,
    Operation,
    UnsupportedOperation,
)
from libs.logging_utils import configure_logging, log_exception
from services.workers.chain_runner import ChainRunner, ProgramNotFound

BASE_PATH = Path(os.getenv("CALCULATOR_BASE_PATH", Path(__file__).resolve().parents[2]))
ERROR_PREFIXES = {
    InvalidArgument.error_type: "Invalid input",
    UnsupportedOperation.error_type: "Unsupported operation",
    ArithmeticInvalid.error_type: "Math error",
}

configure_logging()

app = FastAPI(title="Calculator Service", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CALCULATOR_CORS_ORIGINS", "*").split(","),
    allow_methods=["*"],
    allow_headers=["*"],
)
logger = logging.getLogger("calculator.service")
metrics = MetricsEmitter()
evaluator = Evaluator(metrics=metrics)
runner = ChainRunner(base_path=BASE_PATH, evaluator=evaluator)


class CalculationRequest(BaseModel):
    operation: Optional[str] = Field(None, description="ADD | SUBTRACT | MULTIPLY | DIVIDE")
    num1: Optional[float] = Field(None, description="Left operand")
    num2: Optional[float] = Field(None, description="Right operand")


class ChainOperationRequest(BaseModel):
    operation: Optional[str] = Field(None, description="Operation applied to the running value")
    operand: Optional[float] = Field(None, description="Right operand of the step")


class ChainCalculationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    initial_value: Optional[float] = Field(None, alias="initialValue", description="Starting accumulator value")
    operations: Optional[List[ChainOperationRequest]] = Field(None, description="Steps applied in order")


class ProgramRunRequest(BaseModel):
    parameters: Dict[str, float | str] = Field(default_factory=dict, description="Overrides such as run_id or initial")


class CalculationResponse(BaseModel):
    result: Optional[float] = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    success: bool = True


def _error_response(exc: CalculatorError) -> JSONResponse:
    message = f"{ERROR_PREFIXES.get(exc.error_type, 'Error')}: {exc}"
    metrics.incr(f"calculator_rejected_{exc.error_type}")
    body = CalculationResponse(error=message, error_type=exc.error_type, success=False)
    return JSONResponse(status_code=400, content=body.model_dump(exclude_none=True))


def _server_error(message: str, exc: Exception) -> JSONResponse:
    log_exception(logger, message, exc)
    metrics.incr("calculator_internal_errors")
    body = CalculationResponse(error=f"Internal server error: {exc}", success=False)
    return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))


def _finite(value: float) -> float:
    # JSON has no encoding for inf/nan
    if not math.isfinite(value):
        raise ArithmeticInvalid(f"Result is not a finite number ({value})")
    return value


def _validate_calculation_request(request: CalculationRequest) -> Operation:
    if request.operation is None:
        raise InvalidArgument("Operation cannot be None")
    if request.num1 is None or request.num2 is None:
        raise InvalidArgument("Numbers cannot be None")
    return Operation.parse(request.operation)


def _validate_chain_request(request: ChainCalculationRequest) -> List[tuple]:
    if request.initial_value is None:
        raise InvalidArgument("Initial value cannot be None")
    if not request.operations:
        raise InvalidArgument("Operations list cannot be None or empty")
    steps = []
    for step in request.operations:
        if step.operation is None:
            raise InvalidArgument("Operation cannot be None")
        if step.operand is None:
            raise InvalidArgument("Operand cannot be None")
        steps.append((Operation.parse(step.operation), step.operand))
    return steps


@app.get("/api/calculator/health")
def health() -> dict:
    return {"status": "ok", "message": "Calculator service is running"}


@app.get("/api/calculator/operations")
def list_operations() -> List[str]:
    return Operation.names()


@app.get("/api/calculator/metrics")
def read_metrics() -> Dict[str, float]:
    return metrics.snapshot()


@app.post("/api/calculator/calculate", response_model=CalculationResponse, response_model_exclude_none=True)
def calculate(payload: CalculationRequest):
    try:
        operation = _validate_calculation_request(payload)
        result = _finite(evaluator.evaluate(operation, payload.num1, payload.num2))
    except CalculatorError as exc:
        return _error_response(exc)
    except Exception as exc:
        return _server_error("Calculation failed", exc)
    return CalculationResponse(result=result)


@app.post("/api/calculator/chain", response_model=CalculationResponse, response_model_exclude_none=True)
def calculate_chain(payload: ChainCalculationRequest):
    try:
        steps = _validate_chain_request(payload)
        chain = evaluator.start_chain(payload.initial_value)
        for operation, operand in steps:
            chain.apply(operation, operand)
        result = _finite(chain.result())
    except CalculatorError as exc:
        return _error_response(exc)
    except Exception as exc:
        return _server_error("Chain calculation failed", exc)
    return CalculationResponse(result=result)


@app.get("/api/calculator/programs")
def list_programs() -> List[str]:
    try:
        return runner.list_programs()
    except Exception as exc:
        log_exception(logger, "Failed to list chain programs", exc)
        raise HTTPException(status_code=500, detail="Unable to list chain programs") from exc


@app.post("/api/calculator/programs/{program_id}/run")
def run_program(program_id: str, payload: Optional[ProgramRunRequest] = None):
    overrides = payload.parameters if payload is not None else {}
    try:
        result = runner.run_by_id(program_id, overrides=overrides)
        _finite(result["initial"])
        _finite(result["result"])
    except ProgramNotFound as exc:
        log_exception(logger, "Chain run failed - definition missing", exc)
        raise HTTPException(status_code=404, detail=f"Chain program {program_id} not found") from exc
    except CalculatorError as exc:
        return _error_response(exc)
    except Exception as exc:
        return _server_error("Chain program execution failed", exc)
    return {**result, "success": True}
