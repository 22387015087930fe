"""FastAPI application - REST endpoints for running page queries"""
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import Body, FastAPI, HTTPException
from pydantic import BaseModel, Field

import sys

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from application.ports.page_driver import PageDriverPort
from application.query import Query
from application.services.execution_deps import ExecutionDeps
from application.services.execution_error_builder import ExecutionErrorBuilder
from domain.defaults import QueryDefaults
from domain.exceptions import InvalidMethod, InvalidPipeline, InvalidQuery
from infrastructure.config.env_defaults_provider import EnvDefaultsProvider
from infrastructure.drivers.static_driver import StaticPageDriver
from infrastructure.logging.composite_logger import CompositeLogger
from infrastructure.logging.console_logger import ConsoleLogger
from infrastructure.logging.loguru_logger import LoguruLogger
from infrastructure.query.base_loader import QueryLoadError
from infrastructure.query.file_finder import QueryFileFinder
from infrastructure.query.loader_registry import QueryLoaderRegistry
from infrastructure.query.yaml_loader import YamlQueryLoader


class RunQueryRequest(BaseModel):
    """Inline query definition"""
    url: str = Field(description="Start URL")
    method: str = Field(default="GET", description="GET or POST")
    post_data: Optional[str] = Field(default=None, description="POST body")
    steps: List[Dict[str, Any]] = Field(default_factory=list, description="go / wait_for / group_by / select steps")


class ErrorDetailResponse(BaseModel):
    """Structured error detail"""
    code: str = Field(description="Error code")
    message: str = Field(description="Error message")
    status: Optional[int] = Field(default=None, description="HTTP status of the failing navigation")


class RunQueryResponse(BaseModel):
    """Query run response"""
    success: bool = Field(description="True when the query produced its records")
    results: Optional[List[Dict[str, Optional[str]]]] = Field(default=None, description="Extracted records")
    error: Optional[str] = Field(default=None, description="Error message")
    error_detail: Optional[ErrorDetailResponse] = Field(default=None, description="Structured error detail")


app = FastAPI(
    title="pagequery",
    description="Declarative page extraction queries",
    version="1.0.0",
)

QUERIES_DIR = Path(__file__).parent.parent / "queries"
CONSTRUCTION_ERRORS = (InvalidQuery, InvalidMethod, InvalidPipeline, QueryLoadError)


def load_defaults() -> QueryDefaults:
    return EnvDefaultsProvider().get()


def create_driver(defaults: QueryDefaults) -> PageDriverPort:
    return StaticPageDriver(defaults=defaults)


def _build_logger() -> CompositeLogger:
    return CompositeLogger(
        [
            ConsoleLogger(),
            LoguruLogger(),
        ]
    )


@app.get("/")
def read_root():
    """Health check"""
    return {"status": "ok", "service": "pagequery"}


@app.post("/queries/run", response_model=RunQueryResponse)
def run_inline_query(request: RunQueryRequest = Body(...)) -> RunQueryResponse:
    try:
        query = YamlQueryLoader().load_from_dict(request.model_dump())
    except CONSTRUCTION_ERRORS as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _execute(query)


@app.post("/queries/{query_id}/run", response_model=RunQueryResponse)
def run_named_query(query_id: str) -> RunQueryResponse:
    path = QueryFileFinder(QUERIES_DIR).find_by_id(query_id)
    if path is None:
        raise HTTPException(status_code=404, detail=f"Query not found: {query_id}")

    try:
        query = QueryLoaderRegistry().get_loader(path).load_from_file(path)
    except CONSTRUCTION_ERRORS as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _execute(query)


def _execute(query: Query) -> RunQueryResponse:
    defaults = load_defaults()
    logger = _build_logger().bind(url=query.url)
    deps = ExecutionDeps(logger=logger, defaults=defaults)

    try:
        results = query.run(create_driver(defaults), deps=deps)
    except Exception as e:
        detail = ExecutionErrorBuilder().build_from_exception(e)
        return RunQueryResponse(
            success=False,
            error=detail.message,
            error_detail=ErrorDetailResponse(code=detail.code, message=detail.message, status=detail.status),
        )

    return RunQueryResponse(success=True, results=results)
