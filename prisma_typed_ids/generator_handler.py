"""
Prisma generator protocol handler.

Prisma runs generators as child processes and talks line-delimited JSON-RPC
2.0: requests arrive on stdin, responses are written to stderr. Anything on
stderr that is not JSON is shown by Prisma as generator log output.
"""

import json
import sys
import traceback
from typing import Any, Dict, Optional, TextIO, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .codegen import __version__, convert_datamodel, load_config, rewrite_declarations_file
from .logging_config import get_logger

logger = get_logger(__name__)

GENERATOR_NAME = "prisma-typed-ids"
DEFAULT_OUTPUT = "../generated"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
SERVER_ERROR = -32000


class ProtocolError(Exception):
    """Raised for requests that cannot be answered."""

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code


class Request(BaseModel):
    jsonrpc: str = "2.0"
    id: Union[int, str, None] = None
    method: str
    params: Optional[Dict[str, Any]] = None


class ErrorObject(BaseModel):
    code: int
    message: str
    data: Optional[Dict[str, Any]] = None


class SuccessResponse(BaseModel):
    jsonrpc: str = "2.0"
    id: Union[int, str, None]
    result: Any = None


class ErrorResponse(BaseModel):
    jsonrpc: str = "2.0"
    id: Union[int, str, None]
    error: ErrorObject


class Manifest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pretty_name: str = Field(alias="prettyName")
    default_output: str = Field(alias="defaultOutput")
    version: str


class GeneratorOutput(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    value: Optional[str] = None
    from_env_var: Optional[str] = Field(default=None, alias="fromEnvVar")


class GeneratorInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    output: Optional[GeneratorOutput] = None
    config: Dict[str, Any] = Field(default_factory=dict)


class GenerateParams(BaseModel):
    model_config = ConfigDict(extra="allow")

    generator: GeneratorInfo
    dmmf: Dict[str, Any]


class GeneratorHandler:
    """Answers ``getManifest`` and ``generate`` requests from Prisma."""

    def __init__(self, stdin: Optional[TextIO] = None, stderr: Optional[TextIO] = None):
        self.stdin = stdin or sys.stdin
        self.stderr = stderr or sys.stderr

    def run(self) -> None:
        """Serve requests until stdin closes."""
        for line in self.stdin:
            response = self.handle_line(line)
            if response is None:
                continue
            self.stderr.write(response + "\n")
            self.stderr.flush()

    def handle_line(self, line: str) -> Optional[str]:
        """Answer one raw request line; blank lines are ignored."""
        if not line.strip():
            return None

        try:
            payload = json.loads(line)
        except json.JSONDecodeError as e:
            return self._error(None, PARSE_ERROR, f"Invalid JSON: {e}")

        try:
            request = Request.model_validate(payload)
        except ValidationError as e:
            request_id = payload.get("id") if isinstance(payload, dict) else None
            return self._error(request_id, INVALID_REQUEST, f"Invalid request: {e}")

        try:
            result = self.dispatch(request)
        except ProtocolError as e:
            return self._error(request.id, e.code, str(e))
        except Exception as e:
            logger.error("%s failed: %s", request.method, e)
            return self._error(
                request.id, SERVER_ERROR, str(e), {"stack": traceback.format_exc()}
            )

        return SuccessResponse(id=request.id, result=result).model_dump_json()

    def dispatch(self, request: Request) -> Any:
        params = request.params or {}
        if request.method == "getManifest":
            return {"manifest": self.on_manifest(params).model_dump(by_alias=True)}
        if request.method == "generate":
            self.on_generate(params)
            return None
        raise ProtocolError(METHOD_NOT_FOUND, f"Method not found: {request.method}")

    def on_manifest(self, params: Dict[str, Any]) -> Manifest:
        logger.info("%s:Registered", GENERATOR_NAME)
        return Manifest(
            pretty_name=GENERATOR_NAME,
            default_output=DEFAULT_OUTPUT,
            version=__version__,
        )

    def on_generate(self, params: Dict[str, Any]) -> None:
        options = GenerateParams.model_validate(params)
        output = options.generator.output.value if options.generator.output else None

        if not output:
            logger.info("No output configured for %s; skipping", GENERATOR_NAME)
            return

        config = load_config(custom_config={**options.generator.config, "output": output})
        models = convert_datamodel(options.dmmf)
        rewrite_declarations_file(models, config)

    def _error(
        self,
        request_id: Union[int, str, None],
        code: int,
        message: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> str:
        response = ErrorResponse(
            id=request_id, error=ErrorObject(code=code, message=message, data=data)
        )
        return response.model_dump_json()


def serve(stdin: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> int:
    """Run the generator handler; used as the Prisma ``provider`` command."""
    GeneratorHandler(stdin, stderr).run()
    return 0
