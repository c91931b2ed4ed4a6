"""
MCP Tool Base Classes

Provides common input validation, error handling and the response
envelope for all Shopify tools. Input validation runs through a pydantic
model built from each tool's parameter list.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Annotated, Any, Callable, Dict, List, Literal, Optional, Tuple, Type, Union

import pydantic
from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    create_model,
)

from .shopify import ShopifyClient, ShopifyError

logger = logging.getLogger(__name__)

_SCALAR_TYPES = {
    "string": StrictStr,
    "integer": StrictInt,
    "boolean": StrictBool,
}

_FORMAT_TYPES = {
    "email": EmailStr,
}

_UNION_TAGS = {"int", "float", "constrained-int", "constrained-float"}


@dataclass
class ToolParameter:
    """Definition of a tool parameter."""
    name: str
    type: str
    description: str
    required: bool = True
    default: Any = None
    enum: Optional[List[Any]] = None
    items_type: Optional[str] = None
    # Nested fields for "object" params, or for the items of an "array" of objects
    properties: Optional[List["ToolParameter"]] = None
    minimum: Optional[float] = None
    format: Optional[str] = None
    min_items: Optional[int] = None


@dataclass
class ToolDefinition:
    """Complete definition of an MCP tool."""
    name: str
    description: str
    parameters: List[ToolParameter] = field(default_factory=list)
    handler: Optional[Callable] = None
    category: str = "general"
    input_schema: Dict[str, Any] = field(default_factory=dict)


class MCPToolError(Exception):
    """Base exception for MCP tool errors."""
    def __init__(self, message: str, tool_name: str = None, details: Dict = None):
        self.message = message
        self.tool_name = tool_name
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(MCPToolError):
    """Raised when tool input validation fails."""
    pass


class ExecutionError(MCPToolError):
    """Raised when tool execution fails."""
    pass


def _bounded(annotation: Any, minimum: Optional[float]) -> Any:
    if minimum is None:
        return annotation
    return Annotated[annotation, Field(ge=minimum)]


def _scalar_annotation(type_name: str, param: ToolParameter) -> Any:
    if param.enum is not None:
        return Literal[tuple(param.enum)]
    if param.format in _FORMAT_TYPES:
        return _FORMAT_TYPES[param.format]
    if type_name == "number":
        # bool is rejected by both strict branches
        return Union[_bounded(StrictInt, param.minimum), _bounded(StrictFloat, param.minimum)]
    return _bounded(_SCALAR_TYPES.get(type_name, Any), param.minimum)


def _annotation(param: ToolParameter, model_name: str) -> Any:
    if param.type == "object":
        if param.properties:
            return build_input_model(f"{model_name}_{param.name}", param.properties)
        return Dict[str, Any]

    if param.type == "array":
        if param.items_type == "object" and param.properties:
            item = build_input_model(f"{model_name}_{param.name}Item", param.properties)
        elif param.items_type == "object":
            item = Dict[str, Any]
        elif param.items_type:
            item = _scalar_annotation(param.items_type, ToolParameter(param.name, param.items_type, ""))
        else:
            item = Any
        if param.min_items is None:
            return List[item]
        return Annotated[List[item], Field(min_length=param.min_items)]

    return _scalar_annotation(param.type, param)


def build_input_model(model_name: str, params: List[ToolParameter]) -> Type[BaseModel]:
    """Build a pydantic model that accepts exactly the given parameters."""
    fields: Dict[str, Tuple[Any, Any]] = {}
    for param in params:
        annotation = _annotation(param, model_name)
        if param.required:
            fields[param.name] = (annotation, Field(..., description=param.description))
        else:
            fields[param.name] = (
                Optional[annotation],
                Field(default=param.default, description=param.description),
            )
    return create_model(model_name, __config__=ConfigDict(extra="forbid"), **fields)


def _error_path(loc: Tuple[Any, ...]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def _translate_errors(exc: pydantic.ValidationError) -> Tuple[str, Dict[str, Any]]:
    """Turn pydantic errors into one message plus a details dict."""
    errors = []
    unknown = []
    messages = []
    for error in exc.errors(include_url=False):
        # number unions tag each branch in the loc
        path = _error_path(tuple(p for p in error["loc"] if p not in _UNION_TAGS))
        errors.append({"loc": path, "type": error["type"], "message": error["msg"]})
        if error["type"] == "missing":
            messages.append(f"Missing required parameter: {path}")
        elif error["type"] == "extra_forbidden":
            unknown.append(path)
        else:
            messages.append(f"Parameter '{path}': {error['msg']}")

    if unknown:
        messages.insert(0, f"Unknown parameter(s): {', '.join(unknown)}")
    details: Dict[str, Any] = {"errors": errors}
    if unknown:
        details["unknown"] = unknown
    return "; ".join(dict.fromkeys(messages)), details


def _param_schema(param: ToolParameter) -> Dict[str, Any]:
    prop: Dict[str, Any] = {"type": param.type, "description": param.description}
    if param.enum is not None:
        prop["enum"] = list(param.enum)
    if param.minimum is not None:
        prop["minimum"] = param.minimum
    if param.format is not None:
        prop["format"] = param.format
    if param.default is not None:
        prop["default"] = param.default

    if param.type == "array":
        items: Dict[str, Any] = {"type": param.items_type or "string"}
        if param.items_type == "object" and param.properties:
            items.update(_object_schema(param.properties))
        prop["items"] = items
        if param.min_items is not None:
            prop["minItems"] = param.min_items
    elif param.type == "object" and param.properties:
        prop.update(_object_schema(param.properties))

    return prop


def _object_schema(params: List[ToolParameter]) -> Dict[str, Any]:
    schema: Dict[str, Any] = {
        "properties": {p.name: _param_schema(p) for p in params},
    }
    required = [p.name for p in params if p.required]
    if required:
        schema["required"] = required
    return schema


class MCPTool(ABC):
    """
    Abstract base class for Shopify MCP tools.

    All tools must inherit from this class and implement:
    - name: Tool identifier
    - description: What the tool does
    - parameters: List of ToolParameter definitions
    - execute(): The actual tool logic

    The registry constructs every tool with the shared ShopifyClient.
    """

    def __init__(self, client: ShopifyClient, request_logger=None):
        self.client = client
        self.request_logger = request_logger

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for the tool."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what the tool does."""
        pass

    @property
    def parameters(self) -> List[ToolParameter]:
        """List of parameters the tool accepts."""
        return []

    @property
    def category(self) -> str:
        """Category for grouping tools."""
        return "general"

    @property
    def failure_message(self) -> str:
        """Prefix for error messages returned by this tool."""
        return f"Failed to run {self.name}"

    @property
    def input_model(self) -> Type[BaseModel]:
        """pydantic model of the tool's input, built once per tool class."""
        cls = type(self)
        model = cls.__dict__.get("_input_model")
        if model is None:
            model = build_input_model(f"{cls.__name__}Input", self.parameters)
            cls._input_model = model
        return model

    def validate(self, **kwargs) -> Dict[str, Any]:
        """
        Validate input parameters.
        Returns validated/normalized parameters.
        Raises ValidationError if validation fails.
        """
        given = {k: v for k, v in kwargs.items() if v is not None}
        try:
            model = self.input_model.model_validate(given)
        except pydantic.ValidationError as e:
            message, details = _translate_errors(e)
            raise ValidationError(message, tool_name=self.name, details=details) from e

        validated = {p.name: p.default for p in self.parameters}
        validated.update(model.model_dump(exclude_none=True))
        return validated

    @abstractmethod
    async def execute(self, **kwargs) -> Any:
        """
        Execute the tool with given parameters.
        This method should contain the actual tool logic.
        """
        pass

    def _failure(self, message: str, detail: Any, error_type: str) -> Dict[str, Any]:
        return {
            "success": False,
            "tool": self.name,
            "error": {
                "message": message,
                "detail": detail,
                "type": error_type,
            },
        }

    async def run(self, **kwargs) -> Dict[str, Any]:
        """
        Public entry point: validate and execute.
        Returns standardized response format.
        """
        started = time.perf_counter()
        try:
            validated = self.validate(**kwargs)
            result = await self.execute(**validated)
            response = {
                "success": True,
                "tool": self.name,
                "data": result
            }
        except ValidationError as e:
            logger.error(f"Validation error in {self.name}: {e.message}")
            response = self._failure(f"Invalid input: {e.message}", e.details, "validation")
        except ShopifyError as e:
            logger.error(f"Shopify {e.error_type} error in {self.name}: {e.message}")
            response = self._failure(f"{self.failure_message}: {e.message}", e.details, e.error_type)
        except ExecutionError as e:
            logger.error(f"Execution error in {self.name}: {e.message}")
            response = self._failure(f"{self.failure_message}: {e.message}", e.details, "execution")
        except Exception as e:
            logger.exception(f"Unexpected error in {self.name}")
            response = self._failure(
                f"{self.failure_message}: {e}",
                {"exception": type(e).__name__},
                "unexpected",
            )

        if self.request_logger is not None:
            # file append runs off the event loop
            await asyncio.to_thread(
                self.request_logger.log_tool_call,
                tool_name=self.name,
                success=response["success"],
                latency_ms=(time.perf_counter() - started) * 1000,
                error_type=None if response["success"] else response["error"]["type"],
            )
        return response

    def to_json_schema(self) -> Dict[str, Any]:
        """JSON schema of the tool's input object."""
        return {"type": "object", **_object_schema(self.parameters)}

    def to_definition(self) -> ToolDefinition:
        """Convert tool to ToolDefinition for registry."""
        return ToolDefinition(
            name=self.name,
            description=self.description,
            parameters=self.parameters,
            handler=self.run,
            category=self.category,
            input_schema=self.to_json_schema(),
        )

    def to_openai_schema(self) -> Dict:
        """Convert tool to OpenAI function calling schema."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.to_json_schema(),
            }
        }
