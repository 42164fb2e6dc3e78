"""
Tool registry for the consultant agent.

A ToolDeclaration pairs what the model sees (name, description, JSON
parameters schema) with what the backend runs (input/output models and a
handler over the document store). The model decides which tool to call from
the descriptions alone, so that choice is an untrusted input: arguments are
validated against the input model before the handler runs.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Type

from pydantic import BaseModel, ValidationError

from kira.db.store import DocumentStore
from kira.errors import GenerationFailed

logger = logging.getLogger(__name__)

ToolHandler = Callable[[DocumentStore, Any], BaseModel]


@dataclass(frozen=True)
class ToolDeclaration:
    """A model-callable tool."""
    name: str
    description: str
    parameters: Dict[str, Any]
    input_model: Type[BaseModel]
    output_model: Type[BaseModel]
    handler: ToolHandler

    def function_declaration(self) -> Dict[str, Any]:
        """Declaration in the {name, description, parameters} form sent to Gemini."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters,
        }


class ToolRegistry:
    """
    Immutable name -> ToolDeclaration mapping.

    Built once at process start and shared by every request.
    """

    def __init__(self, declarations: Iterable[ToolDeclaration]):
        tools: Dict[str, ToolDeclaration] = {}
        for declaration in declarations:
            if declaration.name in tools:
                raise ValueError(f"Duplicate tool name: {declaration.name}")
            tools[declaration.name] = declaration
        self._tools = MappingProxyType(tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def names(self) -> List[str]:
        return list(self._tools)

    def get(self, name: str) -> ToolDeclaration:
        try:
            return self._tools[name]
        except KeyError:
            raise GenerationFailed(f"Model requested unknown tool '{name}'") from None

    def function_declarations(self) -> List[Dict[str, Any]]:
        return [tool.function_declaration() for tool in self._tools.values()]

    def invoke(self, store: DocumentStore, name: str, args: Dict[str, Any]) -> Dict[str, Any]:
        """
        Run a tool by name.

        Args:
            store: Document store the handler reads/writes
            name: Tool name requested by the model
            args: Raw arguments requested by the model

        Returns:
            The handler's output as a JSON-compatible dict

        Raises:
            GenerationFailed: Unknown tool or arguments that fail validation
            KiraError: Whatever the handler raises (NotFound, IncompleteProfile, ...)
        """
        tool = self.get(name)

        try:
            tool_input = tool.input_model.model_validate(args)
        except ValidationError as e:
            logger.error(f"Invalid arguments for tool '{name}': {e.error_count()} errors")
            raise GenerationFailed(f"Model requested '{name}' with invalid arguments: {e}") from e

        logger.info(f"[TOOL] Running {name}")
        output = tool.handler(store, tool_input)

        return tool.output_model.model_validate(output.model_dump()).model_dump(mode="json")
