"""
Gemini model invocation client.

Wraps the Google Gen AI SDK (google-genai) behind one call:

    generate(prompt, system_instruction, output_schema, media, tools, call_tool)

- prompt + optional media (data URIs) become a single user turn
- output_schema (a Pydantic model class) switches the request to JSON output
  constrained to that schema; the response is parsed back into the model
- tools (Gemini function declarations) enable the manual function-calling
  loop: each function call requested by the model is executed through
  ``call_tool`` and its result is sent back until the model answers in text

The loop is bounded by ``max_tool_rounds``. Tool failures are not caught
here: they abort the request and reach the caller unchanged.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Type, TypeVar, Union, overload

from google import genai
from google.genai import types
from pydantic import BaseModel, ValidationError

from kira.errors import GenerationFailed, MalformedOutput
from kira.llm.media import decode_data_uri

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

ToolCaller = Callable[[str, Dict[str, Any]], Dict[str, Any]]


class GeminiModelClient:
    """
    Model invocation client backed by a ``genai.Client``.

    One instance is created per process (see kira.context) and shared by
    every request; it holds no per-request state.
    """

    def __init__(
        self,
        client: genai.Client,
        model: str = "gemini-2.5-flash",
        max_tool_rounds: int = 5,
    ):
        self._client = client
        self.model = model
        self.max_tool_rounds = max_tool_rounds

    @classmethod
    def from_api_key(cls, api_key: str, model: str = "gemini-2.5-flash", max_tool_rounds: int = 5) -> "GeminiModelClient":
        """Build a client from a Google API key."""
        if not api_key:
            raise ValueError(
                "GOOGLE_API_KEY is not configured. "
                "Please set it in your .env file to use the model client."
            )
        return cls(genai.Client(api_key=api_key), model=model, max_tool_rounds=max_tool_rounds)

    def close(self) -> None:
        """Release the underlying SDK client's HTTP resources."""
        close = getattr(self._client, "close", None)
        if callable(close):
            close()

    @overload
    def generate(
        self,
        prompt: str,
        *,
        system_instruction: Optional[str] = ...,
        output_schema: Type[ModelT],
        media: Optional[Sequence[str]] = ...,
        tools: Optional[Sequence[Dict[str, Any]]] = ...,
        call_tool: Optional[ToolCaller] = ...,
        temperature: Optional[float] = ...,
    ) -> ModelT:
        ...

    @overload
    def generate(
        self,
        prompt: str,
        *,
        system_instruction: Optional[str] = ...,
        output_schema: None = ...,
        media: Optional[Sequence[str]] = ...,
        tools: Optional[Sequence[Dict[str, Any]]] = ...,
        call_tool: Optional[ToolCaller] = ...,
        temperature: Optional[float] = ...,
    ) -> str:
        ...

    def generate(
        self,
        prompt: str,
        *,
        system_instruction: Optional[str] = None,
        output_schema: Optional[Type[BaseModel]] = None,
        media: Optional[Sequence[str]] = None,
        tools: Optional[Sequence[Dict[str, Any]]] = None,
        call_tool: Optional[ToolCaller] = None,
        temperature: Optional[float] = None,
    ) -> Union[str, BaseModel]:
        """
        Send one prompt to Gemini and return its final answer.

        Args:
            prompt: User-turn text
            system_instruction: Optional system prompt
            output_schema: Optional Pydantic model the answer must conform to
            media: Optional data URIs attached to the user turn
            tools: Optional function declarations ({name, description, parameters})
            call_tool: Executes a requested tool; required when tools are given
            temperature: Optional sampling temperature

        Returns:
            The answer text, or an instance of ``output_schema``.

        Raises:
            GenerationFailed: SDK error, no candidates, empty text, or too many tool rounds
            MalformedOutput: Output does not parse/validate against ``output_schema``
        """
        if tools and call_tool is None:
            raise ValueError("call_tool is required when tools are attached")

        contents: List[types.Content] = [
            types.Content(role="user", parts=self._build_parts(prompt, media))
        ]
        config = self._build_config(system_instruction, output_schema, tools, temperature)

        response = self._send(contents, config)

        rounds = 0
        while response.function_calls:
            if rounds >= self.max_tool_rounds:
                logger.error(f"Tool loop exceeded {self.max_tool_rounds} rounds")
                raise GenerationFailed(
                    f"Model requested tools for more than {self.max_tool_rounds} rounds"
                )
            rounds += 1

            # Echo the model turn back so the function responses have context
            contents.append(response.candidates[0].content)

            response_parts = []
            for function_call in response.function_calls:
                name = function_call.name or ""
                args = dict(function_call.args or {})
                logger.info(f"Model requested tool '{name}' (round {rounds})")
                result = call_tool(name, args)  # type: ignore[misc]
                response_parts.append(
                    types.Part.from_function_response(name=name, response=result)
                )

            contents.append(types.Content(role="user", parts=response_parts))
            response = self._send(contents, config)

        text = (response.text or "").strip()

        if output_schema is None:
            if not text:
                logger.error("Model returned empty text")
                raise GenerationFailed("Model did not return a response")
            return text

        return self._parse_output(text, output_schema)

    def _build_parts(self, prompt: str, media: Optional[Sequence[str]]) -> List[types.Part]:
        parts: List[types.Part] = []

        for data_uri in media or ():
            try:
                mime_type, data = decode_data_uri(data_uri)
            except ValueError as e:
                raise GenerationFailed(f"Attached media is not a valid data URI: {e}") from e
            parts.append(types.Part.from_bytes(data=data, mime_type=mime_type))

        parts.append(types.Part(text=prompt))
        return parts

    def _build_config(
        self,
        system_instruction: Optional[str],
        output_schema: Optional[Type[BaseModel]],
        tools: Optional[Sequence[Dict[str, Any]]],
        temperature: Optional[float],
    ) -> types.GenerateContentConfig:
        config_kwargs: Dict[str, Any] = {}

        if system_instruction:
            config_kwargs["system_instruction"] = system_instruction
        if temperature is not None:
            config_kwargs["temperature"] = temperature
        if output_schema is not None:
            config_kwargs["response_mime_type"] = "application/json"
            config_kwargs["response_schema"] = output_schema
        if tools:
            config_kwargs["tools"] = [
                types.Tool(function_declarations=[
                    types.FunctionDeclaration(
                        name=declaration["name"],
                        description=declaration["description"],
                        parameters_json_schema=declaration["parameters"],
                    )
                    for declaration in tools
                ])
            ]

        return types.GenerateContentConfig(**config_kwargs)

    def _send(
        self,
        contents: List[types.Content],
        config: types.GenerateContentConfig,
    ) -> types.GenerateContentResponse:
        try:
            response = self._client.models.generate_content(
                model=self.model,
                contents=contents,  # type: ignore[arg-type]
                config=config,
            )
        except Exception as e:
            logger.error(f"Gemini call failed: {e}")
            raise GenerationFailed(f"Model call failed: {e}") from e

        if not response.candidates or not response.candidates[0].content:
            logger.error("No response from model")
            raise GenerationFailed("Model did not return a response")

        return response

    @staticmethod
    def _parse_output(text: str, output_schema: Type[ModelT]) -> ModelT:
        if not text:
            raise MalformedOutput(f"Empty {output_schema.__name__} output", raw_response=text)

        try:
            return output_schema.model_validate_json(text)
        except ValidationError as e:
            logger.error(f"Model output failed {output_schema.__name__} validation: {e.error_count()} errors")
            logger.debug(f"Raw response text: {text[:200]}...")
            raise MalformedOutput(
                f"Model output does not match {output_schema.__name__}: {e}",
                raw_response=text,
            ) from e
