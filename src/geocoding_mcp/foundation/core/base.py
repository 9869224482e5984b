"""Core tool abstractions: BaseTool and ToolMetadata.

A tool is a subclass of BaseTool with a typed pydantic parameter schema and a
`_run`/`_async_run` implementation returning a string for LLM consumption.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from ..errors import Err, Ok, ToolError, ToolException, ToolResult

if TYPE_CHECKING:
    from collections.abc import Coroutine


class ToolMetadata(BaseModel):
    """Metadata describing a tool's capabilities and requirements.

    Attributes:
        name: Unique identifier (snake_case, e.g., "geocode_forward")
        description: What the tool does (shown to the LLM for selection)
        category: Grouping category
        requires_api_key: Whether the tool needs external API credentials
        enabled: Whether the tool is advertised
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., pattern=r"^[a-z][a-z0-9_]*$")
    description: str = Field(..., min_length=10)
    category: str = Field(default="general")
    requires_api_key: bool = Field(default=False)
    enabled: bool = Field(default=True)


TParams = TypeVar("TParams", bound=BaseModel)


class BaseTool(ABC, Generic[TParams]):
    """Abstract base class for all tools.

    Subclasses must:
    - Define `metadata` class variable with ToolMetadata
    - Define `params_schema` class variable with the pydantic model type
    - Implement `_run(params)` returning a string result

    Async-native tools override `_async_run` and implement `_run` as
    `self._run_async_sync(self._async_run(params))`.
    """

    metadata: ClassVar[ToolMetadata]
    params_schema: ClassVar[type[BaseModel]]

    # ─────────────────────────────────────────────────────────────────
    # Error Handling
    # ─────────────────────────────────────────────────────────────────

    def _err_from_exc(self, exc: Exception, context: str = "") -> ToolResult:
        return Err(ToolError.from_exception(self.metadata.name, exc, context))

    def _run_async_sync(self, coro: Coroutine[None, None, str]) -> str:
        """Run async coroutine from sync context.

        Inside a running loop the coroutine runs on a worker thread with its
        own loop.
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(coro)

        with ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()

    # ─────────────────────────────────────────────────────────────────
    # Core Execution
    # ─────────────────────────────────────────────────────────────────

    @abstractmethod
    def _run(self, params: TParams) -> str:
        """Execute the tool synchronously and return a string for the LLM."""
        ...

    async def _async_run(self, params: TParams) -> str:
        """Execute the tool asynchronously. Default wraps `_run` in a thread."""
        return await asyncio.to_thread(self._run, params)

    def _run_result(self, params: TParams) -> ToolResult:
        try:
            return Ok(self._run(params))
        except ToolException as e:
            return Err(e.error)
        except Exception as e:
            return self._err_from_exc(e)

    async def _async_run_result(self, params: TParams) -> ToolResult:
        try:
            return Ok(await self._async_run(params))
        except ToolException as e:
            return Err(e.error)
        except Exception as e:
            return self._err_from_exc(e)

    def run(self, params: TParams) -> str:
        """Execute synchronously. Failures come back as rendered error text."""
        return self._run_result(params).match(ok=lambda s: s, err=ToolError.render)

    async def arun(self, params: TParams) -> str:
        return (await self._async_run_result(params)).match(ok=lambda s: s, err=ToolError.render)

    async def arun_result(self, params: TParams) -> ToolResult:
        """Execute asynchronously, returning Ok(text) or Err(ToolError)."""
        return await self._async_run_result(params)

    # ─────────────────────────────────────────────────────────────────
    # Invocation (kwargs interface)
    # ─────────────────────────────────────────────────────────────────

    def __call__(self, **kwargs: object) -> str:
        """Invoke with keyword arguments validated against `params_schema`."""
        params = self.params_schema(**kwargs)
        return self.run(params)  # type: ignore[arg-type]

    async def acall(self, **kwargs: object) -> str:
        params = self.params_schema(**kwargs)
        return await self.arun(params)  # type: ignore[arg-type]
