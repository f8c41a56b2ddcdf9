import os
import inspect
import logging
from contextlib import asynccontextmanager
from typing import Annotated, Any, AsyncIterator, Callable, Iterable, Sequence

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from mcp.types import TextContent, ToolAnnotations

from sales_intel_config.settings import init_runtime
from sales_intel_mcp import __version__
from sales_intel_mcp.adapters import Backends, build_backends
from sales_intel_mcp.dispatcher import Dispatcher, ToolSpec
from sales_intel_mcp.tools import all_tools


logger = logging.getLogger(__name__)

SERVER_NAME = "sales-intelligence-mcp-server"
INSTRUCTIONS = (
    "Sales intelligence tools over Gong (calls, transcripts), ZoomInfo (companies, contacts, "
    "org charts, tech stacks), Clay (enrichment) and LinkedIn (leads, profiles, companies). "
    "Only services with credentials in the environment work; call sales_intel_status to see which."
)


class SalesIntelMCP(FastMCP):
    """
    FastMCP server whose registered tools are answered by a ``Dispatcher``.

    Raw client arguments go to the dispatcher untouched so undeclared fields
    are rejected instead of silently dropped.
    """

    def __init__(self, dispatcher: Dispatcher, **settings: Any) -> None:
        super().__init__(
            name=SERVER_NAME,
            instructions=INSTRUCTIONS,
            lifespan=_close_backends_on_exit,
            **settings,
        )
        self.dispatcher = dispatcher
        for spec in dispatcher.specs:
            self.add_tool(
                _schema_delegate(dispatcher, spec),
                name=spec.name,
                title=spec.title,
                description=spec.description,
                annotations=ToolAnnotations(
                    title=spec.title,
                    readOnlyHint=spec.read_only,
                    destructiveHint=False,
                    idempotentHint=spec.read_only,
                    openWorldHint=spec.open_world,
                ),
                structured_output=False,
            )

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> Sequence[TextContent]:
        if name not in self.dispatcher:
            return await super().call_tool(name, arguments)

        result = await self.dispatcher.invoke(name, arguments or {})
        if result.is_error:
            # reported to the client as isError=true
            raise ToolError(result.text)
        return [TextContent(type="text", text=result.text)]


@asynccontextmanager
async def _close_backends_on_exit(server: SalesIntelMCP) -> AsyncIterator[dict]:
    try:
        yield {}
    finally:
        await server.dispatcher.backends.aclose()


def _schema_delegate(dispatcher: Dispatcher, spec: ToolSpec) -> Callable[..., Any]:
    """
    Async function whose signature mirrors ``spec.params`` so FastMCP can
    derive the tool's input schema from it.
    """

    async def delegate(**kwargs: Any) -> str:
        result = await dispatcher.invoke(spec.name, kwargs)
        if result.is_error:
            raise ToolError(result.text)
        return result.text

    params = []
    for field_name, info in spec.params.model_fields.items():
        default = inspect.Parameter.empty if info.is_required() else info.default
        params.append(
            inspect.Parameter(
                field_name,
                inspect.Parameter.KEYWORD_ONLY,
                default=default,
                annotation=Annotated[info.annotation, info],
            )
        )

    delegate.__name__ = spec.name
    delegate.__doc__ = spec.description
    delegate.__signature__ = inspect.Signature(params, return_annotation=str)  # type: ignore[attr-defined]
    return delegate


def build_server(
    *,
    backends: Backends | None = None,
    specs: Iterable[ToolSpec] | None = None,
    **settings: Any,
) -> SalesIntelMCP:
    """Wire adapters, tools and dispatcher into an MCP server. No I/O happens here."""
    dispatcher = Dispatcher(
        backends if backends is not None else build_backends(),
        specs if specs is not None else all_tools(),
    )
    return SalesIntelMCP(dispatcher, **settings)


def _log_service_summary(server: SalesIntelMCP) -> None:
    states = " ".join(
        f"{a.name}={'configured' if a.is_configured() else 'missing'}" for a in server.dispatcher.backends.all()
    )
    logger.info("Sales intelligence MCP %s starting; %s", __version__, states)


def main() -> None:
    # Console scripts call main() directly, so runtime init (dotenv + logging) happens here.
    init_runtime()
    server = build_server()
    _log_service_summary(server)
    transport = os.environ.get("MCP_TRANSPORT", "stdio")
    server.run(transport=transport)


if __name__ == "__main__":
    main()
