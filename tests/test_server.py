import logging

import httpx
import pytest

from semrush_mcp import server
from semrush_mcp.core.clients.semrush import SemrushClient
from semrush_mcp.tools import TOOLS, build_request


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.asyncio
async def test_every_registered_tool_is_exposed():
    tools = await server.mcp.list_tools()

    assert {tool.name for tool in tools} == set(TOOLS)
    for tool in tools:
        assert tool.annotations.readOnlyHint is True


@pytest.mark.asyncio
async def test_tool_function_uses_configured_client(monkeypatch):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="Dn;Rk\nexample.com;7\n"))
    monkeypatch.setattr(server, "_client", SemrushClient(api_key="k", transport=transport))

    text = await server.domain_overview("example.com")

    assert text == '{"Dn": "example.com", "Rk": "7"}'


def test_configure_builds_client_from_settings(monkeypatch):
    monkeypatch.setattr(server, "_client", None)
    monkeypatch.setenv("SEMRUSH_API_KEY", "abc")

    client = server._get_client()

    assert client is server._client
    url, params = client.build_request(build_request("domain_overview", {"domain": "a.com"}))
    assert params["key"] == "abc"


def test_main_exits_without_credential(monkeypatch):
    ran = []
    monkeypatch.setattr(server.mcp, "run", lambda *args, **kwargs: ran.append(True))

    with pytest.raises(SystemExit) as exc_info:
        server.main()

    assert exc_info.value.code == 1
    assert ran == []


def test_main_runs_server_with_credential(monkeypatch):
    ran = []
    monkeypatch.setattr(server.mcp, "run", lambda *args, **kwargs: ran.append(True))
    monkeypatch.setattr(server, "_client", None)
    monkeypatch.setenv("SEMRUSH_API_KEY", "abc")

    server.main()

    assert ran == [True]
    assert server._client is not None


def test_main_applies_log_level(monkeypatch):
    monkeypatch.setattr(server.mcp, "run", lambda *args, **kwargs: None)
    monkeypatch.setattr(server, "_client", None)
    monkeypatch.setenv("SEMRUSH_API_KEY", "abc")
    monkeypatch.setenv("LOG_LEVEL", "ERROR")

    server.main()

    assert logging.getLogger().level == logging.ERROR
    assert not logging.getLogger("semrush_mcp.core.clients.semrush").isEnabledFor(logging.INFO)


@pytest.mark.asyncio
async def test_advertised_schemas_match_registry():
    tools = {tool.name: tool for tool in await server.mcp.list_tools()}

    for name, spec in TOOLS.items():
        assert tools[name].description == spec.description

    backlinks = tools["backlinks_overview"].inputSchema["properties"]
    assert backlinks["target_type"]["enum"] == ["root_domain", "domain", "url"]
    assert backlinks["target_type"]["default"] == "root_domain"

    organic = tools["domain_organic_search"].inputSchema["properties"]
    assert organic["limit"]["minimum"] == 1
    assert organic["offset"]["minimum"] == 0
    for name in ("competitor_research", "domain_adwords", "related_keywords"):
        assert tools[name].inputSchema["properties"]["limit"]["minimum"] == 1
