from pathlib import Path

import pytest

from plugin_agent.exceptions import ToolNotFoundError
from plugin_agent.models import Plugin
from plugin_agent.tools.registry import InMemoryToolRegistry

from tests.conftest import make_plugin

REPO_ROOT = Path(__file__).resolve().parents[2]


def test_list_tools_preserves_enabled_order(context):
    registry = InMemoryToolRegistry([make_plugin("a"), make_plugin("b"), make_plugin("c")])

    tools = registry.list_tools(context, ["c", "a"])

    assert [t.name_for_model for t in tools] == ["c", "a"]


def test_list_tools_unknown_id_raises(context):
    registry = InMemoryToolRegistry([make_plugin("a")])
    with pytest.raises(ToolNotFoundError) as exc:
        registry.list_tools(context, ["a", "missing"])
    assert exc.value.tool_name == "missing"


def test_enable_by_name_when_id_empty(context):
    registry = InMemoryToolRegistry([make_plugin("search", id="")])
    assert registry.list_tools(context, ["search"])[0].name_for_model == "search"


def test_register_rejects_duplicates():
    registry = InMemoryToolRegistry([make_plugin("a")])
    with pytest.raises(ValueError):
        registry.register(make_plugin("a"))
    with pytest.raises(ValueError):
        registry.register(make_plugin("a", id="other-id"))


def test_from_yaml_loads_plugins_and_extra_fields(tmp_path, context):
    path = tmp_path / "tools.yaml"
    path.write_text(
        "plugins:\n"
        "  - id: weather\n"
        "    name_for_model: get_weather\n"
        "    description_for_model: Weather by city.\n"
        "    auth_type: none\n"
        "    display_for_user: false\n",
        encoding="utf-8",
    )

    registry = InMemoryToolRegistry.from_yaml(path)
    (tool,) = registry.list_tools(context, ["weather"])

    assert isinstance(tool, Plugin)
    assert tool.name_for_model == "get_weather"
    assert tool.name_for_human == "get_weather"
    assert tool.description_for_human == "Weather by city."
    assert tool.display_for_user is False
    assert tool.extra == {"auth_type": "none"}


def test_from_yaml_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        InMemoryToolRegistry.from_yaml(tmp_path / "nope.yaml")


def test_from_yaml_rejects_bad_root(tmp_path):
    path = tmp_path / "tools.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(TypeError):
        InMemoryToolRegistry.from_yaml(path)


def test_shipped_tools_file_loads(context):
    registry = InMemoryToolRegistry.from_yaml(REPO_ROOT / "tools.yaml")
    names = [t.name_for_model for t in registry.list_tools(context, ["web_search", "calculator"])]
    assert names == ["web_search", "calculator"]
