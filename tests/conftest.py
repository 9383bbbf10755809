import pytest

import hubdown.config.hierarchy as hierarchy


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user/global config files and HUBDOWN_* variables out of tests."""
    monkeypatch.setattr(hierarchy, "_GLOBAL_CONFIG_PATH", tmp_path / "global" / "config.yaml")
    monkeypatch.chdir(tmp_path)
    for env_key in hierarchy._ENV_MAP:
        monkeypatch.delenv(env_key, raising=False)


@pytest.fixture
def sample_markdown():
    """Document touching every built-in stage."""
    return (
        "# Hello World\n"
        "\n"
        "Ship it :tada: with <b>raw</b> markup.\n"
        "\n"
        "```python\n"
        "def greet():\n"
        "    return 1\n"
        "```\n"
    )


@pytest.fixture
def frontmatter_markdown():
    return "---\ntitle: Hi\n---\n# Body"
