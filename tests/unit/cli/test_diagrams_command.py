"""Unit tests for the ``toolwarden diagrams`` command group."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import Result

from tests.fixtures.runners import FakeCommandRunner, fail, ok

Invoke = Callable[..., Result]


@pytest.fixture
def sources(project: Path, fake_runner: FakeCommandRunner) -> Path:
    """Two diagram documents and a renderer that verifies."""
    src = project / "assets" / "diagrams" / "src"
    src.mkdir(parents=True)
    (src / "deploy.md").write_text("```mermaid\ngraph TD\n  A --> B\n```\n")
    (src / "build.md").write_text("```mermaid\nsequenceDiagram\n  A->>B: hi\n```\n")
    fake_runner.on(["mmdc", "--version"], ok("10.9.0"))
    return src


def _render_inputs(runner: FakeCommandRunner) -> list[str]:
    return [Path(c[c.index("-i") + 1]).name for c in runner.calls_to("mmdc") if "-i" in c]


def test_render_all(invoke: Invoke, fake_runner: FakeCommandRunner, sources: Path) -> None:
    result = invoke("diagrams", "render-all")

    assert result.exit_code == 0, result.output
    assert "Rendered 2 diagram(s)." in result.output
    assert _render_inputs(fake_runner) == ["build.mmd", "deploy.mmd"]


def test_render_all_needs_renderer(invoke: Invoke, sources: Path) -> None:
    runner = FakeCommandRunner(missing={"mmdc"})

    result = invoke("diagrams", "render-all", executor=runner)

    assert result.exit_code == 1
    assert "not ready" in result.output
    assert _render_inputs(runner) == []


def test_render_failure_shows_output(
    invoke: Invoke, fake_runner: FakeCommandRunner, sources: Path
) -> None:
    fake_runner.on(["mmdc", "-i"], fail("Parse error on line 2"))

    result = invoke("diagrams", "render-all")

    assert result.exit_code == 1
    assert "Parse error on line 2" in result.output


def test_render_one(invoke: Invoke, fake_runner: FakeCommandRunner, sources: Path) -> None:
    result = invoke("diagrams", "render-one", "deploy")

    assert result.exit_code == 0, result.output
    assert "Generated" in result.output
    assert _render_inputs(fake_runner) == ["deploy.mmd"]


def test_render_one_unknown_name(
    invoke: Invoke, fake_runner: FakeCommandRunner, sources: Path
) -> None:
    result = invoke("diagrams", "render-one", "missing")

    assert result.exit_code == 1
    assert "Markdown file not found" in result.output
    assert fake_runner.calls == []


def test_clean(invoke: Invoke, sources: Path, project: Path) -> None:
    generated = project / "assets" / "diagrams" / "gen" / "mmd" / "deploy.mmd"
    generated.parent.mkdir(parents=True)
    generated.write_text("graph TD")

    result = invoke("diagrams", "clean")

    assert result.exit_code == 0
    assert not generated.parent.exists()
    assert sources.exists()
