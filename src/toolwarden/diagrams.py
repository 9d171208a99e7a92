"""Markdown → Mermaid → image render pipeline.

Each Markdown document under the source directory contributes the lines of
its ```` ```mermaid ```` blocks to one ``.mmd`` file, which ``mmdc`` then
renders into the output directory. The renderer resource must verify
before any rendering starts.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from toolwarden.config import DiagramsConfig
from toolwarden.exceptions import DiagramSourceError, RenderError, ToolwardenError
from toolwarden.logging import get_logger
from toolwarden.resources.protocols import SelfHealingResource
from toolwarden.runners.protocols import CommandExecutor

__all__ = ["DiagramRenderer", "extract_mermaid"]

logger = get_logger(__name__)


def extract_mermaid(md_path: Path, mmd_path: Path) -> Path:
    """Write the mermaid blocks of ``md_path`` to ``mmd_path``.

    A block opens on a line that starts (after stripping) with
    ```` ```mermaid ```` and closes on the next line starting with
    ```` ``` ````. Lines of all blocks are concatenated.

    Raises:
        DiagramSourceError: The document is missing or has no mermaid block.
    """
    try:
        text = md_path.read_text(encoding="utf-8")
    except OSError as e:
        raise DiagramSourceError(f"Cannot read {md_path}: {e}", path=md_path) from e

    in_block = False
    collected: list[str] = []
    for line in text.split("\n"):
        trimmed = line.strip()
        if trimmed.startswith("```mermaid"):
            in_block = True
            continue
        if in_block and trimmed.startswith("```"):
            in_block = False
            continue
        if in_block:
            collected.append(line)

    if not collected:
        raise DiagramSourceError(f"No mermaid block found in {md_path}", path=md_path)

    mmd_path.parent.mkdir(parents=True, exist_ok=True)
    mmd_path.write_text("\n".join(collected), encoding="utf-8")
    return mmd_path


class DiagramRenderer:
    """Render diagrams with ``mmdc`` using the configured directories.

    Relative paths in the configuration are resolved against ``root``.
    """

    def __init__(
        self,
        config: DiagramsConfig,
        executor: CommandExecutor,
        renderer: SelfHealingResource,
        root: Path | None = None,
    ) -> None:
        self._config = config
        self._executor = executor
        self._renderer = renderer
        self._root = root or Path.cwd()

    def _path(self, path: Path) -> Path:
        return path if path.is_absolute() else self._root / path

    @property
    def source_dir(self) -> Path:
        return self._path(self._config.source_dir)

    @property
    def mmd_dir(self) -> Path:
        return self._path(self._config.mmd_dir)

    @property
    def output_dir(self) -> Path:
        return self._path(self._config.output_dir)

    def _require_renderer(self) -> None:
        try:
            self._renderer.verify()
        except ToolwardenError as e:
            raise RenderError(
                f"{self._renderer.name} is not ready: {e.message}"
            ) from e

    def render_file(self, input_path: Path, output_path: Path) -> Path:
        """Render one ``.mmd`` file.

        Raises:
            RenderError: ``mmdc`` exited non-zero.
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        command = [
            "mmdc",
            "-i",
            str(input_path),
            "-o",
            str(output_path),
            "--configFile",
            str(self._path(self._config.mermaid_config)),
            "--puppeteerConfigFile",
            str(self._path(self._config.puppeteer_config)),
            "--backgroundColor",
            self._config.background_color,
        ]
        result = self._executor.run(command)
        if not result.success:
            raise RenderError(
                f"mmdc failed for {input_path.name} (exit {result.returncode})",
                path=input_path,
                output=result.output,
            )
        logger.info("diagram_rendered", output=str(output_path))
        return output_path

    def _render_document(self, md_path: Path) -> Path:
        name = md_path.stem
        mmd_path = extract_mermaid(md_path, self.mmd_dir / f"{name}.mmd")
        output = self.output_dir / f"{name}.{self._config.output_format}"
        return self.render_file(mmd_path, output)

    def render_all(self) -> list[Path]:
        """Render every ``*.md`` under the source directory, in sorted order.

        Raises:
            RenderError: The renderer is not ready, or a render failed.
            DiagramSourceError: The source directory is missing, or a
                document has no mermaid block.
        """
        self._require_renderer()
        if not self.source_dir.is_dir():
            raise DiagramSourceError(
                f"Diagram source directory not found: {self.source_dir}",
                path=self.source_dir,
            )
        self.mmd_dir.mkdir(parents=True, exist_ok=True)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        rendered = [self._render_document(p) for p in sorted(self.source_dir.rglob("*.md"))]
        logger.info("diagrams_rendered", count=len(rendered))
        return rendered

    def render_one(self, name: str) -> Path:
        """Render ``<source_dir>/<name>.md``.

        Raises:
            DiagramSourceError: The document does not exist.
            RenderError: The renderer is not ready, or the render failed.
        """
        md_path = self.source_dir / f"{name}.md"
        if not md_path.is_file():
            raise DiagramSourceError(f"Markdown file not found: {md_path}", path=md_path)
        self._require_renderer()
        return self._render_document(md_path)

    def clean(self) -> None:
        """Remove the generated ``.mmd`` and image directories."""
        for directory in (self.mmd_dir, self.output_dir):
            if directory.exists():
                shutil.rmtree(directory)
                logger.info("removed_generated_dir", path=str(directory))
