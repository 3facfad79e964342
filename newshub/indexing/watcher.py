"""Watch the articles directory and keep the index in sync."""

import asyncio
from pathlib import Path
from typing import Callable, Iterable, Optional, Tuple

from rich.console import Console
from watchfiles import Change, awatch

from .builder import ARTICLE_SUFFIX, IndexBuilder, IndexBuildResult, print_build_summary

console = Console()

CHANGE_LABELS = {
    Change.added: "➕ Added",
    Change.modified: "✏️  Changed",
    Change.deleted: "➖ Removed",
}


class Debouncer:
    """Collapse a burst of triggers into one callback.

    Holds a single timer handle. Each trigger cancels the pending timer and
    arms a new one, so the callback runs ``delay`` seconds after the last
    trigger. Must be used from a running event loop.
    """

    def __init__(self, delay: float, callback: Callable[[], object]) -> None:
        self.delay = delay
        self.callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self) -> None:
        loop = asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self.callback()


def is_article_path(path: str) -> bool:
    """Article pages only; dotfiles are editor noise."""
    name = Path(path).name
    return name.endswith(ARTICLE_SUFFIX) and not name.startswith(".")


class DirectoryWatcher:
    """Rebuild the index after changes to article pages settle."""

    def __init__(self, builder: IndexBuilder, debounce_seconds: float = 1.0) -> None:
        self.builder = builder
        self.debouncer = Debouncer(debounce_seconds, self.rebuild)
        self.rebuild_count = 0

    def rebuild(self) -> Optional[IndexBuildResult]:
        """Run one full rebuild; failures are reported, not raised."""
        console.print(f"🔄 Regenerating {self.builder.index_path.name}...")
        try:
            result = self.builder.build()
        except OSError as e:
            console.print(f"[red]❌ Error regenerating {self.builder.index_path.name}: {e}[/red]")
            return None

        self.rebuild_count += 1
        print_build_summary(result, self.builder.index_path)
        return result

    def handle_changes(self, changes: Iterable[Tuple[Change, str]]) -> int:
        """Report article changes and schedule a rebuild; returns how many counted."""
        relevant = 0
        for change, path in sorted(changes, key=lambda c: (c[1], c[0].value)):
            if not is_article_path(path):
                continue
            label = CHANGE_LABELS.get(change, "•")
            console.print(f"{label}: {Path(path).name}")
            relevant += 1

        if relevant:
            self.debouncer.trigger()
        return relevant

    async def watch(self, stop_event: Optional[asyncio.Event] = None) -> None:
        """Initial rebuild, then follow the directory until stopped."""
        articles_dir = self.builder.articles_dir
        if not articles_dir.is_dir():
            raise FileNotFoundError(f"Articles directory not found: {articles_dir}")

        console.print(f"📁 Watching: {articles_dir.resolve()}")
        console.print(f"📄 Output: {self.builder.index_path.resolve()}")
        console.print("[dim]Press Ctrl+C to stop[/dim]\n")

        self.rebuild()

        try:
            async for changes in awatch(
                articles_dir,
                stop_event=stop_event,
                debounce=200,
                step=50,
                recursive=False,
            ):
                self.handle_changes(changes)
        finally:
            self.debouncer.cancel()

    def run(self) -> None:
        """Blocking entry point."""
        asyncio.run(self.watch())
