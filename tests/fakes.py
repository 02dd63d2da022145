"""
In-memory stand-ins for the parts of the Playwright async API the scraper
touches: pages, frames, role locators, element handles and screenshots.

Only the selector shapes the scraper uses are understood:
    [role="x"]            [aria-label*="x" i]            a, b (union)
"""

import re
from typing import Callable, List, Optional

_ROLE = re.compile(r'^\[role="([^"]+)"\]$')
_ARIA_CONTAINS = re.compile(r'^\[aria-label\*="([^"]+)" i\]$')


def _matcher(selector: str) -> Callable[["FakeNode"], bool]:
    tests = []
    for part in selector.split(","):
        part = part.strip()
        m = _ROLE.match(part)
        if m:
            tests.append(lambda n, role=m.group(1): n.role == role)
            continue
        m = _ARIA_CONTAINS.match(part)
        if m:
            tests.append(lambda n, s=m.group(1).lower(): s in (n.aria_label or "").lower())
            continue
        raise ValueError(f"fake locator does not understand selector {part!r}")
    return lambda node: any(t(node) for t in tests)


class FakeNode:
    def __init__(self, role=None, text="", children=None, aria_label="", broken=False):
        self.role = role
        self.text = text
        self.children = list(children or [])
        self.aria_label = aria_label
        self.broken = broken  # inner_text() raises

    def walk(self):
        yield self
        for child in self.children:
            yield from child.walk()


class FakeLocator:
    def __init__(self, nodes: List[FakeNode]):
        self._nodes = nodes

    async def count(self) -> int:
        return len(self._nodes)

    async def all(self) -> List["FakeLocator"]:
        return [FakeLocator([n]) for n in self._nodes]

    @property
    def first(self) -> "FakeLocator":
        return FakeLocator(self._nodes[:1])

    def locator(self, selector: str) -> "FakeLocator":
        match = _matcher(selector)
        found = []
        for node in self._nodes:
            for child in node.children:
                found.extend(n for n in child.walk() if match(n))
        return FakeLocator(found)

    async def inner_text(self) -> str:
        if not self._nodes:
            raise TimeoutError("locator resolved to nothing")
        node = self._nodes[0]
        if node.broken:
            raise RuntimeError("element detached")
        return node.text


class FakePage:
    def __init__(
        self,
        frames=None,
        iframe_src=None,
        iframe_frame=None,
        screenshot_error=False,
        content_frame_error=False,
    ):
        self.frames = list(frames or [])
        self.iframe_src = iframe_src
        self.iframe_frame = iframe_frame
        self.content_frame_error = content_frame_error
        self.screenshot_error = screenshot_error
        self.screenshots: List[str] = []
        self.queries: List[str] = []

    async def query_selector(self, selector: str):
        self.queries.append(selector)
        if self.iframe_src is None:
            return None
        m = re.match(r'^iframe\[src\*="([^"]+)"\]$', selector)
        if m and m.group(1) in self.iframe_src:
            return FakeElementHandle(self.iframe_frame, detached=self.content_frame_error)
        return None

    async def screenshot(self, path: str, full_page: bool = False) -> None:
        if self.screenshot_error:
            raise RuntimeError("target closed")
        self.screenshots.append(path)


class FakeElementHandle:
    def __init__(self, frame, detached=False):
        self._frame = frame
        self._detached = detached

    async def content_frame(self):
        if self._detached:
            raise RuntimeError("Element is not attached to the DOM")
        return self._frame


class FakeFrame:
    def __init__(
        self,
        url: str = "https://app.powerbi.com/reportEmbed",
        nodes: Optional[List[FakeNode]] = None,
        child_frames: Optional[List["FakeFrame"]] = None,
        page: Optional[FakePage] = None,
        locator_error: bool = False,
        evaluate_error: bool = False,
    ):
        self.url = url
        self.nodes = list(nodes or [])
        self.child_frames = list(child_frames or [])
        self.page = page or FakePage()
        self.locator_error = locator_error
        self.evaluate_error = evaluate_error
        self.scripts: List[str] = []
        self.waits: List[int] = []

    def locator(self, selector: str):
        if self.locator_error:
            raise RuntimeError("frame was detached")
        match = _matcher(selector)
        found = []
        for root in self.nodes:
            found.extend(n for n in root.walk() if match(n))
        return FakeLocator(found)

    async def evaluate(self, expression: str):
        if self.evaluate_error:
            raise RuntimeError("execution context was destroyed")
        self.scripts.append(expression)

    async def wait_for_timeout(self, ms: int) -> None:
        self.waits.append(ms)


# ------------------------------------------------------------------------------
# Builders
# ------------------------------------------------------------------------------

def grid_nodes(headers: List[str], rows: List[List[str]], explicit_headers: bool = True) -> List[FakeNode]:
    """A Power BI style grid: a header row then one row per data row."""
    header_role = "columnheader" if explicit_headers else "gridcell"
    header_row = FakeNode("row", children=[FakeNode(header_role, h) for h in headers])
    body = [FakeNode("row", children=[FakeNode("gridcell", v) for v in r]) for r in rows]
    return [FakeNode("grid", aria_label="Table", children=[header_row, *body])]


def grid_frame(headers, rows, explicit_headers=True, **kwargs) -> FakeFrame:
    return FakeFrame(nodes=grid_nodes(headers, rows, explicit_headers), **kwargs)
