"""Rendering slides in a browser through WebDriver and checking their size."""

from __future__ import annotations

import base64
import csv
import enum
import logging
import math
import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union
from urllib.parse import quote, urljoin

import requests

from coursetools.slides import Book, Slide

logger = logging.getLogger(__name__)

_ELEMENT_KEY = "element-6066-11e4-a52e-4f735466cecf"
_NO_SUCH_ELEMENT = "no such element"
_USIZE_MAX = 2**64 - 1


class WebDriverError(Exception):
    """An error reported by the WebDriver server or while talking to it."""

    def __init__(self, error: str, message: str = "") -> None:
        super().__init__(f"{error}: {message}" if message else error)
        self.error = error
        self.message = message


class WebDriverClient:
    """A minimal client for a W3C WebDriver server holding one session."""

    timeout: float = 60.0

    def __init__(self, webdriver_url: str) -> None:
        self._base = webdriver_url.rstrip("/")
        self._http = requests.Session()
        value = self._request("POST", "/session", {"capabilities": {"alwaysMatch": {}}})
        if not isinstance(value, dict) or not isinstance(value.get("sessionId"), str):
            raise WebDriverError("session not created", "no session id in response")
        self.session_id: str = value["sessionId"]

    def __enter__(self) -> "WebDriverClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request(self, method: str, path: str, payload: Optional[dict] = None) -> Any:
        try:
            response = self._http.request(
                method, self._base + path, json=payload, timeout=self.timeout
            )
        except requests.RequestException as error:
            raise WebDriverError("connection failed", str(error)) from error
        try:
            body = response.json()
        except ValueError:
            body = None
        value = body.get("value") if isinstance(body, dict) else None
        if response.status_code >= 400 or (isinstance(value, dict) and "error" in value):
            if isinstance(value, dict):
                raise WebDriverError(
                    str(value.get("error") or f"HTTP {response.status_code}"),
                    str(value.get("message") or ""),
                )
            raise WebDriverError(f"HTTP {response.status_code}")
        return value

    def _session_command(self, method: str, path: str, payload: Optional[dict] = None) -> Any:
        return self._request(method, f"/session/{self.session_id}{path}", payload)

    def goto(self, url: str) -> None:
        """Navigate the browser to url."""
        self._session_command("POST", "/url", {"url": url})

    def find_xpath(self, xpath: str) -> "Element":
        """Find the first element matching an XPath expression."""
        value = self._session_command(
            "POST", "/element", {"using": "xpath", "value": xpath}
        )
        if not isinstance(value, dict) or _ELEMENT_KEY not in value:
            raise WebDriverError("invalid response", "no element reference in response")
        return Element(self, value[_ELEMENT_KEY])

    def set_window_size(self, width: int, height: int) -> None:
        """Resize the browser window."""
        self._session_command("POST", "/window/rect", {"width": width, "height": height})

    def close(self) -> None:
        """End the session so the browser can be reused."""
        self._session_command("DELETE", "")


@dataclass
class Element:
    """A reference to an element on the page currently open in a client."""

    client: WebDriverClient
    element_id: str

    def rectangle(self) -> tuple[float, float, float, float]:
        """The element's position and size as ``(x, y, width, height)``."""
        value = self.client._session_command("GET", f"/element/{self.element_id}/rect")
        if not isinstance(value, dict):
            raise WebDriverError("invalid response", "no rectangle in response")
        return tuple(float(value[key]) for key in ("x", "y", "width", "height"))

    def screenshot(self) -> bytes:
        """A PNG screenshot of the element."""
        value = self.client._session_command(
            "GET", f"/element/{self.element_id}/screenshot"
        )
        if not isinstance(value, str):
            raise WebDriverError("invalid response", "no screenshot in response")
        return base64.b64decode(value)


@dataclass(frozen=True)
class ElementSize:
    """The size of an element as reported by the browser."""

    width: float
    height: float

    @classmethod
    def from_rectangle(cls, rectangle: tuple[float, float, float, float]) -> "ElementSize":
        _, _, width, height = rectangle
        return cls(width, height)


class PolicyViolation(enum.Enum):
    """Ways in which a slide can break the size policy."""

    MAX_WIDTH = "MaxWidth"
    MAX_HEIGHT = "MaxHeight"

    def __str__(self) -> str:
        return self.value


def _truncate(value: float) -> int:
    if math.isnan(value) or value <= 0:
        return 0
    if math.isinf(value):
        return _USIZE_MAX
    return int(value)


def _round(value: float) -> int:
    if math.isnan(value) or value <= 0:
        return 0
    if math.isinf(value):
        return _USIZE_MAX
    return math.floor(value + 0.5)


def _display(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value == int(value):
        return str(int(value))
    return repr(value)


@dataclass(frozen=True)
class SlidePolicy:
    """Limits on the size of a slide."""

    max_width: int
    max_height: int

    def eval_size(self, element_size: ElementSize) -> list[PolicyViolation]:
        """The policy violations of an element of the given size, height first."""
        violations = []
        if _truncate(element_size.height) > self.max_height:
            violations.append(PolicyViolation.MAX_HEIGHT)
        if _truncate(element_size.width) > self.max_width:
            violations.append(PolicyViolation.MAX_WIDTH)
        return violations


@dataclass
class EvaluationResult:
    """The evaluation of one slide."""

    slide: Slide
    element_size: ElementSize
    policy_violations: list[PolicyViolation] = field(default_factory=list)

    def violations_text(self) -> str:
        return ";".join(str(violation) for violation in self.policy_violations)


@dataclass
class EvaluationResults:
    """The evaluations of all slides of a book."""

    book: Book
    results: list[EvaluationResult] = field(default_factory=list)

    def _selected(self, violations_only: bool):
        return (r for r in self.results if r.policy_violations or not violations_only)

    def export_csv(
        self,
        file: Union[str, "os.PathLike[str]"],
        overwrite: bool,
        violations_only: bool,
    ) -> None:
        """Write the results to a CSV file, refusing to replace one unless allowed."""
        path = Path(file)
        if path.exists() and not overwrite:
            raise FileExistsError(
                f"Not allowed to overwrite existing evaluation results at {path}"
            )
        with open(path, "w", encoding="utf-8", newline="") as handle:
            writer = csv.writer(handle, lineterminator="\n")
            header_written = False
            for result in self._selected(violations_only):
                if not header_written:
                    writer.writerow(
                        ["filename", "element_width", "element_height", "policy_violations"]
                    )
                    header_written = True
                writer.writerow(
                    [
                        str(result.slide.filename),
                        _round(result.element_size.width),
                        _round(result.element_size.height),
                        result.violations_text(),
                    ]
                )

    def export_stdout(self, violations_only: bool) -> None:
        """Print one line per result."""
        for result in self._selected(violations_only):
            print(
                f"{result.slide.filename}: "
                f"{_display(result.element_size.width)}x"
                f"{_display(result.element_size.height)} "
                f"[{result.violations_text()}]"
            )


class Evaluator:
    """Renders each slide in a browser and measures one element on it."""

    def __init__(
        self,
        webclient: WebDriverClient,
        element_selector: str,
        screenshot_dir: Optional[Union[str, "os.PathLike[str]"]],
        html_base_url: str,
        source_dir: Union[str, "os.PathLike[str]"],
        cancellation_token: threading.Event,
        slide_policy: SlidePolicy,
    ) -> None:
        self.webclient = webclient
        self.element_selector = element_selector
        self.screenshot_dir = Path(screenshot_dir) if screenshot_dir is not None else None
        self.html_base_url = html_base_url
        self.source_dir = Path(source_dir)
        self.cancellation_token = cancellation_token
        self.slide_policy = slide_policy

    def _content_element(self) -> Optional[Element]:
        try:
            return self.webclient.find_xpath(self.element_selector)
        except WebDriverError as error:
            if error.error == _NO_SUCH_ELEMENT:
                return None
            raise

    def _store_screenshot(self, screenshot: bytes, filename: Path) -> None:
        assert self.screenshot_dir is not None
        relative = filename.relative_to(self.source_dir)
        output = self.screenshot_dir / relative.with_suffix(".png")
        logger.debug("write screenshot to %s", output)
        if not output.parent.exists():
            logger.debug("creating %s", output.parent)
            output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(screenshot)

    def eval_slide(self, slide: Slide) -> Optional[EvaluationResult]:
        """Evaluate one slide; None when the page has no content element."""
        logger.debug("evaluating %r", slide)
        url = urljoin(self.html_base_url, quote(slide.filename.as_posix(), safe="/:"))
        logger.debug("open url in webclient: %s", url)
        self.webclient.goto(url)

        element = self._content_element()
        if element is None:
            return None
        element_size = ElementSize.from_rectangle(element.rectangle())
        if self.screenshot_dir is not None:
            self._store_screenshot(element.screenshot(), slide.filename)
        result = EvaluationResult(
            slide, element_size, self.slide_policy.eval_size(element_size)
        )
        logger.debug("information about element: %r", result)
        return result

    def eval_book(self, book: Book) -> EvaluationResults:
        """Evaluate every slide of a book, stopping early once cancelled."""
        results = []
        logger.debug("slide count: %d", len(book.slides))
        for slide in book.slides:
            if self.cancellation_token.is_set():
                logger.debug("received cancel request, return already completed results")
                break
            result = self.eval_slide(slide)
            if result is None:
                logger.warning("slide with no content - ignore: %r", slide)
                continue
            results.append(result)
        return EvaluationResults(book, results)