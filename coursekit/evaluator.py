"""Rendering slides in a WebDriver browser and checking their size against a policy."""

from __future__ import annotations

import base64
import csv
import enum
import logging
import math
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import quote, urljoin

import requests

from coursekit.slides import Book, Slide

logger = logging.getLogger(__name__)

ELEMENT_KEY = "element-6066-11e4-a52e-4f735466cecf"


class WebDriverError(Exception):
    """An error reported by, or while talking to, a WebDriver server."""

    def __init__(self, error: str, message: str = "") -> None:
        super().__init__(f"{error}: {message}" if message else error)
        self.error = error
        self.message = message


class WebDriverClient:
    """A minimal client for one session of a W3C WebDriver server."""

    def __init__(self, base_url: str, session_id: str, http: Any = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.session_id = session_id
        self._http = http if http is not None else requests.Session()

    @staticmethod
    def _send(http: Any, method: str, url: str, body: Any = None) -> Any:
        try:
            response = http.request(method, url, json=body)
        except requests.RequestException as exc:
            raise WebDriverError("connection error", str(exc)) from exc
        try:
            data = response.json()
        except ValueError as exc:
            raise WebDriverError("invalid response", str(exc)) from exc
        value = data.get("value") if isinstance(data, dict) else None
        if isinstance(value, dict) and "error" in value:
            raise WebDriverError(str(value["error"]), str(value.get("message", "")))
        if response.status_code >= 400:
            raise WebDriverError("http error", f"status {response.status_code}")
        return value

    def _command(self, method: str, path: str, body: Any = None) -> Any:
        url = f"{self.base_url}/session/{self.session_id}{path}"
        return self._send(self._http, method, url, body)

    @classmethod
    def connect(cls, url: str) -> WebDriverClient:
        """Start a new session on the WebDriver server at ``url``."""
        http = requests.Session()
        base_url = url.rstrip("/")
        value = cls._send(
            http, "POST", f"{base_url}/session", {"capabilities": {"alwaysMatch": {}}}
        )
        if not isinstance(value, dict) or "sessionId" not in value:
            raise WebDriverError("invalid response", "no session id returned")
        return cls(base_url, str(value["sessionId"]), http)

    def set_window_size(self, width: int, height: int) -> None:
        """Resize the browser window."""
        self._command("POST", "/window/rect", {"width": width, "height": height})

    def goto(self, url: str) -> None:
        """Navigate to ``url``."""
        logger.debug("open url in webclient: %s", url)
        self._command("POST", "/url", {"url": url})

    def find_xpath(self, selector: str) -> str | None:
        """Return the id of the element matching the XPath, or None if there is none."""
        try:
            value = self._command("POST", "/element", {"using": "xpath", "value": selector})
        except WebDriverError as exc:
            if exc.error == "no such element":
                return None
            raise
        if not isinstance(value, dict) or ELEMENT_KEY not in value:
            raise WebDriverError("invalid response", "no element reference returned")
        return str(value[ELEMENT_KEY])

    def element_rect(self, element_id: str) -> tuple[float, float, float, float]:
        """Return the element's ``(x, y, width, height)``."""
        value = self._command("GET", f"/element/{element_id}/rect")
        try:
            return (
                float(value["x"]),
                float(value["y"]),
                float(value["width"]),
                float(value["height"]),
            )
        except (TypeError, KeyError, ValueError) as exc:
            raise WebDriverError("invalid response", "malformed rectangle") from exc

    def element_screenshot(self, element_id: str) -> bytes:
        """Return a PNG screenshot of the element."""
        value = self._command("GET", f"/element/{element_id}/screenshot")
        if not isinstance(value, str):
            raise WebDriverError("invalid response", "screenshot is not a string")
        return base64.b64decode(value)

    def close(self) -> None:
        """End the session."""
        self._command("DELETE", "")

    def __enter__(self) -> WebDriverClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@dataclass(frozen=True)
class ElementSize:
    """The rendered size of an element."""

    width: float
    height: float

    @classmethod
    def from_rect(cls, rect: tuple[float, float, float, float]) -> ElementSize:
        _, _, width, height = rect
        return cls(width=width, height=height)


class PolicyViolation(enum.Enum):
    """A way in which a slide breaks the size policy."""

    MaxWidth = "MaxWidth"
    MaxHeight = "MaxHeight"

    def __str__(self) -> str:
        return self.value


def _as_unsigned(value: float) -> int:
    if math.isnan(value) or value <= 0:
        return 0
    return int(value)


def _round_unsigned(value: float) -> int:
    if math.isnan(value) or value <= 0:
        return 0
    return int(math.floor(value + 0.5))


def _format_float(value: float) -> str:
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return repr(value)


@dataclass(frozen=True)
class SlidePolicy:
    """Limits on the size of a slide's content."""

    max_width: int
    max_height: int

    def _eval_width(self, element_size: ElementSize) -> PolicyViolation | None:
        if _as_unsigned(element_size.width) > self.max_width:
            return PolicyViolation.MaxWidth
        return None

    def _eval_height(self, element_size: ElementSize) -> PolicyViolation | None:
        if _as_unsigned(element_size.height) > self.max_height:
            return PolicyViolation.MaxHeight
        return None

    def eval_size(self, element_size: ElementSize) -> list[PolicyViolation]:
        """Return every size limit the element breaks, height first."""
        checks = (self._eval_height(element_size), self._eval_width(element_size))
        return [violation for violation in checks if violation is not None]


@dataclass
class EvaluationResult:
    """The evaluation of one slide."""

    slide: Slide
    element_size: ElementSize
    policy_violations: list[PolicyViolation] = field(default_factory=list)

    def _violations_text(self) -> str:
        return ";".join(str(violation) for violation in self.policy_violations)


@dataclass
class EvaluationResults:
    """The evaluations of all slides of a book."""

    book: Book
    results: list[EvaluationResult] = field(default_factory=list)

    def _selected(self, violations_only: bool) -> list[EvaluationResult]:
        return [r for r in self.results if r.policy_violations or not violations_only]

    def export_csv(self, file: str | Path, overwrite: bool, violations_only: bool) -> None:
        """Write the results as CSV to ``file``."""
        file = Path(file)
        if file.exists() and not overwrite:
            raise FileExistsError(
                f"Not allowed to overwrite existing evaluation results at {file}"
            )
        with file.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle, lineterminator="\n")
            for index, result in enumerate(self._selected(violations_only)):
                if index == 0:
                    writer.writerow(
                        ["filename", "element_width", "element_height", "policy_violations"]
                    )
                writer.writerow(
                    [
                        str(result.slide.filename),
                        _round_unsigned(result.element_size.width),
                        _round_unsigned(result.element_size.height),
                        result._violations_text(),
                    ]
                )

    def export_stdout(self, violations_only: bool) -> None:
        """Print one line per result to standard output."""
        for result in self._selected(violations_only):
            print(
                f"{result.slide.filename}: "
                f"{_format_float(result.element_size.width)}x"
                f"{_format_float(result.element_size.height)} "
                f"[{result._violations_text()}]"
            )


class Evaluator:
    """Renders slides in a browser and measures the selected content element."""

    def __init__(
        self,
        webclient: WebDriverClient,
        element_selector: str,
        screenshot_dir: str | Path | None,
        html_base_url: str,
        source_dir: str | Path,
        cancellation_token: threading.Event | None = None,
        slide_policy: SlidePolicy | None = None,
    ) -> None:
        self.webclient = webclient
        self.element_selector = element_selector
        self.screenshot_dir = Path(screenshot_dir) if screenshot_dir is not None else None
        self.html_base_url = html_base_url
        self.source_dir = Path(source_dir)
        self.cancellation_token = (
            cancellation_token if cancellation_token is not None else threading.Event()
        )
        self.slide_policy = (
            slide_policy if slide_policy is not None else SlidePolicy(750, 1333)
        )

    def _store_screenshot(self, screenshot: bytes, filename: Path) -> None:
        assert self.screenshot_dir is not None
        relative = filename.relative_to(self.source_dir)
        output = self.screenshot_dir / relative.with_suffix(".png")
        logger.debug("write screenshot to %s", output)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(screenshot)

    def eval_slide(self, slide: Slide) -> EvaluationResult | None:
        """Evaluate one slide; None if the page has no content element."""
        logger.debug("evaluating %r", slide)
        url = urljoin(self.html_base_url, quote(Path(slide.filename).as_posix()))
        self.webclient.goto(url)

        element_id = self.webclient.find_xpath(self.element_selector)
        if element_id is None:
            return None
        element_size = ElementSize.from_rect(self.webclient.element_rect(element_id))
        if self.screenshot_dir is not None:
            screenshot = self.webclient.element_screenshot(element_id)
            self._store_screenshot(screenshot, Path(slide.filename))
        result = EvaluationResult(
            slide=slide,
            element_size=element_size,
            policy_violations=self.slide_policy.eval_size(element_size),
        )
        logger.debug("information about element: %r", result)
        return result

    def eval_book(self, book: Book) -> EvaluationResults:
        """Evaluate every slide of the book until done or cancelled."""
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
        return EvaluationResults(book=book, results=results)