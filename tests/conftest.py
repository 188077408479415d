"""Shared test fixtures and factories."""

from __future__ import annotations

import asyncio
import struct
import zlib
from pathlib import Path

import pytest
from pydantic import SecretStr

from fingercount.analysis.client import AnalysisClient
from fingercount.analysis.types import AnalysisRequest
from fingercount.config.loader import API_KEY_ENV_VARS
from fingercount.config.models import AppConfig, ProviderConfig
from fingercount.config.paths import ENV_VAR, get_fingercount_home
from fingercount.images.encoder import encode_file
from fingercount.images.types import ImageAsset, InMemoryFile, SelectedFile
from fingercount.workflow.machine import WorkflowStateMachine

# =============================================================================
# Environment isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep tests away from real API keys, config files and home directories."""
    for env_var in API_KEY_ENV_VARS:
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.delenv("FINGERCOUNT_LOG_LEVEL", raising=False)
    monkeypatch.setenv(ENV_VAR, str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    get_fingercount_home.cache_clear()
    yield
    get_fingercount_home.cache_clear()


# =============================================================================
# Image Fixtures
# =============================================================================


def make_png(width: int, height: int, rgb: tuple[int, int, int]) -> bytes:
    """Build a solid-color RGB PNG without any imaging library."""

    def chunk(tag: bytes, data: bytes) -> bytes:
        crc = zlib.crc32(tag + data) & 0xFFFFFFFF
        return struct.pack(">I", len(data)) + tag + data + struct.pack(">I", crc)

    row = b"\x00" + bytes(rgb) * width
    header = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", header)
        + chunk(b"IDAT", zlib.compress(row * height))
        + chunk(b"IEND", b"")
    )


@pytest.fixture
def red_png() -> bytes:
    """A 10x10 red PNG."""
    return make_png(10, 10, (255, 0, 0))


@pytest.fixture
def png_file(red_png: bytes) -> InMemoryFile:
    return InMemoryFile(name="hand.png", data=red_png, content_type="image/png")


@pytest.fixture
def png_path(tmp_path: Path, red_png: bytes) -> Path:
    path = tmp_path / "hand.png"
    path.write_bytes(red_png)
    return path


class BrokenFile:
    """A selected file whose read fails."""

    name = "broken.png"
    content_type = "image/png"

    def read(self) -> bytes:
        raise OSError("disk read error")


# =============================================================================
# Provider Mocks
# =============================================================================


class FakeProvider:
    """Provider that replays scripted outcomes and records requests.

    Each outcome is either response text (or None) or an exception to raise.
    """

    name = "fake"

    def __init__(self, outcomes: list[object] | None = None) -> None:
        self.outcomes = list(outcomes or [])
        self.requests: list[AnalysisRequest] = []

    async def analyze(self, request: AnalysisRequest) -> str | None:
        self.requests.append(request)
        outcome = self.outcomes.pop(0) if self.outcomes else "4 fingers"
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome  # type: ignore[return-value]


class GatedProvider:
    """Provider that blocks until released, for in-flight scenarios."""

    name = "gated"

    def __init__(self, text: str = "3 fingers") -> None:
        self.text = text
        self.calls = 0
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def analyze(self, request: AnalysisRequest) -> str | None:
        _ = request
        self.calls += 1
        self.started.set()
        await self.release.wait()
        return self.text


# =============================================================================
# Configuration and Workflow Fixtures
# =============================================================================


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(gemini=ProviderConfig(api_key=SecretStr("test-key")))


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def client(config: AppConfig, provider: FakeProvider) -> AnalysisClient:
    return AnalysisClient(config, provider=provider)


@pytest.fixture
def machine(client: AnalysisClient) -> WorkflowStateMachine:
    return WorkflowStateMachine(client)


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner with colors disabled."""
    from typer.testing import CliRunner

    return CliRunner(env={"NO_COLOR": "1", "COLUMNS": "120"})


@pytest.fixture
def restore_root_logger():
    """Undo handler and level changes made by configure_logging()."""
    import logging

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


class GatedEncoder:
    """Encoder that holds back files named in ``gated`` until released."""

    def __init__(self, *gated: str) -> None:
        self.gated = set(gated)
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def __call__(self, file: SelectedFile | None) -> ImageAsset | None:
        if file is not None and file.name in self.gated:
            self.started.set()
            await self.release.wait()
        return await encode_file(file)
