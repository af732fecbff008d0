"""Shared test fixtures and model fakes."""

import pytest
from fastapi.testclient import TestClient

from api.router import limiter
from config import settings
from services import gemini_client
from services.monitoring import monitor


@pytest.fixture(autouse=True)
def _isolate_state(monkeypatch):
    """Fresh cache, monitor and rate limits; no real backoff sleeps."""
    monkeypatch.setattr(settings, "model_retry_base_delay", 0.0)
    gemini_client.clear_cache()
    monitor.reset()
    limiter.reset()
    yield
    gemini_client.clear_cache()
    monitor.reset()


class FakeModel:
    """Stands in for the Gemini SDK call. Replies are consumed in order;
    an Exception instance is raised instead of returned. The last reply repeats."""

    def __init__(self):
        self.replies: list = ["{}"]
        self.requests: list = []

    def __call__(self, client, request):
        self.requests.append(request)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        return reply

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def fake_model(monkeypatch) -> FakeModel:
    fake = FakeModel()
    monkeypatch.setattr(gemini_client, "get_client", lambda: object())
    monkeypatch.setattr(gemini_client, "_generate", fake)
    return fake


@pytest.fixture
def client():
    from main import app

    with TestClient(app) as c:
        yield c


def make_pdf_bytes(lines: list[str]) -> bytes:
    """Build a one-page PDF with each line drawn in Helvetica."""
    ops = ["BT", "/F1 12 Tf", "14 TL", "72 720 Td"]
    for line in lines:
        ops.append(f"({line}) Tj T*")
    ops.append("ET")
    stream = "\n".join(ops).encode("latin-1")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Resources << /Font << /F1 5 0 R >> >> /Contents 4 0 R >>",
        b"<< /Length " + str(len(stream)).encode() + b" >>\nstream\n" + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    out = b"%PDF-1.4\n"
    offsets = []
    for i, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{i} 0 obj\n".encode() + body + b"\nendobj\n"
    xref_at = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref_at}\n%%EOF\n".encode()
    return out


@pytest.fixture
def make_pdf():
    return make_pdf_bytes
