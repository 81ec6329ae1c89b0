import pytest
import pytest_asyncio
from aiohttp.test_utils import TestClient, TestServer

from cap_backend.config import ProxyConfig
from cap_backend.features.workflows.store import WorkflowStore
from cap_backend.routes import build_app
from cap_backend.shared import Result


class FakeComfy:
    """Stands in for ComfyUIClient; records queued bodies."""

    def __init__(self):
        self.reply = Result.Ok({"prompt_id": "4f0e8c1a-aaaa-bbbb", "number": 1})
        self.queued: list[dict] = []
        self.history = Result.Ok({})
        self.models = Result.Ok(["checkpoints", "loras"])
        self.closed = False

    async def queue_prompt(self, body):
        self.queued.append(body)
        return self.reply

    async def get_history(self):
        return self.history

    async def get_image(self, filename):
        return Result.Ok(b"\x89PNG", content_type="image/png")

    async def get_model_categories(self):
        return self.models

    async def get_checkpoints(self):
        return Result.Ok(["sd_xl_base_1.0.safetensors", {"name": "flux1-dev.safetensors"}, 3])

    async def get_models_in_category(self, category):
        if category == "bad!":
            return Result.Err("INVALID_INPUT", "Invalid model category")
        return Result.Ok([f"{category}-a"])

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_comfy():
    return FakeComfy()


@pytest.fixture
def proxy_app(tmp_path, fake_comfy):
    config = ProxyConfig(prompts_dir=str(tmp_path))
    return build_app(config, client=fake_comfy, store=WorkflowStore(tmp_path))


@pytest_asyncio.fixture
async def http_client(proxy_app):
    return TestClient(TestServer(proxy_app))
