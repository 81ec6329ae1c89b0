"""
Per-application services stored under typed aiohttp app keys.
"""

from __future__ import annotations

from aiohttp import web

from cap_backend.adapters.comfyui_client import ComfyUIClient
from cap_backend.config import ProxyConfig
from cap_backend.features.overrides.node_kinds import NodeKinds
from cap_backend.features.workflows.store import WorkflowStore

APP_KEY_CONFIG: web.AppKey[ProxyConfig] = web.AppKey("cap_config", ProxyConfig)
APP_KEY_CLIENT: web.AppKey[ComfyUIClient] = web.AppKey("cap_comfyui_client", ComfyUIClient)
APP_KEY_STORE: web.AppKey[WorkflowStore] = web.AppKey("cap_workflow_store", WorkflowStore)
APP_KEY_NODE_KINDS: web.AppKey[NodeKinds] = web.AppKey("cap_node_kinds", NodeKinds)


def install_services(
    app: web.Application,
    config: ProxyConfig,
    client: ComfyUIClient | None = None,
    store: WorkflowStore | None = None,
    kinds: NodeKinds | None = None,
) -> None:
    app[APP_KEY_CONFIG] = config
    app[APP_KEY_CLIENT] = client or ComfyUIClient(config.comfyui_url, timeout=config.http_timeout)
    app[APP_KEY_STORE] = store or WorkflowStore(config.prompts_dir)
    app[APP_KEY_NODE_KINDS] = kinds or NodeKinds()
