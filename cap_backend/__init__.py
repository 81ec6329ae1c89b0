"""ComfyUI API Proxy backend: override engine, workflow store, HTTP API and CLI."""
