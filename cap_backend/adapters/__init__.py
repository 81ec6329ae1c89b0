from .comfyui_client import ComfyUIClient

__all__ = ["ComfyUIClient"]
