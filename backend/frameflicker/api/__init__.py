"""
API Routes
Project: FrameFlicker Studios (Studio Manager)

Aggregates the versioned routers.
"""

from frameflicker.api.v1 import api_v1_router

__all__ = ["api_v1_router"]
