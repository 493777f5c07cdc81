"""Projects V2 board gateway."""

from estimate_spine.gateway.board import BoardGateway

__all__ = ["BoardGateway"]
