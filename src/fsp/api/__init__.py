"""FSP API - Main filter/sort/page interface."""

from fsp.api.fsp import FSP, FSPRequest, FSPResult

__all__ = ["FSP", "FSPRequest", "FSPResult"]
