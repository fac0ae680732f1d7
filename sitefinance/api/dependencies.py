"""Dependency injection for FastAPI endpoints"""

from typing import Dict
from fastapi import Request
from sitefinance.config import settings
from sitefinance.domain.models import CostBand
from sitefinance.infrastructure.clients.procurement import ProcurementClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_procurement_client() -> ProcurementClient:
    """Provide procurement API client instance"""
    return ProcurementClient()


def get_cost_bands() -> Dict[str, CostBand]:
    """Cost-control bands from configuration"""
    return settings.cost_bands()
