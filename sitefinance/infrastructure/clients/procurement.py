"""Procurement API HTTP client for fetching a project's BOQ files"""

import httpx
from datetime import datetime
from typing import List
from sitefinance.domain.models import BOQ
from sitefinance.domain.exceptions import ProcurementAPIError
from sitefinance.config import settings


class ProcurementClient:
    """Client for the external procurement service"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.procurement_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def list_boqs(self, project_id: str) -> List[BOQ]:
        """
        Fetch BOQ files uploaded for a project.

        No retry: callers treat a failure as "no procurement data".

        Raises:
            ProcurementAPIError: On timeout, HTTP errors, or invalid response
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(
                    f"{self.base_url}/procurement/boqs",
                    params={"project_id": project_id},
                )
                response.raise_for_status()
                data = response.json()

                return [
                    BOQ(
                        id=boq["id"],
                        name=boq["name"],
                        created_at=datetime.fromisoformat(boq["created_at"].replace("Z", "+00:00"))
                        if boq.get("created_at")
                        else None,
                        file_url=boq.get("file_url") or "",
                    )
                    for boq in data.get("boqs", [])
                ]

            except httpx.TimeoutException as e:
                raise ProcurementAPIError(f"Procurement API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise ProcurementAPIError(f"Procurement API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise ProcurementAPIError(f"Procurement API unreachable: {e}") from e
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                raise ProcurementAPIError(f"Invalid BOQ data from procurement: {e}") from e
