"""
GoHighLevel REST API client.

Thin async wrapper around httpx with one method per remote operation.
Every non-2xx response is raised as GHLApiError so that tool providers
never have to inspect status codes themselves.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from .base import ExecutionError
from .config import GHLConfig

REQUEST_TIMEOUT = 30.0


class GHLApiError(ExecutionError):
    """Raised when the GoHighLevel API returns an error response."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Dict = None):
        self.status_code = status_code
        super().__init__(message, details=details)


def _error_detail(response: httpx.Response) -> str:
    detail = response.text or response.reason_phrase
    try:
        body = response.json()
    except ValueError:
        return detail
    if isinstance(body, dict):
        message = body.get("message") or body.get("error") or detail
        if isinstance(message, list):
            message = ", ".join(str(m) for m in message)
        return str(message)
    return detail


def _clean(params: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in params.items() if v is not None}


class GHLApiClient:
    """Async client for the GoHighLevel v2 API."""

    def __init__(
        self,
        config: GHLConfig,
        logger: Optional[logging.Logger] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self._http = httpx.AsyncClient(
            base_url=config.base_url,
            headers={
                "Authorization": f"Bearer {config.access_token}",
                "Version": config.version,
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            timeout=REQUEST_TIMEOUT,
            transport=transport,
        )

    @property
    def headers(self) -> httpx.Headers:
        return self._http.headers

    def update_access_token(self, token: str) -> None:
        self._http.headers["Authorization"] = f"Bearer {token}"
        self.logger.debug("Access token updated")

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "GHLApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _location(self, location_id: Optional[str]) -> str:
        return location_id or self.config.location_id

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> Any:
        self.logger.debug(f"{method} {path}")
        try:
            response = await self._http.request(
                method,
                path,
                params=_clean(params) if params else None,
                json=json,
            )
        except httpx.HTTPError as e:
            raise GHLApiError(f"GHL API request failed: {e}") from e

        if response.is_error:
            detail = _error_detail(response)
            self.logger.debug(
                "GHL API error response",
                extra={"meta": {"method": method, "path": path, "status": response.status_code}},
            )
            raise GHLApiError(
                f"GHL API Error ({response.status_code}): {detail}",
                status_code=response.status_code,
            )

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise GHLApiError(
                f"GHL API returned an invalid JSON response ({response.status_code}): {e}",
                status_code=response.status_code,
            ) from e

    # ===== Locations =====

    async def test_connection(self) -> Dict[str, Any]:
        """Fetch the configured location to verify credentials."""
        data = await self._request("GET", f"/locations/{self.config.location_id}")
        return {"success": True, "locationId": self.config.location_id, "data": data}

    async def get_location(self, location_id: Optional[str] = None) -> Dict[str, Any]:
        return await self._request("GET", f"/locations/{self._location(location_id)}")

    async def get_location_tags(self, location_id: Optional[str] = None) -> Dict[str, Any]:
        return await self._request("GET", f"/locations/{self._location(location_id)}/tags")

    async def create_location_tag(self, name: str, location_id: Optional[str] = None) -> Dict[str, Any]:
        return await self._request(
            "POST", f"/locations/{self._location(location_id)}/tags", json={"name": name}
        )

    async def get_location_custom_values(self, location_id: Optional[str] = None) -> Dict[str, Any]:
        return await self._request("GET", f"/locations/{self._location(location_id)}/customValues")

    # ===== Contacts =====

    async def create_contact(self, contact: Dict[str, Any]) -> Dict[str, Any]:
        body = {"locationId": self.config.location_id, **contact}
        return await self._request("POST", "/contacts/", json=body)

    async def get_contact(self, contact_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/contacts/{contact_id}")

    async def update_contact(self, contact_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/contacts/{contact_id}", json=updates)

    async def delete_contact(self, contact_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/contacts/{contact_id}")

    async def search_contacts(
        self, query: Optional[str] = None, limit: Optional[int] = None, location_id: Optional[str] = None
    ) -> Dict[str, Any]:
        body = _clean({
            "locationId": self._location(location_id),
            "query": query,
            "pageLimit": limit,
        })
        return await self._request("POST", "/contacts/search", json=body)

    async def add_contact_tags(self, contact_id: str, tags: List[str]) -> Dict[str, Any]:
        return await self._request("POST", f"/contacts/{contact_id}/tags", json={"tags": tags})

    async def remove_contact_tags(self, contact_id: str, tags: List[str]) -> Dict[str, Any]:
        return await self._request("DELETE", f"/contacts/{contact_id}/tags", json={"tags": tags})

    # ===== Opportunities =====

    async def search_opportunities(self, filters: Dict[str, Any]) -> Dict[str, Any]:
        params = {"location_id": self.config.location_id, **filters}
        return await self._request("GET", "/opportunities/search", params=params)

    async def get_pipelines(self, location_id: Optional[str] = None) -> Dict[str, Any]:
        return await self._request(
            "GET", "/opportunities/pipelines", params={"locationId": self._location(location_id)}
        )

    async def get_opportunity(self, opportunity_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/opportunities/{opportunity_id}")

    async def create_opportunity(self, opportunity: Dict[str, Any]) -> Dict[str, Any]:
        body = {"locationId": self.config.location_id, **opportunity}
        return await self._request("POST", "/opportunities/", json=body)

    async def update_opportunity_status(self, opportunity_id: str, status: str) -> Dict[str, Any]:
        return await self._request(
            "PUT", f"/opportunities/{opportunity_id}/status", json={"status": status}
        )

    async def delete_opportunity(self, opportunity_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/opportunities/{opportunity_id}")

    # ===== Calendars =====

    async def get_calendars(self, location_id: Optional[str] = None) -> Dict[str, Any]:
        return await self._request("GET", "/calendars/", params={"locationId": self._location(location_id)})

    async def get_calendar(self, calendar_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/calendars/{calendar_id}")

    async def get_free_slots(
        self, calendar_id: str, start_date: int, end_date: int, timezone: Optional[str] = None
    ) -> Dict[str, Any]:
        params = {"startDate": start_date, "endDate": end_date, "timezone": timezone}
        return await self._request("GET", f"/calendars/{calendar_id}/free-slots", params=params)

    async def create_appointment(self, appointment: Dict[str, Any]) -> Dict[str, Any]:
        body = {"locationId": self.config.location_id, **appointment}
        return await self._request("POST", "/calendars/events/appointments", json=body)

    async def get_appointment(self, appointment_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/calendars/events/appointments/{appointment_id}")

    async def delete_appointment(self, appointment_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/calendars/events/{appointment_id}")

    # ===== Payments =====

    def _alt(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {"altId": self.config.location_id, "altType": "location", **params}

    async def list_orders(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("GET", "/payments/orders", params=self._alt(params))

    async def get_order_by_id(self, order_id: str, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("GET", f"/payments/orders/{order_id}", params=self._alt(params))

    async def list_transactions(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("GET", "/payments/transactions", params=self._alt(params))

    async def create_coupon(self, coupon: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/payments/coupon", json=self._alt(coupon))

    async def list_coupons(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("GET", "/payments/coupon/list", params=self._alt(params))

    async def delete_coupon(self, coupon_id: str, params: Dict[str, Any]) -> Dict[str, Any]:
        body = self._alt({"id": coupon_id, **params})
        return await self._request("DELETE", "/payments/coupon", json=body)

    # ===== Knowledge Base =====

    async def get_knowledge_base(self, knowledge_base_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/knowledge-bases/{knowledge_base_id}")

    async def delete_knowledge_base(self, knowledge_base_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/knowledge-bases/{knowledge_base_id}")

    async def update_knowledge_base(self, knowledge_base_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/knowledge-bases/{knowledge_base_id}", json=updates)

    async def list_knowledge_bases(
        self,
        location_id: Optional[str] = None,
        query: Optional[str] = None,
        limit: Optional[int] = None,
        last_knowledge_base_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = {
            "locationId": self._location(location_id),
            "query": query,
            "limit": limit,
            "lastKnowledgeBaseId": last_knowledge_base_id,
        }
        return await self._request("GET", "/knowledge-bases/", params=params)

    async def create_knowledge_base(
        self, name: str, description: Optional[str] = None, location_id: Optional[str] = None
    ) -> Dict[str, Any]:
        body = _clean({
            "locationId": self._location(location_id),
            "name": name,
            "description": description,
        })
        return await self._request("POST", "/knowledge-bases/", json=body)

    async def list_knowledge_base_faqs(
        self,
        knowledge_base_id: str,
        location_id: Optional[str] = None,
        limit: Optional[int] = None,
        last_faq_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = {
            "knowledgeBaseId": knowledge_base_id,
            "locationId": self._location(location_id),
            "limit": limit,
            "lastFaqId": last_faq_id,
        }
        return await self._request("GET", "/knowledge-bases/faqs", params=params)

    async def create_knowledge_base_faq(
        self, knowledge_base_id: str, question: str, answer: str, location_id: Optional[str] = None
    ) -> Dict[str, Any]:
        body = {
            "locationId": self._location(location_id),
            "knowledgeBaseId": knowledge_base_id,
            "question": question,
            "answer": answer,
        }
        return await self._request("POST", "/knowledge-bases/faqs", json=body)

    async def update_knowledge_base_faq(self, faq_id: str, question: str, answer: str) -> Dict[str, Any]:
        return await self._request(
            "PUT", f"/knowledge-bases/faqs/{faq_id}", json={"question": question, "answer": answer}
        )

    async def delete_knowledge_base_faq(self, faq_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/knowledge-bases/faqs/{faq_id}")
