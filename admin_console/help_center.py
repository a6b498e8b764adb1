"""Help center client: categories, articles, support tickets, diagnostics."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from admin_console.admin_client import AdminClient

HELP_ENDPOINT = "/admin/help"
TICKET_PRIORITIES = ("LOW", "MEDIUM", "HIGH", "URGENT")
TICKET_CATEGORIES = ("GENERAL", "TECHNICAL", "BILLING", "BUG_REPORT", "FEATURE_REQUEST")


class HelpCenterClient:
    def __init__(self, client: AdminClient):
        self.client = client

    def categories(self) -> List[Dict[str, Any]]:
        return self.client.get(f"{HELP_ENDPOINT}/categories").get("data") or []

    def create_category(self, name: str, description: str = "", order: int = 0, icon: Optional[str] = None) -> Dict[str, Any]:
        payload = {"name": name, "description": description, "order": order, "icon": icon}
        return self.client.post(f"{HELP_ENDPOINT}/categories", json=payload)["data"]

    def articles(self, category: Optional[str] = None, search: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {
            "category": category if category and category != "all" else None,
            "search": search or None,
        }
        return self.client.get(f"{HELP_ENDPOINT}/articles", params=params).get("data") or []

    def article(self, article_id: str) -> Dict[str, Any]:
        return self.client.get(f"{HELP_ENDPOINT}/articles/{article_id}")["data"]

    def create_article(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self.client.post(f"{HELP_ENDPOINT}/articles", json=payload)["data"]

    def update_article(self, article_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self.client.put(f"{HELP_ENDPOINT}/articles/{article_id}", json=payload)["data"]

    def delete_article(self, article_id: str) -> None:
        self.client.delete(f"{HELP_ENDPOINT}/articles/{article_id}")

    def tickets(
        self,
        *,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        category: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Dict[str, Any]:
        """Return ``{tickets, pagination}``; ``"all"`` filters are dropped."""
        params: Dict[str, Any] = {"page": page, "limit": limit}
        for name, value in (("status", status), ("priority", priority), ("category", category)):
            if value and value != "all":
                params[name] = value
        return self.client.get(f"{HELP_ENDPOINT}/tickets", params=params).get("data") or {}

    def submit_ticket(
        self,
        subject: str,
        description: str,
        priority: str = "MEDIUM",
        category: str = "GENERAL",
    ) -> Dict[str, Any]:
        payload = {
            "subject": subject,
            "description": description,
            "priority": priority,
            "category": category,
        }
        return self.client.post(f"{HELP_ENDPOINT}/tickets", json=payload)["data"]

    def diagnostics(self) -> Dict[str, Any]:
        return self.client.get(f"{HELP_ENDPOINT}/diagnostics").get("data") or {}
