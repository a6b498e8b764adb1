import json

import httpx

from admin_console.admin_client import AdminClient


class RecordingTransport:
    """Scripted ``httpx.MockTransport`` that keeps every request it sees."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request):
        self.requests.append(request)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(request)
        # Fresh copy so a scripted response can be served more than once.
        return httpx.Response(
            response.status_code,
            headers=response.headers,
            content=response.content,
        )

    def client(self, token="test-token"):
        return AdminClient("http://api.test/api", token=token, transport=self.transport)

    def params(self, index=-1):
        return dict(self.requests[index].url.params)

    def body(self, index=-1):
        return json.loads(self.requests[index].content)


def envelope(data, status_code=200):
    return httpx.Response(status_code, json={"success": True, "data": data})


def list_payload(collection, items, *, page=1, total_pages=1, total_items=None, per_page=20):
    return {
        collection: items,
        "pagination": {
            "currentPage": page,
            "totalPages": total_pages,
            "totalItems": len(items) if total_items is None else total_items,
            "itemsPerPage": per_page,
        },
    }
