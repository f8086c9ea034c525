# Shared fixtures: a ContentService wired to an in-process fake of the
# GraphQL endpoint (httpx.MockTransport), no network involved.

import json
import sys
from pathlib import Path

import httpx
import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from core.content_service import ContentService  # noqa: E402
from core.transport import GraphQLClient  # noqa: E402

CONTENT_URL = "http://content.test/cd/api"
TOKEN_URL = "http://token.test/token.svc"


class FakeContentService:
    """Records every request and answers with a canned GraphQL body."""

    def __init__(self, body=None, status_code=200, raw=None, error=None):
        self.body = body
        self.status_code = status_code
        self.raw = raw
        self.error = error
        self.requests = []

    @property
    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error(f"simulated {self.error.__name__}", request=request)
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw)
        return httpx.Response(self.status_code, json=self.body)


@pytest.fixture
def make_service():
    """Build a ContentService backed by a FakeContentService.

    Usage: service, fake = make_service(body={"data": {...}})
    """
    clients = []

    def _make(**kwargs):
        fake = FakeContentService(**kwargs)
        client = GraphQLClient(CONTENT_URL, client=httpx.Client(transport=httpx.MockTransport(fake)))
        clients.append(client)
        return ContentService(client), fake

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def task_topic_data():
    return {
        "__typename": "IshTaskTopic",
        "publicationId": 42,
        "itemId": 1001,
        "title": "Install the server",
        "shortDescription": "How to install.",
        "url": "/42/1001/install-the-server",
        "xhtml": "<div>Install</div>",
        "body": {
            "steps": [
                {"__typename": "IshStep", "title": "Download", "xhtml": "<p>Get it</p>"},
                {"__typename": "IshStep", "title": "Run", "xhtml": "<p>Run it</p>"},
            ]
        },
        "links": [
            {
                "item": {
                    "__typename": "BinaryComponent",
                    "publicationId": 42,
                    "itemId": 2001,
                    "title": "installer.zip",
                    "variants": {
                        "edges": [
                            {"node": {"binaryId": 7, "downloadUrl": "/binary/42/2001/7"}},
                            {"node": None},
                        ]
                    },
                }
            },
            {"item": {"__typename": "Page", "publicationId": 42, "itemId": 3001, "title": "Home"}},
        ],
        "relatedLinks": {
            "links": [
                {
                    "item": {
                        "__typename": "IshGenericTopic",
                        "publicationId": 42,
                        "itemId": 1002,
                        "title": "Configure the server",
                        "shortDescription": "How to configure.",
                    }
                }
            ]
        },
    }


@pytest.fixture
def generic_topic_data():
    return {
        "__typename": "IshGenericTopic",
        "publicationId": 42,
        "itemId": 1002,
        "title": "Configure the server",
        "shortDescription": "How to configure.",
        "url": "/42/1002/configure-the-server",
        "xhtml": "<div>Configure</div>",
        "links": [],
        "relatedLinks": [],
    }
