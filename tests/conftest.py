"""Shared fixtures: a fake Firebase backend served through httpx.MockTransport."""

from __future__ import annotations

import json

import httpx
import pytest


class FakeFirebase:
    """Minimal Identity Toolkit, Secure Token and Firestore endpoints."""

    def __init__(self):
        self.documents: dict[str, dict] = {}
        self.requests: list[httpx.Request] = []
        self.fail_writes = False
        self.reject_next_with_401 = False
        self.refreshes = 0

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host = request.url.host
        path = request.url.path

        if host == "identitytoolkit.googleapis.com":
            body = json.loads(request.content)
            if body.get("password") != "secret":
                return httpx.Response(400, json={"error": {"message": "INVALID_PASSWORD"}})
            return httpx.Response(200, json={
                "idToken": "token-1",
                "refreshToken": "refresh-1",
                "localId": "coach-1",
                "email": body["email"],
                "displayName": "Coach",
                "expiresIn": "3600",
            })

        if host == "securetoken.googleapis.com":
            self.refreshes += 1
            return httpx.Response(200, json={
                "id_token": f"token-r{self.refreshes}",
                "refresh_token": "refresh-2",
                "expires_in": "3600",
            })

        if host == "firestore.googleapis.com":
            if self.reject_next_with_401:
                self.reject_next_with_401 = False
                return httpx.Response(401, json={"error": {"message": "expired"}})
            doc_id = path.rsplit("/", 1)[-1]
            if request.method == "PATCH":
                if self.fail_writes:
                    return httpx.Response(503, text="unavailable")
                self.documents[doc_id] = json.loads(request.content)
                return httpx.Response(200, json={"name": path, **self.documents[doc_id]})
            if request.method == "GET":
                if doc_id not in self.documents:
                    return httpx.Response(404, json={"error": {"code": 404}})
                return httpx.Response(200, json={"name": path, **self.documents[doc_id]})

        return httpx.Response(500, text=f"unexpected request {request.method} {request.url}")


@pytest.fixture
def firebase() -> FakeFirebase:
    return FakeFirebase()


@pytest.fixture
def transport(firebase: FakeFirebase) -> httpx.MockTransport:
    return httpx.MockTransport(firebase.handler)
