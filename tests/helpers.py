"""Shared fakes for order feed tests."""

from __future__ import annotations

import json
from typing import Any

import requests


class FakeResponse:
    def __init__(self, body: str, status_code: int = 200) -> None:
        self.body = body
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self) -> Any:
        return json.loads(self.body)


class FakeSession:
    """Records requested URLs and replays a canned response or error."""

    def __init__(
        self,
        response: FakeResponse | None = None,
        error: Exception | None = None,
    ) -> None:
        self.response = response
        self.error = error
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response


def feed(*toppings: list[str]) -> str:
    return json.dumps([{"toppings": items} for items in toppings])
