"""
Shared pytest fixtures for estimate-spine tests.

This module provides:
- Environment isolation so settings never pick up the developer's shell
- A scripted in-memory GraphQL transport
- Builders for Projects V2 response payloads

Usage:
    async def test_fetch(settings, transport):
        transport.respond(items_page([...]))
        gateway = BoardGateway(transport, settings)
"""

from __future__ import annotations

from collections import deque
from typing import Any

import pytest
import structlog

from estimate_spine.core.settings import ENV_NAMES, EstimateSettings, load_settings


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Clear every setting from the environment and keep .env lookups in tmp."""
    for env_name in ENV_NAMES.values():
        monkeypatch.delenv(env_name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


# =============================================================================
# Settings
# =============================================================================


@pytest.fixture
def settings() -> EstimateSettings:
    return load_settings(
        token="ghp_test_token_1234",
        owner_type="organization",
        owner_name="acme",
        project_number=7,
    )


@pytest.fixture
def user_settings() -> EstimateSettings:
    return load_settings(
        token="ghp_test_token_1234",
        owner_type="User",
        owner_name="octocat",
        project_number=3,
        target_field="Estimation Hack",
    )


# =============================================================================
# Transport
# =============================================================================


class ScriptedTransport:
    """GraphQL transport that replays queued responses and records calls.

    Queue a dict to return it as ``data``, or an exception to raise it.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self._responses: deque[Any] = deque()

    def respond(self, *responses: Any) -> ScriptedTransport:
        self._responses.extend(responses)
        return self

    async def execute(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        self.calls.append((query, variables))
        if not self._responses:
            raise AssertionError(f"unexpected GraphQL call with {variables!r}")
        response = self._responses.popleft()
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def transport() -> ScriptedTransport:
    return ScriptedTransport()


# =============================================================================
# Payload builders
# =============================================================================


def fields_payload(owner: str, project_id: str = "PVT_1", fields: list[tuple[str, str]] | None = None) -> dict:
    if fields is None:
        fields = [("F_TITLE", "Title"), ("F_SIZE", "Size"), ("F_RISK", "Risk"), ("F_EST", "Days Estimate")]
    return {
        owner: {
            "projectV2": {
                "id": project_id,
                "fields": {"nodes": [{"id": fid, "name": name} for fid, name in fields]},
            }
        }
    }


def item_node(
    item_id: str,
    title: str | None = "An item",
    size: str | None = None,
    risk: str | None = None,
    estimate: float | None = None,
    estimate_field: str = "Days Estimate",
) -> dict:
    values: list[dict] = [{}]  # non-matching field value types come back empty
    if size is not None:
        values.append({"name": size, "field": {"name": "Size"}})
    if risk is not None:
        values.append({"name": risk, "field": {"name": "Risk"}})
    if estimate is not None:
        values.append({"number": estimate, "field": {"name": estimate_field}})
    return {
        "id": item_id,
        "content": {"title": title} if title is not None else None,
        "fieldValues": {"nodes": values},
    }


def items_page(nodes: list[dict], end_cursor: str | None = None, has_next: bool = False) -> dict:
    return {
        "node": {
            "items": {
                "pageInfo": {"hasNextPage": has_next, "endCursor": end_cursor},
                "nodes": nodes,
            }
        }
    }


def update_payload(item_id: str) -> dict:
    return {"updateProjectV2ItemFieldValue": {"projectV2Item": {"id": item_id}}}
