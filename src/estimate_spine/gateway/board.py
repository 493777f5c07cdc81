"""
Board gateway: the three remote operations the reconciliation run needs.

Manifesto:
    The engine should not know what GraphQL looks like. The gateway turns
    the Projects V2 API into three calls with domain types on both sides,
    and decides which transport failures are fatal:

    - **resolve_field_ids:** lookup failures raise ``RemoteLookupError``
    - **fetch_all_items:** any failure raises ``FetchError``; the run cannot
      continue with half a board because the cursor is gone
    - **update_estimate:** failures raise ``UpdateError``, which the engine
      records against the one item and moves on

Architecture:
    ::

        ReconciliationEngine
              │  ProjectFields / list[WorkItem] / item id
              ▼
        BoardGateway ── settings (owner, project, field names)
              │  query + variables / data
              ▼
        GraphQLTransport (httpx)

Tags:
    gateway, graphql, github-projects, pagination, estimate-spine
"""

from __future__ import annotations

from typing import Any

from estimate_spine.core.errors import (
    FetchError,
    FieldNotFoundError,
    ProjectNotFoundError,
    TransportError,
    UpdateError,
)
from estimate_spine.core.logging import get_logger, mask_secret
from estimate_spine.core.settings import EstimateSettings
from estimate_spine.domain.models import NO_TITLE, FieldDescriptor, ProjectFields, WorkItem
from estimate_spine.gateway.queries import LIST_ITEMS, UPDATE_NUMBER_FIELD, resolve_fields_query
from estimate_spine.transport.graphql import GraphQLTransport

logger = get_logger(__name__)


class BoardGateway:
    """Projects V2 access for one target board."""

    def __init__(self, transport: GraphQLTransport, settings: EstimateSettings):
        self._transport = transport
        self._settings = settings

    # ------------------------------------------------------------------ #
    # Identifier resolution
    # ------------------------------------------------------------------ #

    async def resolve_field_ids(self) -> ProjectFields:
        """Look up the project id and the target estimate field id.

        Raises:
            ProjectNotFoundError: the owner or project is not in the response
            FieldNotFoundError: the project has no field with the target name
            TransportError: the query itself failed
        """
        s = self._settings
        logger.info(
            "resolving_field_ids",
            token=mask_secret(s.token.get_secret_value()),
            owner_type=s.owner_type.value,
            owner_name=s.owner_name,
            project_number=s.project_number,
        )

        data = await self._transport.execute(
            resolve_fields_query(s.owner_type),
            {"ownerName": s.owner_name, "projectNumber": s.project_number},
        )

        owner = data.get(s.owner_type.value)
        if not owner:
            logger.warning(
                "owner_data_unavailable",
                owner_type=s.owner_type.value,
                owner_name=s.owner_name,
            )
        project = (owner or {}).get("projectV2")
        if not project or not project.get("id"):
            raise ProjectNotFoundError(s.owner_type.value, s.owner_name, s.project_number)

        fields = [
            FieldDescriptor(id=node["id"], name=node["name"])
            for node in ((project.get("fields") or {}).get("nodes") or [])
            if node and node.get("id") and node.get("name")
        ]
        estimate_field = find_field(fields, s.target_field)
        if estimate_field is None:
            raise FieldNotFoundError(s.target_field).with_context(project_id=project["id"])

        resolved = ProjectFields(project_id=project["id"], estimate_field=estimate_field)
        logger.info(
            "field_ids_resolved",
            project_id=resolved.project_id,
            estimate_field=estimate_field.name,
            estimate_field_id=estimate_field.id,
        )
        return resolved

    # ------------------------------------------------------------------ #
    # Item listing
    # ------------------------------------------------------------------ #

    async def fetch_all_items(self, project_id: str) -> list[WorkItem]:
        """Read every item on the project, 100 per page, in remote order.

        Raises:
            FetchError: any page failed or came back malformed
        """
        items: list[WorkItem] = []
        cursor: str | None = None
        page_number = 0

        while True:
            page_number += 1
            try:
                data = await self._transport.execute(
                    LIST_ITEMS,
                    {"projectId": project_id, "cursor": cursor},
                )
            except TransportError as e:
                raise FetchError(
                    f"Failed to fetch items page {page_number}: {e.message}",
                    cause=e,
                ).with_context(project_id=project_id, page=page_number)

            page = ((data.get("node") or {}).get("items")) if isinstance(data, dict) else None
            if page is None:
                raise FetchError(
                    f"Items page {page_number} has no item connection"
                ).with_context(project_id=project_id, page=page_number)

            nodes = page.get("nodes") or []
            for node in nodes:
                if not node or not node.get("id"):
                    logger.warning("item_node_skipped", page=page_number, node=node)
                    continue
                items.append(self.parse_item(node))

            page_info = page.get("pageInfo") or {}
            logger.debug(
                "items_page_fetched",
                page=page_number,
                count=len(nodes),
                has_next_page=bool(page_info.get("hasNextPage")),
            )
            if not page_info.get("hasNextPage"):
                break
            next_cursor = page_info.get("endCursor")
            if not next_cursor or next_cursor == cursor:
                raise FetchError(
                    f"Items page {page_number} reports more pages but the cursor did not advance"
                ).with_context(project_id=project_id, page=page_number, cursor=next_cursor)
            cursor = next_cursor

        logger.info("items_fetched", project_id=project_id, count=len(items), pages=page_number)
        return items

    def parse_item(self, node: dict[str, Any]) -> WorkItem:
        """Build a ``WorkItem`` from one item node of the listing query."""
        s = self._settings
        values = (node.get("fieldValues") or {}).get("nodes") or []

        size = field_value(values, s.size_field, "name")
        risk = field_value(values, s.risk_field, "name")
        estimate = field_value(values, s.target_field, "number")

        return WorkItem(
            id=node["id"],
            title=(node.get("content") or {}).get("title") or NO_TITLE,
            size_label=size or None,
            risk_label=risk or None,
            current_estimate=estimate,
        )

    # ------------------------------------------------------------------ #
    # Update
    # ------------------------------------------------------------------ #

    async def update_estimate(self, project_id: str, item_id: str, field_id: str, value: float) -> str:
        """Set the numeric field ``field_id`` of ``item_id`` to ``value``.

        Returns the updated item id.

        Raises:
            UpdateError: the mutation failed
        """
        variables = {
            "input": {
                "projectId": project_id,
                "itemId": item_id,
                "fieldId": field_id,
                "value": {"number": value},
            }
        }
        try:
            data = await self._transport.execute(UPDATE_NUMBER_FIELD, variables)
        except TransportError as e:
            raise UpdateError(
                f"Failed to update item {item_id}: {e.message}",
                cause=e,
            ).with_context(project_id=project_id, item_id=item_id)

        updated = ((data.get("updateProjectV2ItemFieldValue") or {}).get("projectV2Item") or {}).get("id")
        if not updated:
            raise UpdateError(
                f"Update of item {item_id} returned no item"
            ).with_context(project_id=project_id, item_id=item_id)
        return updated


def find_field(fields: list[FieldDescriptor], name: str) -> FieldDescriptor | None:
    """First field whose name equals ``name`` ignoring case."""
    wanted = name.lower()
    return next((f for f in fields if f.name.lower() == wanted), None)


def field_value(values: list[dict[str, Any]], field_name: str, key: str) -> Any:
    """Value ``key`` of the first field value belonging to ``field_name`` (case-insensitive)."""
    wanted = field_name.lower()
    for value in values:
        if not value:
            continue
        name = (value.get("field") or {}).get("name")
        if name is not None and name.lower() == wanted:
            return value.get(key)
    return None


__all__ = ["BoardGateway", "find_field", "field_value"]
