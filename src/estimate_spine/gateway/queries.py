"""GraphQL documents for the Projects V2 API."""

from __future__ import annotations

from estimate_spine.core.settings import OwnerType

PAGE_SIZE = 100
FIELDS_PAGE_SIZE = 100
FIELD_VALUES_PAGE_SIZE = 50

_RESOLVE_FIELDS = """
query($ownerName: String!, $projectNumber: Int!) {
    %(owner)s(login: $ownerName) {
        projectV2(number: $projectNumber) {
            id
            fields(first: %(fields)d) {
                nodes {
                    ... on ProjectV2SingleSelectField {
                        id
                        name
                    }
                    ... on ProjectV2FieldCommon {
                        id
                        name
                    }
                }
            }
        }
    }
}
"""

LIST_ITEMS = """
query($projectId: ID!, $cursor: String) {
    node(id: $projectId) {
        ... on ProjectV2 {
            items(first: %(page)d, after: $cursor) {
                pageInfo {
                    hasNextPage
                    endCursor
                }
                nodes {
                    id
                    content {
                        ... on DraftIssue {
                            title
                        }
                        ... on Issue {
                            title
                        }
                        ... on PullRequest {
                            title
                        }
                    }
                    fieldValues(first: %(values)d) {
                        nodes {
                            ... on ProjectV2ItemFieldSingleSelectValue {
                                name
                                field {
                                    ... on ProjectV2FieldCommon {
                                        name
                                    }
                                }
                            }
                            ... on ProjectV2ItemFieldNumberValue {
                                number
                                field {
                                    ... on ProjectV2FieldCommon {
                                        name
                                    }
                                }
                            }
                        }
                    }
                }
            }
        }
    }
}
""" % {"page": PAGE_SIZE, "values": FIELD_VALUES_PAGE_SIZE}

UPDATE_NUMBER_FIELD = """
mutation($input: UpdateProjectV2ItemFieldValueInput!) {
    updateProjectV2ItemFieldValue(input: $input) {
        projectV2Item {
            id
        }
    }
}
"""


def resolve_fields_query(owner_type: OwnerType) -> str:
    """Field/project lookup rooted at ``organization`` or ``user``."""
    return _RESOLVE_FIELDS % {"owner": owner_type.value, "fields": FIELDS_PAGE_SIZE}


__all__ = [
    "PAGE_SIZE",
    "FIELDS_PAGE_SIZE",
    "FIELD_VALUES_PAGE_SIZE",
    "LIST_ITEMS",
    "UPDATE_NUMBER_FIELD",
    "resolve_fields_query",
]
