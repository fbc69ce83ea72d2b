"""Example saved searches written on a store's first access."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from ..schemas import SavedSearch

_EXAMPLES: list[dict[str, Any]] = [
    {
        "id": "search-example-senior-frontend",
        "name": "Senior Frontend Engineers",
        "description": "Senior and executive candidates with React or Vue experience",
        "globalOperator": "AND",
        "groups": [
            {
                "id": "group-frontend-skills",
                "logicalOperator": "OR",
                "conditions": [
                    {"id": "cond-react", "field": "skills", "operator": "contains", "value": "react"},
                    {
                        "id": "cond-vue",
                        "field": "skills",
                        "operator": "contains",
                        "value": "vue",
                        "logicalOperator": "OR",
                    },
                ],
            },
            {
                "id": "group-frontend-level",
                "logicalOperator": "AND",
                "conditions": [
                    {
                        "id": "cond-senior",
                        "field": "experienceLevel",
                        "operator": "in",
                        "value": ["senior", "executive"],
                    }
                ],
            },
        ],
    },
    {
        "id": "search-example-active-cloud",
        "name": "Active Cloud Engineers",
        "description": "Active candidates tagged or skilled in AWS",
        "globalOperator": "AND",
        "groups": [
            {
                "id": "group-cloud",
                "logicalOperator": "AND",
                "conditions": [
                    {"id": "cond-aws", "field": "skills", "operator": "contains", "value": "aws"},
                    {
                        "id": "cond-active",
                        "field": "status",
                        "operator": "equals",
                        "value": "active",
                        "logicalOperator": "AND",
                    },
                ],
            }
        ],
    },
    {
        "id": "search-example-referrals",
        "name": "Referral Pipeline",
        "description": "Referred candidates who have not been placed yet",
        "globalOperator": "AND",
        "isDefault": True,
        "groups": [
            {
                "id": "group-referrals",
                "logicalOperator": "AND",
                "conditions": [
                    {"id": "cond-referral", "field": "source", "operator": "equals", "value": "referral"},
                    {
                        "id": "cond-not-placed",
                        "field": "status",
                        "operator": "not_equals",
                        "value": "placed",
                        "logicalOperator": "AND",
                    },
                ],
            }
        ],
    },
]


def example_searches(now: datetime) -> list[SavedSearch]:
    """Return fresh copies of the example searches stamped with ``now``."""
    return [
        SavedSearch.model_validate({**example, "createdAt": now, "updatedAt": now, "useCount": 0})
        for example in _EXAMPLES
    ]
