from __future__ import annotations

import pytest

EPIC_DOC = {
    "number": 100,
    "title": "Checkout rewrite",
    "owner": "acme",
    "repo": "shop",
    "batches": [
        {
            "number": 10,
            "title": "Backend",
            "status": "in-progress",
            "tasks": [
                {"number": 1, "title": "Cart model", "status": "done"},
                {"number": 2, "title": "Payments API", "status": "in-progress", "dependsOn": [1]},
            ],
        },
        {
            "number": 20,
            "title": "Frontend",
            "dependsOn": [10],
            "tasks": [
                {"number": 3, "title": "Checkout page <beta>", "dependsOn": [2]},
                {"number": 4, "title": "Receipts", "status": "not-planned"},
            ],
        },
    ],
}


@pytest.fixture
def epic_doc() -> dict:
    return EPIC_DOC
