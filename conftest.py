"""Shared pytest fixtures."""
from typing import Dict, List

import pytest

SKINCARE_POSTS: List[Dict[str, str]] = [
    {"id": "1", "text": "Ik heb last van een droge huid na het koken", "platform": "reddit",
     "timestamp": "2024-03-01T10:00:00"},
    {"id": "2", "text": "Waar te koop: goede handcreme voor droge huid", "platform": "instagram",
     "timestamp": "2024-03-02T11:00:00"},
    {"id": "3", "text": "Review van deze handcreme: beter dan de vorige", "platform": "trustpilot",
     "timestamp": "2024-03-04T09:30:00"},
    {"id": "4", "text": "Beste manier om een droge huid te verzorgen?", "platform": "reddit",
     "timestamp": "2024-03-08T14:00:00"},
    {"id": "5", "text": "Handcreme bestellen met korting, droge huid voorbij", "platform": "instagram",
     "timestamp": "2024-03-09T16:00:00"},
]


@pytest.fixture
def skincare_posts() -> List[Dict[str, str]]:
    """Five Dutch posts about dry skin and hand cream across three platforms."""
    return [dict(post) for post in SKINCARE_POSTS]
