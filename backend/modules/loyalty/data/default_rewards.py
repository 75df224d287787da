# backend/modules/loyalty/data/default_rewards.py

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class RewardCatalogEntry:
    id: str
    title: str
    cost: int
    description: str

    def summary(self) -> Dict[str, object]:
        return {"id": self.id, "title": self.title, "cost": self.cost}

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "cost": self.cost,
            "desc": self.description,
        }


# Server-side catalog (reward id -> title/cost); not editable at runtime
REWARDS_CATALOG: List[RewardCatalogEntry] = [
    RewardCatalogEntry(
        id="milkshake_30",
        title="Milkshake do 30 PLN",
        cost=25,
        description="Wartość do 30 PLN",
    ),
    RewardCatalogEntry(
        id="burger_set_60",
        title="Zestaw burger do 60 PLN",
        cost=50,
        description="Wartość do 60 PLN",
    ),
    RewardCatalogEntry(
        id="order_120",
        title="Zamówienie do 120 PLN",
        cost=100,
        description="Wartość do 120 PLN",
    ),
]


def get_catalog_entry(reward_id: str) -> Optional[RewardCatalogEntry]:
    for entry in REWARDS_CATALOG:
        if entry.id == reward_id:
            return entry
    return None
