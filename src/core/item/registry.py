"""아이템 카탈로그 — JSON 로드 + 가격 산정 + 조회"""

from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from typing import Optional

from .models import EffectTrigger, EffectType, Item, ItemEffect, ItemRarity, ItemType
from .pricing import calculate_price

logger = logging.getLogger(__name__)


def _parse_effect(raw: dict) -> ItemEffect:
    chance = raw.get("chance")
    duration = raw.get("duration")
    max_stacks = raw.get("max_stacks")
    max_duration = raw.get("max_duration")
    return ItemEffect(
        trigger=EffectTrigger(raw["trigger"]),
        effect_type=EffectType(raw["effect_type"]),
        value=raw["value"],
        chance=float(chance) if chance is not None else None,
        stackable=bool(raw.get("stackable", False)),
        current_stacks=int(raw.get("current_stacks", 0)),
        max_stacks=int(max_stacks) if max_stacks is not None else None,
        duration=int(duration) if duration is not None else None,
        breakable=bool(raw.get("breakable", False)),
        max_duration=int(max_duration) if max_duration is not None else None,
        current_duration=int(raw.get("current_duration", 0)),
    )


class ItemCatalog:
    """
    아이템 템플릿 저장소.
    템플릿은 외부로 내보내지 않는다. 게임에 들어가는 아이템은 항상 instantiate()로 복제.
    """

    def __init__(self) -> None:
        self._items: dict[str, Item] = {}

    def load_from_json(self, path: str | Path) -> int:
        """items.json 로드. 반환: 로드된 수량.

        rarity/type/trigger/effect_type 문자열 → enum 변환.
        price는 여기서 한 번만 계산한다.
        """
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            raw_list: list[dict] = json.load(f)

        count = 0
        for raw in raw_list:
            try:
                item = Item(
                    id=raw["id"],
                    name=raw["name"],
                    emoji=raw.get("emoji", ""),
                    rarity=ItemRarity(raw["rarity"]),
                    item_type=ItemType(raw["type"]),
                    base_attack=int(raw.get("base_attack", 0)),
                    base_defense=int(raw.get("base_defense", 0)),
                    description=raw.get("description", ""),
                    effects=[_parse_effect(e) for e in raw.get("effects", [])],
                )
                self.register(item)
                count += 1
            except (KeyError, ValueError, TypeError) as e:
                logger.warning("Failed to load item: %s — %s", raw.get("id", "?"), e)

        logger.info("Loaded %d items from %s", count, path)
        return count

    def register(self, item: Item) -> None:
        """템플릿 등록. price 미지정(0)이면 가격 산정.
        이미 존재하는 id면 경고 로그 후 덮어쓴다.
        """
        if item.id in self._items:
            logger.warning("Overwriting existing item: %s", item.id)
        if item.price <= 0:
            item.price = calculate_price(item)
        self._items[item.id] = item

    def get(self, item_id: str) -> Optional[Item]:
        """템플릿 사본 조회. 없으면 None."""
        item = self._items.get(item_id)
        return item.clone() if item else None

    def instantiate(self, item_id: str) -> Item:
        """새 런타임 아이템 생성. 없는 id면 ValueError."""
        item = self._items.get(item_id)
        if item is None:
            raise ValueError(f"Unknown item: {item_id}")
        return item.clone()

    def get_all(self) -> list[Item]:
        return [i.clone() for i in self._items.values()]

    def by_rarity(self, rarity: ItemRarity) -> list[Item]:
        return [i.clone() for i in self._items.values() if i.rarity == rarity]

    def by_type(self, item_type: ItemType) -> list[Item]:
        return [i.clone() for i in self._items.values() if i.item_type == item_type]

    def random_items(
        self,
        count: int,
        exclude_ids: Optional[list[str]] = None,
        rng: Optional[random.Random] = None,
    ) -> list[Item]:
        """exclude_ids를 제외하고 무작위 count개."""
        rng = rng or random
        excluded = set(exclude_ids or [])
        available = [i for i in self._items.values() if i.id not in excluded]
        picked = rng.sample(available, min(count, len(available)))
        return [i.clone() for i in picked]

    def count(self) -> int:
        return len(self._items)

    def stats(self) -> dict:
        """희귀도/타입별 수량."""
        items = list(self._items.values())
        return {
            "total": len(items),
            "by_rarity": {
                r.value: sum(1 for i in items if i.rarity == r) for r in ItemRarity
            },
            "by_type": {
                t.value: sum(1 for i in items if i.item_type == t) for t in ItemType
            },
        }
