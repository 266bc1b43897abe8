"""ShoppingList aggregate: counted ingredient items plus the user's checked-off overlay."""
from typing import Iterable, List, Optional, Set

from mealplanner.domain.errors import NotFoundError


class ShoppingListItem:
    def __init__(self, ingredient_key: str, text: str, count: int = 1, checked: bool = False):
        self.ingredient_key = ingredient_key
        self.text = text
        self.count = count
        self.checked = checked

    @property
    def id(self) -> str:
        # The ingredient key is stable across regenerations, unlike the list position.
        return self.ingredient_key

    @property
    def label(self) -> str:
        if self.count > 1:
            return f"{self.text} ({self.count}x)"
        return self.text

    def __eq__(self, other) -> bool:
        if not isinstance(other, ShoppingListItem):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        return f"[{'x' if self.checked else ' '}] {self.label}"

    __repr__ = __str__

    def to_dict(self):
        return {
            "id": self.id,
            "text": self.text,
            "count": self.count,
            "label": self.label,
            "checked": self.checked,
        }


class ShoppingList:
    def __init__(self, items: Optional[List[ShoppingListItem]] = None, nothing_planned: bool = False):
        self.items: List[ShoppingListItem] = items[:] if items else []
        self.nothing_planned = nothing_planned

    def get_items(self) -> List[ShoppingListItem]:
        return self.items

    def labels(self) -> List[str]:
        return [item.label for item in self.items]

    def item_at(self, index: int) -> ShoppingListItem:
        if not isinstance(index, int) or index < 0 or index >= len(self.items):
            raise NotFoundError(f"No shopping list item at position {index}")
        return self.items[index]

    def __len__(self) -> int:
        return len(self.items)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ShoppingList):
            return NotImplemented
        return self.items == other.items and self.nothing_planned == other.nothing_planned

    def __str__(self) -> str:
        if self.nothing_planned:
            return "Shopping List: nothing planned"
        return "Shopping List:\n\t" + "\n\t".join(str(item) for item in self.items)

    __repr__ = __str__


class CheckedOverlay:
    '''
    Checked-off state for a shopping list, keyed by item id rather than by position,
    so regenerating the list with a different plan keeps checks on the right ingredients.
    '''

    def __init__(self, checked_ids: Optional[Iterable[str]] = None):
        self.checked_ids: Set[str] = set(checked_ids or [])

    def apply(self, shopping_list: ShoppingList) -> ShoppingList:
        '''Marks items whose id is in the overlay and prunes ids no longer in the list.'''
        present = {item.id for item in shopping_list.items}
        self.checked_ids &= present
        for item in shopping_list.items:
            item.checked = item.id in self.checked_ids
        return shopping_list

    def check(self, shopping_list: ShoppingList, index: int) -> ShoppingListItem:
        item = shopping_list.item_at(index)
        item.checked = True
        self.checked_ids.add(item.id)
        return item

    def uncheck(self, shopping_list: ShoppingList, index: int) -> ShoppingListItem:
        item = shopping_list.item_at(index)
        item.checked = False
        self.checked_ids.discard(item.id)
        return item

    def clear_checked(self, shopping_list: ShoppingList) -> int:
        '''Removes checked items from the list and from the overlay. Returns how many were removed.'''
        removed = [item for item in shopping_list.items if item.checked]
        shopping_list.items = [item for item in shopping_list.items if not item.checked]
        for item in removed:
            self.checked_ids.discard(item.id)
        return len(removed)

    def clear_all(self, shopping_list: ShoppingList):
        shopping_list.items = []
        self.checked_ids.clear()

    def to_list(self) -> List[str]:
        return sorted(self.checked_ids)

    @staticmethod
    def from_list(data) -> "CheckedOverlay":
        if not isinstance(data, list):
            return CheckedOverlay()
        return CheckedOverlay(str(entry) for entry in data if isinstance(entry, (str, int)))
