"""Meal domain entity: id, name, ingredient lines and optional metadata."""
from typing import Iterable, List, Optional, Union
from uuid import uuid4

from mealplanner.domain.errors import ValidationError


def new_meal_id() -> str:
    return uuid4().hex


def parse_ingredients(raw: Union[str, Iterable[str], None]) -> List[str]:
    '''Splits ingredient text on line breaks, trims each line and drops blanks.

    Lists are accepted too; every entry goes through the same trimming.
    Anything else (numbers, booleans, mappings, non-string entries) yields
    no lines, so callers treat the record as having no ingredients.
    '''
    if isinstance(raw, str):
        lines = raw.splitlines()
    elif isinstance(raw, (list, tuple)):
        lines = []
        for entry in raw:
            if isinstance(entry, str):
                lines.extend(entry.splitlines())
    else:
        return []
    return [line.strip() for line in lines if line and line.strip()]


def normalize_name(name: Optional[str]) -> str:
    """Name index key: trimmed and case-folded."""
    if not isinstance(name, str):
        return ""
    return name.strip().casefold()


class Meal:
    def __init__(self, name: str = "", ingredients: Optional[List[str]] = None, meal_id: Optional[str] = None,
                 category: Optional[str] = None, instructions: Optional[str] = None,
                 prep_time: Optional[int] = None, servings: Optional[int] = None):
        self.id = meal_id or new_meal_id()
        self.name = name
        self.ingredients = ingredients[:] if ingredients else []
        self.category = category
        self.instructions = instructions
        self.prep_time = prep_time
        self.servings = servings

    @classmethod
    def create(cls, name, ingredients, **metadata) -> "Meal":
        '''
        Builds a validated Meal from raw user input.
        Raises ValidationError when the name or the ingredient list is empty after trimming.
        '''
        clean_name = name.strip() if isinstance(name, str) else ""
        if not clean_name:
            raise ValidationError("Meal name is required")
        lines = parse_ingredients(ingredients)
        if not lines:
            raise ValidationError("Meal needs at least one ingredient")
        return cls(clean_name, lines, **metadata)

    def __str__(self) -> str:
        return f"{self.name} - {len(self.ingredients)} ingredients: {', '.join(self.ingredients)}"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, Meal):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data) -> "Meal":
        '''Creates a Meal from a persisted or remote record. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        raw_id = d.get("id")
        meal_id = str(raw_id) if raw_id not in (None, "") else None
        return Meal(
            name=(d.get("name") or "").strip() if isinstance(d.get("name"), str) else "",
            ingredients=parse_ingredients(d.get("ingredients")),
            meal_id=meal_id,
            category=d.get("category"),
            instructions=d.get("instructions"),
            prep_time=d.get("prepTime", d.get("prep_time")),
            servings=d.get("servings"),
        )

    def to_dict(self):
        '''Converts the Meal to a dictionary for JSON persistence; unset metadata is omitted.'''
        data = {
            "id": self.id,
            "name": self.name,
            "ingredients": list(self.ingredients),
        }
        for key, value in (("category", self.category), ("instructions", self.instructions),
                           ("prep_time", self.prep_time), ("servings", self.servings)):
            if value is not None:
                data[key] = value
        return data
