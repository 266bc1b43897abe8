"""
Input validation schemas using Pydantic for the HTTP layer.

Shape checks live here; the emptiness rules (blank name, no ingredients left
after trimming) are enforced by the catalog itself so every caller gets them.
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Union


class MealInput(BaseModel):
    """Schema for a new meal. Ingredients may be newline-separated text or a list."""
    name: str = Field(..., max_length=200)
    ingredients: Union[str, List[str]]
    category: Optional[str] = Field(None, max_length=100)
    instructions: Optional[str] = None
    prep_time: Optional[int] = Field(None, ge=0, le=24 * 60)
    servings: Optional[int] = Field(None, ge=1, le=50)

    @field_validator('name', 'category')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v

    def metadata(self) -> dict:
        return {
            "category": self.category or None,
            "instructions": self.instructions or None,
            "prep_time": self.prep_time,
            "servings": self.servings,
        }


class MealUpdateInput(BaseModel):
    """Schema for renaming a meal and/or replacing its ingredients."""
    name: Optional[str] = Field(None, max_length=200)
    ingredients: Optional[Union[str, List[str]]] = None


class PlanAssignInput(BaseModel):
    """Schema for assigning a meal to a day; a blank name clears the day."""
    meal_name: Optional[str] = None

    @field_validator('meal_name')
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v
