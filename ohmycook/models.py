import copy
from enum import Enum
from typing import Any, Self


GENERAL_CONTEXT = "__general__"
DEFAULT_QUANTITY = "1"


class Lang(Enum):
    en = "en"
    ko = "ko"

    @property
    def display(self) -> str:
        return "Korean" if self is Lang.ko else "English"


class Category(Enum):
    vegetables = "vegetables"
    fruits = "fruits"
    meat = "meat"
    seafood = "seafood"
    grains_carbs = "grainsCarbs"
    dairy = "dairy"
    seasoning = "seasoning"
    nuts_seeds = "nutsSeeds"
    others = "others"


class Difficulty(Enum):
    easy = "Easy"
    medium = "Medium"
    hard = "Hard"


class HydrationState(Enum):
    pending = "Pending"
    hydrated = "Hydrated"


class Role(Enum):
    user = "user"
    model = "model"


class IngredientEntry:
    def __init__(
        self,
        *,
        canonical_key: str,
        en: str,
        ko: str,
        category: Category,
        emoji: str,
    ) -> None:
        self.canonical_key = canonical_key
        self.translations = {Lang.en: en, Lang.ko: ko}
        self.category = category
        self.emoji = emoji

    def __repr__(self) -> str:
        return f"<IngredientEntry(key={self.canonical_key}, ko={self.translations[Lang.ko]})>"

    def name(self, lang: Lang) -> str:
        return self.translations[lang]


class Ingredient:
    def __init__(self, canonical_key: str, quantity: str = DEFAULT_QUANTITY) -> None:
        self.canonical_key = canonical_key
        self.quantity = quantity

    def __repr__(self) -> str:
        return f"<Ingredient(key={self.canonical_key}, quantity={self.quantity})>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ingredient):
            return NotImplemented
        return (self.canonical_key, self.quantity) == (
            other.canonical_key,
            other.quantity,
        )

    def to_dict(self) -> dict[str, str]:
        return {"name": self.canonical_key, "quantity": self.quantity}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(data["name"], data.get("quantity", DEFAULT_QUANTITY))


class Cuisine(Enum):
    any = "any"
    korean = "korean"
    japanese = "japanese"
    chinese = "chinese"
    western = "western"


class Spiciness(Enum):
    mild = "mild"
    medium = "medium"
    spicy = "spicy"


class FilterDifficulty(Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"


class RecipeFilters:
    def __init__(
        self,
        *,
        cuisine: Cuisine = Cuisine.any,
        servings: int = 2,
        spiciness: Spiciness = Spiciness.medium,
        difficulty: FilterDifficulty = FilterDifficulty.medium,
        max_cook_time: int = 45,
    ) -> None:
        self.cuisine = cuisine
        self.servings = servings
        self.spiciness = spiciness
        self.difficulty = difficulty
        self.max_cook_time = max_cook_time

    def to_dict(self) -> dict[str, Any]:
        return {
            "cuisine": self.cuisine.value,
            "servings": self.servings,
            "spiciness": self.spiciness.value,
            "difficulty": self.difficulty.value,
            "maxCookTime": self.max_cook_time,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        default = cls()
        return cls(
            cuisine=Cuisine(data.get("cuisine", default.cuisine.value)),
            servings=int(data.get("servings", default.servings)),
            spiciness=Spiciness(data.get("spiciness", default.spiciness.value)),
            difficulty=FilterDifficulty(
                data.get("difficulty", default.difficulty.value)
            ),
            max_cook_time=int(data.get("maxCookTime", default.max_cook_time)),
        )


class CookingLevel(Enum):
    beginner = "Beginner"
    intermediate = "Intermediate"
    advanced = "Advanced"


class UserProfile:
    def __init__(
        self,
        *,
        cooking_level: CookingLevel = CookingLevel.beginner,
        allergies: list[str] | None = None,
        preferred_cuisines: list[str] | None = None,
        disliked_ingredients: list[str] | None = None,
        available_tools: list[str] | None = None,
        spiciness_preference: int = 3,
        max_cook_time: int = 30,
    ) -> None:
        self.cooking_level = cooking_level
        self.allergies = [] if allergies is None else allergies
        self.preferred_cuisines = [] if preferred_cuisines is None else preferred_cuisines
        self.disliked_ingredients = (
            [] if disliked_ingredients is None else disliked_ingredients
        )
        self.available_tools = [] if available_tools is None else available_tools
        self.spiciness_preference = spiciness_preference
        self.max_cook_time = max_cook_time

    def to_dict(self) -> dict[str, Any]:
        return {
            "cookingLevel": self.cooking_level.value,
            "allergies": list(self.allergies),
            "preferredCuisines": list(self.preferred_cuisines),
            "dislikedIngredients": list(self.disliked_ingredients),
            "availableTools": list(self.available_tools),
            "spicinessPreference": self.spiciness_preference,
            "maxCookTime": self.max_cook_time,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            cooking_level=CookingLevel(data.get("cookingLevel", "Beginner")),
            allergies=list(data.get("allergies", [])),
            preferred_cuisines=list(data.get("preferredCuisines", [])),
            disliked_ingredients=list(data.get("dislikedIngredients", [])),
            available_tools=list(data.get("availableTools", [])),
            spiciness_preference=int(data.get("spicinessPreference", 3)),
            max_cook_time=int(data.get("maxCookTime", 30)),
        )


class Substitution:
    def __init__(self, missing: str, substitute: str) -> None:
        self.missing = missing
        self.substitute = substitute

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Substitution):
            return NotImplemented
        return (self.missing, self.substitute) == (other.missing, other.substitute)

    def to_dict(self) -> dict[str, str]:
        return {"missing": self.missing, "substitute": self.substitute}


class RecipeOverview:
    def __init__(
        self,
        *,
        name: str,
        english_name: str,
        description: str,
        cuisine: str,
        cook_time_minutes: int,
        difficulty: Difficulty,
        spiciness: int,
        calories: int,
        servings: int,
        ingredient_names: list[str],
        missing_ingredient_names: list[str] | None = None,
        image_search_query: str = "",
        image_url: str | None = None,
    ) -> None:
        if not 1 <= spiciness <= 5:
            raise ValueError(f"Spiciness must be between 1 and 5, got {spiciness}.")
        self.name = name
        self.english_name = english_name
        self.description = description
        self.cuisine = cuisine
        self.cook_time_minutes = cook_time_minutes
        self.difficulty = difficulty
        self.spiciness = spiciness
        self.calories = calories
        self.servings = servings
        self.ingredient_names = ingredient_names
        self.missing_ingredient_names = (
            [] if missing_ingredient_names is None else missing_ingredient_names
        )
        self.image_search_query = image_search_query
        self.image_url = image_url

    def __repr__(self) -> str:
        return f"<RecipeOverview(name={self.name})>"

    def to_dict(self) -> dict[str, Any]:
        return {
            "recipeName": self.name,
            "englishRecipeName": self.english_name,
            "description": self.description,
            "cuisine": self.cuisine,
            "cookTime": self.cook_time_minutes,
            "difficulty": self.difficulty.value,
            "spiciness": self.spiciness,
            "calories": self.calories,
            "servings": self.servings,
            "ingredients": list(self.ingredient_names),
            "missingIngredients": list(self.missing_ingredient_names),
            "imageSearchQuery": self.image_search_query,
            "imageUrl": self.image_url,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            name=data["recipeName"],
            english_name=data["englishRecipeName"],
            description=data["description"],
            cuisine=data["cuisine"],
            cook_time_minutes=int(data["cookTime"]),
            difficulty=Difficulty(data["difficulty"]),
            spiciness=int(data["spiciness"]),
            calories=int(data["calories"]),
            servings=int(data["servings"]),
            ingredient_names=list(data["ingredients"]),
            missing_ingredient_names=list(data.get("missingIngredients") or []),
            image_search_query=data.get("imageSearchQuery", ""),
            image_url=data.get("imageUrl"),
        )


class RecipeDetail:
    def __init__(
        self,
        *,
        ingredients_with_quantities: list[str],
        instructions: list[str],
        substitutions: list[Substitution] | None = None,
    ) -> None:
        self.ingredients_with_quantities = ingredients_with_quantities
        self.instructions = instructions
        self.substitutions = [] if substitutions is None else substitutions

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecipeDetail):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_dict(self) -> dict[str, Any]:
        return {
            "ingredients": list(self.ingredients_with_quantities),
            "substitutions": [s.to_dict() for s in self.substitutions],
            "instructions": list(self.instructions),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            ingredients_with_quantities=list(data["ingredients"]),
            instructions=list(data["instructions"]),
            substitutions=[
                Substitution(s["missing"], s["substitute"])
                for s in data.get("substitutions") or []
            ],
        )


class Recipe:
    """An overview recipe, optionally hydrated with its detail."""

    def __init__(
        self,
        overview: RecipeOverview,
        *,
        recipe_id: str = "",
        detail: RecipeDetail | None = None,
    ) -> None:
        self.overview = overview
        self.recipe_id = recipe_id
        self.detail = detail

    def __repr__(self) -> str:
        return f"<Recipe(name={self.name}, state={self.hydration_state.value})>"

    @property
    def name(self) -> str:
        return self.overview.name

    @property
    def display_name(self) -> str:
        return self.name.split("(")[0].strip() or self.name

    @property
    def hydration_state(self) -> HydrationState:
        if self.detail is None:
            return HydrationState.pending
        return HydrationState.hydrated

    @property
    def is_hydrated(self) -> bool:
        return self.hydration_state is HydrationState.hydrated

    @property
    def ingredients(self) -> list[str]:
        if self.detail is None:
            return self.overview.ingredient_names
        return self.detail.ingredients_with_quantities

    @property
    def instructions(self) -> list[str]:
        return [] if self.detail is None else self.detail.instructions

    def hydrate(self, detail: RecipeDetail) -> None:
        self.detail = detail

    def copy(self) -> "Recipe":
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        data = self.overview.to_dict()
        data["id"] = self.recipe_id
        data["hydrationState"] = self.hydration_state.value
        data["detail"] = None if self.detail is None else self.detail.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        detail = data.get("detail")
        return cls(
            RecipeOverview.from_dict(data),
            recipe_id=data.get("id", ""),
            detail=None if detail is None else RecipeDetail.from_dict(detail),
        )


class ChatMessage:
    def __init__(self, role: Role, text: str) -> None:
        self.role = role
        self.text = text

    def __repr__(self) -> str:
        return f"<ChatMessage(role={self.role.value}, text={self.text[:20]!r})>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChatMessage):
            return NotImplemented
        return (self.role, self.text) == (other.role, other.text)

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role.value, "text": self.text}

    @classmethod
    def from_dict(cls, data: dict[str, str]) -> Self:
        return cls(Role(data["role"]), data["text"])


class ChatContext:
    def __init__(self, key: str, messages: list[ChatMessage] | None = None) -> None:
        self.key = key
        self.messages: list[ChatMessage] = [] if messages is None else messages

    def __repr__(self) -> str:
        return f"<ChatContext(key={self.key}, messages={len(self.messages)})>"

    @property
    def is_empty(self) -> bool:
        return not self.messages

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key, "messages": [m.to_dict() for m in self.messages]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(data["key"], [ChatMessage.from_dict(m) for m in data["messages"]])
