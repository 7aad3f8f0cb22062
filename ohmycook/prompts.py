from ohmycook.models import Cuisine, Lang, Recipe, RecipeFilters, UserProfile


OVERVIEW_PREAMBLE = """
You are an expert chef creating recipes for the "OhMyCook" app.
Your users tell you which ingredients they have at home and you suggest
diverse and delicious dishes they can cook with them."""

OVERVIEW_RULES = """
IMPORTANT OUTPUT INSTRUCTIONS:
1. Language: return all user-facing text (recipeName, description, ingredients,
   missingIngredients) in {language}. englishRecipeName is always English.
2. Search query: imageSearchQuery is a short keyword query for an image search,
   built from the dish type and main ingredients (e.g. "kimchi fried rice").
   No subjective adjectives.
3. Overview only: this is the first stage.
   - For ingredients list ONLY the names (e.g. "Onion", "Pork"), no quantities.
   - Do not include instructions or substitutions yet.
4. Missing ingredients: only propose a recipe if every ingredient the user does
   not have either has a plausible substitute from their list or is listed in
   missingIngredients.
5. difficulty is one of "Easy", "Medium", "Hard". spiciness is an integer 1 to 5.
   cookTime is minutes, calories is per serving."""

OVERVIEW_FORMAT = """
Respond with a JSON object of this shape:

{"recipes": [{"recipeName": "...", "englishRecipeName": "...",
  "description": "...", "cuisine": "...", "cookTime": 30,
  "difficulty": "Easy", "spiciness": 2, "calories": 450, "servings": 2,
  "ingredients": ["..."], "missingIngredients": ["..."],
  "imageSearchQuery": "..."}]}"""

DETAIL_RULES = """
IMPORTANT OUTPUT INSTRUCTIONS:
1. Language: return all text in {language}.
2. Ingredients: the full list with specific quantities
   (e.g. "200g Pork", "1/2 Onion", "1 tsp Salt").
3. Instructions: detailed, step-by-step cooking instructions, one step per item.
4. Substitutions: if the user is missing any required ingredient based on their
   list, suggest a specific substitute."""

DETAIL_FORMAT = """
Respond with a JSON object of this shape:

{"ingredients": ["..."], "instructions": ["..."],
 "substitutions": [{"missing": "...", "substitute": "..."}]}"""

RECEIPT_PROMPT = """
Analyze this receipt image. Extract only the names of the food ingredients
purchased, in English. Do not include quantities, prices, or any other text.
Respond with a JSON object of this shape: {"ingredients": ["Egg", "Green Onion", "Tofu"]}""".strip()

CHEF_PREAMBLE = """
You are 'AI Chef', a helpful and friendly cooking assistant for the OhMyCook app."""


class OverviewPrompt:
    def __init__(
        self,
        *,
        ingredients: list[str],
        priority_ingredients: list[str],
        filters: RecipeFilters,
        lang: Lang,
        count: int = 5,
    ) -> None:
        self.ingredients = ingredients
        self.priority_ingredients = priority_ingredients
        self.filters = filters
        self.lang = lang
        self.count = count

    @property
    def context(self) -> str:
        priority = ", ".join(self.priority_ingredients) or "None"
        return (
            "\nCONTEXT:\n"
            f"- User Ingredients: {', '.join(self.ingredients)}.\n"
            f"- Priority Ingredients (must use if possible): {priority}."
        )

    @property
    def constraints(self) -> str:
        f = self.filters
        cuisine = "Any" if f.cuisine is Cuisine.any else f.cuisine.value
        return (
            "\nFILTERS:\n"
            f"- Cuisine: {cuisine}\n"
            f"- Servings: {f.servings}\n"
            f"- Spiciness: {f.spiciness.value}\n"
            f"- Difficulty: {f.difficulty.value}\n"
            f"- Max Cook Time: {f.max_cook_time} minutes\n"
            "\nTASK:\n"
            f"Recommend {self.count} diverse and delicious recipes matching these conditions."
        )

    def __str__(self) -> str:
        return "\n".join(
            [
                OVERVIEW_PREAMBLE,
                self.context,
                self.constraints,
                OVERVIEW_RULES.format(language=self.lang.display),
                OVERVIEW_FORMAT,
            ]
        ).strip()


class DetailPrompt:
    def __init__(self, *, recipe_name: str, ingredients: list[str], lang: Lang) -> None:
        self.recipe_name = recipe_name
        self.ingredients = ingredients
        self.lang = lang

    def __str__(self) -> str:
        return (
            "You are an expert chef.\n\n"
            "CONTEXT:\n"
            f'- Selected Recipe: "{self.recipe_name}"\n'
            f"- User Ingredients: {', '.join(self.ingredients)}\n\n"
            "TASK:\nProvide the detailed cooking information for this recipe.\n"
            f"{DETAIL_RULES.format(language=self.lang.display)}\n"
            f"{DETAIL_FORMAT}"
        )


class ChefPrompt:
    """System prompt for the chat. Grounded on a recipe when one is given."""

    def __init__(
        self,
        *,
        profile: UserProfile,
        lang: Lang,
        recipe: Recipe | None = None,
    ) -> None:
        self.profile = profile
        self.lang = lang
        self.recipe = recipe

    @property
    def user(self) -> str:
        p = self.profile
        return (
            "\nUSER PROFILE:\n"
            f"- Cooking Level: {p.cooking_level.value}\n"
            f"- Allergies: {', '.join(p.allergies) or 'None'}\n"
            f"- Disliked Ingredients: {', '.join(p.disliked_ingredients) or 'None'}\n"
            f"- Tools: {', '.join(p.available_tools) or 'Basic'}"
        )

    @property
    def instructions(self) -> str:
        return (
            "\nINSTRUCTIONS:\n"
            f"- Answer in {self.lang.display}.\n"
            "- Keep answers concise, friendly, and easy to understand."
        )

    @property
    def recipe_context(self) -> str:
        if self.recipe is None:
            return ""
        steps = "\n".join(self.recipe.instructions)
        return (
            "\nCURRENT RECIPE CONTEXT:\n"
            f"Name: {self.recipe.name}\n"
            f"Ingredients: {', '.join(self.recipe.ingredients)}\n"
            f"Instructions: {steps}\n"
            "Keep your answers about this recipe unless the user asks otherwise."
        )

    def __str__(self) -> str:
        return "\n".join(
            [CHEF_PREAMBLE, self.user, self.instructions, self.recipe_context]
        ).strip()
