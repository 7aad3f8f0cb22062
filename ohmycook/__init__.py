"""Describes the OhMyCook core. Centres around the `RecipeCache`.

Why is this hard?

- Recipes arrive in two stages. The overview is cheap, the detail is not, and
  the user can open the same recipe from several places at once.
- Ingredients come from two languages and from receipts, so everything is
  normalised to a canonical English key before it is compared.
- Chats are keyed by context and must not interleave.

The generation service sits behind an api. Fake it in tests.
"""
