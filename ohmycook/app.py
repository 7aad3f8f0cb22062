import contextlib
import functools
import logging
from typing import Any, Awaitable, Callable

from starlette.applications import Starlette
from starlette.datastructures import UploadFile
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from ohmycook import config, log
from ohmycook.cache import RecipeNotFound
from ohmycook.chat import EmptyMessage
from ohmycook.db import SqlRecordStore
from ohmycook.generation import GenerationClient, GenerationFailure
from ohmycook.images import ImageSearch
from ohmycook.ingredient_data import COMMON_INGREDIENTS
from ohmycook.messages import t
from ohmycook.models import DEFAULT_QUANTITY, GENERAL_CONTEXT, Lang, Recipe, RecipeFilters
from ohmycook.popular import POPULAR
from ohmycook.recommend import EmptyIngredientSet
from ohmycook.session import GUEST, Session, SessionStore


logger = logging.getLogger(__name__)


CONFIG = config.Config()


def lang_of(request: Request) -> Lang:
    try:
        return Lang(request.query_params.get("lang", "en"))
    except ValueError:
        return Lang.en


async def session_of(request: Request) -> Session:
    sessions: SessionStore = request.app.state.sessions
    return await sessions.get(request.headers.get("x-user") or GUEST)


def aJSONResponse(route: Callable[..., Awaitable[Any]]):
    @functools.wraps(route)
    async def wrapper(*args: Any, **kwargs: Any) -> JSONResponse:
        resp = await route(*args, **kwargs)
        if not isinstance(resp, tuple):
            data, code = resp, 200
        else:
            data, code = resp
        return JSONResponse(data, status_code=code)

    return wrapper


def recipe_json(recipe: Recipe, session: Session) -> dict[str, Any]:
    data = recipe.to_dict()
    data["isSaved"] = recipe.name in session.saved
    return data


@aJSONResponse
async def ingredients(request: Request) -> Any:
    session = await session_of(request)
    lang = lang_of(request)
    match request.method.lower():
        case "get":
            pass
        case "post":
            body = await request.json()
            name = str(body.get("name", "")).strip()
            if not name:
                return {"error": "Name an ingredient."}, 400
            session.pantry.add_named(name, str(body.get("quantity") or DEFAULT_QUANTITY))
            await request.app.state.sessions.save(session)
        case _:
            raise ValueError("Unsupported method.")
    return [
        {
            **i.to_dict(),
            "displayName": session.catalog.translate(i.canonical_key, lang),
            "category": session.catalog.category_of(i.canonical_key).value,
            "emoji": session.catalog.emoji_of(i.canonical_key),
        }
        for i in session.pantry
    ]


@aJSONResponse
async def remove_ingredient(request: Request) -> Any:
    session = await session_of(request)
    removed = session.pantry.remove(request.path_params["key"])
    await request.app.state.sessions.save(session)
    return {"removed": removed}


@aJSONResponse
async def search_ingredients(request: Request) -> Any:
    session = await session_of(request)
    lang = lang_of(request)
    found = session.catalog.search(
        request.query_params.get("q", ""),
        exclude=session.pantry.keys(),
        limit=CONFIG.search_limit,
    )
    return {
        category.value: [
            {"name": e.canonical_key, "displayName": e.name(lang), "emoji": e.emoji}
            for e in entries
        ]
        for category, entries in session.catalog.group_by_category(found).items()
    }


@aJSONResponse
async def recommendations(request: Request) -> Any:
    session = await session_of(request)
    body = await request.json()
    recipes = await session.recommend(
        priority_ingredients=body.get("priorityIngredients", []),
        filters=RecipeFilters.from_dict(body.get("filters") or {}),
        lang=lang_of(request),
    )
    await request.app.state.sessions.save(session)
    return [recipe_json(r, session) for r in recipes]


@aJSONResponse
async def recipe_detail(request: Request) -> Any:
    session = await session_of(request)
    recipe = await session.open_recipe(request.path_params["name"], lang_of(request))
    await request.app.state.sessions.save(session)
    return recipe_json(recipe, session)


@aJSONResponse
async def chat_history(request: Request) -> Any:
    session = await session_of(request)
    context = session.open_chat(request.path_params["key"], lang_of(request))
    return context.to_dict()


@aJSONResponse
async def chat(request: Request) -> Any:
    session = await session_of(request)
    body = await request.json()
    key = body.get("key") or GENERAL_CONTEXT
    text = str(body.get("text", "")).strip()
    if not text:
        return {"error": "Say something."}, 400
    lang = lang_of(request)
    session.open_chat(key, lang)
    reply = await session.ask(text, key=key, lang=lang)
    await request.app.state.sessions.save(session)
    return reply.to_dict()


@aJSONResponse
async def voice_chat(request: Request) -> Any:
    session = await session_of(request)
    lang = lang_of(request)
    async with request.form() as form:
        audio = form.get("audio")
        if not isinstance(audio, UploadFile):
            return {"error": "Upload a recording."}, 400
        data = await audio.read()
        key = str(form.get("key") or GENERAL_CONTEXT)
    session.open_chat(key, lang)
    reply = await session.ask_spoken(data, key=key, lang=lang)
    await request.app.state.sessions.save(session)
    return reply.to_dict()


@aJSONResponse
async def receipts(request: Request) -> Any:
    session = await session_of(request)
    async with request.form() as form:
        image = form.get("image")
        if not isinstance(image, UploadFile):
            return {"error": "Upload an image."}, 400
        data = await image.read()
    added = await session.scan_receipt(data)
    await request.app.state.sessions.save(session)
    return [i.to_dict() for i in added]


@aJSONResponse
async def toggle_saved(request: Request) -> Any:
    session = await session_of(request)
    saved = session.toggle_saved(request.path_params["name"])
    await request.app.state.sessions.save(session)
    return {"saved": saved}


@aJSONResponse
async def toggle_shopping(request: Request) -> Any:
    session = await session_of(request)
    listed = session.shopping_list.toggle(request.path_params["name"])
    await request.app.state.sessions.save(session)
    return {"listed": listed}


@aJSONResponse
async def shopping(request: Request) -> Any:
    session = await session_of(request)
    match request.method.lower():
        case "get":
            pass
        case "delete":
            session.shopping_list.clear()
            await request.app.state.sessions.save(session)
        case _:
            raise ValueError("Unsupported method.")
    return session.shopping_list.to_list()


@aJSONResponse
async def saved(request: Request) -> Any:
    session = await session_of(request)
    return [recipe_json(r, session) for r in session.saved]


@aJSONResponse
async def popular(request: Request) -> Any:
    session = await session_of(request)
    return [recipe_json(r, session) for r in POPULAR]


@aJSONResponse
async def common_ingredients(request: Request) -> Any:
    session = await session_of(request)
    lang = lang_of(request)
    return [
        {
            "name": key,
            "displayName": session.catalog.translate(key, lang),
            "emoji": session.catalog.emoji_of(key),
            "held": key in session.pantry,
        }
        for key in COMMON_INGREDIENTS
    ]


async def empty_ingredients(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse({"error": t("add_ingredients_first", lang_of(request))}, 400)


async def generation_failed(request: Request, exc: Exception) -> JSONResponse:
    logger.warning("Generation failed: %s", exc)
    return JSONResponse({"error": t("generation_failed", lang_of(request))}, 502)


async def not_found(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse({"error": t("recipe_not_found", lang_of(request))}, 404)


async def empty_message(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse({"error": t("empty_message", lang_of(request))}, 400)


def create_app(sessions: SessionStore | None = None) -> Starlette:
    store: SqlRecordStore | None = None
    if sessions is None:
        store = SqlRecordStore.from_url(CONFIG.db_url)
        sessions = SessionStore(
            store,
            llm=GenerationClient(config=CONFIG),
            images=ImageSearch.from_config(CONFIG),
        )

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette):
        log.configure(CONFIG)
        if store is not None:
            await store.connect()
        yield
        if store is not None:
            await store.disconnect()

    app = Starlette(
        debug=True if CONFIG.env == config.Env.local else False,
        routes=[
            Route("/ingredients", ingredients, methods=["GET", "POST"]),
            Route("/ingredients/search", search_ingredients),
            Route("/ingredients/common", common_ingredients),
            Route("/ingredients/{key}", remove_ingredient, methods=["DELETE"]),
            Route("/recommendations", recommendations, methods=["POST"]),
            Route("/recipes/{name}", recipe_detail),
            Route("/popular", popular),
            Route("/saved", saved),
            Route("/chat", chat, methods=["POST"]),
            Route("/chat/voice", voice_chat, methods=["POST"]),
            Route("/chat/{key}", chat_history),
            Route("/receipts", receipts, methods=["POST"]),
            Route("/saved/{name}", toggle_saved, methods=["POST"]),
            Route("/shopping", shopping, methods=["GET", "DELETE"]),
            Route("/shopping/{name}", toggle_shopping, methods=["POST"]),
        ],
        exception_handlers={
            EmptyIngredientSet: empty_ingredients,
            GenerationFailure: generation_failed,
            RecipeNotFound: not_found,
            EmptyMessage: empty_message,
        },
        lifespan=lifespan,
    )
    app.state.sessions = sessions
    return app


app = create_app()
