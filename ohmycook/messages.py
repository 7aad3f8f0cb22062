"""User-facing strings, in both languages."""

from ohmycook.models import Lang


MESSAGES: dict[str, dict[Lang, str]] = {
    "add_ingredients_first": {
        Lang.en: "Please add some ingredients first!",
        Lang.ko: "먼저 재료를 추가해주세요!",
    },
    "generation_failed": {
        Lang.en: "Something went wrong while talking to the AI chef. Please try again.",
        Lang.ko: "AI 셰프와 통신하는 중 문제가 발생했어요. 다시 시도해주세요.",
    },
    "recipe_not_found": {
        Lang.en: "We couldn't find that recipe.",
        Lang.ko: "레시피를 찾을 수 없어요.",
    },
    "empty_message": {
        Lang.en: "We didn't catch that. Please say it again.",
        Lang.ko: "잘 듣지 못했어요. 다시 말씀해주세요.",
    },
    "chef_greeting": {
        Lang.en: "Hello! I'm your AI Chef. Ask me anything about cooking.",
        Lang.ko: "안녕하세요! AI 셰프예요. 요리에 대해 무엇이든 물어보세요.",
    },
    "recipe_greeting": {
        Lang.en: "Hi! Let's talk about {recipe_name}. Ask me anything about it.",
        Lang.ko: "안녕하세요! {recipe_name}에 대해 무엇이든 물어보세요.",
    },
}


def t(key: str, lang: Lang = Lang.en, **kwargs: str) -> str:
    msg = MESSAGES[key][lang]
    return msg.format(**kwargs) if kwargs else msg
