"""Defaults for the chat front-ends and the environment overlay."""

DEFAULT_CITY = "Taipei, TW"
DEFAULT_GITHUB_OWNER = "facebook"

QUICK_PROMPTS: list[str] = [
    "今天適合穿什麼?",
    "幫我看今天的運勢",
    "我今天幸運色是什麼？",
]

GREETING = "嗨👋 我是你的運勢小助手，可以幫你分析今日運勢喔！"

# Environment variable -> dotted config key
ENV_OVERRIDES: dict[str, str] = {
    "OPENWEATHER_API_KEY": "weather.api_key",
    "GITHUB_REPO_OWNER": "github.owner",
    "GITHUB_REPO_NAME": "github.repo",
    "GITHUB_TOKEN": "github.token",
    "GEMINI_API_KEY": "genai.api_key",
    "GEMINI_MODEL": "genai.model",
}
