"""Prompt templates for the outfit advisor and the fortune teller."""

import re
from datetime import date

from assistant.models.forecast import ForecastSample

FORTUNE_QUERY_RE = re.compile(r"運勢|星座|生日|命運|luck|fortune", re.IGNORECASE)

DEFAULT_CONDITION = "晴朗"

OUTFIT_TEMPLATE = """
今天是 {today}。
請根據以下「{city}」在 {when} 的天氣數據，提供詳細的穿搭建議和活動提醒。
---
天氣數據：
- 天氣狀況：{condition}
- 溫度：攝氏 {temp}°C
- 體感溫度：攝氏 {feels_like}°C
- 濕度：{humidity}%
---
請包含以下內容：
1. ☀️ 天氣摘要 (用親切語氣)。
2. 🧥 穿搭建議 (針對上衣、下裝、外套、配件，需根據 {temp}°C 判斷)。
3. 👟 活動建議 (建議適合的天氣活動)。
4. 🌟 注意事項 (例如防曬、防雨、保暖)。
請使用 markdown 格式並搭配 emoji，總長約 100-150 字。
"""

FORTUNE_TEMPLATE = """
你是一位溫柔的命理分析師。
使用者輸入：「{content}」
請根據生日與今日日期 ({today})，分析今日運勢。
請包含：
1️⃣ 整體運勢（以大吉、中吉、小吉、凶為主）
2️⃣ 感情運
3️⃣ 事業/學業運
4️⃣ 財運
5️⃣ 幸運色與幸運圖案
6️⃣ 今日建議或鼓勵的話
用親切的語氣與 emoji 撰寫。
最後請以 JSON 格式附上：
{{"運勢":"中吉","幸運色":"粉紅色","幸運圖案":"🌸 櫻花"}}
"""


def display_date(d: date) -> str:
    """zh-TW short date, e.g. 2024/6/1."""
    return f"{d.year}/{d.month}/{d.day}"


def _number(value: float) -> str:
    return f"{value:g}"


def build_outfit_prompt(city: str, sample: ForecastSample, today: date) -> str:
    when = sample.payload.get("dt_txt") or sample.timestamp.strftime("%Y-%m-%d %H:%M:%S")
    return OUTFIT_TEMPLATE.format(
        today=display_date(today),
        city=city,
        when=when,
        condition=sample.condition or DEFAULT_CONDITION,
        temp=_number(sample.temp),
        feels_like=_number(sample.feels_like),
        humidity=_number(sample.humidity),
    )


def is_fortune_query(text: str) -> bool:
    return FORTUNE_QUERY_RE.search(text) is not None


def build_fortune_prompt(content: str, today: date) -> str:
    """Fortune-teller prompt for fortune queries; anything else goes out verbatim."""
    if not is_fortune_query(content):
        return content
    return FORTUNE_TEMPLATE.format(content=content, today=display_date(today))
