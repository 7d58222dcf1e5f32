"""
Gemini-backed advice and market content.

Every public method returns usable data. Any failure on the way to a
validated reply (including a missing API key) is logged and answered with
hand-written fallback content.
"""

from __future__ import annotations

import datetime
import logging
import random
from typing import Any, Callable, List, Optional, Sequence
from urllib.parse import quote_plus
from zoneinfo import ZoneInfo

from google import genai
from pydantic import TypeAdapter

from backend.schemas.advice import (
    AiAdvice,
    MarketInsight,
    NationalStrategy,
    StockDetail,
    StockHistoryPoint,
    TimeRange,
)
from backend.schemas.finance import Expense, SideHustle
from backend.schemas.simulation import Profile

logger = logging.getLogger(__name__)

JST = ZoneInfo("Asia/Tokyo")
FALLBACK_BASE_PRICE = 5000
INTRADAY_HOURS = [9, 10, 11, 12, 13, 15]

_insight_list = TypeAdapter(List[MarketInsight])


class AdvisorError(RuntimeError):
    """Raised internally when the Gemini client cannot produce an answer."""


# ---------------------------------------------
# Response schemas sent to Gemini
# ---------------------------------------------

ADVICE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "savingsTips": {"type": "ARRAY", "items": {"type": "STRING"}},
        "hustleRecommendations": {"type": "ARRAY", "items": {"type": "STRING"}},
        "riskWarning": {"type": "STRING"},
        "motivationalMessage": {"type": "STRING"},
    },
}

INSIGHTS_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "indexName": {"type": "STRING"},
            "currentValue": {"type": "STRING"},
            "changePercent": {"type": "STRING"},
            "sentiment": {"type": "STRING", "enum": ["positive", "negative", "neutral"]},
            "impactSummary": {"type": "STRING"},
            "newsTitle": {"type": "STRING"},
            "newsUrl": {"type": "STRING"},
        },
        "required": [
            "indexName",
            "currentValue",
            "changePercent",
            "sentiment",
            "impactSummary",
            "newsTitle",
            "newsUrl",
        ],
    },
}

STRATEGY_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "sectors": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "id": {"type": "INTEGER"},
                    "name": {"type": "STRING"},
                    "description": {"type": "STRING"},
                    "stocks": {
                        "type": "ARRAY",
                        "items": {
                            "type": "OBJECT",
                            "properties": {
                                "code": {"type": "STRING"},
                                "name": {"type": "STRING"},
                                "reason": {"type": "STRING"},
                            },
                        },
                    },
                },
            },
        }
    },
}

STOCK_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "code": {"type": "STRING"},
        "name": {"type": "STRING"},
        "currentPrice": {"type": "NUMBER"},
        "description": {"type": "STRING"},
        "history": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "date": {"type": "STRING"},
                    "price": {"type": "NUMBER"},
                    "newsTitle": {"type": "STRING"},
                    "newsSummary": {"type": "STRING"},
                    "newsUrl": {"type": "STRING"},
                },
            },
        },
    },
}


# ---------------------------------------------
# Fallback content
# ---------------------------------------------

FALLBACK_ADVICE = AiAdvice(
    savingsTips=["支出分析に失敗しました。"],
    hustleRecommendations=["副業提案に失敗しました。"],
    riskWarning="情報の取得に失敗しました。",
    motivationalMessage="一歩ずつ進みましょう。",
)

FALLBACK_INSIGHTS = [
    MarketInsight(
        indexName="日経平均",
        currentValue="取得失敗",
        changePercent="0%",
        sentiment="neutral",
        impactSummary="マーケット情報の取得中にエラーが発生しました。",
        newsTitle="最新ニュースを確認中...",
        newsUrl="https://www.nikkei.com",
    )
]

FALLBACK_STRATEGY = NationalStrategy.model_validate(
    {
        "sectors": [
            {
                "id": 1,
                "name": "半導体・DX",
                "description": "デジタル産業基盤の強化",
                "stocks": [
                    {"code": "8035", "name": "東京エレクトロン", "reason": "製造装置世界シェア上位"},
                    {"code": "6146", "name": "ディスコ", "reason": "精密加工装置で高シェア"},
                    {"code": "4063", "name": "信越化学工業", "reason": "シリコンウエハ世界首位"},
                ],
            },
            {
                "id": 2,
                "name": "GX (脱炭素)",
                "description": "クリーンエネルギー戦略",
                "stocks": [
                    {"code": "7203", "name": "トヨタ自動車", "reason": "EV/HV全方位戦略"},
                    {"code": "6501", "name": "日立製作所", "reason": "送配電・再エネ事業"},
                ],
            },
            {
                "id": 3,
                "name": "防衛・宇宙",
                "description": "安全保障と宇宙開発",
                "stocks": [
                    {"code": "7011", "name": "三菱重工業", "reason": "防衛・H3ロケット主導"},
                    {"code": "7013", "name": "IHI", "reason": "航空宇宙エンジン"},
                ],
            },
            {
                "id": 4,
                "name": "インバウンド",
                "description": "観光立国の推進",
                "stocks": [
                    {"code": "9020", "name": "JR東日本", "reason": "鉄道需要回復"},
                    {"code": "4661", "name": "OLC", "reason": "ディズニーリゾート運営"},
                ],
            },
            {
                "id": 5,
                "name": "AI・ロボティクス",
                "description": "生産性向上と人手不足解消",
                "stocks": [
                    {"code": "9984", "name": "ソフトバンクG", "reason": "AI投資世界的リーダー"},
                    {"code": "6301", "name": "コマツ", "reason": "建機自律運転"},
                ],
            },
            {
                "id": 6,
                "name": "金融・資産運用",
                "description": "資産運用立国とPBR改革",
                "stocks": [
                    {"code": "8306", "name": "三菱UFJ", "reason": "金利上昇メリット"},
                    {"code": "8316", "name": "三井住友FG", "reason": "総合金融力"},
                ],
            },
        ]
    }
)


def _shift_months(day: datetime.date, months: int) -> tuple[int, int]:
    """(year, month) of day moved by a number of months."""
    index = day.year * 12 + (day.month - 1) + months
    return index // 12, index % 12 + 1


def fallback_stock_detail(
    code: str,
    name: str,
    time_range: TimeRange,
    now: datetime.datetime,
    rng: random.Random,
) -> StockDetail:
    """
    Synthesize a price history around a flat base price.

      1D: 6 intraday points, 'H:MM'
      1M: 10 points three days apart, 'MM/DD'
      3M: 12 weekly points, 'MM/DD'
      1Y: 12 monthly points, 'YYYY/MM'

    Daily, weekly and monthly series end on `now`.
    """
    count = {"1D": 6, "1M": 10}.get(time_range, 12)
    history: List[StockHistoryPoint] = []

    for i in range(count):
        steps_back = count - 1 - i
        if time_range == "1D":
            hour = INTRADAY_HOURS[i % len(INTRADAY_HOURS)]
            label = f"{hour}:{'30' if hour == 12 else '00'}"
            price = FALLBACK_BASE_PRICE + rng.random() * 100 - 50
        else:
            if time_range == "1M":
                label = (now - datetime.timedelta(days=steps_back * 3)).strftime("%m/%d")
            elif time_range == "3M":
                label = (now - datetime.timedelta(days=steps_back * 7)).strftime("%m/%d")
            else:
                year, month = _shift_months(now.date(), -steps_back)
                label = f"{year}/{month:02d}"
            price = FALLBACK_BASE_PRICE + rng.random() * 500 - 250

        history.append(
            StockHistoryPoint(
                date=label,
                price=int(price),
                newsTitle="市場動向の影響",
                newsSummary="セクター全体の動きに連動。",
                newsUrl=f"https://www.google.com/search?q={quote_plus(name)}",
            )
        )

    return StockDetail(
        code=code,
        name=name,
        currentPrice=history[-1].price if history else FALLBACK_BASE_PRICE,
        description="データ取得に失敗しました（フォールバック表示中）。",
        history=history,
    )


# ---------------------------------------------
# Prompts
# ---------------------------------------------


def advice_prompt(
    profile: Profile,
    expenses: Sequence[Expense],
    hustles: Sequence[SideHustle],
) -> str:
    expense_summary = ", ".join(f"{e.category}: ¥{e.amount}" for e in expenses)
    hustle_summary = ", ".join(f"{h.title} (¥{h.hourlyRate:g}/h)" for h in hustles)
    return f"""
You are "MiniFIRE Agent", a consultant for people pursuing FIRE.
The user is a data analyst living in Tokyo with the following profile:
- Monthly take-home income: ¥{profile.monthlyIncome:,.0f}
- Current assets: ¥{profile.currentAssets:,.0f}
- Target assets: ¥{profile.targetAssets:,.0f}

Constraint: base salary is modest, but the user has strong Python/SQL skills.

This month's expenses: [{expense_summary}]
Current side hustles: [{hustle_summary}]

Reply in Japanese with:
1. Three concrete cost-cutting ideas based on the expenses.
2. Three side hustles suited to a data analyst, with estimated earnings.
3. A short risk warning related to market volatility.
4. A short motivational message.
"""


MARKET_PROMPT = """
Look up the latest price moves and major news for the Nikkei 225, the S&P 500
and the MSCI ACWI ("All Country") index as of now in Japan time. For each
index, explain in Japanese how the news affects an investor working towards
FIRE.
"""

STRATEGY_PROMPT = """
Based on Japan's current national strategy (the "Honebuto" policy, New Form
of Capitalism and similar), identify the six sectors given the most weight
right now (for example semiconductors/DX, GX, defence/space, inbound tourism,
asset management, AI). For each sector pick 5-10 listed Japanese companies
investors should watch, with their securities code and the reason they
matter for that sector. Reply in Japanese.
"""

_RANGE_INSTRUCTIONS = {
    "1D": (
        "intraday prices on the Japanese market today ({today}) between 9:00 and 15:00, "
        "with date formatted 'HH:MM'; stop at the latest closed session if later times are in the future",
        "6 points (9:00, 10:00, 11:00, 12:30, 14:00, 15:00)",
    ),
    "1M": ("daily prices over the month ending today ({today}), date formatted 'MM/DD'", "10 points"),
    "3M": ("weekly prices over the three months ending today ({today}), date formatted 'MM/DD'", "12 points"),
    "1Y": ("monthly prices over the year ending today ({today}), date formatted 'YYYY/MM'", "12 points"),
}


def stock_prompt(code: str, name: str, time_range: TimeRange, now: datetime.datetime) -> str:
    today = now.strftime("%Y-%m-%d")
    instruction, count = _RANGE_INSTRUCTIONS[time_range]
    return f"""
Produce the following for the Japanese stock "{name} ({code})".
It is currently {now.strftime("%Y-%m-%d %H:%M")} in Japan time.

1. The approximate current price.
2. A one-line company summary (about 30 characters, Japanese).
3. {instruction.format(today=today)}.
   - Generate {count} realistic prices reflecting the actual trend.
   - The last point must be dated {today} (or the most recent trading day).
   - Attach to each point a headline and a short summary (under 20 characters)
     of the news that moved the price, plus a news URL.
"""


class FireAdvisor:
    """Fetch-and-parse wrappers around the Gemini API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gemini-2.5-flash",
        client_factory: Optional[Callable[[], Any]] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime.datetime]] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self._client_factory = client_factory
        self._rng = rng or random.Random()
        self._clock = clock or (lambda: datetime.datetime.now(JST))

    def _client(self) -> Any:
        if self._client_factory is not None:
            return self._client_factory()
        if not self.api_key:
            raise AdvisorError("GEMINI_API_KEY is not configured")
        return genai.Client(api_key=self.api_key)

    def _generate_json(self, prompt: str, schema: dict, use_search: bool = False) -> str:
        config: dict = {
            "response_mime_type": "application/json",
            "response_schema": schema,
        }
        if use_search:
            config["tools"] = [{"google_search": {}}]

        response = self._client().models.generate_content(
            model=self.model,
            contents=prompt,
            config=config,
        )
        text = getattr(response, "text", None)
        if not text:
            raise AdvisorError("empty response from Gemini")
        return text

    def fire_advice(
        self,
        profile: Profile,
        expenses: Sequence[Expense],
        hustles: Sequence[SideHustle],
    ) -> AiAdvice:
        try:
            text = self._generate_json(advice_prompt(profile, expenses, hustles), ADVICE_SCHEMA)
            return AiAdvice.model_validate_json(text)
        except Exception as exc:
            logger.warning("FIRE advice failed, using fallback: %s", exc)
            return FALLBACK_ADVICE.model_copy(deep=True)

    def market_insights(self) -> List[MarketInsight]:
        try:
            text = self._generate_json(MARKET_PROMPT, INSIGHTS_SCHEMA, use_search=True)
            return _insight_list.validate_json(text)
        except Exception as exc:
            logger.warning("Market insights failed, using fallback: %s", exc)
            return [insight.model_copy() for insight in FALLBACK_INSIGHTS]

    def national_strategy(self) -> NationalStrategy:
        try:
            text = self._generate_json(STRATEGY_PROMPT, STRATEGY_SCHEMA, use_search=True)
            return NationalStrategy.model_validate_json(text)
        except Exception as exc:
            logger.warning("Strategy data failed, using fallback: %s", exc)
            return FALLBACK_STRATEGY.model_copy(deep=True)

    def stock_detail(self, code: str, name: str, time_range: TimeRange = "1Y") -> StockDetail:
        now = self._clock()
        try:
            text = self._generate_json(stock_prompt(code, name, time_range, now), STOCK_SCHEMA)
            return StockDetail.model_validate_json(text)
        except Exception as exc:
            logger.warning("Stock detail for %s failed, using fallback: %s", code, exc)
            return fallback_stock_detail(code, name, time_range, now, self._rng)
